from __future__ import annotations

from typing import Any, Optional

from .attributes import AttributeSpec, Nullability


def legacy_empty() -> str:
    """Default for text attributes that historically never held null."""
    return ""


def unset() -> Optional[Any]:
    return None


class NullabilityPolicy:
    """Sole owner of defaults and of the primitive/nullable view contract.

    ``NULLABLE`` attributes use ``None`` for "never set"; their primitive view
    reads ``0`` for integers and ``""`` for text. ``LEGACY_EMPTY`` attributes
    default to ``""`` and have no absent state at all, so whatever a payload
    carries for them is applied.
    """

    def default_for(self, attr: AttributeSpec) -> Any:
        if attr.nullability is Nullability.LEGACY_EMPTY:
            return legacy_empty()
        return unset()

    def coerce_primitive_view(self, attr: AttributeSpec, value: Any) -> Any:
        if value is None:
            return attr.primitive_default
        return value

    def is_absent(self, attr: AttributeSpec, value: Any) -> bool:
        if attr.nullability is Nullability.LEGACY_EMPTY:
            return False
        return value is None

    def normalize(self, attr: AttributeSpec, value: Any) -> Any:
        """Map an explicit null onto the attribute's legacy default."""
        if value is None and attr.nullability is Nullability.LEGACY_EMPTY:
            return legacy_empty()
        return value
