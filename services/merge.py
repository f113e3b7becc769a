from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel

from models.attributes import AttributeSpec, EntitySpec, Nullability
from models.nullability import NullabilityPolicy
from services.accessors import AccessorResolver


class PartialUpdateMerger:
    """Copies the attributes a payload provides onto an existing record.

    "Provided" means explicitly set on the parsed model (``model_fields_set``)
    or present as a key when the payload is a plain mapping. Provided values the
    policy treats as absent (``None`` on nullable attributes) are skipped. An
    empty string on a legacy-empty attribute is a real value and overwrites.

    With ``fill_omitted`` the merger reproduces the old DTO behaviour where every
    legacy-empty attribute counted as provided, so omitted ones reset to ``""``.
    """

    def __init__(
        self,
        entity: EntitySpec,
        resolver: AccessorResolver,
        policy: Optional[NullabilityPolicy] = None,
        fill_omitted: bool = False,
    ):
        self.entity = entity
        self.resolver = resolver
        self.policy = policy or NullabilityPolicy()
        self.fill_omitted = fill_omitted

    def blank(self) -> Any:
        """Fresh record with every attribute at its policy default."""
        record = self.entity.record_cls()
        for attr in self.entity.attributes:
            self.resolver.set(record, attr.name, self.policy.default_for(attr))
        return record

    def merge(self, existing: Any, payload: Any, include_identity: bool = False) -> Any:
        for attr, value in self.changes(payload, include_identity=include_identity):
            self.resolver.set(existing, attr.name, value)
        return existing

    def changes(self, payload: Any, include_identity: bool = False) -> List[Tuple[AttributeSpec, Any]]:
        values = self._provided(payload)
        out: List[Tuple[AttributeSpec, Any]] = []
        for attr in self.entity.attributes:
            if attr.identity is not None and not include_identity:
                continue
            if attr.name in values:
                value = values[attr.name]
            elif self.fill_omitted and attr.nullability is Nullability.LEGACY_EMPTY:
                value = self.policy.default_for(attr)
            else:
                continue
            if self.policy.is_absent(attr, value):
                continue
            out.append((attr, value))
        return out

    def _provided(self, payload: Any) -> dict:
        if isinstance(payload, BaseModel):
            declared = {attr.name for attr in self.entity.attributes}
            names: Iterable[str] = payload.model_fields_set & declared
            return {name: self.resolver.get(payload, name) for name in names}
        if isinstance(payload, Mapping):
            provided = {}
            for key, value in payload.items():
                try:
                    attr = self.entity.attribute(key)
                except KeyError:
                    continue
                provided[attr.name] = self.policy.normalize(attr, value)
            return provided
        raise TypeError(f"Unsupported payload type: {type(payload).__name__}")
