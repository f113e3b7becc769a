from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Type


class StrategyKind(str, Enum):
    """How an attribute is reached on a record, in resolution order."""

    ATTRIBUTE = "attribute"
    LEGACY_ATTRIBUTE = "legacy_attribute"
    STORAGE = "storage"


class Nullability(str, Enum):
    NULLABLE = "nullable"
    LEGACY_EMPTY = "legacy_empty"


class IdentityKind(str, Enum):
    SURROGATE = "surrogate"
    NATURAL = "natural"


@dataclass(frozen=True)
class AccessStrategy:
    kind: StrategyKind
    key: str


def strategies(canonical: str, *legacy: str) -> Tuple[AccessStrategy, ...]:
    """Canonical name first, then each historical spelling, then the raw slot."""
    ordered = [AccessStrategy(StrategyKind.ATTRIBUTE, canonical)]
    ordered.extend(AccessStrategy(StrategyKind.LEGACY_ATTRIBUTE, name) for name in legacy)
    ordered.append(AccessStrategy(StrategyKind.STORAGE, canonical))
    return tuple(ordered)


@dataclass(frozen=True)
class AttributeSpec:
    """One row of an entity's descriptor table."""

    name: str
    wire_name: str
    value_type: type
    nullability: Nullability
    access: Tuple[AccessStrategy, ...]
    identity: Optional[IdentityKind] = None
    lookup: bool = False

    @property
    def primitive_default(self) -> Any:
        return 0 if self.value_type is int else ""


@dataclass(frozen=True)
class EntitySpec:
    name: str
    record_cls: Type[Any]
    attributes: Tuple[AttributeSpec, ...]

    @property
    def identity(self) -> AttributeSpec:
        for attr in self.attributes:
            if attr.identity is not None:
                return attr
        raise LookupError(f"{self.name} declares no identity attribute")

    def attribute(self, name: str) -> AttributeSpec:
        """Find an attribute by logical or wire name."""
        for attr in self.attributes:
            if name in (attr.name, attr.wire_name):
                return attr
        raise KeyError(f"Unknown attribute for {self.name}: {name}")

    def lookups(self) -> Tuple[AttributeSpec, ...]:
        return tuple(attr for attr in self.attributes if attr.lookup)
