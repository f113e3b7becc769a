from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from models.attributes import AccessStrategy, EntitySpec, StrategyKind
from services.errors import AttributeNotResolvable
from utils.logging_setup import log_extra


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Accessor:
    attribute: str
    strategy: AccessStrategy
    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], None]


def _is_read_write_attribute(record: Any, key: str) -> bool:
    cls = type(record)
    if key in (getattr(cls, "model_fields", None) or {}):
        return True
    static = inspect.getattr_static(cls, key, None)
    if isinstance(static, property):
        return static.fset is not None
    return key in getattr(record, "__dict__", {})


def _attribute_pair(key: str) -> Tuple[Callable[[Any], Any], Callable[[Any, Any], None]]:
    def getter(record: Any) -> Any:
        return getattr(record, key)

    def setter(record: Any, value: Any) -> None:
        setattr(record, key, value)

    return getter, setter


def _storage_pair(key: str) -> Tuple[Callable[[Any], Any], Callable[[Any, Any], None]]:
    def getter(record: Any) -> Any:
        return vars(record)[key]

    def setter(record: Any, value: Any) -> None:
        vars(record)[key] = value

    return getter, setter


class AccessorResolver:
    """Finds the getter/setter pair for a logical attribute on a record.

    Each attribute in the entity's descriptor table lists its access
    strategies in priority order: the current attribute name, then any
    historical spellings, then the raw instance slot. The first strategy that
    gives a working getter *and* setter wins; the result is cached per record
    class so the lookup happens once.
    """

    def __init__(self, entity: EntitySpec):
        self.entity = entity
        self._cache: Dict[Tuple[type, str], Accessor] = {}

    def bind(self, record_cls: Optional[type] = None) -> Dict[str, Accessor]:
        """Resolve every declared attribute up front; raises on schema drift."""
        cls = record_cls or self.entity.record_cls
        probe = cls()
        return {attr.name: self.resolve(probe, attr.name) for attr in self.entity.attributes}

    def resolve(self, record: Any, logical_name: str) -> Accessor:
        attr = self.entity.attribute(logical_name)
        cache_key = (type(record), attr.name)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        tried = []
        for strategy in attr.access:
            tried.append(f"{strategy.kind.value}:{strategy.key}")
            pair = self._try(record, strategy)
            if pair is None:
                continue
            accessor = Accessor(attribute=attr.name, strategy=strategy, getter=pair[0], setter=pair[1])
            self._cache[cache_key] = accessor
            if strategy.kind is not StrategyKind.ATTRIBUTE:
                logger.debug(
                    "resolved %s.%s via %s",
                    self.entity.name,
                    attr.name,
                    strategy.key,
                    extra=log_extra(self.entity.name, "resolve", status=strategy.kind.value),
                )
            return accessor

        logger.critical(
            "no accessor for %s.%s on %s",
            self.entity.name,
            attr.name,
            type(record).__name__,
            extra=log_extra(self.entity.name, "resolve", status="fatal", error=attr.name),
        )
        raise AttributeNotResolvable(self.entity.name, attr.name, type(record).__name__, tried)

    def get(self, record: Any, logical_name: str) -> Any:
        return self.resolve(record, logical_name).getter(record)

    def set(self, record: Any, logical_name: str, value: Any) -> None:
        self.resolve(record, logical_name).setter(record, value)

    @staticmethod
    def _try(record: Any, strategy: AccessStrategy) -> Optional[Tuple[Callable[[Any], Any], Callable[[Any, Any], None]]]:
        if strategy.kind in (StrategyKind.ATTRIBUTE, StrategyKind.LEGACY_ATTRIBUTE):
            if not _is_read_write_attribute(record, strategy.key):
                return None
            pair = _attribute_pair(strategy.key)
        elif strategy.kind is StrategyKind.STORAGE:
            if strategy.key not in getattr(record, "__dict__", {}):
                return None
            pair = _storage_pair(strategy.key)
        else:
            return None
        try:
            pair[0](record)
        except AttributeError:
            return None
        return pair
