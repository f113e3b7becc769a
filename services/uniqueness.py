from __future__ import annotations

import logging
from typing import Any, Callable

from models.attributes import EntitySpec, IdentityKind
from services.accessors import AccessorResolver
from services.errors import IdentityConflict
from utils.logging_setup import log_extra


logger = logging.getLogger(__name__)


class UniquenessGuard:
    """Create-path identity check; runs only after validation passed."""

    def __init__(self, entity: EntitySpec, resolver: AccessorResolver):
        self.entity = entity
        self.resolver = resolver

    def ensure_creatable(self, payload: Any, exists_by_identity: Callable[[Any], bool]) -> None:
        attr = self.entity.identity
        identity = self.resolver.get(payload, attr.name)

        if attr.identity is IdentityKind.SURROGATE:
            # The storage layer assigns surrogate keys; a client-sent one means
            # create was used where update was meant.
            if identity is not None:
                self._reject(identity, f"{attr.wire_name} must be null when creating")
            return

        if exists_by_identity(identity):
            self._reject(identity, "already exists")

    def _reject(self, identity: Any, reason: str) -> None:
        logger.warning(
            "create refused: %s",
            reason,
            extra=log_extra(self.entity.name, "create", identity=identity, status="conflict"),
        )
        raise IdentityConflict(self.entity.name, identity, reason)
