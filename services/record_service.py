from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from models.attributes import EntitySpec
from models.nullability import NullabilityPolicy
from ports.repos import RecordRepoPort
from services.accessors import AccessorResolver
from services.errors import NotFound
from services.merge import PartialUpdateMerger
from services.uniqueness import UniquenessGuard
from services.validation import Ruleset, ValidationGate
from utils.logging_setup import log_extra


logger = logging.getLogger(__name__)


class RecordService:
    """Create/update/read/delete for one entity over a storage repo.

    Create: validate (Create rules) -> uniqueness guard -> blank record from
    policy defaults -> merge payload (identity included) -> save.
    Update: validate (Update rules) -> load by identity or ``NotFound`` ->
    merge payload (identity excluded) -> save.

    Both write paths run inside ``repo.transaction()`` so a concurrent writer
    cannot slip in between the existence check and the save. Rejections
    happen before any storage write.
    """

    entity: EntitySpec

    def __init__(self, repo: RecordRepoPort, fill_omitted: bool = False):
        self.repo = repo
        self.policy = NullabilityPolicy()
        self.resolver = AccessorResolver(self.entity)
        # Schema drift surfaces here, at construction, not mid-request
        self.resolver.bind()
        self.gate = ValidationGate(self.entity)
        self.guard = UniquenessGuard(self.entity, self.resolver)
        self.merger = PartialUpdateMerger(self.entity, self.resolver, self.policy, fill_omitted=fill_omitted)

    # --- Writes ---
    def create(self, payload: Mapping[str, Any]) -> Any:
        parsed = self.gate.check(payload, Ruleset.CREATE)
        with self.repo.transaction():
            self.guard.ensure_creatable(parsed, self.repo.exists_by_identity)
            record = self.merger.merge(self.merger.blank(), parsed, include_identity=True)
            saved = self.repo.save(record)
        logger.info(
            "record created",
            extra=log_extra(self.entity.name, "create", identity=self.identity_of(saved), status="ok"),
        )
        return saved

    def update(self, payload: Mapping[str, Any], identity: Optional[Any] = None) -> Any:
        """Apply the provided attributes of ``payload`` to the stored record.

        ``identity`` (e.g. taken from a path) takes precedence over the one in
        the payload.
        """
        if identity is not None and isinstance(payload, Mapping):
            payload = {**payload, self.entity.identity.wire_name: identity}
        parsed = self.gate.check(payload, Ruleset.UPDATE)
        key = self.resolver.get(parsed, self.entity.identity.name)
        with self.repo.transaction():
            existing = self.repo.find_by_identity(key)
            if existing is None:
                self._not_found("update", key)
            changed = [attr.wire_name for attr, _value in self.merger.changes(parsed)]
            self.merger.merge(existing, parsed)
            saved = self.repo.save(existing)
        logger.info(
            "record updated (%s)",
            ", ".join(changed) or "no changes",
            extra=log_extra(self.entity.name, "update", identity=key, status="ok"),
        )
        return saved

    def delete(self, identity: Any) -> None:
        with self.repo.transaction():
            if not self.repo.exists_by_identity(identity):
                self._not_found("delete", identity)
            self.repo.delete_by_identity(identity)
        logger.info(
            "record deleted",
            extra=log_extra(self.entity.name, "delete", identity=identity, status="ok"),
        )

    # --- Reads ---
    def get(self, identity: Any) -> Any:
        record = self.repo.find_by_identity(identity)
        if record is None:
            self._not_found("get", identity)
        return record

    def list(self) -> List[Any]:
        return self.repo.find_all()

    def exists(self, identity: Any) -> bool:
        return self.repo.exists_by_identity(identity)

    def count(self) -> int:
        return self.repo.count()

    def find_by(self, attribute: str, value: Any) -> List[Any]:
        """Exact-match lookup on one of the entity's lookup attributes (logical or wire name)."""
        attr = self.entity.attribute(attribute)
        lookups = self.entity.lookups()
        if attr not in lookups:
            allowed = ", ".join(a.wire_name for a in lookups)
            raise KeyError(f"{self.entity.name} has no lookup on {attr.wire_name} (lookups: {allowed})")
        return getattr(self.repo, f"find_by_{attr.name}")(value)

    # --- Helpers ---
    def identity_of(self, record: Any) -> Any:
        return self.resolver.get(record, self.entity.identity.name)

    def to_wire(self, record: Any) -> Dict[str, Any]:
        return {attr.wire_name: self.resolver.get(record, attr.name) for attr in self.entity.attributes}

    def _not_found(self, operation: str, identity: Any) -> None:
        logger.warning(
            "record not found",
            extra=log_extra(self.entity.name, operation, identity=identity, status="not_found"),
        )
        raise NotFound(self.entity.name, identity)
