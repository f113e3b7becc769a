from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence


@dataclass(frozen=True)
class Violation:
    attribute: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"attribute": self.attribute, "message": self.message}


class RecordError(Exception):
    """Base for every error the record services raise on purpose."""

    kind = "record_error"
    http_status = 500

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "status": self.http_status, "message": str(self)}


class ValidationFailed(RecordError):
    kind = "validation_failed"
    http_status = 400

    def __init__(self, entity: str, ruleset: str, violations: Sequence[Violation]):
        self.entity = entity
        self.ruleset = ruleset
        self.violations: List[Violation] = list(violations)
        summary = "; ".join(f"{v.attribute}: {v.message}" for v in self.violations)
        super().__init__(f"{entity} {ruleset} payload rejected: {summary}")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["violations"] = [v.as_dict() for v in self.violations]
        return data


class IdentityConflict(RecordError):
    kind = "identity_conflict"
    http_status = 409

    def __init__(self, entity: str, identity: Any, reason: str):
        self.entity = entity
        self.identity = identity
        super().__init__(f"{entity} {identity!r}: {reason}")


class NotFound(RecordError):
    kind = "not_found"
    http_status = 404

    def __init__(self, entity: str, identity: Any):
        self.entity = entity
        self.identity = identity
        super().__init__(f"{entity} not found with identity: {identity!r}")


class AttributeNotResolvable(RecordError):
    """A declared attribute has no reachable accessor: schema drift, not a bad request."""

    kind = "attribute_not_resolvable"
    http_status = 500

    def __init__(self, entity: str, attribute: str, record_type: str, tried: Optional[Sequence[str]] = None):
        self.entity = entity
        self.attribute = attribute
        self.record_type = record_type
        self.tried = list(tried or [])
        super().__init__(
            f"No accessor for {entity}.{attribute} on {record_type} (tried: {', '.join(self.tried) or 'nothing'})"
        )
