from __future__ import annotations

import logging
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ValidationError

from models.attributes import AttributeSpec, EntitySpec, IdentityKind
from services.errors import ValidationFailed, Violation
from utils.logging_setup import log_extra


logger = logging.getLogger(__name__)


class Ruleset(str, Enum):
    CREATE = "create"
    UPDATE = "update"


def _raw_value(payload: Mapping[str, Any], attr: AttributeSpec) -> Any:
    if attr.wire_name in payload:
        return payload[attr.wire_name]
    return payload.get(attr.name)


class ValidationGate:
    """Checks an inbound payload against the Create or Update rule-set.

    Field constraints (length, minimum, type) live on the entity's pydantic
    model and apply under both rule-sets. On top of those:

    - a natural identity must be non-blank (both rule-sets);
    - a surrogate identity must be present for Update.

    A surrogate identity sent on Create is left to the uniqueness guard,
    which reports it as an identity conflict.
    """

    def __init__(self, entity: EntitySpec):
        self.entity = entity

    def validate(self, payload: Any, ruleset: Ruleset) -> List[Violation]:
        _parsed, violations = self._evaluate(payload, ruleset)
        return violations

    def check(self, payload: Any, ruleset: Ruleset) -> BaseModel:
        parsed, violations = self._evaluate(payload, ruleset)
        if violations:
            logger.warning(
                "%s payload rejected with %d violation(s)",
                ruleset.value,
                len(violations),
                extra=log_extra(self.entity.name, ruleset.value, status="invalid"),
            )
            raise ValidationFailed(self.entity.name, ruleset.value, violations)
        assert parsed is not None
        return parsed

    def _evaluate(self, payload: Any, ruleset: Ruleset) -> Tuple[Optional[BaseModel], List[Violation]]:
        if not isinstance(payload, Mapping):
            return None, [Violation("", "payload must be an object")]

        violations: List[Violation] = []
        parsed: Optional[BaseModel] = None
        try:
            parsed = self.entity.record_cls.model_validate(dict(payload))
        except ValidationError as exc:
            violations.extend(self._from_pydantic(exc))

        violations.extend(self._identity_rules(payload, ruleset))
        return parsed, violations

    def _from_pydantic(self, exc: ValidationError) -> List[Violation]:
        out: List[Violation] = []
        for error in exc.errors():
            loc = error.get("loc") or ()
            head = str(loc[0]) if loc else ""
            try:
                attribute = self.entity.attribute(head).wire_name
            except KeyError:
                attribute = head
            out.append(Violation(attribute, error.get("msg", "invalid value")))
        return out

    def _identity_rules(self, payload: Mapping[str, Any], ruleset: Ruleset) -> List[Violation]:
        attr = self.entity.identity
        value = _raw_value(payload, attr)
        if attr.identity is IdentityKind.NATURAL:
            if value is None or not str(value).strip():
                return [Violation(attr.wire_name, "must not be blank")]
        elif ruleset is Ruleset.UPDATE and value is None:
            return [Violation(attr.wire_name, "must be provided for update")]
        return []
