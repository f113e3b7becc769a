from .attributes import AccessStrategy, AttributeSpec, EntitySpec, IdentityKind, Nullability, StrategyKind
from .nullability import NullabilityPolicy
from .file_record import FILE_ENTITY, FileRecord
from .reregistration_record import REREGISTRATION_ENTITY, ReRegistrationRecord

__all__ = [
    "AccessStrategy",
    "AttributeSpec",
    "EntitySpec",
    "IdentityKind",
    "Nullability",
    "StrategyKind",
    "NullabilityPolicy",
    "FILE_ENTITY",
    "FileRecord",
    "REREGISTRATION_ENTITY",
    "ReRegistrationRecord",
]
