from __future__ import annotations

import sqlite3
from typing import Any, Callable, Dict

from db.repos.files_repo import FilesRepo
from db.repos.reregistrations_repo import ReRegistrationsRepo
from services.file_service import FileService
from services.record_service import RecordService
from services.reregistration_service import ReRegistrationService


ServiceFactory = Callable[[sqlite3.Connection], RecordService]

_REGISTRY: Dict[str, ServiceFactory] = {}


def register(name: str, factory: ServiceFactory) -> None:
    _REGISTRY[name] = factory


def get_service(name: str, conn: sqlite3.Connection) -> RecordService:
    if name not in _REGISTRY:
        raise KeyError(f"Unknown entity: {name}")
    return _REGISTRY[name](conn)


def available_entities() -> Dict[str, Any]:
    return dict(_REGISTRY)


register(FileService.entity.name, lambda conn: FileService(FilesRepo(conn)))
register(ReRegistrationService.entity.name, lambda conn: ReRegistrationService(ReRegistrationsRepo(conn)))
