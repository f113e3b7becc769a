from __future__ import annotations

from typing import Any, ContextManager, List, Optional, Protocol

from models.file_record import FileRecord
from models.reregistration_record import ReRegistrationRecord


class RecordRepoPort(Protocol):
    """Storage collaborator shared by both entities.

    Writers must be serialised per identity by ``transaction()``; the services
    run exists-check and save inside it.
    """

    def save(self, record: Any) -> Any:
        ...

    def find_by_identity(self, identity: Any) -> Optional[Any]:
        ...

    def exists_by_identity(self, identity: Any) -> bool:
        ...

    def find_all(self) -> List[Any]:
        ...

    def delete_by_identity(self, identity: Any) -> None:
        ...

    def count(self) -> int:
        ...

    def transaction(self) -> ContextManager[None]:
        ...


class FilesRepoPort(RecordRepoPort, Protocol):
    def find_by_codigo_escola(self, codigo_escola: str) -> List[FileRecord]:
        ...

    def find_by_ano_vigencia(self, ano_vigencia: str) -> List[FileRecord]:
        ...


class ReRegistrationsRepoPort(RecordRepoPort, Protocol):
    def find_by_ano_base(self, ano_base: str) -> List[ReRegistrationRecord]:
        ...

    def find_by_cnpj(self, cnpj: str) -> List[ReRegistrationRecord]:
        ...

    def find_by_bairro(self, bairro: str) -> List[ReRegistrationRecord]:
        ...
