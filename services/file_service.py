from __future__ import annotations

from typing import List, Optional

from models.file_record import FILE_ENTITY, FileRecord
from ports.repos import FilesRepoPort
from services.record_service import RecordService


class FileService(RecordService):
    """``arquivo`` records: surrogate integer id assigned by storage."""

    entity = FILE_ENTITY

    def __init__(self, repo: FilesRepoPort):
        super().__init__(repo)
        self.repo: FilesRepoPort = repo

    def get_file_name(self, codigo_arquivo: int) -> Optional[str]:
        """File name of one record; raises ``NotFound`` for an unknown id."""
        return self.get(codigo_arquivo).nome_arquivo

    def find_by_codigo_escola(self, codigo_escola: str) -> List[FileRecord]:
        return self.repo.find_by_codigo_escola(codigo_escola)

    def find_by_ano_vigencia(self, ano_vigencia: str) -> List[FileRecord]:
        return self.repo.find_by_ano_vigencia(ano_vigencia)
