from __future__ import annotations

from typing import List

from db.repos.base import SqliteRecordRepo
from models.reregistration_record import ReRegistrationRecord


class ReRegistrationsRepo(SqliteRecordRepo):
    table = "arquivo_recadastramento_estado"
    identity_column = "codigo"
    columns = (
        ("codigo", "codigo"),
        ("codigo_sec", "codigo_sec"),
        ("data_movimentacao", "data_movimentacao"),
        ("ano_base", "ano_base"),
        ("nome", "nome"),
        ("cnpj", "cnpj"),
        ("bairro", "bairro"),
    )
    record_cls = ReRegistrationRecord

    def save(self, record: ReRegistrationRecord) -> ReRegistrationRecord:
        """Insert or update by ``codigo``; the key itself never changes."""
        self._upsert(record)
        return record

    def find_by_ano_base(self, ano_base: str) -> List[ReRegistrationRecord]:
        return self._find_by("ano_base", ano_base)

    def find_by_cnpj(self, cnpj: str) -> List[ReRegistrationRecord]:
        return self._find_by("cnpj", cnpj)

    def find_by_bairro(self, bairro: str) -> List[ReRegistrationRecord]:
        return self._find_by("bairro", bairro)
