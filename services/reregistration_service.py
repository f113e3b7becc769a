from __future__ import annotations

from typing import List, Optional

from config.settings import get_settings
from models.reregistration_record import REREGISTRATION_ENTITY, ReRegistrationRecord
from ports.repos import ReRegistrationsRepoPort
from services.record_service import RecordService


class ReRegistrationService(RecordService):
    """State re-registrations: natural key ``codigo``, text attributes default to ""."""

    entity = REREGISTRATION_ENTITY

    def __init__(self, repo: ReRegistrationsRepoPort, fill_omitted: Optional[bool] = None):
        if fill_omitted is None:
            fill_omitted = get_settings().reregistration_fill_omitted
        super().__init__(repo, fill_omitted=fill_omitted)
        self.repo: ReRegistrationsRepoPort = repo

    def find_by_ano_base(self, ano_base: str) -> List[ReRegistrationRecord]:
        return self.repo.find_by_ano_base(ano_base)

    def find_by_cnpj(self, cnpj: str) -> List[ReRegistrationRecord]:
        return self.repo.find_by_cnpj(cnpj)

    def find_by_bairro(self, bairro: str) -> List[ReRegistrationRecord]:
        return self.repo.find_by_bairro(bairro)
