from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .attributes import AttributeSpec, EntitySpec, IdentityKind, Nullability, strategies
from .nullability import NullabilityPolicy, legacy_empty


_POLICY = NullabilityPolicy()


class ReRegistrationRecord(BaseModel):
    """App/DB record shape for a state re-registration (``arquivo_recadastramento_estado``).

    Keyed by the business code ``codigo``. All attributes are text and start
    out as ``""`` rather than null, as the system this replaces did.
    """

    codigo: str = Field(default_factory=legacy_empty, alias="codigo", max_length=50)
    codigo_sec: str = Field(default_factory=legacy_empty, alias="codigoSec", max_length=50)
    data_movimentacao: str = Field(default_factory=legacy_empty, alias="dataMovimentacao", max_length=50)
    ano_base: str = Field(default_factory=legacy_empty, alias="anoBase", max_length=10)
    nome: str = Field(default_factory=legacy_empty, alias="nome", max_length=255)
    cnpj: str = Field(default_factory=legacy_empty, alias="cnpj", max_length=20)
    bairro: str = Field(default_factory=legacy_empty, alias="bairro", max_length=100)

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any, info: ValidationInfo) -> Any:
        return _POLICY.normalize(REREGISTRATION_ENTITY.attribute(info.field_name), value)

    # --- Legacy accessor spellings ---
    @property
    def codigosec(self) -> str:
        return self.codigo_sec

    @codigosec.setter
    def codigosec(self, value: str) -> None:
        self.codigo_sec = value

    @property
    def datamovimentacao(self) -> str:
        return self.data_movimentacao

    @datamovimentacao.setter
    def datamovimentacao(self, value: str) -> None:
        self.data_movimentacao = value

    @property
    def anobase(self) -> str:
        return self.ano_base

    @anobase.setter
    def anobase(self, value: str) -> None:
        self.ano_base = value


REREGISTRATION_ATTRIBUTES = (
    AttributeSpec("codigo", "codigo", str, Nullability.LEGACY_EMPTY,
                  strategies("codigo"), identity=IdentityKind.NATURAL),
    AttributeSpec("codigo_sec", "codigoSec", str, Nullability.LEGACY_EMPTY,
                  strategies("codigo_sec", "codigosec", "codigoSec")),
    AttributeSpec("data_movimentacao", "dataMovimentacao", str, Nullability.LEGACY_EMPTY,
                  strategies("data_movimentacao", "datamovimentacao", "dataMovimentacao")),
    AttributeSpec("ano_base", "anoBase", str, Nullability.LEGACY_EMPTY,
                  strategies("ano_base", "anobase", "anoBase"), lookup=True),
    AttributeSpec("nome", "nome", str, Nullability.LEGACY_EMPTY, strategies("nome")),
    AttributeSpec("cnpj", "cnpj", str, Nullability.LEGACY_EMPTY, strategies("cnpj"), lookup=True),
    AttributeSpec("bairro", "bairro", str, Nullability.LEGACY_EMPTY, strategies("bairro"), lookup=True),
)

REREGISTRATION_ENTITY = EntitySpec(
    name="recadastramento",
    record_cls=ReRegistrationRecord,
    attributes=REREGISTRATION_ATTRIBUTES,
)
