from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .attributes import AttributeSpec, EntitySpec, IdentityKind, Nullability, strategies
from .nullability import NullabilityPolicy


_POLICY = NullabilityPolicy()


class FileRecord(BaseModel):
    """App/DB record shape for an ``arquivo`` row.

    Every attribute is nullable. ``primitive()`` exposes the legacy view in
    which unset counters read ``0`` and unset text reads ``""``. The
    all-lowercase properties are the accessor spellings older callers used.
    """

    codigo_arquivo: int | None = Field(default=None, alias="codigoarquivo")
    nome_arquivo: str | None = Field(default=None, alias="nomearquivo")
    quantidade_registro: int | None = Field(default=None, alias="quantidaderegistro", ge=0)
    aptos: int | None = Field(default=None, alias="aptos", ge=0)
    sem_documento: int | None = Field(default=None, alias="semdocumento", ge=0)
    com_codigo_setps: int | None = Field(default=None, alias="comcodigosetps", ge=0)
    com_erro: int | None = Field(default=None, alias="comerro", ge=0)
    ano_vigencia: str | None = Field(default=None, alias="anovigencia")
    codigo_escola: str | None = Field(default=None, alias="codigoescola")

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    def primitive(self, name: str) -> Any:
        attr = FILE_ENTITY.attribute(name)
        return _POLICY.coerce_primitive_view(attr, getattr(self, attr.name))

    # --- Legacy accessor spellings ---
    @property
    def codigoarquivo(self) -> int | None:
        return self.codigo_arquivo

    @codigoarquivo.setter
    def codigoarquivo(self, value: int | None) -> None:
        self.codigo_arquivo = value

    @property
    def nomearquivo(self) -> str | None:
        return self.nome_arquivo

    @nomearquivo.setter
    def nomearquivo(self, value: str | None) -> None:
        self.nome_arquivo = value

    @property
    def quantidaderegistro(self) -> int | None:
        return self.quantidade_registro

    @quantidaderegistro.setter
    def quantidaderegistro(self, value: int | None) -> None:
        self.quantidade_registro = value

    @property
    def semdocumento(self) -> int | None:
        return self.sem_documento

    @semdocumento.setter
    def semdocumento(self, value: int | None) -> None:
        self.sem_documento = value

    @property
    def comcodigosetps(self) -> int | None:
        return self.com_codigo_setps

    @comcodigosetps.setter
    def comcodigosetps(self, value: int | None) -> None:
        self.com_codigo_setps = value

    @property
    def comerro(self) -> int | None:
        return self.com_erro

    @comerro.setter
    def comerro(self, value: int | None) -> None:
        self.com_erro = value

    @property
    def anovigencia(self) -> str | None:
        return self.ano_vigencia

    @anovigencia.setter
    def anovigencia(self, value: str | None) -> None:
        self.ano_vigencia = value

    @property
    def codigoescola(self) -> str | None:
        return self.codigo_escola

    @codigoescola.setter
    def codigoescola(self, value: str | None) -> None:
        self.codigo_escola = value


FILE_ATTRIBUTES = (
    AttributeSpec("codigo_arquivo", "codigoarquivo", int, Nullability.NULLABLE,
                  strategies("codigo_arquivo", "codigoarquivo"), identity=IdentityKind.SURROGATE),
    AttributeSpec("nome_arquivo", "nomearquivo", str, Nullability.NULLABLE,
                  strategies("nome_arquivo", "nomearquivo")),
    AttributeSpec("quantidade_registro", "quantidaderegistro", int, Nullability.NULLABLE,
                  strategies("quantidade_registro", "quantidaderegistro")),
    AttributeSpec("aptos", "aptos", int, Nullability.NULLABLE, strategies("aptos")),
    AttributeSpec("sem_documento", "semdocumento", int, Nullability.NULLABLE,
                  strategies("sem_documento", "semdocumento")),
    AttributeSpec("com_codigo_setps", "comcodigosetps", int, Nullability.NULLABLE,
                  strategies("com_codigo_setps", "comcodigosetps")),
    AttributeSpec("com_erro", "comerro", int, Nullability.NULLABLE, strategies("com_erro", "comerro")),
    AttributeSpec("ano_vigencia", "anovigencia", str, Nullability.NULLABLE,
                  strategies("ano_vigencia", "anovigencia"), lookup=True),
    # School code went through two spellings before the snake_case field.
    AttributeSpec("codigo_escola", "codigoescola", str, Nullability.NULLABLE,
                  strategies("codigo_escola", "codigoescola", "codigoEscola"), lookup=True),
)

FILE_ENTITY = EntitySpec(
    name="arquivo",
    record_cls=FileRecord,
    attributes=FILE_ATTRIBUTES,
)
