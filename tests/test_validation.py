from __future__ import annotations

import pytest

from models.file_record import FILE_ENTITY
from models.reregistration_record import REREGISTRATION_ENTITY
from services.errors import ValidationFailed
from services.validation import Ruleset, ValidationGate


def test_all_file_violations_reported_together():
    gate = ValidationGate(FILE_ENTITY)
    violations = gate.validate(
        {"nomearquivo": "a.txt", "aptos": -1, "semdocumento": -2, "comerro": -3},
        Ruleset.CREATE,
    )
    assert {v.attribute for v in violations} == {"aptos", "semdocumento", "comerro"}


def test_file_text_attributes_have_no_length_limit():
    gate = ValidationGate(FILE_ENTITY)
    payload = {"nomearquivo": "x" * 300, "anovigencia": "2024/2025-S1", "codigoescola": "E" * 80}
    assert gate.validate(payload, Ruleset.CREATE) == []


def test_numbers_are_accepted_for_text_attributes():
    gate = ValidationGate(FILE_ENTITY)
    parsed = gate.check({"anovigencia": 2024, "codigoescola": 35}, Ruleset.CREATE)
    assert (parsed.ano_vigencia, parsed.codigo_escola) == ("2024", "35")

    parsed = ValidationGate(REREGISTRATION_ENTITY).check({"codigo": 101, "anoBase": 2024}, Ruleset.CREATE)
    assert (parsed.codigo, parsed.ano_base) == ("101", "2024")


def test_file_create_accepts_minimal_payload():
    gate = ValidationGate(FILE_ENTITY)
    assert gate.validate({"nomearquivo": "a.txt", "quantidaderegistro": 10}, Ruleset.CREATE) == []
    assert gate.validate({}, Ruleset.CREATE) == []


def test_surrogate_identity_on_create_is_not_a_validation_error():
    # Reported as an identity conflict further down the create path
    gate = ValidationGate(FILE_ENTITY)
    assert gate.validate({"codigoarquivo": 5}, Ruleset.CREATE) == []


def test_file_update_requires_identity():
    gate = ValidationGate(FILE_ENTITY)
    violations = gate.validate({"aptos": 3}, Ruleset.UPDATE)
    assert [(v.attribute, v.message) for v in violations] == [("codigoarquivo", "must be provided for update")]
    assert gate.validate({"codigoarquivo": 7, "aptos": 3}, Ruleset.UPDATE) == []


def test_file_update_still_checks_counter_minimums():
    gate = ValidationGate(FILE_ENTITY)
    violations = gate.validate({"codigoarquivo": 7, "quantidaderegistro": -1, "codigoescola": "E2"}, Ruleset.UPDATE)
    assert [v.attribute for v in violations] == ["quantidaderegistro"]


def test_non_integer_identity_is_rejected():
    gate = ValidationGate(FILE_ENTITY)
    violations = gate.validate({"codigoarquivo": "abc"}, Ruleset.UPDATE)
    assert [v.attribute for v in violations] == ["codigoarquivo"]


@pytest.mark.parametrize("codigo", [None, "", "   "])
def test_reregistration_codigo_must_not_be_blank(codigo):
    gate = ValidationGate(REREGISTRATION_ENTITY)
    payload = {"nome": "Escola A"}
    if codigo is not None:
        payload["codigo"] = codigo
    for ruleset in (Ruleset.CREATE, Ruleset.UPDATE):
        violations = gate.validate(payload, ruleset)
        assert [(v.attribute, v.message) for v in violations] == [("codigo", "must not be blank")]


def test_reregistration_lengths():
    gate = ValidationGate(REREGISTRATION_ENTITY)
    violations = gate.validate(
        {"codigo": "C" * 51, "anoBase": "20242025202", "cnpj": "9" * 21, "bairro": "b" * 100},
        Ruleset.CREATE,
    )
    assert {v.attribute for v in violations} == {"codigo", "anoBase", "cnpj"}


def test_non_object_payload():
    gate = ValidationGate(FILE_ENTITY)
    violations = gate.validate(["not", "an", "object"], Ruleset.CREATE)
    assert len(violations) == 1
    assert violations[0].message == "payload must be an object"


def test_check_raises_with_violations_and_returns_parsed_model():
    gate = ValidationGate(REREGISTRATION_ENTITY)
    with pytest.raises(ValidationFailed) as info:
        gate.check({"codigo": ""}, Ruleset.CREATE)
    err = info.value
    assert err.http_status == 400
    assert err.ruleset == "create"
    data = err.to_dict()
    assert data["kind"] == "validation_failed"
    assert data["violations"] == [{"attribute": "codigo", "message": "must not be blank"}]

    parsed = gate.check({"codigo": "SP01", "nome": "Escola A"}, Ruleset.CREATE)
    assert parsed.codigo == "SP01"
    assert parsed.model_fields_set == {"codigo", "nome"}
