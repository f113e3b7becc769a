from __future__ import annotations

import threading

import pytest

from db import schema
from db.connection import get_connection
from db.repos.reregistrations_repo import ReRegistrationsRepo
from services.errors import IdentityConflict, NotFound, ValidationFailed
from services.reregistration_service import ReRegistrationService


def _service(conn, fill_omitted=None) -> ReRegistrationService:
    return ReRegistrationService(ReRegistrationsRepo(conn), fill_omitted=fill_omitted)


def test_create_fills_missing_text_with_empty_string(conn):
    service = _service(conn)
    record = service.create({"codigo": "SP01", "nome": "Escola A"})
    assert record.model_dump() == {
        "codigo": "SP01",
        "codigo_sec": "",
        "data_movimentacao": "",
        "ano_base": "",
        "nome": "Escola A",
        "cnpj": "",
        "bairro": "",
    }
    cur = conn.cursor()
    cur.execute("SELECT cnpj, bairro FROM arquivo_recadastramento_estado WHERE codigo = ?", ("SP01",))
    assert cur.fetchone() == ("", "")


def test_duplicate_code_is_a_conflict_and_keeps_stored_values(conn):
    service = _service(conn)
    service.create({"codigo": "SP01", "nome": "Escola A"})
    with pytest.raises(IdentityConflict):
        service.create({"codigo": "SP01", "nome": "Outra"})
    assert service.get("SP01").nome == "Escola A"
    assert service.count() == 1


def test_blank_code_is_rejected(conn):
    service = _service(conn)
    with pytest.raises(ValidationFailed):
        service.create({"codigo": "  ", "nome": "Escola A"})
    assert service.count() == 0


def test_update_keeps_omitted_and_overwrites_provided_empty(conn):
    service = _service(conn)
    service.create({"codigo": "SP01", "nome": "Escola A", "bairro": "Centro", "cnpj": "111"})
    service.update({"codigo": "SP01", "bairro": "Sul", "cnpj": ""})
    stored = service.get("SP01")
    assert stored.nome == "Escola A"
    assert stored.bairro == "Sul"
    assert stored.cnpj == ""


def test_update_with_fill_omitted_resets_missing_text(conn):
    service = _service(conn, fill_omitted=True)
    service.create({"codigo": "SP01", "nome": "Escola A", "bairro": "Centro"})
    service.update({"codigo": "SP01", "cnpj": "222"})
    stored = service.get("SP01")
    assert (stored.nome, stored.bairro, stored.cnpj) == ("", "", "222")


def test_fill_omitted_defaults_from_settings(conn, monkeypatch):
    from config.settings import get_settings

    monkeypatch.setenv("REREGISTRATION_FILL_OMITTED", "true")
    get_settings.cache_clear()
    assert _service(conn).merger.fill_omitted is True

    monkeypatch.setenv("REREGISTRATION_FILL_OMITTED", "false")
    get_settings.cache_clear()
    assert _service(conn).merger.fill_omitted is False


def test_update_unknown_code_is_not_found(conn):
    service = _service(conn)
    with pytest.raises(NotFound):
        service.update({"codigo": "XX99", "nome": "n"})
    assert service.exists("XX99") is False


def test_lookups(conn):
    service = _service(conn)
    service.create({"codigo": "A1", "anoBase": "2024", "cnpj": "111", "bairro": "Centro"})
    service.create({"codigo": "A2", "anoBase": "2024", "cnpj": "222", "bairro": "Sul"})
    service.create({"codigo": "A3", "anoBase": "2023", "cnpj": "111", "bairro": "Centro"})

    assert [r.codigo for r in service.find_by_ano_base("2024")] == ["A1", "A2"]
    assert [r.codigo for r in service.find_by_cnpj("111")] == ["A1", "A3"]
    assert [r.codigo for r in service.find_by_bairro("Sul")] == ["A2"]
    assert [r.codigo for r in service.find_by("anoBase", "2023")] == ["A3"]
    assert service.find_by("cnpj", "999") == []


def test_concurrent_creates_with_same_code_admit_one(tmp_path):
    db_path = str(tmp_path / "concurrent.db")
    setup = get_connection(db_path)
    schema.bootstrap(setup)
    setup.close()

    barrier = threading.Barrier(2)
    outcomes = []
    lock = threading.Lock()

    def worker():
        # sqlite3 connections stay on the thread that opened them
        conn = get_connection(db_path)
        try:
            service = _service(conn, fill_omitted=False)
            barrier.wait()
            try:
                service.create({"codigo": "SP01"})
                result = "ok"
            except IdentityConflict:
                result = "conflict"
            except Exception as exc:  # surfaced through the assertion below
                result = repr(exc)
        finally:
            conn.close()
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)

    assert sorted(outcomes) == ["conflict", "ok"]
    check = get_connection(db_path)
    try:
        assert _service(check, fill_omitted=False).count() == 1
    finally:
        check.close()
