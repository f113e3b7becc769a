from __future__ import annotations

import pytest

from db.repos.files_repo import FilesRepo
from models.file_record import FileRecord
from services.errors import IdentityConflict, NotFound, ValidationFailed
from services.file_service import FileService


def _service(conn) -> FileService:
    return FileService(FilesRepo(conn))


def test_create_assigns_id_and_leaves_counters_unset(conn):
    service = _service(conn)
    record = service.create({"nomearquivo": "a.txt", "quantidaderegistro": 10})
    assert isinstance(record.codigo_arquivo, int)
    assert record.aptos is None
    assert record.primitive("aptos") == 0

    cur = conn.cursor()
    cur.execute("SELECT nomearquivo, quantidaderegistro, aptos FROM arquivo WHERE codigoarquivo = ?", (record.codigo_arquivo,))
    assert cur.fetchone() == ("a.txt", 10, None)


def test_update_touches_only_provided_attributes(conn):
    service = _service(conn)
    service.repo.save(FileRecord(codigoarquivo=7, nomearquivo="a.txt", aptos=4, codigoescola="E1"))

    updated = service.update({"codigoarquivo": 7, "codigoescola": "E2"})
    assert updated.codigo_escola == "E2"

    stored = service.get(7)
    assert stored.codigo_escola == "E2"
    assert stored.nome_arquivo == "a.txt"
    assert stored.aptos == 4


def test_update_identity_argument_wins_over_payload(conn):
    service = _service(conn)
    service.repo.save(FileRecord(codigoarquivo=7, nomearquivo="a.txt"))
    service.update({"codigoarquivo": 8, "aptos": 2}, identity=7)
    assert service.get(7).aptos == 2
    assert service.exists(8) is False


def test_create_with_client_id_is_a_conflict_and_persists_nothing(conn):
    service = _service(conn)
    with pytest.raises(IdentityConflict):
        service.create({"codigoarquivo": 5, "nomearquivo": "x"})
    assert service.count() == 0


def test_update_unknown_id_is_not_found(conn):
    service = _service(conn)
    with pytest.raises(NotFound) as info:
        service.update({"codigoarquivo": 999, "aptos": 1})
    assert info.value.http_status == 404
    assert service.count() == 0


def test_invalid_update_leaves_record_untouched(conn):
    service = _service(conn)
    service.repo.save(FileRecord(codigoarquivo=3, nomearquivo="a.txt", aptos=1))
    with pytest.raises(ValidationFailed):
        service.update({"codigoarquivo": 3, "aptos": -5, "nomearquivo": "b.txt"})
    stored = service.get(3)
    assert (stored.nome_arquivo, stored.aptos) == ("a.txt", 1)


def test_get_file_name(conn):
    service = _service(conn)
    created = service.create({"nomearquivo": "remessa.csv"})
    assert service.get_file_name(created.codigo_arquivo) == "remessa.csv"
    with pytest.raises(NotFound):
        service.get_file_name(12345)


def test_lookups(conn):
    service = _service(conn)
    service.create({"nomearquivo": "a", "codigoescola": "E1", "anovigencia": "2024"})
    service.create({"nomearquivo": "b", "codigoescola": "E1", "anovigencia": "2025"})
    service.create({"nomearquivo": "c", "codigoescola": "E2", "anovigencia": "2024"})

    assert [r.nome_arquivo for r in service.find_by_codigo_escola("E1")] == ["a", "b"]
    assert [r.nome_arquivo for r in service.find_by_ano_vigencia("2024")] == ["a", "c"]
    assert [r.nome_arquivo for r in service.find_by("codigoescola", "E2")] == ["c"]
    with pytest.raises(KeyError):
        service.find_by("nomearquivo", "a")


def test_delete(conn):
    service = _service(conn)
    created = service.create({"nomearquivo": "a"})
    service.delete(created.codigo_arquivo)
    assert service.list() == []
    with pytest.raises(NotFound):
        service.delete(created.codigo_arquivo)


def test_to_wire_uses_wire_names(conn):
    service = _service(conn)
    created = service.create({"nomearquivo": "a", "comerro": 0})
    wire = service.to_wire(created)
    assert list(wire) == [
        "codigoarquivo",
        "nomearquivo",
        "quantidaderegistro",
        "aptos",
        "semdocumento",
        "comcodigosetps",
        "comerro",
        "anovigencia",
        "codigoescola",
    ]
    assert wire["comerro"] == 0
    assert wire["aptos"] is None
    assert wire == created.model_dump(by_alias=True)


def test_long_text_and_numeric_year_are_stored(conn):
    service = _service(conn)
    created = service.create({"nomearquivo": "x" * 300, "anovigencia": 2024, "codigoescola": "2024/2025-S1"})
    stored = service.get(created.codigo_arquivo)
    assert len(stored.nome_arquivo) == 300
    assert stored.ano_vigencia == "2024"
    assert stored.codigo_escola == "2024/2025-S1"
