from __future__ import annotations

from typing import List

from db.repos.base import SqliteRecordRepo
from models.file_record import FileRecord


class FilesRepo(SqliteRecordRepo):
    table = "arquivo"
    identity_column = "codigoarquivo"
    columns = (
        ("codigoarquivo", "codigo_arquivo"),
        ("nomearquivo", "nome_arquivo"),
        ("quantidaderegistro", "quantidade_registro"),
        ("aptos", "aptos"),
        ("semdocumento", "sem_documento"),
        ("comcodigosetps", "com_codigo_setps"),
        ("comerro", "com_erro"),
        ("anovigencia", "ano_vigencia"),
        ("codigoescola", "codigo_escola"),
    )
    record_cls = FileRecord

    def save(self, record: FileRecord) -> FileRecord:
        """Insert when the record has no id yet (the id is assigned here), else upsert."""
        if record.codigo_arquivo is None:
            names = [column for column, _field in self.columns if column != self.identity_column]
            sql = f"INSERT INTO {self.table} ({', '.join(names)}) VALUES ({', '.join('?' for _ in names)})"
            cur = self.conn.cursor()
            cur.execute(sql, self._values(record, skip_identity=True))
            record.codigo_arquivo = int(cur.lastrowid)
            return record
        self._upsert(record)
        return record

    def find_by_codigo_escola(self, codigo_escola: str) -> List[FileRecord]:
        return self._find_by("codigoescola", codigo_escola)

    def find_by_ano_vigencia(self, ano_vigencia: str) -> List[FileRecord]:
        return self._find_by("anovigencia", ano_vigencia)

