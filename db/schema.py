from __future__ import annotations

import sqlite3


def bootstrap(conn: sqlite3.Connection) -> None:
    """Create the record tables and lookup indexes (idempotent)."""
    cur = conn.cursor()

    # File records; column names are the legacy wire names
    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS arquivo (\n"
            "  codigoarquivo INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "  nomearquivo TEXT,\n"
            "  quantidaderegistro INTEGER CHECK (quantidaderegistro IS NULL OR quantidaderegistro >= 0),\n"
            "  aptos INTEGER CHECK (aptos IS NULL OR aptos >= 0),\n"
            "  semdocumento INTEGER CHECK (semdocumento IS NULL OR semdocumento >= 0),\n"
            "  comcodigosetps INTEGER CHECK (comcodigosetps IS NULL OR comcodigosetps >= 0),\n"
            "  comerro INTEGER CHECK (comerro IS NULL OR comerro >= 0),\n"
            "  anovigencia TEXT,\n"
            "  codigoescola TEXT\n"
            ")"
        )
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_arquivo_codigoescola ON arquivo(codigoescola);")
    cur.execute("CREATE INDEX IF NOT EXISTS idx_arquivo_anovigencia ON arquivo(anovigencia);")

    # State re-registrations, keyed by the business code
    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS arquivo_recadastramento_estado (\n"
            "  codigo TEXT NOT NULL PRIMARY KEY CHECK (length(trim(codigo)) > 0),\n"
            "  codigo_sec TEXT NOT NULL DEFAULT '',\n"
            "  data_movimentacao TEXT NOT NULL DEFAULT '',\n"
            "  ano_base TEXT NOT NULL DEFAULT '',\n"
            "  nome TEXT NOT NULL DEFAULT '',\n"
            "  cnpj TEXT NOT NULL DEFAULT '',\n"
            "  bairro TEXT NOT NULL DEFAULT ''\n"
            ")"
        )
    )
    cur.execute(
        "CREATE INDEX IF NOT EXISTS idx_recadastramento_ano_base ON arquivo_recadastramento_estado(ano_base);"
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_recadastramento_cnpj ON arquivo_recadastramento_estado(cnpj);")
    cur.execute(
        "CREATE INDEX IF NOT EXISTS idx_recadastramento_bairro ON arquivo_recadastramento_estado(bairro);"
    )

    conn.commit()
