import argparse
import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator

from config.settings import get_settings
from db import schema
from db.connection import get_connection
from models.file_record import FILE_ENTITY
from models.reregistration_record import REREGISTRATION_ENTITY
from services.errors import RecordError, ValidationFailed, Violation
from services.record_service import RecordService
from services.registry import available_entities, get_service
from utils.logging_setup import init_logging


logger = logging.getLogger(__name__)

# Error status -> process exit code
EXIT_CODES = {400: 2, 404: 3, 409: 4, 500: 70}


@contextmanager
def _open_service(args) -> Iterator[RecordService]:
    conn = get_connection(args.db)
    try:
        schema.bootstrap(conn)
        yield get_service(args.entity, conn)
    finally:
        conn.close()


def _identity(service: RecordService, raw: str) -> Any:
    attr = service.entity.identity
    try:
        return attr.value_type(raw)
    except ValueError:
        raise ValidationFailed(
            service.entity.name, "lookup", [Violation(attr.wire_name, f"must be {attr.value_type.__name__}")]
        )


def _payload(args) -> Dict[str, Any]:
    if args.input:
        try:
            text = Path(args.input).read_text(encoding="utf-8")
        except OSError as exc:
            raise ValidationFailed(args.entity, args.cmd, [Violation("", f"cannot read {args.input}: {exc.strerror}")])
    else:
        text = args.data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationFailed(args.entity, args.cmd, [Violation("", f"invalid JSON: {exc.msg}")])
    return data


def _print(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_bootstrap(args):
    conn = get_connection(args.db)
    try:
        schema.bootstrap(conn)
    finally:
        conn.close()
    print("Schema ready")


def cmd_list(args):
    with _open_service(args) as service:
        _print([service.to_wire(r) for r in service.list()])


def cmd_get(args):
    with _open_service(args) as service:
        _print(service.to_wire(service.get(_identity(service, args.id))))


def cmd_create(args):
    payload = _payload(args)
    with _open_service(args) as service:
        _print(service.to_wire(service.create(payload)))


def cmd_update(args):
    payload = _payload(args)
    with _open_service(args) as service:
        record = service.update(payload, identity=_identity(service, args.id))
        _print(service.to_wire(record))


def cmd_delete(args):
    with _open_service(args) as service:
        identity = _identity(service, args.id)
        service.delete(identity)
    print(f"Deleted {args.entity} {identity}")


def cmd_find(args):
    with _open_service(args) as service:
        try:
            rows = service.find_by(args.by, args.value)
        except KeyError as exc:
            raise ValidationFailed(args.entity, "lookup", [Violation(args.by, str(exc.args[0]))])
        _print([service.to_wire(r) for r in rows])


def cmd_count(args):
    with _open_service(args) as service:
        print(service.count())


def cmd_name(args):
    args.entity = FILE_ENTITY.name
    with _open_service(args) as service:
        codigo = _identity(service, args.id)
        _print({"codigoarquivo": codigo, "nomearquivo": service.get_file_name(codigo)})


def _fail(exc: RecordError) -> None:
    print(json.dumps(exc.to_dict(), indent=2, ensure_ascii=False), file=sys.stderr)
    raise SystemExit(EXIT_CODES.get(exc.http_status, 1))


def _lookup_help() -> str:
    return "; ".join(
        f"{entity.name}: {', '.join(attr.wire_name for attr in entity.lookups())}"
        for entity in (FILE_ENTITY, REREGISTRATION_ENTITY)
    )


def main():
    settings = get_settings()
    init_logging(settings.log_level)
    entities = sorted(available_entities().keys())
    parser = argparse.ArgumentParser(description="File / state re-registration records CLI")
    parser.add_argument("--db", default=settings.db_path, help="Path to SQLite DB (default from settings)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_boot = sub.add_parser("bootstrap", help="Create tables and indexes")
    p_boot.set_defaults(func=cmd_bootstrap)

    p_list = sub.add_parser("list", help="List all records of an entity")
    p_list.add_argument("entity", choices=entities)
    p_list.set_defaults(func=cmd_list)

    p_get = sub.add_parser("get", help="Show one record by identity")
    p_get.add_argument("entity", choices=entities)
    p_get.add_argument("id", help="codigoarquivo (arquivo) or codigo (recadastramento)")
    p_get.set_defaults(func=cmd_get)

    p_create = sub.add_parser("create", help="Create a record from a JSON payload")
    p_create.add_argument("entity", choices=entities)
    src = p_create.add_mutually_exclusive_group(required=True)
    src.add_argument("--data", help="JSON object using the wire field names")
    src.add_argument("--input", help="Path to a JSON file")
    p_create.set_defaults(func=cmd_create)

    p_update = sub.add_parser("update", help="Apply the fields present in a JSON payload to a record")
    p_update.add_argument("entity", choices=entities)
    p_update.add_argument("id")
    src = p_update.add_mutually_exclusive_group(required=True)
    src.add_argument("--data", help="JSON object using the wire field names")
    src.add_argument("--input", help="Path to a JSON file")
    p_update.set_defaults(func=cmd_update)

    p_delete = sub.add_parser("delete", help="Delete a record by identity")
    p_delete.add_argument("entity", choices=entities)
    p_delete.add_argument("id")
    p_delete.set_defaults(func=cmd_delete)

    p_find = sub.add_parser("find", help="Exact-match lookup on a lookup field")
    p_find.add_argument("entity", choices=entities)
    p_find.add_argument("--by", required=True, help=f"Lookup field ({_lookup_help()})")
    p_find.add_argument("--value", required=True)
    p_find.set_defaults(func=cmd_find)

    p_count = sub.add_parser("count", help="Number of stored records")
    p_count.add_argument("entity", choices=entities)
    p_count.set_defaults(func=cmd_count)

    p_name = sub.add_parser("name", help="File name of an arquivo record")
    p_name.add_argument("id")
    p_name.set_defaults(func=cmd_name)

    args = parser.parse_args()
    try:
        args.func(args)
    except RecordError as exc:
        _fail(exc)


if __name__ == "__main__":
    main()
