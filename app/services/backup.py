"""
services/backup.py

JSON 백업 / 검증 / 복원 로직.

백업 문서 형식:
{
  "timestamp": ISO-8601 (UTC),
  "version": settings.BACKUP_VERSION,
  "tables": {"<table>": [ {컬럼: 값, ...}, ... ]},
  "metadata": {"total_records": int, "backup_size": "12.5 KB", "tables": [...]}
}

설계 원칙:
- 행이 없는 테이블은 문서에서 생략
- 날짜 / UUID 는 문자열로 저장, 복원 시 컬럼 타입 기준으로 되돌림
- 복원은 FK 순서(Base.metadata.sorted_tables)대로, 테이블마다 savepoint
  → 실패한 테이블은 errors 에 기록하고 나머지는 계속 진행
- backup_size 는 실제 직렬화 크기가 아니라 테이블별 레코드 크기 추정치 합

"""

import logging
import math
import uuid
from datetime import date, datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.base import Base

logger = logging.getLogger(__name__)

DEFAULT_TABLES = [
    "membres",
    "exercices",
    "cotisations_types",
    "cotisations",
    "epargnes",
    "prets",
    "prets_paiements",
    "sanctions_types",
    "sanctions",
    "reunions",
    "rapports_seances",
    "aides_types",
    "aides",
    "roles",
    "role_permissions",
]

# 레코드 1건당 대략적인 크기 (bytes)
RECORD_SIZE_ESTIMATES = {
    "membres": 500,
    "cotisations": 300,
    "prets": 400,
    "aides": 350,
    "sanctions": 400,
    "epargnes": 250,
    "reunions": 600,
    "rapports_seances": 400,
}
DEFAULT_RECORD_SIZE = 300


def format_bytes(size: int, decimals: int = 2) -> str:
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    i = min(int(math.floor(math.log(size, 1024))), len(units) - 1)
    value = round(size / (1024 ** i), max(decimals, 0))
    return f"{value:g} {units[i]}"


def _table(name: str):
    table = Base.metadata.tables.get(name)
    if table is None:
        raise ValueError(f"unknown table: {name}")
    return table


def _to_json_value(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    return value


def _python_type(column):
    try:
        return column.type.python_type
    except NotImplementedError:
        return None


def _from_json_value(column, value):
    if not isinstance(value, str):
        return value
    py_type = _python_type(column)
    if py_type is datetime:
        return datetime.fromisoformat(value)
    if py_type is date:
        return date.fromisoformat(value)
    if py_type is uuid.UUID:
        return uuid.UUID(value)
    return value


def create_backup(db: Session, tables: list[str] | None = None) -> dict:
    names = tables or DEFAULT_TABLES
    data: dict[str, list[dict]] = {}
    total = 0
    estimated = 0

    for name in names:
        table = _table(name)
        rows = db.execute(select(table)).mappings().all()
        if not rows:
            continue
        data[name] = [{k: _to_json_value(v) for k, v in row.items()} for row in rows]
        total += len(rows)
        estimated += len(rows) * RECORD_SIZE_ESTIMATES.get(name, DEFAULT_RECORD_SIZE)

    logger.info("backup created: %d records in %d tables", total, len(data))
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.BACKUP_VERSION,
        "tables": data,
        "metadata": {
            "total_records": total,
            "backup_size": format_bytes(estimated),
            "tables": list(data.keys()),
        },
    }


def validate_backup(backup) -> dict:
    errors = []
    if not isinstance(backup, dict):
        return {"valid": False, "errors": ["invalid backup data"]}

    if not backup.get("timestamp") or not backup.get("version") or backup.get("tables") is None:
        errors.append("incomplete backup structure")
    if not isinstance(backup.get("metadata"), dict):
        errors.append("missing backup metadata")

    tables = backup.get("tables")
    if isinstance(tables, dict):
        for name, rows in tables.items():
            if not isinstance(rows, list):
                errors.append(f"table {name}: data must be a list")
            elif name not in Base.metadata.tables:
                errors.append(f"table {name}: unknown table")
    elif tables is not None:
        errors.append("tables must be an object")

    return {"valid": not errors, "errors": errors}


"""
백업 복원

- tables 지정 시 해당 테이블만, 아니면 문서에 있는 모든 테이블
- clear_existing=True 이면 삽입 전에 대상 테이블을 FK 역순으로 비움
- 반환: {"success": bool, "restored": {table: 건수}, "errors": [...]}

NOTE:
- commit 은 라우터에서 수행

"""

def restore_backup(db: Session, backup: dict, *, clear_existing: bool = False,
                   tables: list[str] | None = None) -> dict:
    check = validate_backup(backup)
    if not check["valid"]:
        raise ValueError("; ".join(check["errors"]))

    requested = set(tables or backup["tables"].keys())
    ordered = [t for t in Base.metadata.sorted_tables if t.name in requested and t.name in backup["tables"]]

    restored: dict[str, int] = {}
    errors: list[str] = []

    if clear_existing:
        for table in reversed(ordered):
            try:
                with db.begin_nested():
                    db.execute(delete(table))
            except SQLAlchemyError as e:
                errors.append(f"could not clear {table.name}: {type(e).__name__}")
                logger.warning("backup restore: clearing %s failed: %s", table.name, e)

    for table in ordered:
        rows = backup["tables"][table.name]
        if not rows:
            restored[table.name] = 0
            continue
        try:
            values = [
                {c.name: _from_json_value(c, row[c.name]) for c in table.columns if c.name in row}
                for row in rows
            ]
            with db.begin_nested():
                db.execute(table.insert(), values)
            restored[table.name] = len(values)
        except (SQLAlchemyError, ValueError, TypeError) as e:
            errors.append(f"error restoring {table.name}: {type(e).__name__}")
            logger.warning("backup restore: %s failed: %s", table.name, e)

    logger.info("backup restored: %s (errors: %d)", restored, len(errors))
    return {"success": not errors, "restored": restored, "errors": errors}
