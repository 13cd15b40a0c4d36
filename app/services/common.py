"""
services/common.py

여러 도메인 서비스에서 공통으로 쓰는 작은 헬퍼 모음.

- NotFoundError    : 조회 대상이 없을 때 (라우터에서 404로 변환)
- get_or_raise     : PK 조회 + NotFoundError
- safe_pct         : 분모가 0이면 0.0 (NaN / ZeroDivisionError 없음)
- add_months       : 월 단위 날짜 이동 (말일 보정)
- sum_of           : SUM(...) 을 coalesce 하여 int 로 반환

"""

import calendar
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session


class NotFoundError(LookupError):
    pass


def get_or_raise(db: Session, model, obj_id, label: str):
    obj = db.get(model, obj_id)
    if obj is None:
        raise NotFoundError(f"{label} not found")
    return obj


def safe_pct(part, total, digits: int = 2) -> float:
    if not total:
        return 0.0
    return round(part / total * 100, digits)


def add_months(d: date, months: int) -> date:
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def sum_of(db: Session, column, *conditions) -> int:
    stmt = select(func.coalesce(func.sum(column), 0))
    if conditions:
        stmt = stmt.where(*conditions)
    return int(db.scalar(stmt) or 0)
