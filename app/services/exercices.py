"""
services/exercices.py

회계 기간(Exercice) 관련 비즈니스 로직.

- 기간 생성 / 수정 / 마감
- 오늘 날짜 기준 현재 기간 조회
- 날짜로 소속 기간 찾기 (회비 / 저축 등록 시 exercice_id 자동 지정)

"""

import logging
from datetime import date

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.models.exercice import Exercice

logger = logging.getLogger(__name__)


def _validate_dates(date_debut: date, date_fin: date) -> None:
    if date_debut >= date_fin:
        raise ValueError("date_debut must be before date_fin")


def create_exercice(db: Session, *, nom: str, date_debut: date, date_fin: date, statut: str = "actif") -> Exercice:
    _validate_dates(date_debut, date_fin)
    exercice = Exercice(nom=nom, date_debut=date_debut, date_fin=date_fin, statut=statut)
    db.add(exercice)
    db.flush()
    logger.info("exercice created: %s (%s -> %s)", nom, date_debut, date_fin)
    return exercice


def update_exercice(db: Session, exercice: Exercice, changes: dict) -> Exercice:
    for field, value in changes.items():
        setattr(exercice, field, value)
    _validate_dates(exercice.date_debut, exercice.date_fin)
    db.flush()
    return exercice


def close_exercice(db: Session, exercice: Exercice) -> Exercice:
    if exercice.statut == "cloture":
        raise ValueError("exercice already closed")
    exercice.statut = "cloture"
    db.flush()
    logger.info("exercice closed: %s", exercice.nom)
    return exercice


def current_exercice(db: Session, today: date | None = None) -> Exercice | None:
    today = today or date.today()
    return db.scalar(
        select(Exercice)
        .where(Exercice.statut == "actif", Exercice.date_debut <= today, Exercice.date_fin >= today)
        .order_by(desc(Exercice.date_debut))
    )


# 날짜가 속한 기간 (여러 개면 가장 늦게 시작한 기간)
def exercice_for_date(db: Session, d: date) -> Exercice | None:
    return db.scalar(
        select(Exercice)
        .where(Exercice.date_debut <= d, Exercice.date_fin >= d)
        .order_by(desc(Exercice.date_debut))
    )


def resolve_exercice_id(db: Session, exercice_id, d: date):
    if exercice_id is not None:
        if db.get(Exercice, exercice_id) is None:
            raise ValueError("exercice not found")
        return exercice_id
    exercice = exercice_for_date(db, d)
    return exercice.id if exercice else None
