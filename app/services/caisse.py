"""
services/caisse.py

현금함(fond de caisse) 로직.

- 잔액 = 직전 마감의 solde_reel (없으면 0) + 열린 입금 합계 - 열린 출금 합계
- 마감: 실사 잔액(solde_reel)을 받아 차이(ecart = reel - theorique)를 기록하고
  열린 거래 전부를 해당 마감에 연결
- 마감일은 직전 마감일보다 앞설 수 없음 (잔액의 기준이 되는 마감 순서 유지)

"""

import logging
import uuid
from datetime import date

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.models.caisse import CaisseCloture, CaisseOperation
from app.services.common import sum_of

logger = logging.getLogger(__name__)

OPERATION_TYPES = ("entree", "sortie")


def add_operation(
    db: Session,
    *,
    type_operation: str,
    montant: int,
    libelle: str,
    date_operation: date | None = None,
    categorie: str | None = None,
    operateur_id: uuid.UUID | None = None,
) -> CaisseOperation:
    if type_operation not in OPERATION_TYPES:
        raise ValueError("type_operation must be 'entree' or 'sortie'")
    if montant <= 0:
        raise ValueError("montant must be greater than 0")

    operation = CaisseOperation(
        type_operation=type_operation,
        montant=montant,
        libelle=libelle,
        date_operation=date_operation or date.today(),
        categorie=categorie,
        operateur_id=operateur_id,
    )
    db.add(operation)
    db.flush()
    return operation


def last_cloture(db: Session) -> CaisseCloture | None:
    return db.scalar(
        select(CaisseCloture).order_by(desc(CaisseCloture.date_cloture), desc(CaisseCloture.created_at))
    )


def current_balance(db: Session) -> dict:
    cloture = last_cloture(db)
    ouverture = cloture.solde_reel if cloture else 0
    entrees = sum_of(
        db, CaisseOperation.montant,
        CaisseOperation.cloture_id.is_(None),
        CaisseOperation.type_operation == "entree",
    )
    sorties = sum_of(
        db, CaisseOperation.montant,
        CaisseOperation.cloture_id.is_(None),
        CaisseOperation.type_operation == "sortie",
    )
    return {
        "solde_ouverture": ouverture,
        "total_entrees": entrees,
        "total_sorties": sorties,
        "solde": ouverture + entrees - sorties,
    }


def close_caisse(db: Session, *, solde_reel: int, notes: str | None = None,
                 cloture_par: uuid.UUID | None = None, date_cloture: date | None = None) -> CaisseCloture:
    if solde_reel < 0:
        raise ValueError("solde_reel must not be negative")

    date_cloture = date_cloture or date.today()
    previous = last_cloture(db)
    if previous is not None and date_cloture < previous.date_cloture:
        raise ValueError(f"date_cloture must not be before the last closing ({previous.date_cloture.isoformat()})")

    balance = current_balance(db)
    cloture = CaisseCloture(
        date_cloture=date_cloture,
        solde_ouverture=balance["solde_ouverture"],
        total_entrees=balance["total_entrees"],
        total_sorties=balance["total_sorties"],
        solde_theorique=balance["solde"],
        solde_reel=solde_reel,
        ecart=solde_reel - balance["solde"],
        notes=notes,
        cloture_par=cloture_par,
    )
    db.add(cloture)
    db.flush()

    for op in db.scalars(select(CaisseOperation).where(CaisseOperation.cloture_id.is_(None))).all():
        op.cloture_id = cloture.id
    db.flush()

    if cloture.ecart:
        logger.warning("caisse closed with ecart=%s (theorique=%s reel=%s)",
                       cloture.ecart, cloture.solde_theorique, solde_reel)
    else:
        logger.info("caisse closed: solde=%s", solde_reel)
    return cloture
