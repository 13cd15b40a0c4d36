"""
services/aides.py

지원금(Aide) 비즈니스 로직.

- 지원금 종류 생성
- 지원금 배정 (금액 미지정 시 종류 기본 금액)
- 지급 처리(verse) / 취소(annule)

"""

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.aide import Aide, AideType
from app.models.membre import Membre
from app.services.exercices import resolve_exercice_id

logger = logging.getLogger(__name__)


def create_type(db: Session, **fields) -> AideType:
    if db.scalar(select(AideType).where(AideType.nom == fields["nom"])):
        raise ValueError("aide type already exists")
    aide_type = AideType(**{k: v for k, v in fields.items() if v is not None})
    db.add(aide_type)
    db.flush()
    return aide_type


def create_aide(
    db: Session,
    *,
    beneficiaire_id: uuid.UUID,
    type_aide_id: uuid.UUID,
    montant: int | None = None,
    date_allocation: date | None = None,
    contexte_aide: str = "reunion",
    justificatif: str | None = None,
    notes: str | None = None,
    reunion_id: uuid.UUID | None = None,
    exercice_id: uuid.UUID | None = None,
) -> Aide:
    if db.get(Membre, beneficiaire_id) is None:
        raise ValueError("beneficiaire not found")
    aide_type = db.get(AideType, type_aide_id)
    if aide_type is None:
        raise ValueError("aide type not found")

    if montant is None:
        montant = aide_type.montant_defaut or 0
    if montant <= 0:
        raise ValueError("montant must be greater than 0")

    date_allocation = date_allocation or date.today()
    aide = Aide(
        beneficiaire_id=beneficiaire_id,
        type_aide_id=type_aide_id,
        montant=montant,
        date_allocation=date_allocation,
        statut="alloue",
        contexte_aide=contexte_aide,
        justificatif=justificatif,
        notes=notes,
        reunion_id=reunion_id,
        exercice_id=resolve_exercice_id(db, exercice_id, date_allocation),
    )
    db.add(aide)
    db.flush()
    logger.info("aide allocated: beneficiaire=%s montant=%s", beneficiaire_id, montant)
    return aide


def mark_paid(db: Session, aide: Aide) -> Aide:
    if aide.statut != "alloue":
        raise ValueError(f"aide is {aide.statut}")
    aide.statut = "verse"
    db.flush()
    return aide


def cancel_aide(db: Session, aide: Aide) -> Aide:
    if aide.statut == "annule":
        raise ValueError("aide already cancelled")
    aide.statut = "annule"
    db.flush()
    return aide
