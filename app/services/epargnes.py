"""
services/epargnes.py

저축(Épargne) 비즈니스 로직.

- 예치 등록 / 인출 처리
- 회원별 저축 합계
- 저축자 이익 배분 (대출 이자 총액을 활성 저축 비율대로 분배)

"""

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.epargne import Epargne
from app.models.exercice import Exercice
from app.models.membre import Membre
from app.models.pret import Pret
from app.services.common import safe_pct
from app.services.exercices import resolve_exercice_id
from app.services.prets import interest_amount

logger = logging.getLogger(__name__)


def create_epargne(
    db: Session,
    *,
    membre_id: uuid.UUID,
    montant: int,
    date_depot: date | None = None,
    exercice_id: uuid.UUID | None = None,
    reunion_id: uuid.UUID | None = None,
    notes: str | None = None,
) -> Epargne:
    if db.get(Membre, membre_id) is None:
        raise ValueError("membre not found")
    if montant <= 0:
        raise ValueError("montant must be greater than 0")

    date_depot = date_depot or date.today()
    epargne = Epargne(
        membre_id=membre_id,
        montant=montant,
        date_depot=date_depot,
        exercice_id=resolve_exercice_id(db, exercice_id, date_depot),
        reunion_id=reunion_id,
        notes=notes,
    )
    db.add(epargne)
    db.flush()
    logger.info("epargne deposited: membre=%s montant=%s", membre_id, montant)
    return epargne


def withdraw_epargne(db: Session, epargne: Epargne) -> Epargne:
    if epargne.statut != "actif":
        raise ValueError(f"epargne is {epargne.statut}")
    epargne.statut = "retire"
    db.flush()
    logger.info("epargne withdrawn: %s", epargne.id)
    return epargne


def totals_by_membre(db: Session, *, exercice_id: uuid.UUID | None = None) -> dict[uuid.UUID, int]:
    stmt = select(Epargne).where(Epargne.statut == "actif")
    if exercice_id is not None:
        stmt = stmt.where(Epargne.exercice_id == exercice_id)

    totals: dict[uuid.UUID, int] = {}
    for e in db.scalars(stmt).all():
        totals[e.membre_id] = totals.get(e.membre_id, 0) + e.montant
    return totals


"""
저축자 이익 배분

- 이자 총액: statut en_cours / reconduit 대출의 montant * taux/100 * (1 + reconductions)
  (exercice 지정 시 date_pret 이 기간 안에 있는 대출만)
- 저축: statut actif (exercice 지정 시 해당 기간 저축만)
- 회원별 gains = 저축 / 총저축 * 이자 총액, 총저축이 0이면 0
- 저축액 내림차순 정렬

"""

def compute_benefices(epargnes_by_membre: dict, total_interets: float) -> list[dict]:
    total_epargne = sum(epargnes_by_membre.values())
    rows = []
    for membre_id, montant in epargnes_by_membre.items():
        gains = round(montant / total_epargne * total_interets) if total_epargne > 0 else 0
        rows.append(
            {
                "membre_id": membre_id,
                "total_epargne": montant,
                "pourcentage": safe_pct(montant, total_epargne),
                "gains_estimes": gains,
            }
        )
    rows.sort(key=lambda r: r["total_epargne"], reverse=True)
    return rows


def epargnants_benefices(db: Session, *, exercice_id: uuid.UUID | None = None) -> dict:
    pret_stmt = select(Pret).where(Pret.statut.in_(["en_cours", "reconduit"]))
    if exercice_id is not None:
        exercice = db.get(Exercice, exercice_id)
        if exercice is None:
            raise ValueError("exercice not found")
        pret_stmt = pret_stmt.where(Pret.date_pret >= exercice.date_debut, Pret.date_pret <= exercice.date_fin)

    total_interets = sum(interest_amount(p.montant, p.taux_interet, p.reconductions) for p in db.scalars(pret_stmt).all())

    totals = totals_by_membre(db, exercice_id=exercice_id)
    rows = compute_benefices(totals, total_interets)

    membres = {m.id: m for m in db.scalars(select(Membre).where(Membre.id.in_(list(totals.keys())))).all()} if totals else {}
    for r in rows:
        m = membres.get(r["membre_id"])
        r["nom"] = m.nom if m else ""
        r["prenom"] = m.prenom if m else ""

    return {
        "total_interets": round(total_interets),
        "total_epargnes": sum(totals.values()),
        "epargnants": rows,
    }
