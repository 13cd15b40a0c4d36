"""
services/prets.py

대출(Prêt) 도메인의 비즈니스 로직 모음.

주요 기능:
- 대출 생성 (보증인 ≠ 차입자, 금액/이율/만기 검증)
- 부분 상환 / 전액 상환 (잔액 초과 상환 불가)
- 만기 연장(reconduction): 이자 한 번 더 부과
- 연체 판정 및 대출 현황 대시보드

계산 규칙:
- interets       = montant * taux/100 * (1 + reconductions)
- montant_total_du = round(montant + interets)  (FCFA 정수)
- restant        = montant_total_du - montant_paye

관련 파일:
- app.models.pret          : Pret / PretPaiement
- app.routers.prets        : 대출 API
- app.services.epargnes    : 저축자 이익 배분에서 interest_amount 사용

"""

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.membre import Membre
from app.models.pret import Pret, PretPaiement
from app.services.common import add_months

logger = logging.getLogger(__name__)

CLOSED_STATUSES = ("rembourse", "annule")
PAYMENT_MODES = ("especes", "virement", "mobile_money", "cheque")
MAX_TAUX = 50


def interest_amount(montant: int, taux_interet: float, reconductions: int = 0) -> float:
    return montant * (taux_interet / 100) * (1 + (reconductions or 0))


def total_du(montant: int, taux_interet: float, reconductions: int = 0) -> int:
    return round(montant + interest_amount(montant, taux_interet, reconductions))


def remaining(pret: Pret) -> int:
    return max(pret.montant_total_du - pret.montant_paye, 0)


def is_overdue(pret: Pret, today: date | None = None) -> bool:
    today = today or date.today()
    return pret.echeance < today and remaining(pret) > 0 and pret.statut not in CLOSED_STATUSES


def create_pret(
    db: Session,
    *,
    membre_id: uuid.UUID,
    montant: int,
    echeance: date,
    taux_interet: float = 5.0,
    date_pret: date | None = None,
    avaliste_id: uuid.UUID | None = None,
    notes: str | None = None,
) -> Pret:
    if db.get(Membre, membre_id) is None:
        raise ValueError("membre not found")
    if avaliste_id is not None:
        if avaliste_id == membre_id:
            raise ValueError("avaliste must differ from borrower")
        if db.get(Membre, avaliste_id) is None:
            raise ValueError("avaliste not found")
    if montant <= 0:
        raise ValueError("montant must be greater than 0")
    if taux_interet < 0 or taux_interet > MAX_TAUX:
        raise ValueError(f"taux_interet must be between 0 and {MAX_TAUX}")

    date_pret = date_pret or date.today()
    if echeance <= date_pret:
        raise ValueError("echeance must be after date_pret")

    pret = Pret(
        membre_id=membre_id,
        avaliste_id=avaliste_id,
        montant=montant,
        taux_interet=taux_interet,
        date_pret=date_pret,
        echeance=echeance,
        reconductions=0,
        montant_paye=0,
        montant_total_du=total_du(montant, taux_interet, 0),
        statut="en_cours",
        notes=notes,
    )
    db.add(pret)
    db.flush()
    logger.info("pret created: membre=%s montant=%s total_du=%s", membre_id, montant, pret.montant_total_du)
    return pret


"""
부분 상환 기록

- 상환 금액 > 0, 잔액 이하
- rembourse / annule 상태 대출은 상환 불가
- 잔액이 0이 되면 rembourse, 아니면 partiel

"""

def record_payment(
    db: Session,
    pret: Pret,
    *,
    montant: int,
    date_paiement: date | None = None,
    mode_paiement: str = "especes",
    notes: str | None = None,
) -> PretPaiement:
    if pret.statut in CLOSED_STATUSES:
        raise ValueError(f"pret is {pret.statut}")
    if montant <= 0:
        raise ValueError("montant must be greater than 0")
    if mode_paiement not in PAYMENT_MODES:
        raise ValueError("invalid mode_paiement")

    rest = remaining(pret)
    if montant > rest:
        raise ValueError(f"payment exceeds remaining balance ({rest})")

    paiement = PretPaiement(
        pret_id=pret.id,
        montant_paye=montant,
        date_paiement=date_paiement or date.today(),
        mode_paiement=mode_paiement,
        notes=notes,
    )
    db.add(paiement)

    pret.montant_paye += montant
    pret.statut = "rembourse" if remaining(pret) == 0 else "partiel"
    db.flush()
    logger.info("pret payment: pret=%s montant=%s statut=%s", pret.id, montant, pret.statut)
    return paiement


def repay_in_full(db: Session, pret: Pret, *, mode_paiement: str = "especes") -> PretPaiement:
    rest = remaining(pret)
    if rest <= 0:
        raise ValueError("pret already fully paid")
    return record_payment(db, pret, montant=rest, mode_paiement=mode_paiement, notes="remboursement total")


"""
만기 연장

- 새 만기는 기존 만기 이후여야 함 (미지정 시 기존 만기 + 2개월)
- reconductions + 1, statut reconduit, montant_total_du 재계산

"""

def reconduct(db: Session, pret: Pret, *, nouvelle_echeance: date | None = None) -> Pret:
    if pret.statut in CLOSED_STATUSES:
        raise ValueError(f"pret is {pret.statut}")

    nouvelle_echeance = nouvelle_echeance or add_months(pret.echeance, 2)
    if nouvelle_echeance <= pret.echeance:
        raise ValueError("new echeance must be after the current one")

    pret.echeance = nouvelle_echeance
    pret.reconductions += 1
    pret.montant_total_du = total_du(pret.montant, pret.taux_interet, pret.reconductions)
    pret.statut = "reconduit"
    db.flush()
    logger.info("pret reconducted: pret=%s reconductions=%d", pret.id, pret.reconductions)
    return pret


def cancel_pret(db: Session, pret: Pret) -> Pret:
    if pret.statut == "rembourse":
        raise ValueError("pret already repaid")
    pret.statut = "annule"
    db.flush()
    return pret


def list_overdue(db: Session, today: date | None = None) -> list[Pret]:
    today = today or date.today()
    candidates = db.scalars(
        select(Pret).where(Pret.echeance < today, Pret.statut.notin_(CLOSED_STATUSES)).order_by(Pret.echeance)
    ).all()
    return [p for p in candidates if is_overdue(p, today)]


# 연체 대출의 statut 을 en_retard 로 갱신, 갱신 건수 반환
def mark_overdue(db: Session, today: date | None = None) -> int:
    count = 0
    for p in list_overdue(db, today):
        if p.statut != "en_retard":
            p.statut = "en_retard"
            count += 1
    db.flush()
    return count


"""
대출 현황 대시보드

- total_prets    : 모든 대출의 (원금 + 이자) 합
- total_interets : 이자 합
- total_paye     : rembourse 대출의 총액 합
- total_en_retard / total_en_cours : 연체 / 정상 대출의 잔액 합
- 건수: nombre_prets = en_cours + rembourses + en_retard (annule 는 nombre_annules 로 따로 집계)

"""

def dashboard(prets: list[Pret], today: date | None = None) -> dict:
    today = today or date.today()
    stats = {
        "total_prets": 0,
        "total_en_cours": 0,
        "total_paye": 0,
        "total_en_retard": 0,
        "total_interets": 0,
        "nombre_prets": 0,
        "nombre_en_cours": 0,
        "nombre_rembourses": 0,
        "nombre_en_retard": 0,
        "nombre_annules": 0,
    }
    for p in prets:
        if p.statut == "annule":
            stats["nombre_annules"] += 1
            continue
        stats["nombre_prets"] += 1
        montant_total = total_du(p.montant, p.taux_interet, p.reconductions)
        stats["total_prets"] += montant_total
        stats["total_interets"] += montant_total - p.montant

        if p.statut == "rembourse":
            stats["total_paye"] += montant_total
            stats["nombre_rembourses"] += 1
        elif is_overdue(p, today):
            stats["total_en_retard"] += remaining(p)
            stats["nombre_en_retard"] += 1
        else:
            stats["total_en_cours"] += remaining(p)
            stats["nombre_en_cours"] += 1
    return stats
