"""
services/vitrine.py

공개 페이지(가입 신청, 후원, 문의) 처리 로직.

- 가입 신청: type 별 요금(e2d 30 / phoenix 50 / both 70)과 다른 금액은 거부
- 가입 승인: Membre 생성(E2D / Phoenix 플래그), Phoenix 포함이면 PhoenixAdherent 도 생성
- 후원: 의사만 기록 (payment_status=pending), 통화별 합계 제공

NOTE:
- 실제 결제 처리 / 메일 발송은 하지 않음

"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.membre import Membre
from app.models.sport import PhoenixAdherent
from app.models.vitrine import AdhesionRequest, ContactMessage, Donation

logger = logging.getLogger(__name__)

ADHESION_TARIFS = {"e2d": 30, "phoenix": 50, "both": 70}
SUGGESTED_DONATIONS = {"EUR": [10, 25, 50, 100], "XOF": [5000, 10000, 25000, 50000]}
CURRENCIES = ("EUR", "XOF")


def public_info() -> dict:
    return {"tarifs_adhesion": ADHESION_TARIFS, "dons_suggeres": SUGGESTED_DONATIONS, "devises": list(CURRENCIES)}


def create_adhesion(db: Session, *, type_adhesion: str, montant_paye: int | None = None, **fields) -> AdhesionRequest:
    if type_adhesion not in ADHESION_TARIFS:
        raise ValueError("type_adhesion must be e2d, phoenix or both")
    tarif = ADHESION_TARIFS[type_adhesion]
    if montant_paye is not None and montant_paye != tarif:
        raise ValueError(f"montant for {type_adhesion} must be {tarif}")

    adhesion = AdhesionRequest(type_adhesion=type_adhesion, montant_paye=tarif, **fields)
    db.add(adhesion)
    db.flush()
    logger.info("adhesion request received: %s (%s)", adhesion.email, type_adhesion)
    return adhesion


def approve_adhesion(db: Session, adhesion: AdhesionRequest) -> Membre:
    if adhesion.statut == "traite":
        raise ValueError("adhesion already processed")

    with_e2d = adhesion.type_adhesion in ("e2d", "both")
    with_phoenix = adhesion.type_adhesion in ("phoenix", "both")

    membre = Membre(
        nom=adhesion.nom,
        prenom=adhesion.prenom,
        email=adhesion.email,
        telephone=adhesion.telephone,
        statut="actif",
        est_membre_e2d=with_e2d,
        est_adherent_phoenix=with_phoenix,
    )
    db.add(membre)
    db.flush()

    if with_phoenix:
        db.add(
            PhoenixAdherent(
                membre_id=membre.id,
                montant_adhesion=ADHESION_TARIFS["phoenix"],
                adhesion_payee=adhesion.payment_status == "completed",
            )
        )

    adhesion.statut = "traite"
    adhesion.membre_id = membre.id
    adhesion.processed_at = datetime.now(timezone.utc)
    db.flush()
    logger.info("adhesion approved: %s -> membre %s", adhesion.id, membre.id)
    return membre


def create_donation(db: Session, *, amount: int, currency: str = "EUR", recurring: str = "once", **fields) -> Donation:
    if amount <= 0:
        raise ValueError("amount must be greater than 0")
    if currency not in CURRENCIES:
        raise ValueError("currency must be EUR or XOF")
    if recurring not in ("once", "monthly", "yearly"):
        raise ValueError("recurring must be once, monthly or yearly")

    donation = Donation(amount=amount, currency=currency, recurring=recurring, payment_status="pending", **fields)
    db.add(donation)
    db.flush()
    logger.info("donation intent recorded: %s %s (%s)", amount, currency, recurring)
    return donation


def donation_totals(db: Session) -> dict:
    totals = {c: 0 for c in CURRENCIES}
    count = 0
    for d in db.scalars(select(Donation)).all():
        totals[d.currency] = totals.get(d.currency, 0) + d.amount
        count += 1
    return {"totals": totals, "count": count}


def create_contact(db: Session, **fields) -> ContactMessage:
    message = ContactMessage(**fields)
    db.add(message)
    db.flush()
    return message
