"""
services/sanctions.py

제재(Sanction) 비즈니스 로직.

주요 기능:
- 제재 종류 관리 (contexte: sport / reunion)
- 제재 부과 (금액 미지정 시 종류 금액), 납부, 취소
- 경기 카드(옐로 / 레드) → 제재 생성
- 경기 기록 일괄 동기화: 카드가 있고 회원과 연결된 미동기화 기록마다 카드당 제재 1건

설계 원칙:
- 일괄 동기화는 기록 단위 savepoint(begin_nested) 사용
  → 한 기록이 실패해도 나머지 기록의 결과는 유지
- 실패는 로그로 남기고 errors 건수로 반환

"""

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.membre import Membre
from app.models.sanction import Sanction, SanctionType
from app.models.sport import Match, MatchStatistic

logger = logging.getLogger(__name__)

CARD_TYPES = {
    "jaune": ("Carton Jaune", 1000),
    "rouge": ("Carton Rouge", 3000),
}
OPEN_STATUSES = ("impaye", "partiel")


def create_type(db: Session, *, nom: str, montant: int, contexte: str = "reunion",
                categorie: str | None = None, description: str | None = None) -> SanctionType:
    exists = db.scalar(select(SanctionType).where(SanctionType.nom == nom, SanctionType.contexte == contexte))
    if exists:
        raise ValueError("sanction type already exists for that contexte")
    sanction_type = SanctionType(
        nom=nom, montant=montant, contexte=contexte, categorie=categorie, description=description
    )
    db.add(sanction_type)
    db.flush()
    return sanction_type


def get_or_create_type(db: Session, *, nom: str, contexte: str, montant_defaut: int,
                       categorie: str | None = None) -> SanctionType:
    sanction_type = db.scalar(select(SanctionType).where(SanctionType.nom == nom, SanctionType.contexte == contexte))
    if sanction_type:
        return sanction_type
    sanction_type = SanctionType(nom=nom, montant=montant_defaut, contexte=contexte, categorie=categorie)
    db.add(sanction_type)
    db.flush()
    logger.info("sanction type created on demand: %s (%s)", nom, contexte)
    return sanction_type


def create_sanction(
    db: Session,
    *,
    membre_id: uuid.UUID,
    type_sanction_id: uuid.UUID,
    montant: int | None = None,
    date_sanction: date | None = None,
    motif: str | None = None,
    contexte_sanction: str | None = None,
    reunion_id: uuid.UUID | None = None,
    source_statistic_id: uuid.UUID | None = None,
) -> Sanction:
    if db.get(Membre, membre_id) is None:
        raise ValueError("membre not found")
    sanction_type = db.get(SanctionType, type_sanction_id)
    if sanction_type is None:
        raise ValueError("sanction type not found")

    montant = sanction_type.montant if montant is None else montant
    if montant < 0:
        raise ValueError("montant must not be negative")

    sanction = Sanction(
        membre_id=membre_id,
        type_sanction_id=type_sanction_id,
        montant=montant,
        montant_paye=0,
        date_sanction=date_sanction or date.today(),
        motif=motif,
        statut="impaye" if montant > 0 else "paye",
        contexte_sanction=contexte_sanction or sanction_type.contexte,
        reunion_id=reunion_id,
        source_statistic_id=source_statistic_id,
    )
    db.add(sanction)
    db.flush()
    return sanction


def pay_sanction(db: Session, sanction: Sanction, *, montant: int) -> Sanction:
    if sanction.statut not in OPEN_STATUSES:
        raise ValueError(f"sanction is {sanction.statut}")
    if montant <= 0:
        raise ValueError("montant must be greater than 0")
    rest = sanction.montant - sanction.montant_paye
    if montant > rest:
        raise ValueError(f"payment exceeds remaining balance ({rest})")

    sanction.montant_paye += montant
    sanction.statut = "paye" if sanction.montant_paye >= sanction.montant else "partiel"
    db.flush()
    return sanction


def cancel_sanction(db: Session, sanction: Sanction) -> Sanction:
    if sanction.statut == "annule":
        raise ValueError("sanction already cancelled")
    if sanction.statut == "paye":
        raise ValueError("sanction already paid")
    sanction.statut = "annule"
    db.flush()
    return sanction


def create_card_sanction(
    db: Session,
    *,
    membre_id: uuid.UUID,
    card: str,
    motif: str | None = None,
    date_sanction: date | None = None,
    source_statistic_id: uuid.UUID | None = None,
) -> Sanction:
    if card not in CARD_TYPES:
        raise ValueError("card must be 'jaune' or 'rouge'")
    nom, montant_defaut = CARD_TYPES[card]
    sanction_type = get_or_create_type(db, nom=nom, contexte="sport", montant_defaut=montant_defaut, categorie="carton")
    return create_sanction(
        db,
        membre_id=membre_id,
        type_sanction_id=sanction_type.id,
        date_sanction=date_sanction,
        motif=motif or nom,
        contexte_sanction="sport",
        source_statistic_id=source_statistic_id,
    )


"""
경기 기록 → 제재 일괄 동기화

- 대상: cards_synced=False, membre_id 존재, (yellow_cards + red_cards) > 0
- 기록마다 savepoint 안에서 카드 수만큼 제재 생성 후 cards_synced=True
- 반환: {"created": 생성된 제재 수, "skipped": 회원 미연결 기록 수, "errors": 실패 기록 수}

NOTE:
- 최종 commit 은 라우터에서 수행

"""

def sync_cards_from_statistics(db: Session) -> dict:
    stats = db.scalars(
        select(MatchStatistic).where(
            MatchStatistic.cards_synced.is_(False),
            (MatchStatistic.yellow_cards + MatchStatistic.red_cards) > 0,
        )
    ).all()

    created = skipped = errors = 0
    for stat in stats:
        if stat.membre_id is None:
            skipped += 1
            continue

        match = db.get(Match, stat.match_id)
        when = match.date_match if match else None
        label = f"vs {match.equipe_adverse}" if match else "match"
        try:
            with db.begin_nested():
                count = 0
                for card, n in (("jaune", stat.yellow_cards), ("rouge", stat.red_cards)):
                    for _ in range(n):
                        create_card_sanction(
                            db,
                            membre_id=stat.membre_id,
                            card=card,
                            motif=f"Carton {card} ({label})",
                            date_sanction=when,
                            source_statistic_id=stat.id,
                        )
                        count += 1
                stat.cards_synced = True
            created += count
        except (SQLAlchemyError, ValueError) as e:
            errors += 1
            logger.warning("card sync failed for statistic %s: %s", stat.id, e)

    logger.info("card sync done: created=%d skipped=%d errors=%d", created, skipped, errors)
    return {"created": created, "skipped": skipped, "errors": errors}


def summary_by_context(db: Session) -> dict:
    rows = db.scalars(select(Sanction).where(Sanction.statut.in_(OPEN_STATUSES))).all()
    result = {"sport": 0, "reunion": 0, "total": 0, "nombre": len(rows)}
    for s in rows:
        due = s.montant - s.montant_paye
        result[s.contexte_sanction] = result.get(s.contexte_sanction, 0) + due
        result["total"] += due
    return result
