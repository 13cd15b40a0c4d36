"""
services/cotisations.py

회비(Cotisation) 도메인의 비즈니스 로직 모음.

주요 기능:
- 회비 종류 / 회원별 개별 금액 설정
- 회비 납부 기록 (금액 미지정 시 개별 금액 → 종류 기본 금액 순으로 결정)
- 회원별 / 전체 회원 납부 현황 (PAID / PARTIAL / UNPAID / NO_CHARGE)
- 회계연도 마감 점검: 마감 7일 이내 기간의 필수 회비 미납 → en_retard_annuel

설계 원칙:
- 금액 계산은 항상 DB 기준으로 수행
- 라우터는 commit / rollback 만 담당, 여기서는 flush 까지만

관련 파일:
- app.models.cotisation      : CotisationType / MembreCotisationConfig / Cotisation
- app.routers.cotisations    : 회비 API 및 CSV / XLSX 내보내기

"""

import logging
import uuid
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.cotisation import Cotisation, CotisationType, MembreCotisationConfig
from app.models.exercice import Exercice
from app.models.membre import Membre
from app.services.common import sum_of
from app.services.exercices import resolve_exercice_id

logger = logging.getLogger(__name__)

PAID_STATUSES = ("paye", "partiel")


def create_type(db: Session, *, nom: str, description: str | None, montant_defaut: int | None,
                obligatoire: bool = False) -> CotisationType:
    if db.scalar(select(CotisationType).where(CotisationType.nom == nom)):
        raise ValueError("cotisation type already exists")
    cotisation_type = CotisationType(
        nom=nom, description=description, montant_defaut=montant_defaut, obligatoire=obligatoire
    )
    db.add(cotisation_type)
    db.flush()
    return cotisation_type


# 회원별 개별 금액 설정 (있으면 갱신, 없으면 생성)
def set_membre_config(db: Session, *, membre_id: uuid.UUID, type_cotisation_id: uuid.UUID,
                      montant_personnalise: int) -> MembreCotisationConfig:
    if db.get(Membre, membre_id) is None:
        raise ValueError("membre not found")
    if db.get(CotisationType, type_cotisation_id) is None:
        raise ValueError("cotisation type not found")

    config = db.scalar(
        select(MembreCotisationConfig).where(
            MembreCotisationConfig.membre_id == membre_id,
            MembreCotisationConfig.type_cotisation_id == type_cotisation_id,
        )
    )
    if config:
        config.montant_personnalise = montant_personnalise
    else:
        config = MembreCotisationConfig(
            membre_id=membre_id,
            type_cotisation_id=type_cotisation_id,
            montant_personnalise=montant_personnalise,
        )
        db.add(config)
    db.flush()
    return config


def expected_amount(db: Session, *, membre_id: uuid.UUID, cotisation_type: CotisationType) -> int:
    config = db.scalar(
        select(MembreCotisationConfig).where(
            MembreCotisationConfig.membre_id == membre_id,
            MembreCotisationConfig.type_cotisation_id == cotisation_type.id,
        )
    )
    if config:
        return config.montant_personnalise
    return cotisation_type.montant_defaut or 0


"""
회비 기록 생성

- montant 미지정 시 expected_amount 사용, 결과가 0 이하이면 거부
- exercice_id 미지정 시 date_paiement 이 속한 기간으로 자동 지정

"""

def create_cotisation(
    db: Session,
    *,
    membre_id: uuid.UUID,
    type_cotisation_id: uuid.UUID,
    montant: int | None = None,
    date_paiement: date | None = None,
    statut: str = "paye",
    reunion_id: uuid.UUID | None = None,
    exercice_id: uuid.UUID | None = None,
    notes: str | None = None,
    created_by: uuid.UUID | None = None,
) -> Cotisation:
    if db.get(Membre, membre_id) is None:
        raise ValueError("membre not found")
    cotisation_type = db.get(CotisationType, type_cotisation_id)
    if cotisation_type is None:
        raise ValueError("cotisation type not found")

    if montant is None:
        montant = expected_amount(db, membre_id=membre_id, cotisation_type=cotisation_type)
    if montant <= 0:
        raise ValueError("montant must be greater than 0")

    date_paiement = date_paiement or date.today()
    cotisation = Cotisation(
        membre_id=membre_id,
        type_cotisation_id=type_cotisation_id,
        montant=montant,
        date_paiement=date_paiement,
        statut=statut,
        reunion_id=reunion_id,
        exercice_id=resolve_exercice_id(db, exercice_id, date_paiement),
        notes=notes,
        created_by=created_by,
    )
    db.add(cotisation)
    db.flush()
    logger.info("cotisation recorded: membre=%s type=%s montant=%s", membre_id, cotisation_type.nom, montant)
    return cotisation


def sum_paid(db: Session, *, membre_id: uuid.UUID, type_cotisation_id: uuid.UUID,
             exercice_id: uuid.UUID | None = None) -> int:
    conditions = [
        Cotisation.membre_id == membre_id,
        Cotisation.type_cotisation_id == type_cotisation_id,
        Cotisation.statut.in_(PAID_STATUSES),
    ]
    if exercice_id is not None:
        conditions.append(Cotisation.exercice_id == exercice_id)
    return sum_of(db, Cotisation.montant, *conditions)


def payment_status(expected: int, paid: int) -> str:
    if expected <= 0:
        return "NO_CHARGE"
    if paid <= 0:
        return "UNPAID"
    if paid < expected:
        return "PARTIAL"
    return "PAID"


def status_for_membre(db: Session, *, membre: Membre, cotisation_type: CotisationType,
                      exercice_id: uuid.UUID | None = None) -> dict:
    expected = expected_amount(db, membre_id=membre.id, cotisation_type=cotisation_type)
    paid = sum_paid(db, membre_id=membre.id, type_cotisation_id=cotisation_type.id, exercice_id=exercice_id)
    return {
        "membre": membre,
        "amount_due": expected,
        "paid_amount": paid,
        "status": payment_status(expected, paid),
    }


"""
전체 활성 회원의 납부 현황

- statut='actif' 회원만 대상
- 종류가 없으면 ValueError

"""

def status_table(db: Session, *, type_cotisation_id: uuid.UUID, exercice_id: uuid.UUID | None = None):
    cotisation_type = db.get(CotisationType, type_cotisation_id)
    if cotisation_type is None:
        raise ValueError("cotisation type not found")

    membres = db.scalars(
        select(Membre).where(Membre.statut == "actif").order_by(Membre.nom, Membre.prenom)
    ).all()
    rows = [
        status_for_membre(db, membre=m, cotisation_type=cotisation_type, exercice_id=exercice_id)
        for m in membres
    ]
    return cotisation_type, rows


"""
회계연도 마감 점검

- 상태가 actif 이고 date_fin 이 today + 7일 이내인 기간 대상
- 해당 기간의 필수(obligatoire) 종류 회비 중 paye 가 아닌 기록 → en_retard_annuel
- 기간별 변경 건수 요약 반환

"""

def check_annual_closure(db: Session, today: date | None = None) -> list[dict]:
    today = today or date.today()
    limit = today + timedelta(days=7)

    exercices = db.scalars(
        select(Exercice).where(Exercice.statut == "actif", Exercice.date_fin <= limit)
    ).all()
    obligatoires = [t.id for t in db.scalars(select(CotisationType).where(CotisationType.obligatoire.is_(True))).all()]

    summary = []
    for exercice in exercices:
        updated = 0
        if obligatoires:
            pending = db.scalars(
                select(Cotisation).where(
                    Cotisation.exercice_id == exercice.id,
                    Cotisation.type_cotisation_id.in_(obligatoires),
                    Cotisation.statut.notin_(["paye", "en_retard_annuel"]),
                )
            ).all()
            for c in pending:
                c.statut = "en_retard_annuel"
                updated += 1
        summary.append(
            {
                "exercice_id": str(exercice.id),
                "exercice": exercice.nom,
                "date_fin": exercice.date_fin.isoformat(),
                "cotisations_en_retard": updated,
            }
        )
        logger.info("annual closure check: exercice=%s marked=%d", exercice.nom, updated)
    db.flush()
    return summary
