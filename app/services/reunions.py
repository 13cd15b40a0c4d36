"""
services/reunions.py

정기 회의(Réunion) 비즈니스 로직.

주요 기능:
- 회의 생성 (과거 날짜 불가) / 수정
- 출석 기록 (회원당 1건, upsert)
- 회의록 항목 추가
- 수혜자 설정 / 수혜자 생성 / 지급 처리
- 회의 마감: statut terminee, 선택적으로 결석한 활성 회원에게 "Absence" 제재 부과

관련 파일:
- app.models.reunion         : Reunion / ReunionPresence / RapportSeance / 수혜자 모델
- app.services.sanctions     : 결석 제재 생성

"""

import logging
import uuid
from datetime import date

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.models.cotisation import Cotisation
from app.models.membre import Membre
from app.models.reunion import (
    BeneficiaireConfig,
    RapportSeance,
    Reunion,
    ReunionBeneficiaire,
    ReunionPresence,
)
from app.services.common import sum_of
from app.services.sanctions import create_sanction, get_or_create_type

logger = logging.getLogger(__name__)

ABSENCE_SANCTION = "Absence"
ABSENCE_DEFAULT_MONTANT = 2000


def create_reunion(db: Session, *, date_reunion: date, today: date | None = None, **fields) -> Reunion:
    today = today or date.today()
    if date_reunion < today:
        raise ValueError("date_reunion cannot be in the past")
    reunion = Reunion(date_reunion=date_reunion, **{k: v for k, v in fields.items() if v is not None})
    db.add(reunion)
    db.flush()
    logger.info("reunion planned: %s", date_reunion)
    return reunion


def update_reunion(db: Session, reunion: Reunion, changes: dict) -> Reunion:
    if reunion.statut == "terminee":
        raise ValueError("reunion already closed")
    for field, value in changes.items():
        setattr(reunion, field, value)
    db.flush()
    return reunion


def set_presence(db: Session, reunion: Reunion, *, membre_id: uuid.UUID, present: bool,
                 heure_arrivee: str | None = None, observations: str | None = None) -> ReunionPresence:
    if db.get(Membre, membre_id) is None:
        raise ValueError("membre not found")

    presence = db.scalar(
        select(ReunionPresence).where(
            ReunionPresence.reunion_id == reunion.id,
            ReunionPresence.membre_id == membre_id,
        )
    )
    if presence is None:
        presence = ReunionPresence(reunion_id=reunion.id, membre_id=membre_id)
        db.add(presence)
    presence.present = present
    presence.heure_arrivee = heure_arrivee
    presence.observations = observations
    db.flush()
    return presence


def add_rapport(db: Session, reunion: Reunion, *, sujet: str, resolution: str | None = None) -> RapportSeance:
    ordre = len(db.scalars(select(RapportSeance.id).where(RapportSeance.reunion_id == reunion.id)).all()) + 1
    rapport = RapportSeance(reunion_id=reunion.id, sujet=sujet, resolution=resolution, ordre=ordre)
    db.add(rapport)
    db.flush()
    return rapport


def current_config(db: Session) -> BeneficiaireConfig:
    config = db.scalar(select(BeneficiaireConfig).order_by(desc(BeneficiaireConfig.created_at)))
    # 설정이 없으면 기본값 (pourcentage 10%), 저장하지 않음
    return config or BeneficiaireConfig(mode_calcul="pourcentage", pourcentage=10.0, montant_fixe=None)


def save_config(db: Session, *, mode_calcul: str, pourcentage: float | None, montant_fixe: int | None) -> BeneficiaireConfig:
    if mode_calcul == "montant_fixe" and not montant_fixe:
        raise ValueError("montant_fixe is required for mode montant_fixe")
    config = BeneficiaireConfig(
        mode_calcul=mode_calcul,
        pourcentage=pourcentage if pourcentage is not None else 10.0,
        montant_fixe=montant_fixe,
    )
    db.add(config)
    db.flush()
    return config


def beneficiary_amount(db: Session, reunion: Reunion) -> int:
    config = current_config(db)
    if config.mode_calcul == "montant_fixe":
        return config.montant_fixe or 0
    collected = sum_of(
        db, Cotisation.montant,
        Cotisation.reunion_id == reunion.id,
        Cotisation.statut.in_(["paye", "partiel"]),
    )
    return round(collected * (config.pourcentage or 0) / 100)


def add_beneficiaires(db: Session, reunion: Reunion, membre_ids: list[uuid.UUID]) -> list[ReunionBeneficiaire]:
    montant = beneficiary_amount(db, reunion)
    created = []
    for membre_id in membre_ids:
        if db.get(Membre, membre_id) is None:
            raise ValueError(f"membre not found: {membre_id}")
        exists = db.scalar(
            select(ReunionBeneficiaire).where(
                ReunionBeneficiaire.reunion_id == reunion.id,
                ReunionBeneficiaire.membre_id == membre_id,
            )
        )
        if exists:
            continue
        b = ReunionBeneficiaire(reunion_id=reunion.id, membre_id=membre_id, montant=montant, statut="prevu")
        db.add(b)
        created.append(b)
    db.flush()
    return created


def pay_beneficiaire(db: Session, beneficiaire: ReunionBeneficiaire, *, when: date | None = None) -> ReunionBeneficiaire:
    if beneficiaire.statut == "paye":
        raise ValueError("beneficiaire already paid")
    beneficiaire.statut = "paye"
    beneficiaire.date_paiement = when or date.today()
    db.flush()
    return beneficiaire


"""
회의 마감

- terminee / annulee 회의는 다시 마감할 수 없음
- sanction_absents=True 이면 출석 기록이 없거나 present=False 인 활성 회원에게
  reunion 컨텍스트 "Absence" 제재 부과 (종류가 없으면 기본 금액으로 생성)
- 반환: {"reunion": Reunion, "sanctions": 생성된 제재 수}

"""

def close_reunion(db: Session, reunion: Reunion, *, sanction_absents: bool = False) -> dict:
    if reunion.statut in ("terminee", "annulee"):
        raise ValueError(f"reunion is {reunion.statut}")

    reunion.statut = "terminee"
    created = 0

    if sanction_absents:
        presents = set(
            db.scalars(
                select(ReunionPresence.membre_id).where(
                    ReunionPresence.reunion_id == reunion.id,
                    ReunionPresence.present.is_(True),
                )
            ).all()
        )
        absence_type = get_or_create_type(
            db, nom=ABSENCE_SANCTION, contexte="reunion", montant_defaut=ABSENCE_DEFAULT_MONTANT, categorie="presence"
        )
        actifs = db.scalars(select(Membre).where(Membre.statut == "actif")).all()
        for m in actifs:
            if m.id in presents:
                continue
            create_sanction(
                db,
                membre_id=m.id,
                type_sanction_id=absence_type.id,
                date_sanction=reunion.date_reunion,
                motif=f"Absence à la réunion du {reunion.date_reunion.isoformat()}",
                contexte_sanction="reunion",
                reunion_id=reunion.id,
            )
            created += 1

    db.flush()
    logger.info("reunion closed: %s (absence sanctions: %d)", reunion.id, created)
    return {"reunion": reunion, "sanctions": created}
