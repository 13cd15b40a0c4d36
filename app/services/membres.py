"""
services/membres.py

회원 명부(Membre) 비즈니스 로직.

주요 기능:
- 회원 목록 필터링 (상태 / E2D / Phoenix / 이름·이메일 검색)
- 회원 생성 / 부분 수정 / 삭제
- 회원 이력(fiche) 집계: 회비, 저축, 대출, 제재, 회의 출석

설계 원칙:
- 금전 기록(회비, 저축, 대출, 제재, 지원금)이나 경기 기록, 수혜 이력,
  회의 장소, 가입 신청에 연결된 회원은 삭제 불가
  → 상태를 inactif 로 바꾸는 것으로 대체
- 집계는 매 요청마다 DB 기준으로 다시 계산

"""

import logging

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from app.models.aide import Aide
from app.models.cotisation import Cotisation, MembreCotisationConfig
from app.models.epargne import Epargne
from app.models.membre import Membre
from app.models.pret import Pret
from app.models.reunion import Reunion, ReunionBeneficiaire, ReunionPresence
from app.models.sanction import Sanction
from app.models.sport import (
    MatchPresence,
    MatchStatistic,
    PhoenixAdherent,
    PhoenixComposition,
    PhoenixEntrainementPresence,
)
from app.models.vitrine import AdhesionRequest
from app.services.common import safe_pct, sum_of

logger = logging.getLogger(__name__)


def list_membres(
    db: Session,
    *,
    statut: str | None = None,
    e2d: bool | None = None,
    phoenix: bool | None = None,
    search: str | None = None,
) -> list[Membre]:
    stmt = select(Membre)
    if statut:
        stmt = stmt.where(Membre.statut == statut)
    if e2d is not None:
        stmt = stmt.where(Membre.est_membre_e2d.is_(e2d))
    if phoenix is not None:
        stmt = stmt.where(Membre.est_adherent_phoenix.is_(phoenix))
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(Membre.nom.ilike(pattern), Membre.prenom.ilike(pattern), Membre.email.ilike(pattern))
        )
    return list(db.scalars(stmt.order_by(Membre.nom, Membre.prenom)).all())


def create_membre(db: Session, **fields) -> Membre:
    membre = Membre(**{k: v for k, v in fields.items() if v is not None})
    db.add(membre)
    db.flush()
    logger.info("membre created: %s %s", membre.prenom, membre.nom)
    return membre


def update_membre(db: Session, membre: Membre, changes: dict) -> Membre:
    for field, value in changes.items():
        setattr(membre, field, value)
    db.flush()
    return membre


# 삭제를 막는 참조 (금전 기록 + 경기 기록, 수혜 이력, 회의 장소, 가입 신청)
_BLOCKING_REFERENCES = (
    (Cotisation, Cotisation.membre_id),
    (Epargne, Epargne.membre_id),
    (Pret, Pret.membre_id),
    (Sanction, Sanction.membre_id),
    (Aide, Aide.beneficiaire_id),
    (MatchStatistic, MatchStatistic.membre_id),
    (ReunionBeneficiaire, ReunionBeneficiaire.membre_id),
    (Reunion, Reunion.lieu_membre_id),
    (AdhesionRequest, AdhesionRequest.membre_id),
)

# 회원과 함께 지워지는 부속 행 (DB 의 ON DELETE CASCADE 와 같은 범위)
_DEPENDENT_ROWS = (
    (MembreCotisationConfig, MembreCotisationConfig.membre_id),
    (ReunionPresence, ReunionPresence.membre_id),
    (MatchPresence, MatchPresence.membre_id),
    (PhoenixEntrainementPresence, PhoenixEntrainementPresence.membre_id),
    (PhoenixComposition, PhoenixComposition.membre_id),
    (PhoenixAdherent, PhoenixAdherent.membre_id),
)


def linked_tables(db: Session, membre_id) -> list[str]:
    found = []
    for model, column in _BLOCKING_REFERENCES:
        count = db.scalar(select(func.count()).select_from(model).where(column == membre_id)) or 0
        if count:
            found.append(model.__tablename__)
    return found


def delete_membre(db: Session, membre: Membre) -> None:
    tables = linked_tables(db, membre.id)
    if tables:
        raise ValueError(
            "membre has linked records (" + ", ".join(tables) + "); set statut to inactif instead"
        )
    for model, column in _DEPENDENT_ROWS:
        db.execute(delete(model).where(column == membre.id))
    db.delete(membre)
    db.flush()
    logger.info("membre deleted: %s", membre.id)


"""
회원 이력(fiche) 집계

- cotisations_payees : statut paye / partiel 인 회비 합계
- epargnes_actives   : statut actif 인 저축 합계
- prets_nombre / prets_restant : 대출 건수, 상환 잔액 합계 (rembourse / annule 제외)
- sanctions_impayees : 미납 제재 잔액 (montant - montant_paye)
- presences / absences : 회의 출석 집계, taux_presence(%)

"""

def membre_fiche(db: Session, membre: Membre) -> dict:
    cotisations = sum_of(
        db, Cotisation.montant,
        Cotisation.membre_id == membre.id,
        Cotisation.statut.in_(["paye", "partiel"]),
    )
    epargnes = sum_of(db, Epargne.montant, Epargne.membre_id == membre.id, Epargne.statut == "actif")

    prets = db.scalars(select(Pret).where(Pret.membre_id == membre.id)).all()
    prets_restant = sum(
        max(p.montant_total_du - p.montant_paye, 0) for p in prets if p.statut not in ("rembourse", "annule")
    )

    sanctions = db.scalars(
        select(Sanction).where(Sanction.membre_id == membre.id, Sanction.statut.in_(["impaye", "partiel"]))
    ).all()
    sanctions_impayees = sum(s.montant - s.montant_paye for s in sanctions)

    presences = db.scalars(select(ReunionPresence).where(ReunionPresence.membre_id == membre.id)).all()
    nb_presents = sum(1 for p in presences if p.present)

    return {
        "membre_id": str(membre.id),
        "nom": membre.nom,
        "prenom": membre.prenom,
        "cotisations_payees": cotisations,
        "epargnes_actives": epargnes,
        "prets_nombre": len(prets),
        "prets_restant": prets_restant,
        "sanctions_impayees": sanctions_impayees,
        "presences": nb_presents,
        "absences": len(presences) - nb_presents,
        "taux_presence": safe_pct(nb_presents, len(presences)),
    }
