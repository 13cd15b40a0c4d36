"""
reunion.py

정기 회의(Réunion) 관련 모델 모음.

- Reunion              : 회의 일정 / 안건 / 상태
- ReunionPresence      : 회원별 출석 여부 (회의당 회원 1건)
- RapportSeance        : 회의록 항목 (안건 / 결정 사항)
- BeneficiaireConfig   : 회의 수혜자(tontine) 지급액 계산 방식
- ReunionBeneficiaire  : 회의별 수혜자와 지급 상태

"""

import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class Reunion(Base):
    __tablename__ = "reunions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    date_reunion: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    type_reunion: Mapped[str] = mapped_column(String(30), nullable=False, default="mensuelle")
    sujet: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ordre_du_jour: Mapped[str | None] = mapped_column(String(2000), nullable=True)

    lieu_membre_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("membres.id"), nullable=True)
    lieu_description: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # planifie / en_cours / terminee / annulee
    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="planifie")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class ReunionPresence(Base):
    __tablename__ = "reunions_presences"
    __table_args__ = (
        UniqueConstraint("reunion_id", "membre_id", name="uq_reunions_presences_reunion_membre"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    reunion_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("reunions.id", ondelete="CASCADE"), nullable=False)
    membre_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("membres.id", ondelete="CASCADE"), nullable=False)
    present: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    heure_arrivee: Mapped[str | None] = mapped_column(String(10), nullable=True)
    observations: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class RapportSeance(Base):
    __tablename__ = "rapports_seances"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    reunion_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("reunions.id", ondelete="CASCADE"), nullable=False)
    sujet: Mapped[str] = mapped_column(String(255), nullable=False)
    resolution: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    ordre: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class BeneficiaireConfig(Base):
    """수혜자 지급액 계산 방식.

    - mode_calcul='pourcentage' : 해당 회의에서 납부된 회비 합계 * pourcentage / 100
    - mode_calcul='montant_fixe': montant_fixe 그대로
    가장 최근 행이 현재 설정으로 사용된다.
    """

    __tablename__ = "beneficiaires_config"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    mode_calcul: Mapped[str] = mapped_column(String(20), nullable=False, default="pourcentage")
    pourcentage: Mapped[float] = mapped_column(Float, nullable=False, default=10.0)
    montant_fixe: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class ReunionBeneficiaire(Base):
    __tablename__ = "reunion_beneficiaires"
    __table_args__ = (
        UniqueConstraint("reunion_id", "membre_id", name="uq_reunion_beneficiaires_reunion_membre"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    reunion_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("reunions.id", ondelete="CASCADE"), nullable=False)
    membre_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("membres.id"), nullable=False)
    montant: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # prevu / paye
    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="prevu")
    date_paiement: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
