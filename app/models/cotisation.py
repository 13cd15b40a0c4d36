import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class CotisationType(Base):
    """회비 종류 (월회비, 연회비, 기금 등).

    obligatoire=True 인 종류만 회계연도 마감 점검 대상이 된다.
    """

    __tablename__ = "cotisations_types"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    nom: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    montant_defaut: Mapped[int | None] = mapped_column(Integer, nullable=True)
    obligatoire: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class MembreCotisationConfig(Base):
    """회원별 회비 금액 개별 설정 (종류의 기본 금액보다 우선)."""

    __tablename__ = "membres_cotisations_config"
    __table_args__ = (
        UniqueConstraint("membre_id", "type_cotisation_id", name="uq_membres_cotisations_config_membre_type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    membre_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("membres.id", ondelete="CASCADE"), nullable=False)
    type_cotisation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("cotisations_types.id", ondelete="CASCADE"), nullable=False
    )
    montant_personnalise: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class Cotisation(Base):
    """회비 납부(또는 미납 기록) 한 건.

    - statut: paye / impaye / partiel / en_retard_annuel
    - 부분 납부/추가 납부를 지원하기 위해 같은 (회원, 종류)에 여러 건 허용
    - exercice_id 는 지정이 없으면 date_paiement 이 속한 회계연도로 채워진다
    """

    __tablename__ = "cotisations"
    __table_args__ = (
        Index("ix_cotisations_membre_id", "membre_id"),
        Index("ix_cotisations_type_cotisation_id", "type_cotisation_id"),
        Index("ix_cotisations_date_paiement", "date_paiement"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    membre_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("membres.id"), nullable=False)
    type_cotisation_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("cotisations_types.id"), nullable=False)

    montant: Mapped[int] = mapped_column(Integer, nullable=False)
    date_paiement: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="paye")

    reunion_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("reunions.id"), nullable=True)
    exercice_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("exercices.id"), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
