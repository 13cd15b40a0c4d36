import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class SanctionType(Base):
    """제재(벌금) 종류.

    contexte: 'sport' (경기 카드 등) | 'reunion' (회의 결석/지각 등)
    같은 이름이라도 contexte 가 다르면 별도 종류로 취급한다.
    """

    __tablename__ = "sanctions_types"
    __table_args__ = (
        UniqueConstraint("nom", "contexte", name="uq_sanctions_types_nom_contexte"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    nom: Mapped[str] = mapped_column(String(100), nullable=False)
    montant: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    categorie: Mapped[str | None] = mapped_column(String(50), nullable=True)
    contexte: Mapped[str] = mapped_column(String(20), nullable=False, default="reunion")
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class Sanction(Base):
    """회원에게 부과된 제재 한 건.

    - statut: impaye / partiel / paye / annule
    - source_statistic_id: 경기 기록(카드)에서 자동 생성된 경우 원본 기록
    """

    __tablename__ = "sanctions"
    __table_args__ = (
        Index("ix_sanctions_membre_id", "membre_id"),
        Index("ix_sanctions_statut", "statut"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    membre_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("membres.id"), nullable=False)
    type_sanction_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("sanctions_types.id"), nullable=False)

    montant: Mapped[int] = mapped_column(Integer, nullable=False)
    montant_paye: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    date_sanction: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    motif: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="impaye")
    contexte_sanction: Mapped[str] = mapped_column(String(20), nullable=False, default="reunion")

    reunion_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("reunions.id"), nullable=True)
    source_statistic_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("match_statistics.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
