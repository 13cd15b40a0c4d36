import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class Epargne(Base):
    """회원 저축 예치 한 건.

    statut: actif / retire / bloque
    이익 배분(epargnants-benefices)은 statut='actif' 인 예치금만 대상으로 한다.
    """

    __tablename__ = "epargnes"
    __table_args__ = (
        Index("ix_epargnes_membre_id", "membre_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    membre_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("membres.id"), nullable=False)
    montant: Mapped[int] = mapped_column(Integer, nullable=False)
    date_depot: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="actif")

    exercice_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("exercices.id"), nullable=True)
    reunion_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("reunions.id"), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
