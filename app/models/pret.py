import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class Pret(Base):
    """회원 대출(Prêt).

    - montant_total_du = montant + 이자(montant * taux/100 * (1 + reconductions))
    - reconductions: 만기 연장 횟수, 연장할 때마다 이자가 한 번 더 붙는다
    - statut: en_cours / partiel / reconduit / rembourse / en_retard / annule
    """

    __tablename__ = "prets"
    __table_args__ = (
        Index("ix_prets_membre_id", "membre_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    membre_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("membres.id"), nullable=False)
    avaliste_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("membres.id"), nullable=True)

    montant: Mapped[int] = mapped_column(Integer, nullable=False)
    taux_interet: Mapped[float] = mapped_column(Float, nullable=False, default=5.0)

    date_pret: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    echeance: Mapped[date] = mapped_column(Date, nullable=False)

    reconductions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    montant_paye: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    montant_total_du: Mapped[int] = mapped_column(Integer, nullable=False)

    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="en_cours")
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class PretPaiement(Base):
    """대출 상환 한 건 (부분 상환 포함)."""

    __tablename__ = "prets_paiements"
    __table_args__ = (
        Index("ix_prets_paiements_pret_id", "pret_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    pret_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("prets.id", ondelete="CASCADE"), nullable=False)
    montant_paye: Mapped[int] = mapped_column(Integer, nullable=False)
    date_paiement: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    mode_paiement: Mapped[str] = mapped_column(String(20), nullable=False, default="especes")
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
