import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class AideType(Base):
    """지원금 종류 (경조사, 출산, 질병 등)."""

    __tablename__ = "aides_types"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    nom: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    montant_defaut: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # equitable / proportionnel
    mode_repartition: Mapped[str] = mapped_column(String(20), nullable=False, default="equitable")
    delai_remboursement: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class Aide(Base):
    """회원에게 지급(예정)된 지원금 한 건.

    statut: alloue / verse / annule
    """

    __tablename__ = "aides"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    beneficiaire_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("membres.id"), nullable=False, index=True)
    type_aide_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("aides_types.id"), nullable=False)

    montant: Mapped[int] = mapped_column(Integer, nullable=False)
    date_allocation: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="alloue")
    contexte_aide: Mapped[str] = mapped_column(String(20), nullable=False, default="reunion")
    justificatif: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    reunion_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("reunions.id"), nullable=True)
    exercice_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("exercices.id"), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
