import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class CaisseCloture(Base):
    """현금함(fond de caisse) 마감 기록.

    ecart = solde_reel - solde_theorique
    다음 기간의 시작 잔액은 직전 마감의 solde_reel 이다.
    """

    __tablename__ = "fond_caisse_clotures"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    date_cloture: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    solde_ouverture: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_entrees: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_sorties: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    solde_theorique: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    solde_reel: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    ecart: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    cloture_par: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class CaisseOperation(Base):
    """현금 입출금 한 건 (type_operation: entree / sortie).

    cloture_id 가 None 이면 아직 마감되지 않은 "열린" 거래.
    """

    __tablename__ = "fond_caisse_operations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    type_operation: Mapped[str] = mapped_column(String(10), nullable=False)
    montant: Mapped[int] = mapped_column(Integer, nullable=False)
    libelle: Mapped[str] = mapped_column(String(255), nullable=False)
    date_operation: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    categorie: Mapped[str | None] = mapped_column(String(50), nullable=True)

    operateur_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)
    cloture_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("fond_caisse_clotures.id"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
