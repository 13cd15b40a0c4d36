"""
vitrine.py

공개 페이지(비로그인)에서 들어오는 데이터 모델.

- AdhesionRequest : 가입 신청 (E2D / Phoenix / 둘 다)
- Donation        : 후원 의사 기록 (실제 결제 처리는 하지 않음)
- ContactMessage  : 문의 메시지

"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class AdhesionRequest(Base):
    __tablename__ = "adhesions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    nom: Mapped[str] = mapped_column(String(50), nullable=False)
    prenom: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    telephone: Mapped[str] = mapped_column(String(30), nullable=False)
    message: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # e2d / phoenix / both
    type_adhesion: Mapped[str] = mapped_column(String(10), nullable=False)
    montant_paye: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_method: Mapped[str | None] = mapped_column(String(30), nullable=True)
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")

    # en_attente / traite
    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="en_attente")
    membre_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("membres.id"), nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class Donation(Base):
    __tablename__ = "donations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    donor_name: Mapped[str] = mapped_column(String(100), nullable=False)
    donor_email: Mapped[str] = mapped_column(String(255), nullable=False)
    donor_phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    donor_message: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    # EUR / XOF
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="EUR")
    payment_method: Mapped[str | None] = mapped_column(String(30), nullable=True)
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    # once / monthly / yearly
    recurring: Mapped[str] = mapped_column(String(10), nullable=False, default="once")
    is_anonymous: Mapped[bool] = mapped_column(default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class ContactMessage(Base):
    __tablename__ = "messages_contact"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    nom: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    objet: Mapped[str | None] = mapped_column(String(255), nullable=True)
    message: Mapped[str] = mapped_column(String(2000), nullable=False)
    # nouveau / lu / traite
    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="nouveau")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
