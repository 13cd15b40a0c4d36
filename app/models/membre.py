"""
membre.py

협회 회원(Membre) 모델.

- 로그인 계정(User)과는 분리된 "명부" 데이터
- E2D 회원 / Phoenix 클럽 가입자 여부를 플래그로 관리
- 회비, 저축, 대출, 제재, 출석 등 모든 도메인 레코드가 membre_id 로 참조

"""

import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class Membre(Base):
    __tablename__ = "membres"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    nom: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    prenom: Mapped[str] = mapped_column(String(50), nullable=False)

    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    telephone: Mapped[str | None] = mapped_column(String(30), nullable=True)

    # actif / inactif / suspendu
    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="actif", index=True)
    date_inscription: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    fonction: Mapped[str | None] = mapped_column(String(100), nullable=True)

    est_membre_e2d: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    est_adherent_phoenix: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    equipe_e2d: Mapped[str | None] = mapped_column(String(50), nullable=True)
    equipe_phoenix: Mapped[str | None] = mapped_column(String(50), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
