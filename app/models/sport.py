"""
sport.py

축구 클럽(E2D / Phoenix) 활동 모델 모음.

- Match            : 두 팀(equipe='e2d' | 'phoenix')의 경기 일정과 결과
- MatchStatistic   : 선수별 경기 기록 (골, 도움, 카드, MVP)
- MatchPresence    : 경기 출석
- PhoenixAdherent  : Phoenix 클럽 연회비 가입자
- PhoenixEntrainement : Phoenix 훈련 일정 (내부 청백전은 Jaune / Rouge 점수 포함)
- PhoenixEntrainementPresence : 훈련 출석 (지각 분, 사유)
- PhoenixComposition : 경기별 Jaune / Rouge 출전 명단, 포지션, 주장
- SportOperation   : 팀별 수입/지출

설계 원칙:
- 두 팀의 경기를 하나의 테이블에서 equipe 컬럼으로 구분
- 경기 기록은 membre_id 로 회원과 연결 (외부 선수는 player_name 만 사용)
- cards_synced 로 카드 → 제재 자동 생성 여부를 추적

"""

import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class Match(Base):
    __tablename__ = "matchs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    equipe: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    date_match: Mapped[date] = mapped_column(Date, nullable=False)
    heure_match: Mapped[str | None] = mapped_column(String(10), nullable=True)
    equipe_adverse: Mapped[str] = mapped_column(String(100), nullable=False)
    lieu: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # amical / championnat / coupe / entrainement
    type_match: Mapped[str] = mapped_column(String(20), nullable=False, default="amical")
    # prevu / termine / annule
    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="prevu")

    score_equipe: Mapped[int | None] = mapped_column(Integer, nullable=True)
    score_adverse: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class MatchStatistic(Base):
    __tablename__ = "match_statistics"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    match_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("matchs.id", ondelete="CASCADE"), nullable=False, index=True)
    membre_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("membres.id"), nullable=True, index=True)
    player_name: Mapped[str] = mapped_column(String(100), nullable=False)

    goals: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    assists: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    yellow_cards: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    red_cards: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    man_of_match: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    cards_synced: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class MatchPresence(Base):
    __tablename__ = "match_presences"
    __table_args__ = (
        UniqueConstraint("match_id", "membre_id", name="uq_match_presences_match_membre"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    match_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("matchs.id", ondelete="CASCADE"), nullable=False)
    membre_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("membres.id", ondelete="CASCADE"), nullable=False)
    present: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class PhoenixAdherent(Base):
    __tablename__ = "phoenix_adherents"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    membre_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("membres.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    date_adhesion: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    montant_adhesion: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    adhesion_payee: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    date_limite_paiement: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class PhoenixEntrainement(Base):
    __tablename__ = "phoenix_entrainements"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    date_entrainement: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    heure_debut: Mapped[str | None] = mapped_column(String(10), nullable=True)
    heure_fin: Mapped[str | None] = mapped_column(String(10), nullable=True)
    lieu: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # normal / intensif / technique / physique / interne
    type_entrainement: Mapped[str] = mapped_column(String(20), nullable=False, default="normal")
    # prevu / termine / annule
    statut: Mapped[str] = mapped_column(String(20), nullable=False, default="prevu")

    # 내부 청백전(interne) 결과
    score_jaune: Mapped[int | None] = mapped_column(Integer, nullable=True)
    score_rouge: Mapped[int | None] = mapped_column(Integer, nullable=True)
    equipe_gagnante: Mapped[str | None] = mapped_column(String(10), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class PhoenixEntrainementPresence(Base):
    __tablename__ = "phoenix_presences_entrainement"
    __table_args__ = (
        UniqueConstraint("entrainement_id", "membre_id", name="uq_phoenix_presences_entrainement_membre"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    entrainement_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("phoenix_entrainements.id", ondelete="CASCADE"), nullable=False, index=True
    )
    membre_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("membres.id", ondelete="CASCADE"), nullable=False)
    present: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    retard_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    excuse: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class PhoenixComposition(Base):
    """경기 출전 명단 한 줄. 한 경기에서 회원은 한 번만, 팀(Jaune / Rouge)마다 주장은 한 명."""

    __tablename__ = "phoenix_compositions"
    __table_args__ = (
        UniqueConstraint("match_id", "membre_id", name="uq_phoenix_compositions_match_membre"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    match_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("matchs.id", ondelete="CASCADE"), nullable=False, index=True)
    membre_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("membres.id", ondelete="CASCADE"), nullable=False)
    equipe_nom: Mapped[str] = mapped_column(String(10), nullable=False, default="Jaune")
    poste: Mapped[str | None] = mapped_column(String(50), nullable=True)
    est_capitaine: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

class SportOperation(Base):
    """팀 수입/지출 (type_operation: recette / depense)."""

    __tablename__ = "sport_finances"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    equipe: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    type_operation: Mapped[str] = mapped_column(String(10), nullable=False)
    montant: Mapped[int] = mapped_column(Integer, nullable=False)
    libelle: Mapped[str] = mapped_column(String(255), nullable=False)
    date_operation: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
