"""
user.py

사용자 계정(User) 및 권한(Role) 모델 정의 파일.

이 파일은 대시보드에 로그인하는 계정의 기본 정보와
권한(Role), 탈퇴 상태(Soft Delete), 인증 관련 정보를 관리한다.

계정은 선택적으로 협회 회원(Membre) 한 명과 연결되며,
모든 인증, 권한, 관리자 기능의 기준이 되는 핵심 모델이다.

"""

import uuid
import datetime
from enum import Enum

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey, Uuid, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow



"""
사용자 권한(Role) 정의

- GUEST       : 가입 후 승인 대기 상태
- MEMBER      : 일반 회원
- ADMIN       : 관리자
- SUPERADMIN  : 최고 관리자
- DELETED     : 탈퇴(삭제) 처리된 사용자

"""

class Role(str, Enum):
    GUEST = "GUEST"
    MEMBER = "MEMBER"
    ADMIN = "ADMIN"
    SUPERADMIN = "SUPERADMIN"
    DELETED = "DELETED"



"""
사용자(User) 모델

- email 은 고유 식별자
- role을 통해 접근 권한 제어 (세부 권한은 app.models.permission)
- membre_id 로 협회 회원 정보와 1:1 연결 (선택)
- is_deleted / deleted_at 으로 Soft Delete 지원
- refresh_token_version 으로 강제 로그아웃 및 토큰 무효화 지원

"""

class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)

    role: Mapped[Role] = mapped_column(SAEnum(Role, name="user_role"), nullable=False, default=Role.GUEST)

    membre_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("membres.id", ondelete="SET NULL"), unique=True, nullable=True
    )

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    deleted_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    refresh_token_version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
