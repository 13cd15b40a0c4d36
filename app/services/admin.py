"""
services/admin.py

계정 관리자 기능에서 쓰는 정책 로직.

- count_admins : 활성 ADMIN 계정 수 (마지막 ADMIN 보호)
- link_membre  : 로그인 계정과 회원 명부(Membre) 1:1 연결

설계 원칙:
- HTTP / 트랜잭션 제어 없음 (라우터에서 commit / rollback)

"""

import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.membre import Membre
from app.models.user import Role, User


def count_admins(db: Session) -> int:
    return db.scalar(
        select(func.count()).select_from(User).where(User.role == Role.ADMIN, User.is_deleted.is_(False))
    ) or 0


def link_membre(db: Session, *, user: User, membre_id: uuid.UUID | None) -> User:
    if membre_id is None:
        user.membre_id = None
        db.flush()
        return user

    if db.get(Membre, membre_id) is None:
        raise ValueError("membre not found")
    other = db.scalar(select(User).where(User.membre_id == membre_id, User.id != user.id))
    if other:
        raise ValueError("membre already linked to another account")
    user.membre_id = membre_id
    db.flush()
    return user
