"""
services/permissions.py

직책 역할(roles)과 리소스 권한(role_permissions) 관리 로직.

- 역할 생성 / 목록
- 역할의 권한 세트 저장 (기존 권한 전부 교체)
- 사용자에게 역할 부여 / 회수
- 사용자의 유효 권한 목록

"""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models.permission import NamedRole, RolePermission, UserRole
from app.models.user import Role, User

RESOURCES = (
    "membres",
    "exercices",
    "cotisations",
    "epargnes",
    "prets",
    "sanctions",
    "reunions",
    "aides",
    "caisse",
    "sport",
    "analytics",
    "vitrine",
)
PERMISSIONS = ("read", "write")


def create_role(db: Session, *, name: str, description: str | None = None) -> NamedRole:
    if db.scalar(select(NamedRole).where(NamedRole.name == name)):
        raise ValueError("role already exists")
    role = NamedRole(name=name, description=description)
    db.add(role)
    db.flush()
    return role


def role_permissions(db: Session, role_id: uuid.UUID) -> list[RolePermission]:
    return list(
        db.scalars(
            select(RolePermission)
            .where(RolePermission.role_id == role_id)
            .order_by(RolePermission.resource, RolePermission.permission)
        ).all()
    )


def save_permissions(db: Session, role: NamedRole, grants: list[dict]) -> list[RolePermission]:
    seen = set()
    for g in grants:
        if g["resource"] not in RESOURCES:
            raise ValueError(f"unknown resource: {g['resource']}")
        if g["permission"] not in PERMISSIONS:
            raise ValueError(f"unknown permission: {g['permission']}")
        key = (g["resource"], g["permission"])
        if key in seen:
            raise ValueError(f"duplicate permission: {g['resource']}:{g['permission']}")
        seen.add(key)

    db.execute(delete(RolePermission).where(RolePermission.role_id == role.id))
    for g in grants:
        db.add(
            RolePermission(
                role_id=role.id,
                resource=g["resource"],
                permission=g["permission"],
                granted=g.get("granted", True),
            )
        )
    db.flush()
    return role_permissions(db, role.id)


def assign_role(db: Session, *, user: User, role: NamedRole) -> UserRole:
    if user.role in (Role.GUEST, Role.DELETED):
        raise ValueError("user must be an approved member")
    exists = db.scalar(select(UserRole).where(UserRole.user_id == user.id, UserRole.role_id == role.id))
    if exists:
        raise ValueError("role already assigned")
    link = UserRole(user_id=user.id, role_id=role.id)
    db.add(link)
    db.flush()
    return link


def revoke_role(db: Session, *, user: User, role: NamedRole) -> None:
    link = db.scalar(select(UserRole).where(UserRole.user_id == user.id, UserRole.role_id == role.id))
    if not link:
        raise ValueError("role not assigned")
    db.delete(link)
    db.flush()


def user_permissions(db: Session, user: User) -> dict:
    if user.role in (Role.ADMIN, Role.SUPERADMIN):
        return {
            "roles": [],
            "all": True,
            "permissions": [f"{r}:{p}" for r in RESOURCES for p in PERMISSIONS],
        }

    roles = db.scalars(
        select(NamedRole).join(UserRole, UserRole.role_id == NamedRole.id).where(UserRole.user_id == user.id)
    ).all()
    grants = db.scalars(
        select(RolePermission)
        .join(UserRole, UserRole.role_id == RolePermission.role_id)
        .where(UserRole.user_id == user.id, RolePermission.granted.is_(True))
    ).all()
    return {
        "roles": [r.name for r in roles],
        "all": False,
        "permissions": sorted({f"{g.resource}:{g.permission}" for g in grants}),
    }
