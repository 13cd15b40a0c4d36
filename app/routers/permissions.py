"""
permissions.py

직책 역할(roles) 및 리소스 권한 관리 API (관리자 전용).

- 역할 생성 / 목록
- 역할별 권한 세트 조회 / 저장 (전체 교체)
- 계정에 역할 부여 / 회수

역할은 MEMBER 계정에게 특정 리소스의 read / write 권한을 열어주는 용도이며,
ADMIN 이상은 역할과 무관하게 모든 리소스에 접근 가능하다.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.deps import get_current_admin, get_db
from app.models.admin_log import AdminAction
from app.models.permission import NamedRole
from app.models.user import User
from app.schemas.permission import (
    PermissionGrantResponse,
    PermissionSetRequest,
    RoleAssignRequest,
    RoleCreate,
    RoleResponse,
)
from app.services.admin_log import client_meta, write_admin_log
from app.services.common import NotFoundError, get_or_raise
from app.services.permissions import (
    PERMISSIONS,
    RESOURCES,
    assign_role,
    create_role,
    revoke_role,
    role_permissions,
    save_permissions,
)

router = APIRouter(prefix="/admin/roles", tags=["admin-permissions"])


def _role_or_404(db: Session, role_id: uuid.UUID) -> NamedRole:
    try:
        return get_or_raise(db, NamedRole, role_id, "role")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _active_user_or_404(db: Session, user_id: uuid.UUID) -> User:
    user = db.scalar(select(User).where(User.id == user_id, User.is_deleted.is_(False)))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/resources")
def list_resources(_: User = Depends(get_current_admin)):
    return {"resources": list(RESOURCES), "permissions": list(PERMISSIONS)}


@router.get("", response_model=list[RoleResponse])
def list_roles(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    return db.scalars(select(NamedRole).order_by(NamedRole.name)).all()


@router.post("", response_model=RoleResponse)
def create_named_role(
    body: RoleCreate,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    try:
        role = create_role(db, name=body.name, description=body.description)
        write_admin_log(
            db,
            actor_id=admin.id,
            action=AdminAction.CREATE_ROLE,
            details=f"role={role.name}",
            **client_meta(request),
        )
        db.commit()
        db.refresh(role)
        return role
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("/{role_id}/permissions", response_model=list[PermissionGrantResponse])
def get_role_permissions(
    role_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    role = _role_or_404(db, role_id)
    return role_permissions(db, role.id)


"""
역할 권한 세트 저장 API

- 요청 본문의 permissions 로 기존 권한을 모두 교체
- 알 수 없는 resource / 중복 항목이 있으면 전체 거부

"""
@router.put("/{role_id}/permissions", response_model=list[PermissionGrantResponse])
def put_role_permissions(
    role_id: uuid.UUID,
    body: PermissionSetRequest,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    role = _role_or_404(db, role_id)
    try:
        saved = save_permissions(db, role, [g.model_dump() for g in body.permissions])
        granted = ",".join(f"{p.resource}:{p.permission}" for p in saved if p.granted)
        write_admin_log(
            db,
            actor_id=admin.id,
            action=AdminAction.SAVE_PERMISSIONS,
            details=f"role={role.name} [{granted}]",
            **client_meta(request),
        )
        db.commit()
        return role_permissions(db, role.id)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/{role_id}/assign")
def assign_named_role(
    role_id: uuid.UUID,
    body: RoleAssignRequest,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    role = _role_or_404(db, role_id)
    user = _active_user_or_404(db, body.user_id)
    try:
        assign_role(db, user=user, role=role)
        write_admin_log(
            db,
            actor_id=admin.id,
            action=AdminAction.ASSIGN_ROLE,
            target_user_id=user.id,
            details=f"role={role.name}",
            **client_meta(request),
        )
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
    return {"message": "Role assigned", "data": {"user_id": str(user.id), "role": role.name}}


@router.post("/{role_id}/revoke")
def revoke_named_role(
    role_id: uuid.UUID,
    body: RoleAssignRequest,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    role = _role_or_404(db, role_id)
    user = _active_user_or_404(db, body.user_id)
    try:
        revoke_role(db, user=user, role=role)
        write_admin_log(
            db,
            actor_id=admin.id,
            action=AdminAction.REVOKE_ROLE,
            target_user_id=user.id,
            details=f"role={role.name}",
            **client_meta(request),
        )
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
    return {"message": "Role revoked", "data": {"user_id": str(user.id), "role": role.name}}
