"""
admin.py

계정 관리자 API 모음.

- 승인 대기(GUEST) 목록 / 승인 / 거절
- 계정 등급 변경 (SUPERADMIN 보호, 마지막 ADMIN 보호)
- 계정 삭제 (SUPERADMIN 전용, Soft Delete)
- 계정 ↔ 회원(Membre) 연결
- 관리자 행위 로그 / 접속(로그인) 로그 조회

모든 변경은 AdminActionLog 에 IP / User-Agent 와 함께 기록된다.
"""

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import desc, select
from sqlalchemy.orm import Session, aliased

from app.core.deps import get_current_admin, get_current_superadmin, get_db
from app.models.admin_log import AdminAction, AdminActionLog, ConnexionLog
from app.models.user import Role, User
from app.schemas.user import LinkMembreRequest, RoleUpdate
from app.services.admin import count_admins, link_membre
from app.services.admin_log import client_meta, write_admin_log

router = APIRouter(prefix="/admin", tags=["admin"])


def _active_user_or_404(db: Session, user_id: uuid.UUID) -> User:
    user = db.scalar(select(User).where(User.id == user_id, User.is_deleted.is_(False)))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _user_dict(u: User) -> dict:
    return {
        "id": str(u.id),
        "email": u.email,
        "name": u.name,
        "phone": u.phone,
        "role": u.role.value,
        "membre_id": str(u.membre_id) if u.membre_id else None,
    }


# 관리자가 계정 등급을 변경하는 엔드포인트
@router.patch("/member/{user_id}/set_role")
def set_role(
    user_id: uuid.UUID,
    data: RoleUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    user = _active_user_or_404(db, user_id)

    if user.role == data.role:
        raise HTTPException(status_code=400, detail=f"User already {user.role.value}")

    if user.id == current_admin.id:
        raise HTTPException(status_code=400, detail="Cannot change your own role")

    if data.role in (Role.SUPERADMIN, Role.DELETED):
        raise HTTPException(status_code=403, detail=f"Cannot set role {data.role.value}")
    if user.role == Role.SUPERADMIN:
        raise HTTPException(status_code=403, detail="Cannot change SUPERADMIN role")

    # ADMIN 승격은 SUPERADMIN만 가능
    if data.role == Role.ADMIN and current_admin.role != Role.SUPERADMIN:
        raise HTTPException(status_code=403, detail="Only SUPERADMIN can promote to ADMIN")

    if user.role == Role.ADMIN and count_admins(db) <= 1:
        raise HTTPException(status_code=400, detail="Cannot demote the last ADMIN")

    before = user.role

    try:
        user.role = data.role
        write_admin_log(
            db,
            actor_id=current_admin.id,
            action=AdminAction.SET_ROLE,
            target_user_id=user.id,
            before_role=before.value,
            after_role=user.role.value,
            **client_meta(request),
        )
        db.commit()
        db.refresh(user)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {"message": "Role updated", "data": _user_dict(user)}


@router.get("/guest/pending")
def list_pending_users(
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    pending = db.scalars(
        select(User).where(User.role == Role.GUEST, User.is_deleted.is_(False)).order_by(User.created_at)
    ).all()
    return {"data": [_user_dict(u) for u in pending]}


# 대기자 승인 엔드포인트
@router.post("/guest/{user_id}/approve")
def approve_user(
    user_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    user = _active_user_or_404(db, user_id)
    if user.role != Role.GUEST:
        raise HTTPException(status_code=400, detail="User already approved")

    try:
        user.role = Role.MEMBER
        write_admin_log(
            db,
            actor_id=current_admin.id,
            action=AdminAction.APPROVE_USER,
            target_user_id=user.id,
            before_role=Role.GUEST.value,
            after_role=Role.MEMBER.value,
            **client_meta(request),
        )
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {
        "message": "User approved",
        "data": {
            "id": str(user.id),
            "name": user.name,
            "email": user.email,
            "before_role": Role.GUEST.value,
            "after_role": Role.MEMBER.value,
        },
    }


# 대기자 거절 엔드포인트 (Soft Delete)
@router.post("/guest/{user_id}/reject")
def reject_user(
    user_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    user = _active_user_or_404(db, user_id)
    if user.role != Role.GUEST:
        raise HTTPException(status_code=400, detail=f"User already {user.role.value}")

    snapshot = _user_dict(user)

    try:
        write_admin_log(
            db,
            actor_id=current_admin.id,
            action=AdminAction.REJECT_USER,
            target_user_id=user.id,
            before_role=user.role.value,
            after_role=Role.DELETED.value,
            **client_meta(request),
        )
        user.is_deleted = True
        user.deleted_at = datetime.now(timezone.utc)
        user.role = Role.DELETED
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {"message": "User rejected and deleted", "data": snapshot}


# 계정 삭제 엔드포인트 (SUPERADMIN 전용)
@router.delete("/users/{user_id}")
def delete_user_by_admin(
    user_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_superadmin),
):
    user = _active_user_or_404(db, user_id)

    if user.id == current_admin.id:
        raise HTTPException(status_code=400, detail="Cannot delete yourself")
    if user.role == Role.SUPERADMIN:
        raise HTTPException(status_code=403, detail="Cannot delete SUPERADMIN user")
    if user.role == Role.ADMIN and count_admins(db) <= 1:
        raise HTTPException(status_code=400, detail="Cannot delete the last ADMIN")

    snapshot = _user_dict(user)

    try:
        write_admin_log(
            db,
            actor_id=current_admin.id,
            action=AdminAction.DELETE_USER,
            target_user_id=user.id,
            before_role=user.role.value,
            after_role=Role.DELETED.value,
            **client_meta(request),
        )
        user.is_deleted = True
        user.deleted_at = datetime.now(timezone.utc)
        user.role = Role.DELETED
        user.membre_id = None
        user.refresh_token_version += 1
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {"message": "User deleted by admin", "data": snapshot}


"""
계정 ↔ 회원 연결 API

- membre_id=None 이면 연결 해제
- 하나의 회원은 하나의 계정에만 연결 가능

"""
@router.patch("/users/{user_id}/membre")
def set_user_membre(
    user_id: uuid.UUID,
    data: LinkMembreRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    user = _active_user_or_404(db, user_id)
    try:
        link_membre(db, user=user, membre_id=data.membre_id)
        write_admin_log(
            db,
            actor_id=current_admin.id,
            action=AdminAction.LINK_MEMBRE,
            target_user_id=user.id,
            details=f"membre_id={data.membre_id}",
            **client_meta(request),
        )
        db.commit()
        db.refresh(user)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise

    return {"message": "Membre linked", "data": _user_dict(user)}


@router.get("/users/{user_id}/search")
def get_user_details(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    user = _active_user_or_404(db, user_id)
    return {
        **_user_dict(user),
        "is_deleted": user.is_deleted,
        "deleted_at": user.deleted_at.isoformat() if user.deleted_at else None,
        "created_at": user.created_at.isoformat(),
        "updated_at": user.updated_at.isoformat(),
    }


@router.get("/users/all")
def list_all_users(
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    users = db.scalars(select(User).where(User.is_deleted.is_(False)).order_by(User.name)).all()
    return {"data": [_user_dict(u) for u in users]}


@router.get("/users/deleted")
def list_deleted_users(
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    users = db.scalars(select(User).where(User.is_deleted.is_(True)).order_by(desc(User.deleted_at))).all()
    return {
        "data": [
            {
                **_user_dict(u),
                "deleted_at": u.deleted_at.isoformat() if u.deleted_at else None,
            }
            for u in users
        ]
    }


# 관리자 활동 로그 조회 엔드포인트
@router.get("/logs")
def list_admin_logs(
    limit: int = 50,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    limit = max(1, min(limit, 200))

    Actor = aliased(User)
    Target = aliased(User)

    rows = db.execute(
        select(AdminActionLog, Actor, Target)
        .join(Actor, Actor.id == AdminActionLog.actor_id)
        .outerjoin(Target, Target.id == AdminActionLog.target_user_id)
        .order_by(desc(AdminActionLog.created_at))
        .limit(limit)
    ).all()

    result = []
    for log, actor, target in rows:
        result.append(
            {
                "id": str(log.id),
                "created_at": log.created_at.isoformat(),
                "action": log.action.value,
                "before_role": log.before_role,
                "after_role": log.after_role,
                "details": log.details,
                "ip": log.ip,
                "actor": {"id": str(actor.id), "email": actor.email, "name": actor.name},
                "target": (
                    {"id": str(target.id), "email": target.email, "name": target.name}
                    if target
                    else None
                ),
            }
        )
    return {"data": result, "meta": {"limit": limit, "count": len(result)}}


# 로그인 시도 기록 조회 (statut 필터: success / failed / pending)
@router.get("/connexions")
def list_connexion_logs(
    limit: int = 50,
    statut: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    limit = max(1, min(limit, 200))
    stmt = select(ConnexionLog).order_by(desc(ConnexionLog.created_at)).limit(limit)
    if statut:
        stmt = stmt.where(ConnexionLog.statut == statut)
    logs = db.scalars(stmt).all()
    return {
        "data": [
            {
                "id": str(c.id),
                "email": c.email,
                "user_id": str(c.user_id) if c.user_id else None,
                "statut": c.statut,
                "ip": c.ip,
                "user_agent": c.user_agent,
                "created_at": c.created_at.isoformat(),
            }
            for c in logs
        ],
        "meta": {"limit": limit, "count": len(logs)},
    }
