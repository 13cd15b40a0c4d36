"""
auth.py

대시보드 계정 인증(Authentication) API 모음.

회원 가입, 로그인, 토큰 재발급, 로그아웃, 프로필 수정과 같이
계정 인증 흐름 전반을 담당한다.
JWT 기반 인증 방식을 사용하며, Access Token + Refresh Token 구조를 따른다.

주요 기능:
- 회원 가입 (탈퇴 계정 복구 포함)
- 로그인 및 토큰 발급 (모든 시도를 ConnexionLog 에 기록)
- Refresh Token 기반 Access Token 재발급
- 로그아웃 (Refresh Token 무효화)
- 프로필 수정 및 비밀번호 변경
- 본인 탈퇴 (Soft Delete)

설계 원칙:
- Access Token은 Authorization Header로 전달
- Refresh Token은 HttpOnly Cookie로 관리
- Refresh Token Version을 이용해 강제 로그아웃 / 토큰 무효화 처리

관련 파일:
- app.core.security        : 비밀번호 해시 / JWT 생성·검증
- app.services.admin_log   : 접속 기록(write_connexion_log)
- app.schemas.auth         : 인증 관련 요청/응답

"""

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from jose import ExpiredSignatureError, JWTError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.deps import get_current_member, get_db
from app.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    get_password_hash,
    verify_password,
)
from app.models.user import Role, User
from app.schemas.auth import (
    ChangePasswordRequest,
    DeleteMeRequest,
    EditProfileRequest,
    LoginRequest,
    RegisterRequest,
)
from app.services.admin_log import client_meta, write_connexion_log

router = APIRouter(prefix="/auth", tags=["auth"])

REFRESH_COOKIE_NAME = "refresh_token"


def _set_refresh_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        domain=settings.COOKIE_DOMAIN,
        path="/",
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


def _clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(key=REFRESH_COOKIE_NAME, path="/", domain=settings.COOKIE_DOMAIN)


"""
회원 가입 API

- 활성 계정과 이메일이 겹치면 거부
- 탈퇴한 계정이 존재할 경우 복구하여 재가입 처리
- 가입 시 기본 권한은 GUEST (관리자 승인 필요)

"""

@router.post("/register")
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    active = db.scalar(select(User).where(User.email == data.email, User.is_deleted.is_(False)))
    if active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    deleted = db.scalar(select(User).where(User.email == data.email, User.is_deleted.is_(True)))

    try:
        if deleted:
            deleted.is_deleted = False
            deleted.deleted_at = None
            deleted.password_hash = get_password_hash(data.password)
            deleted.name = data.name
            deleted.phone = data.phone
            deleted.role = Role.GUEST
            user = deleted
        else:
            user = User(
                email=data.email,
                password_hash=get_password_hash(data.password),
                name=data.name,
                phone=data.phone,
                role=Role.GUEST,
            )
            db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {"data": {"id": str(user.id), "email": user.email}}


"""
로그인 API

- 이메일 / 비밀번호 인증
- 승인되지 않은 GUEST 계정은 로그인 불가 (pending 으로 기록)
- 성공 / 실패 / 대기 여부와 관계없이 접속 기록 한 건 추가

"""

@router.post("/login")
def login(data: LoginRequest, request: Request, response: Response, db: Session = Depends(get_db)):
    meta = client_meta(request)
    user = db.scalar(select(User).where(User.email == data.email, User.is_deleted.is_(False)))

    if not user or not verify_password(data.password, user.password_hash):
        write_connexion_log(db, email=data.email, statut="failed", user_id=user.id if user else None, **meta)
        db.commit()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if user.role == Role.GUEST:
        write_connexion_log(db, email=data.email, statut="pending", user_id=user.id, **meta)
        db.commit()
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Pending approval")

    write_connexion_log(db, email=data.email, statut="success", user_id=user.id, **meta)
    db.commit()

    access = create_access_token(subject=str(user.id))
    refresh = create_refresh_token(subject=str(user.id), refresh_token_version=user.refresh_token_version)
    _set_refresh_cookie(response, refresh)

    return {"data": {"access_token": access, "token_type": "bearer"}}


"""
Access Token 재발급 API

- Refresh Token 쿠키로 새로운 Access Token 발급
- Refresh Token Version이 일치하지 않으면 거부
- 재발급 시 Refresh Token 회전(rotation)

"""

@router.post("/refresh")
def refresh(request: Request, response: Response, db: Session = Depends(get_db)):
    token = request.cookies.get(REFRESH_COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing refresh token")

    try:
        user_id, token_rtv = decode_refresh_token(token)
        user_uuid = uuid.UUID(user_id)
    except (ExpiredSignatureError, JWTError, ValueError):
        _clear_refresh_cookie(response)
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    user = db.scalar(select(User).where(User.id == user_uuid, User.is_deleted.is_(False)))
    if not user:
        _clear_refresh_cookie(response)
        raise HTTPException(status_code=401, detail="User not found")

    if token_rtv != user.refresh_token_version:
        _clear_refresh_cookie(response)
        raise HTTPException(status_code=401, detail="Refresh token revoked")

    user.refresh_token_version += 1
    db.commit()
    db.refresh(user)

    new_access = create_access_token(subject=str(user.id))
    new_refresh = create_refresh_token(subject=str(user.id), refresh_token_version=user.refresh_token_version)
    _set_refresh_cookie(response, new_refresh)

    return {"data": {"access_token": new_access, "token_type": "bearer"}}


@router.post("/logout")
def logout(
    response: Response,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_member),
):
    try:
        user.refresh_token_version += 1
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    _clear_refresh_cookie(response)
    return Response(status_code=204)


"""
본인 계정 조회 API

- 연결된 회원(membre_id) 포함

"""

@router.get("/me")
def me(user: User = Depends(get_current_member)):
    return {
        "data": {
            "id": str(user.id),
            "email": user.email,
            "name": user.name,
            "phone": user.phone,
            "role": user.role.value,
            "membre_id": str(user.membre_id) if user.membre_id else None,
        }
    }


"""
본인 탈퇴 API

- 비밀번호 확인 후 Soft Delete (is_deleted=True, role=DELETED)
- ADMIN / SUPERADMIN 계정은 탈퇴 불가

"""

@router.delete("/me")
def delete_me(
    data: DeleteMeRequest,
    response: Response,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_member),
):
    if not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid password")

    if user.role in (Role.ADMIN, Role.SUPERADMIN):
        raise HTTPException(status_code=403, detail="Admin users cannot delete")

    try:
        user.is_deleted = True
        user.deleted_at = datetime.now(timezone.utc)
        user.role = Role.DELETED
        user.membre_id = None
        user.refresh_token_version += 1
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    _clear_refresh_cookie(response)
    return {"data": {"status": "deleted"}}


@router.patch("/edit")
def edit_profile(
    data: EditProfileRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_member),
):
    if data.name is None and data.phone is None:
        raise HTTPException(status_code=400, detail="No changes provided")

    if not verify_password(data.current_password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    if data.name is not None:
        user.name = data.name
    if data.phone is not None:
        user.phone = data.phone

    try:
        db.commit()
        db.refresh(user)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {
        "data": {
            "id": str(user.id),
            "email": user.email,
            "name": user.name,
            "phone": user.phone,
            "role": user.role.value,
        },
    }


"""
비밀번호 변경 API

- 현재 비밀번호 확인 필수, 새 비밀번호는 기존과 달라야 함
- 변경 시 Refresh Token 무효화 (재로그인 유도)

"""

@router.patch("/password")
def change_password(
    data: ChangePasswordRequest,
    response: Response,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_member),
):
    if not verify_password(data.current_password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    if data.new_password != data.confirm_password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Passwords do not match")

    if verify_password(data.new_password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="New password must be different")

    try:
        user.password_hash = get_password_hash(data.new_password)
        user.refresh_token_version += 1
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    _clear_refresh_cookie(response)
    return {"data": {"status": "password_updated"}}
