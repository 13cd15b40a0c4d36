"""
deps.py

FastAPI 의존성(Depends) 모음.

- get_db                : 요청 단위 DB 세션
- get_current_user      : Bearer Access Token → User
- require_min_role      : 계정 등급(GUEST < MEMBER < ADMIN < SUPERADMIN) 검사
- require_permission    : 직책 역할(roles / role_permissions) 기반 리소스 권한 검사

"""

from typing import Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.security import decode_access_token
from app.db.session import SessionLocal
from app.models.permission import RolePermission, UserRole
from app.models.user import User, Role

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if cred is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = decode_access_token(cred.credentials)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.scalar(select(User).where(User.id == user_id, User.is_deleted.is_(False)))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


ROLE_LEVEL = {
    Role.DELETED: -1,
    Role.GUEST: 0,
    Role.MEMBER: 1,
    Role.ADMIN: 2,
    Role.SUPERADMIN: 3,
}


def require_min_role(min_role: Role):
    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if ROLE_LEVEL[current_user.role] < ROLE_LEVEL[min_role]:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role >= {min_role.value}",
            )
        return current_user
    return _checker


get_current_member = require_min_role(Role.MEMBER)
get_current_admin = require_min_role(Role.ADMIN)
get_current_superadmin = require_min_role(Role.SUPERADMIN)


def has_permission(db: Session, user: User, resource: str, permission: str) -> bool:
    # ADMIN 이상은 모든 리소스에 접근 가능
    if ROLE_LEVEL[user.role] >= ROLE_LEVEL[Role.ADMIN]:
        return True
    if ROLE_LEVEL[user.role] < ROLE_LEVEL[Role.MEMBER]:
        return False

    granted = db.scalar(
        select(RolePermission.id)
        .join(UserRole, UserRole.role_id == RolePermission.role_id)
        .where(
            UserRole.user_id == user.id,
            RolePermission.resource == resource,
            RolePermission.permission == permission,
            RolePermission.granted.is_(True),
        )
        .limit(1)
    )
    return granted is not None


"""
리소스 권한 의존성

- 예: Depends(require_permission("prets", "write"))
- MEMBER 는 자신에게 부여된 직책 역할 중 하나라도 (resource, permission)을 허용하면 통과

"""

def require_permission(resource: str, permission: str):
    def _checker(
        current_user: User = Depends(get_current_member),
        db: Session = Depends(get_db),
    ) -> User:
        if not has_permission(db, current_user, resource, permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Missing permission {resource}:{permission}",
            )
        return current_user
    return _checker


# 경로 파라미터 id 로 조회, 없으면 404
def get_or_404(db: Session, model, obj_id, label: str):
    obj = db.get(model, obj_id)
    if obj is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    return obj
