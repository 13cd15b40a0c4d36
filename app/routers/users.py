"""
users.py

로그인 계정용 조회 API 모음.

- 본인 프로필 + 연결된 회원(Membre) 요약
- 본인 직책 역할 / 리소스 권한 목록 (프론트 메뉴 노출 판단용)
- 활성 계정 목록 (공개 정보만)

관리자용 계정 관리 기능(admin.py)과 분리하여 노출 데이터 범위를 구분한다.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.deps import get_current_member, get_db
from app.models.membre import Membre
from app.models.user import Role, User
from app.services.membres import membre_fiche
from app.services.permissions import user_permissions

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile")
def profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_member),
):
    membre = db.get(Membre, current_user.membre_id) if current_user.membre_id else None
    return {
        "name": current_user.name,
        "email": current_user.email,
        "phone": current_user.phone,
        "role": current_user.role.value,
        "membre": (
            {
                "id": str(membre.id),
                "nom": membre.nom,
                "prenom": membre.prenom,
                "fiche": membre_fiche(db, membre),
            }
            if membre
            else None
        ),
    }


@router.get("/permissions")
def my_permissions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_member),
):
    return user_permissions(db, current_user)


"""
활성 계정 목록 API (회원용)

- GUEST / DELETED 제외
- 이름 기준 오름차순, 공개 가능한 최소 정보만 반환

"""
@router.get("/all")
def list_all_users(
    db: Session = Depends(get_db),
    member: User = Depends(get_current_member),
):
    users = db.scalars(
        select(User)
        .where(User.role.in_([Role.MEMBER, Role.ADMIN, Role.SUPERADMIN]), User.is_deleted.is_(False))
        .order_by(User.name)
    ).all()
    return [{"name": u.name, "role": u.role.value} for u in users]
