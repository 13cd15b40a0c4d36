# tests/helpers.py
import uuid
from sqlalchemy.orm import Session
from sqlalchemy import select

from app.models.user import User, Role
from app.core.security import get_password_hash

DEFAULT_PASSWORD = "Passw0rd!234"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_user_in_db(db: Session, *, email: str, password: str = DEFAULT_PASSWORD,
                      role: Role = Role.MEMBER, name: str = "Utilisateur") -> User:
    user = User(
        email=email,
        password_hash=get_password_hash(password),
        name=name,
        phone="+237 600 000 000",
        role=role,
        is_deleted=False,
        deleted_at=None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_admin_in_db(db: Session, *, email: str, password: str) -> User:
    return create_user_in_db(db, email=email, password=password, role=Role.ADMIN, name="ADMIN")


def login(client, email: str, password: str = DEFAULT_PASSWORD) -> str:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["data"]["access_token"]


def admin_token(client, db: Session, role: Role = Role.ADMIN) -> str:
    email = f"admin_{uuid.uuid4().hex[:6]}@test.com"
    create_user_in_db(db, email=email, role=role, name="ADMIN")
    return login(client, email)


def member_token(client, db: Session) -> tuple[str, str]:
    """MEMBER 계정 생성 후 (user_id, token) 반환"""
    email = f"member_{uuid.uuid4().hex[:6]}@test.com"
    user = create_user_in_db(db, email=email, role=Role.MEMBER, name="Membre")
    user_id = str(user.id)
    return user_id, login(client, email)


def register(client, *, email: str, password: str = DEFAULT_PASSWORD, name: str = "Nouveau Membre",
             phone: str = "+237 655 111 222") -> str:
    r = client.post("/auth/register", json={"email": email, "password": password, "name": name, "phone": phone})
    assert r.status_code == 200, r.text
    return r.json()["data"]["id"]


def setup_admin_and_member(client, db: Session):
    """
    ADMIN 토큰 + 승인된 MEMBER(user_id, token) 세팅
    """
    admin_email = f"admin_{uuid.uuid4().hex[:6]}@test.com"
    admin_password = "AdminPassw0rd!"
    create_admin_in_db(db, email=admin_email, password=admin_password)
    token = login(client, admin_email, admin_password)

    user_email = f"user_{uuid.uuid4().hex[:6]}@test.com"
    user_password = "UserPassw0rd!"
    user_id = register(client, email=user_email, password=user_password)

    approve = client.post(f"/admin/guest/{user_id}/approve", headers=auth_header(token))
    assert approve.status_code == 200, approve.text

    return {
        "admin_email": admin_email,
        "admin_password": admin_password,
        "admin_token": token,
        "user_email": user_email,
        "user_password": user_password,
        "user_id": user_id,
        "user_token": login(client, user_email, user_password),
    }


def create_membre(client, token: str, nom: str = "Mbarga", prenom: str = "Jean", **extra) -> dict:
    r = client.post("/membres", headers=auth_header(token), json={"nom": nom, "prenom": prenom, **extra})
    assert r.status_code == 200, r.text
    return r.json()


def get_user(db: Session, user_id: str) -> User:
    return db.scalar(select(User).where(User.id == uuid.UUID(user_id)))
