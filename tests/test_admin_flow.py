"""
관리자 계정 관리 통합 테스트.
- 대기자 목록 → 승인, 등급 변경 규칙(ADMIN 승격은 SUPERADMIN 만, 마지막 ADMIN 보호),
  계정 ↔ 회원 연결, 관리자 활동 로그 기록까지 확인한다.
"""

import uuid

from sqlalchemy import select

from app.models.user import Role, User
from tests.helpers import admin_token, auth_header, create_membre, create_user_in_db, register


def test_guest_approval_flow_end_to_end(client, db_session):
    guest_email = "guest_approve@example.com"
    register(client, email=guest_email, name="Invite")

    token = admin_token(client, db_session)

    r = client.get("/admin/guest/pending", headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert any(p["email"] == guest_email for p in r.json()["data"])

    guest = db_session.scalar(select(User).where(User.email == guest_email))
    assert guest is not None

    r = client.post(f"/admin/guest/{guest.id}/approve", headers=auth_header(token))
    assert r.status_code == 200, r.text

    again = client.post(f"/admin/guest/{guest.id}/approve", headers=auth_header(token))
    assert again.status_code == 400

    db_session.refresh(guest)
    assert guest.role == Role.MEMBER


def test_member_cannot_call_admin_api(client, db_session):
    email = f"member_{uuid.uuid4().hex[:6]}@test.com"
    create_user_in_db(db_session, email=email)
    r = client.post("/auth/login", json={"email": email, "password": "Passw0rd!234"})
    token = r.json()["data"]["access_token"]

    r = client.get("/admin/guest/pending", headers=auth_header(token))
    assert r.status_code == 403


def test_only_superadmin_promotes_to_admin(client, db_session):
    target = create_user_in_db(db_session, email=f"target_{uuid.uuid4().hex[:6]}@test.com")
    target_id = str(target.id)

    admin = admin_token(client, db_session)
    r = client.patch(f"/admin/member/{target_id}/set_role", headers=auth_header(admin), json={"role": "ADMIN"})
    assert r.status_code == 403
    assert r.json()["detail"] == "Only SUPERADMIN can promote to ADMIN"

    superadmin = admin_token(client, db_session, role=Role.SUPERADMIN)
    r = client.patch(f"/admin/member/{target_id}/set_role", headers=auth_header(superadmin), json={"role": "ADMIN"})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["role"] == "ADMIN"

    r = client.patch(f"/admin/member/{target_id}/set_role", headers=auth_header(superadmin), json={"role": "SUPERADMIN"})
    assert r.status_code == 403

    logs = client.get("/admin/logs", headers=auth_header(superadmin))
    assert logs.status_code == 200, logs.text
    assert any(l["action"] == "SET_ROLE" and l["after_role"] == "ADMIN" for l in logs.json()["data"])


def test_last_admin_cannot_be_demoted(client, db_session):
    admin = create_user_in_db(db_session, email=f"solo_{uuid.uuid4().hex[:6]}@test.com", role=Role.ADMIN)
    admin_id = str(admin.id)
    superadmin = admin_token(client, db_session, role=Role.SUPERADMIN)

    r = client.patch(f"/admin/member/{admin_id}/set_role", headers=auth_header(superadmin), json={"role": "MEMBER"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Cannot demote the last ADMIN"


def test_link_user_to_membre(client, db_session):
    token = admin_token(client, db_session)
    user = create_user_in_db(db_session, email=f"linked_{uuid.uuid4().hex[:6]}@test.com")
    other = create_user_in_db(db_session, email=f"other_{uuid.uuid4().hex[:6]}@test.com")
    user_id, other_id = str(user.id), str(other.id)

    membre = create_membre(client, token, nom="Ngono", prenom="Paul")

    r = client.patch(f"/admin/users/{user_id}/membre", headers=auth_header(token), json={"membre_id": membre["id"]})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["membre_id"] == membre["id"]

    # 같은 회원을 다른 계정에 연결할 수 없음
    r = client.patch(f"/admin/users/{other_id}/membre", headers=auth_header(token), json={"membre_id": membre["id"]})
    assert r.status_code == 400
    assert r.json()["detail"] == "membre already linked to another account"

    r = client.patch(f"/admin/users/{user_id}/membre", headers=auth_header(token), json={"membre_id": None})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["membre_id"] is None


def test_superadmin_deletes_user(client, db_session):
    target = create_user_in_db(db_session, email=f"bye_{uuid.uuid4().hex[:6]}@test.com")
    target_id = str(target.id)

    admin = admin_token(client, db_session)
    r = client.delete(f"/admin/users/{target_id}", headers=auth_header(admin))
    assert r.status_code == 403

    superadmin = admin_token(client, db_session, role=Role.SUPERADMIN)
    r = client.delete(f"/admin/users/{target_id}", headers=auth_header(superadmin))
    assert r.status_code == 200, r.text

    deleted = client.get("/admin/users/deleted", headers=auth_header(superadmin))
    assert any(u["id"] == target_id for u in deleted.json()["data"])
