"""

인증 기본 플로우 통합 테스트.
- 회원가입(GUEST) → 승인 전 로그인 차단 → 관리자 승인 → 로그인 성공,
  거절 후 재가입(복구) 흐름, 회원 탈퇴(멤버 OK / 관리자 금지),
  프로필 수정 / 비밀번호 변경까지 검증한다.

"""

import uuid

from tests.helpers import auth_header, create_admin_in_db, login, register


def _admin(client, db_session):
    admin_email = f"admin_{uuid.uuid4().hex[:6]}@test.com"
    admin_password = "AdminPassw0rd!"
    create_admin_in_db(db_session, email=admin_email, password=admin_password)
    return admin_email, admin_password, login(client, admin_email, admin_password)


def test_register_approve_login_flow(client, db_session):
    _, _, admin_token = _admin(client, db_session)

    user_email = f"user_{uuid.uuid4().hex[:6]}@test.com"
    user_password = "UserPassw0rd!"
    user_id = register(client, email=user_email, password=user_password, name="Amadou Diallo")

    # 승인 전 로그인 차단(403)
    pending_login = client.post("/auth/login", json={"email": user_email, "password": user_password})
    assert pending_login.status_code == 403
    assert pending_login.json()["detail"] == "Pending approval"

    approve = client.post(f"/admin/guest/{user_id}/approve", headers=auth_header(admin_token))
    assert approve.status_code == 200, approve.text
    assert approve.json()["data"]["after_role"] == "MEMBER"

    user_token = login(client, user_email, user_password)

    profile = client.get("/users/profile", headers=auth_header(user_token))
    assert profile.status_code == 200, profile.text
    assert profile.json()["role"] == "MEMBER"
    assert profile.json()["membre"] is None

    me = client.get("/auth/me", headers=auth_header(user_token))
    assert me.status_code == 200, me.text
    assert me.json()["data"]["email"] == user_email


def test_register_duplicate_email_rejected(client):
    email = f"dup_{uuid.uuid4().hex[:6]}@test.com"
    register(client, email=email)

    r = client.post("/auth/register", json={"email": email, "password": "Passw0rd!234", "name": "Doublon"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Email already registered"


def test_register_reject_reregister_flow(client, db_session):
    _, _, admin_token = _admin(client, db_session)

    user_email = f"user_{uuid.uuid4().hex[:6]}@test.com"
    user_password = "UserPassw0rd!"
    user_id = register(client, email=user_email, password=user_password, name="Refus Test")

    reject = client.post(f"/admin/guest/{user_id}/reject", headers=auth_header(admin_token))
    assert reject.status_code == 200, reject.text

    login_after_reject = client.post("/auth/login", json={"email": user_email, "password": user_password})
    assert login_after_reject.status_code == 401
    assert login_after_reject.json()["detail"] == "Invalid credentials"

    # 같은 이메일 재가입 -> 복구(GUEST)
    register(client, email=user_email, password=user_password, name="Compte Restaure")

    login_after_rereg = client.post("/auth/login", json={"email": user_email, "password": user_password})
    assert login_after_rereg.status_code == 403
    assert login_after_rereg.json()["detail"] == "Pending approval"


def test_delete_me_member_ok_and_admin_forbidden(client, db_session):
    _, admin_password, admin_token = _admin(client, db_session)

    user_email = f"user_{uuid.uuid4().hex[:6]}@test.com"
    user_password = "UserPassw0rd!"
    user_id = register(client, email=user_email, password=user_password)

    approve = client.post(f"/admin/guest/{user_id}/approve", headers=auth_header(admin_token))
    assert approve.status_code == 200, approve.text

    user_token = login(client, user_email, user_password)

    # ❗ delete는 TestClient 버전 이슈 때문에 request로
    delete_me = client.request("DELETE", "/auth/me", headers=auth_header(user_token), json={"password": user_password})
    assert delete_me.status_code == 200, delete_me.text

    login_after = client.post("/auth/login", json={"email": user_email, "password": user_password})
    assert login_after.status_code == 401

    delete_admin = client.request("DELETE", "/auth/me", headers=auth_header(admin_token), json={"password": admin_password})
    assert delete_admin.status_code == 403


def test_edit_profile_and_change_password(client, db_session):
    _, admin_password, admin_token = _admin(client, db_session)

    no_change = client.patch("/auth/edit", headers=auth_header(admin_token), json={"current_password": admin_password})
    assert no_change.status_code == 400

    edit = client.patch(
        "/auth/edit",
        headers=auth_header(admin_token),
        json={"name": "Tresorier", "phone": "+237 699 000 111", "current_password": admin_password},
    )
    assert edit.status_code == 200, edit.text
    assert edit.json()["data"]["name"] == "Tresorier"

    mismatch = client.patch(
        "/auth/password",
        headers=auth_header(admin_token),
        json={"current_password": admin_password, "new_password": "NewPassw0rd!", "confirm_password": "Other0rd!!"},
    )
    assert mismatch.status_code == 400
    assert mismatch.json()["detail"] == "Passwords do not match"

    same = client.patch(
        "/auth/password",
        headers=auth_header(admin_token),
        json={"current_password": admin_password, "new_password": admin_password, "confirm_password": admin_password},
    )
    assert same.status_code == 400

    ok = client.patch(
        "/auth/password",
        headers=auth_header(admin_token),
        json={"current_password": admin_password, "new_password": "NewPassw0rd!", "confirm_password": "NewPassw0rd!"},
    )
    assert ok.status_code == 200, ok.text


def test_login_attempts_are_logged(client, db_session):
    admin_email, admin_password, admin_token = _admin(client, db_session)

    bad = client.post("/auth/login", json={"email": admin_email, "password": "wrong-password"})
    assert bad.status_code == 401

    r = client.get("/admin/connexions", headers=auth_header(admin_token))
    assert r.status_code == 200, r.text
    statuts = [c["statut"] for c in r.json()["data"] if c["email"] == admin_email]
    assert "failed" in statuts
    assert "success" in statuts

    failed_only = client.get("/admin/connexions?statut=failed", headers=auth_header(admin_token))
    assert all(c["statut"] == "failed" for c in failed_only.json()["data"])
