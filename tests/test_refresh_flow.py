# tests/test_refresh_flow.py
import uuid
from tests.helpers import auth_header, create_admin_in_db, login, register


def test_refresh_token_rotation_and_revocation(client, db_session):
    admin_email = f"admin_{uuid.uuid4().hex[:6]}@test.com"
    admin_password = "AdminPassw0rd!"
    create_admin_in_db(db_session, email=admin_email, password=admin_password)
    admin_token = login(client, admin_email, admin_password)

    user_email = f"user_{uuid.uuid4().hex[:6]}@test.com"
    user_password = "UserPassw0rd!"
    user_id = register(client, email=user_email, password=user_password, name="Refresh Test")

    approve = client.post(f"/admin/guest/{user_id}/approve", headers=auth_header(admin_token))
    assert approve.status_code == 200, approve.text

    access1 = login(client, user_email, user_password)
    assert access1
    assert "refresh_token" in client.cookies
    refresh1 = client.cookies.get("refresh_token")
    assert refresh1

    r1 = client.post("/auth/refresh")
    assert r1.status_code == 200, r1.text
    access2 = r1.json()["data"]["access_token"]
    assert access2

    refresh2 = client.cookies.get("refresh_token")
    assert refresh2 and refresh2 != refresh1

    client.cookies.clear()
    client.cookies.set("refresh_token", refresh1)
    r_old = client.post("/auth/refresh")
    assert r_old.status_code == 401
    assert r_old.json()["detail"] == "Refresh token revoked"

    client.cookies.clear()
    client.cookies.set("refresh_token", refresh2)
    logout = client.post("/auth/logout", headers=auth_header(access2))
    assert logout.status_code == 204


def test_refresh_without_cookie_rejected(client):
    client.cookies.clear()
    r = client.post("/auth/refresh")
    assert r.status_code == 401
    assert r.json()["detail"] == "Missing refresh token"
