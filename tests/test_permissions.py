"""
역할 / 권한 API 테스트.
- ADMIN 이상은 모든 리소스 권한 보유
- MEMBER 는 역할에 부여된 권한만 사용 (부여 / 회수 즉시 반영)
"""

from tests.helpers import admin_token, auth_header, member_token


def _create_role(client, token, name="tresorier"):
    r = client.post("/admin/roles", headers=auth_header(token), json={"name": name, "description": "Trésorerie"})
    assert r.status_code == 200, r.text
    return r.json()


def test_resources_listed(client, db_session):
    token = admin_token(client, db_session)
    r = client.get("/admin/roles/resources", headers=auth_header(token))
    assert r.status_code == 200
    assert "caisse" in r.json()["resources"]
    assert r.json()["permissions"] == ["read", "write"]


def test_admin_has_every_permission(client, db_session):
    token = admin_token(client, db_session)
    data = client.get("/users/permissions", headers=auth_header(token)).json()
    assert data["all"] is True
    assert "caisse:write" in data["permissions"]


def test_duplicate_role_rejected(client, db_session):
    token = admin_token(client, db_session)
    _create_role(client, token)
    r = client.post("/admin/roles", headers=auth_header(token), json={"name": "tresorier"})
    assert r.status_code == 400


def test_invalid_permission_set_rejected(client, db_session):
    token = admin_token(client, db_session)
    role = _create_role(client, token)

    unknown = client.put(f"/admin/roles/{role['id']}/permissions", headers=auth_header(token),
                         json={"permissions": [{"resource": "banque", "permission": "read"}]})
    assert unknown.status_code == 400

    duplicate = client.put(f"/admin/roles/{role['id']}/permissions", headers=auth_header(token), json={
        "permissions": [{"resource": "caisse", "permission": "read"}, {"resource": "caisse", "permission": "read"}],
    })
    assert duplicate.status_code == 400


def test_member_gains_and_loses_permission(client, db_session):
    admin = admin_token(client, db_session)
    user_id, token = member_token(client, db_session)

    assert client.get("/caisse/solde", headers=auth_header(token)).status_code == 403

    role = _create_role(client, admin)
    r = client.put(f"/admin/roles/{role['id']}/permissions", headers=auth_header(admin), json={
        "permissions": [
            {"resource": "caisse", "permission": "read"},
            {"resource": "caisse", "permission": "write", "granted": False},
        ],
    })
    assert r.status_code == 200, r.text
    assert len(r.json()) == 2

    r = client.post(f"/admin/roles/{role['id']}/assign", headers=auth_header(admin), json={"user_id": user_id})
    assert r.status_code == 200, r.text

    again = client.post(f"/admin/roles/{role['id']}/assign", headers=auth_header(admin), json={"user_id": user_id})
    assert again.status_code == 400

    assert client.get("/caisse/solde", headers=auth_header(token)).status_code == 200
    denied = client.post("/caisse/operations", headers=auth_header(token),
                         json={"type_operation": "entree", "montant": 1000, "libelle": "Test"})
    assert denied.status_code == 403

    mine = client.get("/users/permissions", headers=auth_header(token)).json()
    assert mine == {"roles": ["tresorier"], "all": False, "permissions": ["caisse:read"]}

    r = client.post(f"/admin/roles/{role['id']}/revoke", headers=auth_header(admin), json={"user_id": user_id})
    assert r.status_code == 200, r.text
    assert client.get("/caisse/solde", headers=auth_header(token)).status_code == 403


def test_member_cannot_manage_roles(client, db_session):
    _, token = member_token(client, db_session)
    assert client.get("/admin/roles", headers=auth_header(token)).status_code == 403
