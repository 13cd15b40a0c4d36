"""
저축(Épargne) API 통합 테스트.
- 입금 / 인출
- 저축자 이익 배분: 진행 중 대출 이자를 저축 비율로 분배
"""

from datetime import date, timedelta

from app.services.epargnes import compute_benefices
from tests.helpers import admin_token, auth_header, create_membre


def test_compute_benefices_without_savings():
    assert compute_benefices({}, 5000) == []


def test_compute_benefices_sorted_by_savings():
    rows = compute_benefices({"a": 25000, "b": 75000}, 10000)
    assert [r["membre_id"] for r in rows] == ["b", "a"]
    assert rows[0]["gains_estimes"] == 7500
    assert rows[1]["pourcentage"] == 25.0


def test_withdraw_epargne(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)
    dep = client.post("/epargnes", headers=auth_header(token),
                      json={"membre_id": membre["id"], "montant": 15000}).json()

    r = client.post(f"/epargnes/{dep['id']}/withdraw", headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert r.json()["statut"] == "retire"

    again = client.post(f"/epargnes/{dep['id']}/withdraw", headers=auth_header(token))
    assert again.status_code == 400


def test_benefices_distributes_open_loan_interest(client, db_session):
    token = admin_token(client, db_session)
    alice = create_membre(client, token, nom="Ateba", prenom="Alice")
    bruno = create_membre(client, token, nom="Bella", prenom="Bruno")
    borrower = create_membre(client, token, nom="Zambo", prenom="Yves")

    client.post("/epargnes", headers=auth_header(token), json={"membre_id": alice["id"], "montant": 60000})
    client.post("/epargnes", headers=auth_header(token), json={"membre_id": bruno["id"], "montant": 40000})

    echeance = (date.today() + timedelta(days=60)).isoformat()
    client.post("/prets", headers=auth_header(token), json={
        "membre_id": borrower["id"], "montant": 100000, "taux_interet": 10, "echeance": echeance,
    })
    repaid = client.post("/prets", headers=auth_header(token), json={
        "membre_id": borrower["id"], "montant": 50000, "taux_interet": 10, "echeance": echeance,
    }).json()
    client.post(f"/prets/{repaid['id']}/rembourser", headers=auth_header(token), json={})

    r = client.get("/epargnes/benefices", headers=auth_header(token))
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["total_interets"] == 10000
    assert data["total_epargnes"] == 100000

    first, second = data["epargnants"]
    assert (first["nom"], first["gains_estimes"], first["pourcentage"]) == ("Ateba", 6000, 60.0)
    assert (second["nom"], second["gains_estimes"]) == ("Bella", 4000)


def test_benefices_export_csv(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token, nom="Owono", prenom="Clara")
    client.post("/epargnes", headers=auth_header(token), json={"membre_id": membre["id"], "montant": 20000})

    r = client.get("/epargnes/benefices/export", headers=auth_header(token))
    assert r.status_code == 200, r.text
    lines = r.content.decode("utf-8-sig").strip().splitlines()
    assert lines[0] == "nom,prenom,total_epargne,pourcentage,gains_estimes"
    assert lines[1].startswith("Owono,Clara,20000")


def test_totals_by_membre(client, db_session):
    token = admin_token(client, db_session)
    small = create_membre(client, token, nom="Petit", prenom="Luc")
    big = create_membre(client, token, nom="Grand", prenom="Eric")

    client.post("/epargnes", headers=auth_header(token), json={"membre_id": small["id"], "montant": 5000})
    client.post("/epargnes", headers=auth_header(token), json={"membre_id": big["id"], "montant": 20000})
    client.post("/epargnes", headers=auth_header(token), json={"membre_id": big["id"], "montant": 10000})

    r = client.get("/epargnes/totaux", headers=auth_header(token))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["data"] == [
        {"membre_id": big["id"], "total": 30000},
        {"membre_id": small["id"], "total": 5000},
    ]
    assert body["meta"]["total_epargnes"] == 35000
