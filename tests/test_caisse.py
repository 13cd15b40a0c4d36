"""
금고(Caisse) API 통합 테스트.
- 입출금 기록과 현재 잔액
- 마감: 이론 잔액과 실사 잔액의 차이(ecart), 다음 기간 시작 잔액
"""

from datetime import date, timedelta

from tests.helpers import admin_token, auth_header, member_token


def _op(client, token, type_operation, montant, libelle="Opération"):
    r = client.post("/caisse/operations", headers=auth_header(token),
                    json={"type_operation": type_operation, "montant": montant, "libelle": libelle})
    assert r.status_code == 200, r.text
    return r.json()


def test_balance_and_cloture(client, db_session):
    token = admin_token(client, db_session)
    _op(client, token, "entree", 100000, "Cotisations du mois")
    _op(client, token, "sortie", 30000, "Location salle")

    balance = client.get("/caisse/solde", headers=auth_header(token)).json()
    assert balance == {"solde_ouverture": 0, "total_entrees": 100000, "total_sorties": 30000, "solde": 70000}

    r = client.post("/caisse/clotures", headers=auth_header(token), json={"solde_reel": 68000, "notes": "Billets manquants"})
    assert r.status_code == 200, r.text
    cloture = r.json()
    assert cloture["solde_theorique"] == 70000
    assert cloture["ecart"] == -2000

    ops = client.get("/caisse/operations", headers=auth_header(token)).json()
    assert all(op["cloture_id"] == cloture["id"] for op in ops)

    _op(client, token, "entree", 5000)
    balance = client.get("/caisse/solde", headers=auth_header(token)).json()
    assert balance == {"solde_ouverture": 68000, "total_entrees": 5000, "total_sorties": 0, "solde": 73000}

    clotures = client.get("/caisse/clotures", headers=auth_header(token)).json()
    assert len(clotures) == 1


def test_backdated_cloture_rejected(client, db_session):
    token = admin_token(client, db_session)
    _op(client, token, "entree", 100000)
    first = client.post("/caisse/clotures", headers=auth_header(token), json={"solde_reel": 100000})
    assert first.status_code == 200, first.text

    _op(client, token, "entree", 50000)
    backdated = (date.today() - timedelta(days=3)).isoformat()
    r = client.post("/caisse/clotures", headers=auth_header(token),
                    json={"solde_reel": 150000, "date_cloture": backdated})
    assert r.status_code == 400
    assert r.json()["detail"] == f"date_cloture must not be before the last closing ({date.today().isoformat()})"

    balance = client.get("/caisse/solde", headers=auth_header(token)).json()
    assert balance["solde"] == 150000

    r = client.post("/caisse/clotures", headers=auth_header(token), json={"solde_reel": 150000})
    assert r.status_code == 200, r.text
    balance = client.get("/caisse/solde", headers=auth_header(token)).json()
    assert balance == {"solde_ouverture": 150000, "total_entrees": 0, "total_sorties": 0, "solde": 150000}


def test_invalid_operation_rejected(client, db_session):
    token = admin_token(client, db_session)
    r = client.post("/caisse/operations", headers=auth_header(token),
                    json={"type_operation": "virement", "montant": 1000, "libelle": "Test"})
    assert r.status_code == 422

    r = client.post("/caisse/operations", headers=auth_header(token),
                    json={"type_operation": "entree", "montant": 0, "libelle": "Test"})
    assert r.status_code == 422


def test_member_cannot_read_caisse(client, db_session):
    _, token = member_token(client, db_session)
    r = client.get("/caisse/solde", headers=auth_header(token))
    assert r.status_code == 403
