"""
대출(Prêt) API 통합 테스트.
- 총 상환액 계산, 보증인 검증, 부분 / 전액 상환
- 잔액 초과 상환 거부, 만기 연장, 연체 판정 및 대시보드
"""

from datetime import date, timedelta

from app.services.prets import total_du
from app.services.common import add_months
from tests.helpers import admin_token, auth_header, create_membre


def _create_pret(client, token, membre_id, montant=100000, taux=10, **extra):
    body = {
        "membre_id": membre_id,
        "montant": montant,
        "taux_interet": taux,
        "echeance": (date.today() + timedelta(days=60)).isoformat(),
    }
    body.update(extra)
    r = client.post("/prets", headers=auth_header(token), json=body)
    assert r.status_code == 200, r.text
    return r.json()


def test_total_du_rounds_and_counts_reconductions():
    assert total_du(100000, 10) == 110000
    assert total_du(100000, 10, reconductions=1) == 120000
    assert total_du(1000, 3.333) == 1033


def test_add_months_clamps_day():
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2026, 11, 15), 2) == date(2027, 1, 15)


def test_create_pret(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)

    pret = _create_pret(client, token, membre["id"])
    assert pret["montant_total_du"] == 110000
    assert pret["statut"] == "en_cours"
    assert pret["reconductions"] == 0


def test_avaliste_must_differ_from_borrower(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)

    r = client.post("/prets", headers=auth_header(token), json={
        "membre_id": membre["id"],
        "avaliste_id": membre["id"],
        "montant": 50000,
        "echeance": (date.today() + timedelta(days=30)).isoformat(),
    })
    assert r.status_code == 400
    assert r.json()["detail"] == "avaliste must differ from borrower"


def test_echeance_must_follow_date_pret(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)

    r = client.post("/prets", headers=auth_header(token), json={
        "membre_id": membre["id"],
        "montant": 50000,
        "echeance": date.today().isoformat(),
    })
    assert r.status_code == 400


def test_partial_then_full_payment(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)
    pret = _create_pret(client, token, membre["id"])

    r = client.post(f"/prets/{pret['id']}/paiements", headers=auth_header(token), json={"montant": 200000})
    assert r.status_code == 400
    assert r.json()["detail"] == "payment exceeds remaining balance (110000)"

    r = client.post(f"/prets/{pret['id']}/paiements", headers=auth_header(token), json={"montant": 10000})
    assert r.status_code == 200, r.text
    assert client.get(f"/prets/{pret['id']}", headers=auth_header(token)).json()["statut"] == "partiel"

    r = client.post(f"/prets/{pret['id']}/rembourser", headers=auth_header(token),
                    json={"mode_paiement": "mobile_money"})
    assert r.status_code == 200, r.text
    assert r.json()["statut"] == "rembourse"
    assert r.json()["montant_paye"] == 110000

    paiements = client.get(f"/prets/{pret['id']}/paiements", headers=auth_header(token)).json()
    assert sorted(p["montant_paye"] for p in paiements) == [10000, 100000]

    again = client.post(f"/prets/{pret['id']}/paiements", headers=auth_header(token), json={"montant": 1})
    assert again.status_code == 400


def test_reconduction_adds_interest(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)
    pret = _create_pret(client, token, membre["id"])

    r = client.post(f"/prets/{pret['id']}/reconduire", headers=auth_header(token), json={})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["statut"] == "reconduit"
    assert data["reconductions"] == 1
    assert data["montant_total_du"] == 120000
    assert data["echeance"] == add_months(date.fromisoformat(pret["echeance"]), 2).isoformat()

    earlier = client.post(f"/prets/{pret['id']}/reconduire", headers=auth_header(token),
                          json={"nouvelle_echeance": date.today().isoformat()})
    assert earlier.status_code == 400


def test_overdue_and_dashboard(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)
    today = date.today()

    late = _create_pret(client, token, membre["id"], montant=50000, taux=10,
                        date_pret=(today - timedelta(days=90)).isoformat(),
                        echeance=(today - timedelta(days=30)).isoformat())
    _create_pret(client, token, membre["id"], montant=100000, taux=10)
    cancelled = _create_pret(client, token, membre["id"], montant=30000, taux=0)
    client.post(f"/prets/{cancelled['id']}/annuler", headers=auth_header(token))

    overdue = client.get("/prets/overdue", headers=auth_header(token)).json()
    assert [p["id"] for p in overdue] == [late["id"]]

    stats = client.get("/prets/dashboard", headers=auth_header(token)).json()
    assert stats["nombre_prets"] == 2
    assert stats["nombre_annules"] == 1
    assert stats["nombre_prets"] == stats["nombre_en_cours"] + stats["nombre_rembourses"] + stats["nombre_en_retard"]
    assert stats["nombre_en_retard"] == 1
    assert stats["total_en_retard"] == 55000
    assert stats["nombre_en_cours"] == 1
    assert stats["total_en_cours"] == 110000
    assert stats["total_interets"] == 15000

    r = client.post("/prets/overdue/mark", headers=auth_header(token))
    assert r.json()["data"]["marked"] == 1
    assert client.get(f"/prets/{late['id']}", headers=auth_header(token)).json()["statut"] == "en_retard"


def test_dashboard_counts_cancelled_loans_apart(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)
    pret = _create_pret(client, token, membre["id"], montant=40000, taux=5)

    r = client.post(f"/prets/{pret['id']}/annuler", headers=auth_header(token))
    assert r.status_code == 200, r.text

    stats = client.get("/prets/dashboard", headers=auth_header(token)).json()
    assert stats["nombre_prets"] == 0
    assert stats["nombre_annules"] == 1
    assert stats["total_prets"] == 0
    assert stats["nombre_prets"] == stats["nombre_en_cours"] + stats["nombre_rembourses"] + stats["nombre_en_retard"]
