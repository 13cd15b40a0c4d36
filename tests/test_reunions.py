"""
회의(Réunion) API 통합 테스트.
- 과거 날짜 회의 생성 거부
- 출석 기록 (같은 회원은 갱신), 회의록 순번
- 수혜자 금액 (회의 회비 합계의 비율 / 고정 금액)
- 회의 마감 시 결석자 Absence 제재
"""

from datetime import date, timedelta

from tests.helpers import admin_token, auth_header, create_membre


def _reunion(client, token, days_ahead=0):
    r = client.post("/reunions", headers=auth_header(token),
                    json={"date_reunion": (date.today() + timedelta(days=days_ahead)).isoformat()})
    assert r.status_code == 200, r.text
    return r.json()


def test_past_reunion_rejected(client, db_session):
    token = admin_token(client, db_session)
    r = client.post("/reunions", headers=auth_header(token),
                    json={"date_reunion": (date.today() - timedelta(days=1)).isoformat()})
    assert r.status_code == 400
    assert r.json()["detail"] == "date_reunion cannot be in the past"


def test_presence_upsert(client, db_session):
    token = admin_token(client, db_session)
    reunion = _reunion(client, token)
    membre = create_membre(client, token)
    url = f"/reunions/{reunion['id']}/presences"

    r = client.put(url, headers=auth_header(token), json={"membre_id": membre["id"], "present": False})
    assert r.status_code == 200, r.text
    r = client.put(url, headers=auth_header(token),
                   json={"membre_id": membre["id"], "present": True, "heure_arrivee": "09:15"})
    assert r.json()["heure_arrivee"] == "09:15"

    presences = client.get(url, headers=auth_header(token)).json()
    assert len(presences) == 1
    assert presences[0]["present"] is True

    bad = client.put(url, headers=auth_header(token),
                     json={"membre_id": membre["id"], "present": True, "heure_arrivee": "9h"})
    assert bad.status_code == 422


def test_rapports_are_ordered(client, db_session):
    token = admin_token(client, db_session)
    reunion = _reunion(client, token)

    for sujet in ("Bilan financier", "Questions diverses"):
        client.post(f"/reunions/{reunion['id']}/rapports", headers=auth_header(token), json={"sujet": sujet})

    rapports = client.get(f"/reunions/{reunion['id']}/rapports", headers=auth_header(token)).json()
    assert [(r["ordre"], r["sujet"]) for r in rapports] == [(1, "Bilan financier"), (2, "Questions diverses")]


def test_beneficiaire_amount_from_collected_cotisations(client, db_session):
    token = admin_token(client, db_session)
    reunion = _reunion(client, token)
    membre = create_membre(client, token)

    default_config = client.get("/reunions/config", headers=auth_header(token)).json()
    assert default_config["mode_calcul"] == "pourcentage"
    assert default_config["pourcentage"] == 10.0

    type_ = client.post("/cotisations/types", headers=auth_header(token),
                        json={"nom": "Tontine", "montant_defaut": 20000}).json()
    client.post("/cotisations", headers=auth_header(token), json={
        "membre_id": membre["id"], "type_cotisation_id": type_["id"], "reunion_id": reunion["id"],
    })

    r = client.post(f"/reunions/{reunion['id']}/beneficiaires", headers=auth_header(token),
                    json={"membre_ids": [membre["id"]]})
    assert r.status_code == 200, r.text
    beneficiaire = r.json()[0]
    assert beneficiaire["montant"] == 2000
    assert beneficiaire["statut"] == "prevu"

    paid = client.post(f"/reunions/beneficiaires/{beneficiaire['id']}/payer", headers=auth_header(token))
    assert paid.json()["statut"] == "paye"
    again = client.post(f"/reunions/beneficiaires/{beneficiaire['id']}/payer", headers=auth_header(token))
    assert again.status_code == 400


def test_fixed_amount_config(client, db_session):
    token = admin_token(client, db_session)
    reunion = _reunion(client, token)
    membre = create_membre(client, token)

    missing = client.put("/reunions/config", headers=auth_header(token), json={"mode_calcul": "montant_fixe"})
    assert missing.status_code == 400

    r = client.put("/reunions/config", headers=auth_header(token),
                   json={"mode_calcul": "montant_fixe", "montant_fixe": 50000})
    assert r.status_code == 200, r.text

    r = client.post(f"/reunions/{reunion['id']}/beneficiaires", headers=auth_header(token),
                    json={"membre_ids": [membre["id"]]})
    assert r.json()[0]["montant"] == 50000


def test_close_reunion_sanctions_absents(client, db_session):
    token = admin_token(client, db_session)
    reunion = _reunion(client, token, days_ahead=2)
    present = create_membre(client, token, nom="Present", prenom="Paul")
    absent = create_membre(client, token, nom="Absent", prenom="Anne")
    excused = create_membre(client, token, nom="Excuse", prenom="Eve")
    create_membre(client, token, nom="Ancien", prenom="Omer", statut="inactif")

    url = f"/reunions/{reunion['id']}/presences"
    client.put(url, headers=auth_header(token), json={"membre_id": present["id"], "present": True})
    client.put(url, headers=auth_header(token), json={"membre_id": excused["id"], "present": False})

    r = client.post(f"/reunions/{reunion['id']}/cloturer", headers=auth_header(token),
                    json={"sanction_absents": True})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["data"]["statut"] == "terminee"
    assert body["data"]["sanctions"] == 2

    sanctions = client.get("/sanctions?contexte=reunion", headers=auth_header(token)).json()
    assert sorted(s["membre_id"] for s in sanctions) == sorted([absent["id"], excused["id"]])
    assert all(s["montant"] == 2000 and s["reunion_id"] == reunion["id"] for s in sanctions)

    again = client.post(f"/reunions/{reunion['id']}/cloturer", headers=auth_header(token), json={})
    assert again.status_code == 400

    locked = client.patch(f"/reunions/{reunion['id']}", headers=auth_header(token), json={"sujet": "Modif"})
    assert locked.status_code == 400
