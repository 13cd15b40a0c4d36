"""
회비(Cotisation) / 회계 기간(Exercice) API 통합 테스트.
- 금액 결정 순서: 요청 금액 → 회원 개별 금액 → 종류 기본 금액
- 종류별 납부 현황 (PAID / PARTIAL / UNPAID / NO_CHARGE)
- 회계 기간 생성 / 현재 기간 / 마감, 마감 임박 기간 점검
"""

from datetime import date, timedelta

from tests.helpers import admin_token, auth_header, create_membre


def _create_type(client, token, nom="Cotisation mensuelle", montant_defaut=5000, obligatoire=False):
    r = client.post(
        "/cotisations/types",
        headers=auth_header(token),
        json={"nom": nom, "montant_defaut": montant_defaut, "obligatoire": obligatoire},
    )
    assert r.status_code == 200, r.text
    return r.json()


def test_amount_falls_back_to_member_config_then_type_default(client, db_session):
    token = admin_token(client, db_session)
    type_ = _create_type(client, token)
    alice = create_membre(client, token, nom="Ngono", prenom="Alice")
    bob = create_membre(client, token, nom="Owona", prenom="Bob")

    r = client.put(
        "/cotisations/config",
        headers=auth_header(token),
        json={"membre_id": alice["id"], "type_cotisation_id": type_["id"], "montant_personnalise": 7500},
    )
    assert r.status_code == 200, r.text

    r = client.post("/cotisations", headers=auth_header(token),
                    json={"membre_id": alice["id"], "type_cotisation_id": type_["id"]})
    assert r.status_code == 200, r.text
    assert r.json()["montant"] == 7500

    r = client.post("/cotisations", headers=auth_header(token),
                    json={"membre_id": bob["id"], "type_cotisation_id": type_["id"]})
    assert r.json()["montant"] == 5000


def test_zero_amount_rejected(client, db_session):
    token = admin_token(client, db_session)
    type_ = _create_type(client, token, nom="Fonds libre", montant_defaut=None)
    membre = create_membre(client, token)

    r = client.post("/cotisations", headers=auth_header(token),
                    json={"membre_id": membre["id"], "type_cotisation_id": type_["id"]})
    assert r.status_code == 400
    assert r.json()["detail"] == "montant must be greater than 0"


def test_duplicate_type_rejected(client, db_session):
    token = admin_token(client, db_session)
    _create_type(client, token)
    r = client.post("/cotisations/types", headers=auth_header(token),
                    json={"nom": "Cotisation mensuelle", "montant_defaut": 1000})
    assert r.status_code == 400


def test_status_table(client, db_session):
    token = admin_token(client, db_session)
    type_ = _create_type(client, token, montant_defaut=10000)
    paid = create_membre(client, token, nom="Abena", prenom="Paul")
    partial = create_membre(client, token, nom="Biyong", prenom="Marthe")
    unpaid = create_membre(client, token, nom="Certe", prenom="Luc")
    create_membre(client, token, nom="Dormant", prenom="Eric", statut="inactif")

    client.post("/cotisations", headers=auth_header(token),
                json={"membre_id": paid["id"], "type_cotisation_id": type_["id"], "montant": 10000})
    client.post("/cotisations", headers=auth_header(token),
                json={"membre_id": partial["id"], "type_cotisation_id": type_["id"], "montant": 4000})

    r = client.get(f"/cotisations/status?type_cotisation_id={type_['id']}", headers=auth_header(token))
    assert r.status_code == 200, r.text
    by_nom = {row["nom"]: row for row in r.json()}

    assert set(by_nom) == {"Abena", "Biyong", "Certe"}
    assert by_nom["Abena"]["status"] == "PAID"
    assert by_nom["Biyong"]["status"] == "PARTIAL"
    assert by_nom["Biyong"]["paid_amount"] == 4000
    assert by_nom["Certe"]["status"] == "UNPAID"
    assert by_nom["Certe"]["membre_id"] == unpaid["id"]


def test_status_no_charge_when_no_amount(client, db_session):
    token = admin_token(client, db_session)
    type_ = _create_type(client, token, nom="Don volontaire", montant_defaut=0)
    create_membre(client, token)

    r = client.get(f"/cotisations/status?type_cotisation_id={type_['id']}", headers=auth_header(token))
    assert [row["status"] for row in r.json()] == ["NO_CHARGE"]


def test_status_export_csv(client, db_session):
    token = admin_token(client, db_session)
    type_ = _create_type(client, token)
    create_membre(client, token, nom="Tchana", prenom="Rose")

    r = client.get(f"/cotisations/status/export?type_cotisation_id={type_['id']}", headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert r.content.startswith("\ufeff".encode("utf-8"))
    assert "Tchana" in r.content.decode("utf-8-sig")


def test_exercice_lifecycle(client, db_session):
    token = admin_token(client, db_session)
    today = date.today()

    bad = client.post("/exercices", headers=auth_header(token), json={
        "nom": "Inversé", "date_debut": today.isoformat(), "date_fin": (today - timedelta(days=1)).isoformat(),
    })
    assert bad.status_code == 400

    r = client.post("/exercices", headers=auth_header(token), json={
        "nom": "Exercice courant",
        "date_debut": (today - timedelta(days=30)).isoformat(),
        "date_fin": (today + timedelta(days=300)).isoformat(),
    })
    assert r.status_code == 200, r.text
    exercice_id = r.json()["id"]

    current = client.get("/exercices/current", headers=auth_header(token))
    assert current.json()["id"] == exercice_id

    closed = client.post(f"/exercices/{exercice_id}/close", headers=auth_header(token))
    assert closed.json()["statut"] == "cloture"

    again = client.post(f"/exercices/{exercice_id}/close", headers=auth_header(token))
    assert again.status_code == 400


def test_annual_check_marks_unpaid_mandatory(client, db_session):
    token = admin_token(client, db_session)
    today = date.today()
    r = client.post("/exercices", headers=auth_header(token), json={
        "nom": "Fin proche",
        "date_debut": (today - timedelta(days=360)).isoformat(),
        "date_fin": (today + timedelta(days=3)).isoformat(),
    })
    exercice_id = r.json()["id"]

    type_ = _create_type(client, token, nom="Fonds de caisse", obligatoire=True)
    membre = create_membre(client, token)
    pending = client.post("/cotisations", headers=auth_header(token), json={
        "membre_id": membre["id"], "type_cotisation_id": type_["id"], "statut": "en_attente",
    })
    assert pending.json()["exercice_id"] == exercice_id

    r = client.post("/cotisations/annual-check", headers=auth_header(token))
    assert r.status_code == 200, r.text
    summary = r.json()["data"]
    assert summary[0]["cotisations_en_retard"] == 1

    rows = client.get(f"/cotisations?membre_id={membre['id']}", headers=auth_header(token)).json()
    assert rows[0]["statut"] == "en_retard_annuel"


def test_single_member_status(client, db_session):
    token = admin_token(client, db_session)
    type_ = _create_type(client, token, montant_defaut=6000)
    membre = create_membre(client, token)
    client.post("/cotisations", headers=auth_header(token),
                json={"membre_id": membre["id"], "type_cotisation_id": type_["id"], "montant": 2000})

    r = client.get(f"/cotisations/status/membre/{membre['id']}?type_cotisation_id={type_['id']}",
                   headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "PARTIAL"
    assert r.json()["amount_due"] == 6000
