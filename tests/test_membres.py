"""
회원(Membre) API 통합 테스트.
- 생성 / 검색 / 수정 / 삭제, 이름 형식 검증,
  금융 기록이 있는 회원 삭제 거부, CSV / XLSX 내보내기, 회원 이력(fiche)
"""

import io
from datetime import date, timedelta

from openpyxl import load_workbook

from tests.helpers import admin_token, auth_header, create_membre, member_token


def test_create_and_search_membres(client, db_session):
    token = admin_token(client, db_session)
    create_membre(client, token, nom="Mbarga", prenom="Jean", email="jean@e2dconnect.com")
    create_membre(client, token, nom="Essomba", prenom="Hélène", est_adherent_phoenix=True)

    r = client.get("/membres?search=mbar", headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert [m["nom"] for m in r.json()] == ["Mbarga"]

    r = client.get("/membres?phoenix=true", headers=auth_header(token))
    assert [m["prenom"] for m in r.json()] == ["Hélène"]


def test_invalid_name_rejected(client, db_session):
    token = admin_token(client, db_session)
    r = client.post("/membres", headers=auth_header(token), json={"nom": "Jean2", "prenom": "Paul"})
    assert r.status_code == 422

    r = client.post("/membres", headers=auth_header(token), json={"nom": "N", "prenom": "Paul"})
    assert r.status_code == 422


def test_update_membre(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)

    empty = client.patch(f"/membres/{membre['id']}", headers=auth_header(token), json={})
    assert empty.status_code == 400
    assert empty.json()["detail"] == "No changes provided"

    r = client.patch(f"/membres/{membre['id']}", headers=auth_header(token), json={"statut": "inactif"})
    assert r.status_code == 200, r.text
    assert r.json()["statut"] == "inactif"


def test_member_without_permission_cannot_write(client, db_session):
    _, token = member_token(client, db_session)

    r = client.get("/membres", headers=auth_header(token))
    assert r.status_code == 200

    r = client.post("/membres", headers=auth_header(token), json={"nom": "Atangana", "prenom": "Luc"})
    assert r.status_code == 403
    assert r.json()["detail"] == "Missing permission membres:write"


def test_delete_membre_with_financial_records_rejected(client, db_session):
    token = admin_token(client, db_session)
    free = create_membre(client, token, nom="Libre", prenom="Marc")
    saver = create_membre(client, token, nom="Epargnant", prenom="Marie")

    dep = client.post("/epargnes", headers=auth_header(token), json={"membre_id": saver["id"], "montant": 10000})
    assert dep.status_code == 200, dep.text

    r = client.delete(f"/membres/{saver['id']}", headers=auth_header(token))
    assert r.status_code == 400

    r = client.delete(f"/membres/{free['id']}", headers=auth_header(token))
    assert r.status_code == 200, r.text

    r = client.get(f"/membres/{free['id']}", headers=auth_header(token))
    assert r.status_code == 404
    assert r.json()["detail"] == "membre not found"


def test_delete_membre_with_match_statistics_rejected(client, db_session):
    token = admin_token(client, db_session)
    joueur = create_membre(client, token, nom="Joueur", prenom="Paul")

    match = client.post("/sport/matchs", headers=auth_header(token), json={
        "equipe": "e2d",
        "date_match": date.today().isoformat(),
        "equipe_adverse": "AS Mfou",
        "statut": "termine",
        "score_equipe": 1,
        "score_adverse": 1,
    }).json()
    stat = client.post(f"/sport/matchs/{match['id']}/statistics", headers=auth_header(token),
                       json={"membre_id": joueur["id"], "yellow_cards": 1})
    assert stat.status_code == 200, stat.text

    r = client.delete(f"/membres/{joueur['id']}", headers=auth_header(token))
    assert r.status_code == 400
    assert "match_statistics" in r.json()["detail"]

    sync = client.post("/sanctions/sync-cards", headers=auth_header(token))
    assert sync.json()["data"]["errors"] == 0


def test_delete_membre_removes_presences(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token, nom="Absent", prenom="Luc")
    reunion = client.post("/reunions", headers=auth_header(token), json={
        "date_reunion": (date.today() + timedelta(days=7)).isoformat(),
        "ordre_du_jour": "Bilan trimestriel",
    }).json()

    p = client.put(f"/reunions/{reunion['id']}/presences", headers=auth_header(token),
                   json={"membre_id": membre["id"], "present": False})
    assert p.status_code == 200, p.text

    r = client.delete(f"/membres/{membre['id']}", headers=auth_header(token))
    assert r.status_code == 200, r.text

    presences = client.get(f"/reunions/{reunion['id']}/presences", headers=auth_header(token)).json()
    assert presences == []


def test_export_membres_csv(client, db_session):
    token = admin_token(client, db_session)
    create_membre(client, token, nom="Fotso", prenom="Rémi")

    r = client.get("/membres/export", headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment" in r.headers["content-disposition"]

    text = r.content.decode("utf-8-sig")
    lines = text.strip().splitlines()
    assert lines[0].startswith("nom,prenom,email")
    assert "Fotso,Rémi" in lines[1]


def test_export_membres_xlsx(client, db_session):
    token = admin_token(client, db_session)
    create_membre(client, token, nom="Kamga", prenom="Alice")

    r = client.get("/membres/export.xlsx", headers=auth_header(token))
    assert r.status_code == 200, r.text

    wb = load_workbook(io.BytesIO(r.content))
    ws = wb["membres"]
    rows = list(ws.iter_rows(values_only=True))
    assert rows[0][0] == "nom"
    assert rows[1][:2] == ("Kamga", "Alice")


def test_membre_fiche(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)

    client.post("/epargnes", headers=auth_header(token), json={"membre_id": membre["id"], "montant": 25000})

    r = client.get(f"/membres/{membre['id']}/fiche", headers=auth_header(token))
    assert r.status_code == 200, r.text
    fiche = r.json()
    assert fiche["epargnes_actives"] == 25000
    assert fiche["prets_nombre"] == 0
    assert fiche["taux_presence"] == 0
