"""
스포츠(E2D / Phoenix) API 통합 테스트.
- 경기 생성 (종료 경기는 두 점수 필수)
- 팀 전적, 선수 순위
- Phoenix 회원 가입비, 팀 수입 / 지출
"""

from datetime import date, timedelta

from tests.helpers import admin_token, auth_header, create_membre


def _match(client, token, *, equipe="e2d", score=None, statut="termine", adverse="Canon FC"):
    body = {"equipe": equipe, "date_match": date.today().isoformat(), "equipe_adverse": adverse, "statut": statut}
    if score is not None:
        body["score_equipe"], body["score_adverse"] = score
    return client.post("/sport/matchs", headers=auth_header(token), json=body)


def test_finished_match_requires_scores(client, db_session):
    token = admin_token(client, db_session)
    r = _match(client, token)
    assert r.status_code == 400
    assert r.json()["detail"] == "a finished match needs both scores"

    r = _match(client, token, statut="prevu")
    assert r.status_code == 200, r.text


def test_team_record(client, db_session):
    token = admin_token(client, db_session)
    _match(client, token, score=(3, 1))
    _match(client, token, score=(1, 1))
    _match(client, token, score=(0, 2))
    _match(client, token, statut="prevu")
    _match(client, token, equipe="phoenix", score=(5, 0))

    r = client.get("/sport/equipes/e2d/bilan", headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert r.json() == {
        "equipe": "e2d",
        "matchs": 3,
        "victoires": 1,
        "nuls": 1,
        "defaites": 1,
        "buts_pour": 4,
        "buts_contre": 4,
        "difference": 0,
        "pourcentage_victoires": 33.33,
    }

    bad = client.get("/sport/equipes/inconnue/bilan", headers=auth_header(token))
    assert bad.status_code == 400


def test_statistics_validation(client, db_session):
    token = admin_token(client, db_session)
    match = _match(client, token, score=(1, 0)).json()

    r = client.post(f"/sport/matchs/{match['id']}/statistics", headers=auth_header(token),
                    json={"player_name": "Joueur", "yellow_cards": 3})
    assert r.status_code == 422

    r = client.post(f"/sport/matchs/{match['id']}/statistics", headers=auth_header(token), json={"goals": 1})
    assert r.status_code == 400
    assert r.json()["detail"] == "player_name or membre_id is required"


def test_player_ranking(client, db_session):
    token = admin_token(client, db_session)
    buteur = create_membre(client, token, nom="Eto", prenom="Samuel")
    m1 = _match(client, token, score=(2, 0)).json()
    m2 = _match(client, token, score=(1, 0)).json()

    for match_id, goals in ((m1["id"], 2), (m2["id"], 1)):
        client.post(f"/sport/matchs/{match_id}/statistics", headers=auth_header(token),
                    json={"membre_id": buteur["id"], "goals": goals})
    client.post(f"/sport/matchs/{m1['id']}/statistics", headers=auth_header(token),
                json={"player_name": "Passeur", "assists": 2, "yellow_cards": 1})

    r = client.get("/sport/classement?category=goals", headers=auth_header(token))
    assert r.status_code == 200, r.text
    top = r.json()[0]
    assert top["player_name"] == "Samuel Eto"
    assert top["goals"] == 3
    assert top["matchs"] == 2
    assert top["average_goals"] == 1.5

    cards = client.get("/sport/classement?category=cards", headers=auth_header(token)).json()
    assert cards[0]["player_name"] == "Passeur"

    bad = client.get("/sport/classement?category=vitesse", headers=auth_header(token))
    assert bad.status_code == 400


def test_phoenix_adherents_and_finances(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)

    r = client.post("/sport/phoenix/adherents", headers=auth_header(token), json={
        "membre_id": membre["id"],
        "montant_adhesion": 15000,
        "date_limite_paiement": (date.today() - timedelta(days=1)).isoformat(),
    })
    assert r.status_code == 200, r.text
    adherent = r.json()

    dup = client.post("/sport/phoenix/adherents", headers=auth_header(token),
                      json={"membre_id": membre["id"], "montant_adhesion": 15000})
    assert dup.status_code == 400

    late = client.get("/sport/phoenix/adherents/retard", headers=auth_header(token)).json()
    assert [a["id"] for a in late] == [adherent["id"]]

    paid = client.post(f"/sport/phoenix/adherents/{adherent['id']}/payer", headers=auth_header(token))
    assert paid.json()["adhesion_payee"] is True

    client.post("/sport/operations", headers=auth_header(token),
                json={"equipe": "phoenix", "type_operation": "recette", "montant": 20000, "libelle": "Tournoi"})
    client.post("/sport/operations", headers=auth_header(token),
                json={"equipe": "phoenix", "type_operation": "depense", "montant": 8000, "libelle": "Maillots"})

    finances = client.get("/sport/equipes/phoenix/finances", headers=auth_header(token)).json()
    assert finances == {
        "equipe": "phoenix",
        "recettes": 20000,
        "depenses": 8000,
        "solde": 12000,
        "adhesions_payees": 15000,
    }

    membre_after = client.get(f"/membres/{membre['id']}", headers=auth_header(token)).json()
    assert membre_after["est_adherent_phoenix"] is True


def _adherent(client, token, nom, prenom):
    membre = create_membre(client, token, nom=nom, prenom=prenom)
    r = client.post("/sport/phoenix/adherents", headers=auth_header(token),
                    json={"membre_id": membre["id"], "montant_adhesion": 15000})
    assert r.status_code == 200, r.text
    return membre


def test_internal_training_result(client, db_session):
    token = admin_token(client, db_session)
    body = {"date_entrainement": date.today().isoformat(), "type_entrainement": "interne", "statut": "termine"}

    r = client.post("/sport/phoenix/entrainements", headers=auth_header(token), json={**body, "score_jaune": 2})
    assert r.status_code == 400
    assert r.json()["detail"] == "a finished internal training needs both scores"

    r = client.post("/sport/phoenix/entrainements", headers=auth_header(token),
                    json={**body, "score_jaune": 1, "score_rouge": 3, "lieu": "Stade de Mimboman"})
    assert r.status_code == 200, r.text
    assert r.json()["equipe_gagnante"] == "Rouge"

    r = client.patch(f"/sport/phoenix/entrainements/{r.json()['id']}", headers=auth_header(token),
                     json={"score_jaune": 3})
    assert r.status_code == 200, r.text
    assert r.json()["equipe_gagnante"] == "nul"

    r = client.post("/sport/phoenix/entrainements", headers=auth_header(token),
                    json={"date_entrainement": date.today().isoformat(), "type_entrainement": "physique",
                          "score_jaune": 1, "score_rouge": 0})
    assert r.status_code == 400
    assert r.json()["detail"] == "scores only apply to internal trainings"


def test_training_presences(client, db_session):
    token = admin_token(client, db_session)
    a = _adherent(client, token, "Milla", "Roger")
    b = _adherent(client, token, "Song", "Rigobert")
    outsider = create_membre(client, token, nom="Externe", prenom="Paul")

    entrainement = client.post("/sport/phoenix/entrainements", headers=auth_header(token), json={
        "date_entrainement": (date.today() + timedelta(days=2)).isoformat(),
        "heure_debut": "17:00",
        "heure_fin": "19:00",
        "type_entrainement": "technique",
    }).json()
    url = f"/sport/phoenix/entrainements/{entrainement['id']}/presences"

    r = client.put(url, headers=auth_header(token), json={"membre_id": outsider["id"], "present": True})
    assert r.status_code == 400
    assert r.json()["detail"] == "membre is not a Phoenix adherent"

    r = client.put(url, headers=auth_header(token), json={"membre_id": a["id"], "present": True, "retard_minutes": 15})
    assert r.status_code == 200, r.text
    client.put(url, headers=auth_header(token), json={"membre_id": b["id"], "present": True})
    # 같은 회원은 갱신 (결석이면 지각 시간 0)
    r = client.put(url, headers=auth_header(token),
                   json={"membre_id": b["id"], "present": False, "retard_minutes": 10, "excuse": "Malade"})
    assert r.json()["retard_minutes"] == 0

    r = client.get(url, headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert len(r.json()["data"]) == 2
    assert r.json()["meta"] == {"total": 2, "presents": 1, "absents": 1, "retards": 1, "taux_presence": 50.0}

    client.patch(f"/sport/phoenix/entrainements/{entrainement['id']}", headers=auth_header(token),
                 json={"statut": "annule"})
    r = client.put(url, headers=auth_header(token), json={"membre_id": a["id"], "present": False})
    assert r.status_code == 400
    assert r.json()["detail"] == "training is annule"


def test_match_composition(client, db_session):
    token = admin_token(client, db_session)
    capitaine = _adherent(client, token, "Wome", "Pierre")
    joueur = _adherent(client, token, "Mbia", "Stephane")
    autre = _adherent(client, token, "Idrissou", "Mohamadou")

    e2d_match = _match(client, token, equipe="e2d", statut="prevu").json()
    r = client.post(f"/sport/matchs/{e2d_match['id']}/compositions", headers=auth_header(token),
                    json={"membre_id": joueur["id"]})
    assert r.status_code == 400
    assert r.json()["detail"] == "compositions are only kept for Phoenix matches"

    match = _match(client, token, equipe="phoenix", statut="prevu").json()
    url = f"/sport/matchs/{match['id']}/compositions"

    r = client.post(url, headers=auth_header(token),
                    json={"membre_id": capitaine["id"], "poste": "Gardien", "est_capitaine": True})
    assert r.status_code == 200, r.text

    r = client.post(url, headers=auth_header(token), json={"membre_id": capitaine["id"], "equipe_nom": "Rouge"})
    assert r.status_code == 400
    assert r.json()["detail"] == "membre is already in this composition"

    r = client.post(url, headers=auth_header(token), json={"membre_id": joueur["id"], "est_capitaine": True})
    assert r.status_code == 400
    assert r.json()["detail"] == "equipe Jaune already has a captain"

    r = client.post(url, headers=auth_header(token), json={"membre_id": joueur["id"], "poste": "Libero"})
    assert r.status_code == 400
    assert r.json()["detail"] == "unknown poste: Libero"

    r = client.post(url, headers=auth_header(token),
                    json={"membre_id": autre["id"], "equipe_nom": "Rouge", "poste": "Attaquant", "est_capitaine": True})
    assert r.status_code == 200, r.text
    line_id = r.json()["id"]

    lines = client.get(url, headers=auth_header(token)).json()
    assert [(l["equipe_nom"], l["est_capitaine"]) for l in lines] == [("Jaune", True), ("Rouge", True)]

    r = client.delete(f"/sport/compositions/{line_id}", headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert len(client.get(url, headers=auth_header(token)).json()) == 1

    r = client.delete(f"/sport/compositions/{line_id}", headers=auth_header(token))
    assert r.status_code == 404
    assert r.json()["detail"] == "composition not found"
