"""
제재(Sanction) API 통합 테스트.
- 종류별 기본 금액, motif 길이 검증
- 부분 / 전액 납부, 초과 납부 거부, 취소
- 카드 제재 (Carton Jaune / Carton Rouge 종류 자동 생성)
- 경기 기록 → 카드 제재 동기화
"""

from datetime import date

from tests.helpers import admin_token, auth_header, create_membre


def _create_type(client, token, nom="Retard", montant=500, contexte="reunion"):
    r = client.post("/sanctions/types", headers=auth_header(token),
                    json={"nom": nom, "montant": montant, "contexte": contexte})
    assert r.status_code == 200, r.text
    return r.json()


def test_sanction_uses_type_amount(client, db_session):
    token = admin_token(client, db_session)
    type_ = _create_type(client, token)
    membre = create_membre(client, token)

    r = client.post("/sanctions", headers=auth_header(token),
                    json={"membre_id": membre["id"], "type_sanction_id": type_["id"]})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["montant"] == 500
    assert data["statut"] == "impaye"
    assert data["contexte_sanction"] == "reunion"


def test_short_motif_rejected(client, db_session):
    token = admin_token(client, db_session)
    type_ = _create_type(client, token)
    membre = create_membre(client, token)

    r = client.post("/sanctions", headers=auth_header(token),
                    json={"membre_id": membre["id"], "type_sanction_id": type_["id"], "motif": "court"})
    assert r.status_code == 422


def test_pay_sanction(client, db_session):
    token = admin_token(client, db_session)
    type_ = _create_type(client, token, montant=2000)
    membre = create_membre(client, token)
    sanction = client.post("/sanctions", headers=auth_header(token),
                           json={"membre_id": membre["id"], "type_sanction_id": type_["id"]}).json()

    over = client.post(f"/sanctions/{sanction['id']}/payer", headers=auth_header(token), json={"montant": 5000})
    assert over.status_code == 400
    assert over.json()["detail"] == "payment exceeds remaining balance (2000)"

    r = client.post(f"/sanctions/{sanction['id']}/payer", headers=auth_header(token), json={"montant": 500})
    assert r.json()["statut"] == "partiel"

    summary = client.get("/sanctions/summary", headers=auth_header(token)).json()
    assert summary == {"sport": 0, "reunion": 1500, "total": 1500, "nombre": 1}

    r = client.post(f"/sanctions/{sanction['id']}/payer", headers=auth_header(token), json={"montant": 1500})
    assert r.json()["statut"] == "paye"

    cancel = client.post(f"/sanctions/{sanction['id']}/annuler", headers=auth_header(token))
    assert cancel.status_code == 400


def test_card_sanctions_create_sport_types(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)

    jaune = client.post("/sanctions/cards", headers=auth_header(token),
                        json={"membre_id": membre["id"], "card": "jaune"})
    rouge = client.post("/sanctions/cards", headers=auth_header(token),
                        json={"membre_id": membre["id"], "card": "rouge"})
    assert jaune.status_code == 200, jaune.text
    assert jaune.json()["montant"] == 1000
    assert rouge.json()["montant"] == 3000
    assert rouge.json()["contexte_sanction"] == "sport"

    client.post("/sanctions/cards", headers=auth_header(token), json={"membre_id": membre["id"], "card": "jaune"})
    types = client.get("/sanctions/types", headers=auth_header(token)).json()
    assert sorted(t["nom"] for t in types) == ["Carton Jaune", "Carton Rouge"]


def test_sync_cards_from_match_statistics(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)

    match = client.post("/sport/matchs", headers=auth_header(token), json={
        "equipe": "e2d",
        "date_match": date.today().isoformat(),
        "equipe_adverse": "AS Mfou",
        "statut": "termine",
        "score_equipe": 2,
        "score_adverse": 1,
    }).json()

    client.post(f"/sport/matchs/{match['id']}/statistics", headers=auth_header(token),
                json={"membre_id": membre["id"], "yellow_cards": 2, "red_cards": 1})
    client.post(f"/sport/matchs/{match['id']}/statistics", headers=auth_header(token),
                json={"player_name": "Invité", "yellow_cards": 1})

    r = client.post("/sanctions/sync-cards", headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert r.json()["data"] == {"created": 3, "skipped": 1, "errors": 0}

    sanctions = client.get(f"/sanctions?membre_id={membre['id']}", headers=auth_header(token)).json()
    assert sorted(s["montant"] for s in sanctions) == [1000, 1000, 3000]
    assert all(s["source_statistic_id"] for s in sanctions)

    again = client.post("/sanctions/sync-cards", headers=auth_header(token))
    assert again.json()["data"]["created"] == 0
