"""
재무 분석 테스트.
- 예산 경보 규칙 (순수 함수)
- 이동평균 / 성장률 / 예측 / 추세
- 대시보드, 경보, 예측, 보고서 API
"""

from datetime import date, timedelta

import pytest

from app.services.analytics import (
    OBJECTIF_COTISATIONS,
    budget_alerts,
    forecast,
    mean_growth,
    moving_average,
    predictions,
    trend,
)
from tests.helpers import admin_token, auth_header, create_membre, member_token

HEALTHY = dict(
    cotisations_recent=300_000,
    cotisations_precedent=300_000,
    prets_retard_nombre=0,
    prets_retard_montant=0,
    sanctions_impayees_nombre=0,
    sanctions_impayees_montant=0,
    total_epargnes=500_000,
    total_prets=100_000,
    membres_actifs=5,
    aides_recent=0,
    aides_precedent=0,
)


def _types(alerts):
    return [a["type"] for a in alerts]


def test_healthy_situation():
    assert _types(budget_alerts(**HEALTHY)) == ["situation_saine"]


@pytest.mark.parametrize(
    "recent, expected_type, severite",
    [
        (200_000, "cotisations_baisse", "critique"),
        (255_000, "cotisations_baisse", "importante"),
        (360_000, "cotisations_hausse", "informative"),
    ],
)
def test_cotisation_variation(recent, expected_type, severite):
    alerts = budget_alerts(**{**HEALTHY, "cotisations_recent": recent})
    alert = next(a for a in alerts if a["type"] == expected_type)
    assert alert["severite"] == severite


def test_overdue_loans_severity():
    alerts = budget_alerts(**{**HEALTHY, "prets_retard_nombre": 6, "prets_retard_montant": 90_000})
    alert = next(a for a in alerts if a["type"] == "prets_retard")
    assert alert["severite"] == "critique"
    assert alert["montant"] == 90_000


def test_loan_ratio_and_low_treasury():
    alerts = budget_alerts(**{**HEALTHY, "total_prets": 460_000, "membres_actifs": 10})
    ratio = next(a for a in alerts if a["type"] == "ratio_epargnes_prets")
    assert ratio["severite"] == "critique"
    assert ratio["pourcentage"] == 92.0
    assert "tresorerie_faible" in _types(alerts)


def test_low_treasury_without_members():
    alerts = budget_alerts(**{**HEALTHY, "membres_actifs": 0})
    alert = next(a for a in alerts if a["type"] == "tresorerie_faible")
    assert alert["par_membre"] == 0
    assert alert["severite"] == "critique"


def test_aides_increase():
    alerts = budget_alerts(**{**HEALTHY, "aides_recent": 40_000, "aides_precedent": 20_000,
                              "total_epargnes": 600_000})
    alert = next(a for a in alerts if a["type"] == "aides_augmentation")
    assert alert["pourcentage"] == 100.0


def test_series_helpers():
    assert moving_average([1, 2]) == 0.0
    assert moving_average([10, 20, 30, 40]) == 30.0
    assert mean_growth([0, 100, 150]) == 0.5
    assert mean_growth([]) == 0.0
    assert forecast(100, 0.5) == [150, 200, 250]
    assert forecast(100, -0.6) == [40, 0, 0]
    assert [trend(g) for g in (0.1, -0.1, 0.01)] == ["hausse", "baisse", "stable"]


def test_predictions_shape():
    history = [
        {"mois": f"2026-{m:02d}", "cotisations": 100_000 * m, "epargnes": 50_000, "prets": 0}
        for m in range(1, 13)
    ]
    result = predictions(history, date(2026, 12, 1))

    assert [p["mois"] for p in result["predictions"]] == ["2027-01", "2027-02", "2027-03"]
    assert result["tendance"] == "hausse"
    assert result["moyennes"]["epargnes"] == 50_000
    cotisations = result["objectifs"][0]
    assert cotisations["objectif"] == OBJECTIF_COTISATIONS
    assert cotisations["actuel"] == 7_800_000


def test_dashboard_counters(client, db_session):
    token = admin_token(client, db_session)
    create_membre(client, token)
    create_membre(client, token, nom="Inactif", prenom="Jules", statut="inactif")
    client.post("/reunions", headers=auth_header(token),
                json={"date_reunion": (date.today() + timedelta(days=7)).isoformat()})

    r = client.get("/analytics/dashboard", headers=auth_header(token))
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["membres_actifs"] == 1
    assert data["membres_total"] == 2
    assert data["reunions_a_venir"] == 1


def test_alerts_endpoint(client, db_session):
    token = admin_token(client, db_session)
    r = client.get("/analytics/alertes", headers=auth_header(token))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["meta"]["count"] == len(body["data"])
    assert "tresorerie_faible" in _types(body["data"])


def test_predictions_endpoint(client, db_session):
    token = admin_token(client, db_session)
    r = client.get("/analytics/predictions", headers=auth_header(token))
    assert r.status_code == 200, r.text
    body = r.json()
    assert len(body["historique"]) == 12
    assert len(body["predictions"]) == 3


def test_report_endpoint(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)
    type_ = client.post("/cotisations/types", headers=auth_header(token),
                        json={"nom": "Tontine", "montant_defaut": 10000}).json()
    client.post("/cotisations", headers=auth_header(token),
                json={"membre_id": membre["id"], "type_cotisation_id": type_["id"]})

    r = client.get("/analytics/rapport", headers=auth_header(token))
    assert r.status_code == 200, r.text
    report = r.json()
    assert report["exercice"] is None
    assert report["tontine"]["cotisations"] == 10000
    assert set(report["sport"]) == {"recettes_e2d", "depenses_e2d", "recettes_phoenix", "depenses_phoenix"}


def test_member_needs_permission_for_alerts(client, db_session):
    _, token = member_token(client, db_session)
    assert client.get("/analytics/dashboard", headers=auth_header(token)).status_code == 200
    assert client.get("/analytics/alertes", headers=auth_header(token)).status_code == 403
