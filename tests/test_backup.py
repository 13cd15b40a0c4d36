"""
백업 / 복원 API 테스트.
- 백업 문서 구조와 메타데이터
- 구조 검증 오류
- 복원은 SUPERADMIN 전용, clear_existing 으로 기존 데이터 교체
- 여러 테이블 백업 → 복원 후 테이블별 건수 유지
"""

from datetime import date, timedelta

from app.models.user import Role
from app.services.backup import format_bytes, validate_backup
from tests.helpers import admin_token, auth_header, create_membre


def test_format_bytes():
    assert format_bytes(0) == "0 Bytes"
    assert format_bytes(750) == "750 Bytes"
    assert format_bytes(1536) == "1.5 KB"
    assert format_bytes(5 * 1024 * 1024) == "5 MB"


def test_validate_backup_errors():
    assert validate_backup("not a dict") == {"valid": False, "errors": ["invalid backup data"]}

    result = validate_backup({"timestamp": "2026-01-01T00:00:00+00:00", "version": "1.0",
                              "tables": {"inconnue": []}})
    assert result["valid"] is False
    assert "missing backup metadata" in result["errors"]
    assert "table inconnue: unknown table" in result["errors"]


def test_backup_download(client, db_session):
    token = admin_token(client, db_session)
    membre = create_membre(client, token)
    client.post("/epargnes", headers=auth_header(token), json={"membre_id": membre["id"], "montant": 10000})

    r = client.get("/admin/backup?tables=membres&tables=epargnes&tables=prets", headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert "attachment" in r.headers["content-disposition"]

    backup = r.json()
    assert set(backup["tables"]) == {"membres", "epargnes"}
    assert backup["metadata"]["total_records"] == 2
    assert backup["metadata"]["backup_size"] == "750 Bytes"
    assert backup["tables"]["membres"][0]["id"] == membre["id"]

    bad = client.get("/admin/backup?tables=inconnue", headers=auth_header(token))
    assert bad.status_code == 400

    valid = client.post("/admin/backup/validate", headers=auth_header(token), json={"backup": backup})
    assert valid.json() == {"valid": True, "errors": []}


def test_restore_requires_superadmin(client, db_session):
    token = admin_token(client, db_session)
    backup = client.get("/admin/backup", headers=auth_header(token)).json()

    r = client.post("/admin/backup/restore", headers=auth_header(token), json={"backup": backup})
    assert r.status_code == 403


def test_restore_replaces_existing_rows(client, db_session):
    token = admin_token(client, db_session, role=Role.SUPERADMIN)
    kept = create_membre(client, token, nom="Sauvegarde", prenom="Anne")
    backup = client.get("/admin/backup?tables=membres", headers=auth_header(token)).json()

    client.delete(f"/membres/{kept['id']}", headers=auth_header(token))
    create_membre(client, token, nom="Nouveau", prenom="Marc")

    r = client.post("/admin/backup/restore", headers=auth_header(token),
                    json={"backup": backup, "clear_existing": True})
    assert r.status_code == 200, r.text
    assert r.json()["data"] == {"success": True, "restored": {"membres": 1}, "errors": []}

    membres = client.get("/membres", headers=auth_header(token)).json()
    assert [(m["id"], m["nom"]) for m in membres] == [(kept["id"], "Sauvegarde")]

    logs = client.get("/admin/logs", headers=auth_header(token)).json()["data"]
    assert any(log["action"] == "RESTORE_BACKUP" for log in logs)


def test_restore_reports_conflicts(client, db_session):
    token = admin_token(client, db_session, role=Role.SUPERADMIN)
    create_membre(client, token)
    backup = client.get("/admin/backup?tables=membres", headers=auth_header(token)).json()

    r = client.post("/admin/backup/restore", headers=auth_header(token), json={"backup": backup})
    assert r.status_code == 200, r.text
    result = r.json()["data"]
    assert result["success"] is False
    assert result["errors"] == ["error restoring membres: IntegrityError"]


def test_restore_rejects_invalid_document(client, db_session):
    token = admin_token(client, db_session, role=Role.SUPERADMIN)
    r = client.post("/admin/backup/restore", headers=auth_header(token), json={"backup": {"tables": {}}})
    assert r.status_code == 400


def _record_counts(backup: dict) -> dict:
    return {name: len(rows) for name, rows in backup["tables"].items()}


def test_restore_round_trip_keeps_record_counts(client, db_session):
    token = admin_token(client, db_session, role=Role.SUPERADMIN)
    alice = create_membre(client, token, nom="Ngono", prenom="Alice")
    bruno = create_membre(client, token, nom="Fouda", prenom="Bruno")

    type_ = client.post("/cotisations/types", headers=auth_header(token),
                        json={"nom": "Cotisation mensuelle", "montant_defaut": 5000}).json()
    for membre in (alice, bruno):
        r = client.post("/cotisations", headers=auth_header(token),
                        json={"membre_id": membre["id"], "type_cotisation_id": type_["id"]})
        assert r.status_code == 200, r.text

    client.post("/epargnes", headers=auth_header(token), json={"membre_id": alice["id"], "montant": 25000})
    pret = client.post("/prets", headers=auth_header(token), json={
        "membre_id": bruno["id"],
        "montant": 50000,
        "taux_interet": 10,
        "echeance": (date.today() + timedelta(days=60)).isoformat(),
    }).json()
    client.post(f"/prets/{pret['id']}/paiements", headers=auth_header(token), json={"montant": 20000})
    stype = client.post("/sanctions/types", headers=auth_header(token),
                        json={"nom": "Retard", "montant": 1000, "contexte": "reunion"}).json()
    client.post("/sanctions", headers=auth_header(token),
                json={"membre_id": alice["id"], "type_sanction_id": stype["id"]})

    backup = client.get("/admin/backup", headers=auth_header(token)).json()
    counts = _record_counts(backup)
    assert counts == {
        "membres": 2,
        "cotisations_types": 1,
        "cotisations": 2,
        "epargnes": 1,
        "prets": 1,
        "prets_paiements": 1,
        "sanctions_types": 1,
        "sanctions": 1,
    }

    # 백업 이후에 생긴 변경은 복원으로 사라져야 함
    client.post("/epargnes", headers=auth_header(token), json={"membre_id": bruno["id"], "montant": 5000})
    client.post(f"/prets/{pret['id']}/paiements", headers=auth_header(token), json={"montant": 10000})

    r = client.post("/admin/backup/restore", headers=auth_header(token),
                    json={"backup": backup, "clear_existing": True})
    assert r.status_code == 200, r.text
    result = r.json()["data"]
    assert result["success"] is True
    assert result["restored"] == counts

    after = client.get("/admin/backup", headers=auth_header(token)).json()
    assert _record_counts(after) == counts
    assert client.get(f"/prets/{pret['id']}", headers=auth_header(token)).json()["montant_paye"] == 20000
