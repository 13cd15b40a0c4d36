"""
services/analytics.py

재무 분석 / 경보 / 예측 로직.

주요 기능:
- 예산 경보 (회비 감소·증가, 연체 대출, 미납 제재, 대출/저축 비율, 회원당 유동성, 지원금 급증)
- 12개월 이력 기반 3개월 예측 및 연간 목표 달성 예상
- 회계연도(또는 전체 기간) 재무 보고서
- 대시보드 카운터

설계 원칙:
- 계산은 DB 와 분리된 순수 함수(budget_alerts, mean_growth, forecast ...)로 작성하고
  *_for / build_* 함수가 DB 에서 입력을 모아 호출
- 모든 비율은 분모가 0이면 0 (safe_pct)
- 결과는 저장하지 않고 요청마다 다시 계산

"""

import logging
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.aide import Aide
from app.models.cotisation import Cotisation
from app.models.epargne import Epargne
from app.models.exercice import Exercice
from app.models.membre import Membre
from app.models.pret import Pret
from app.models.reunion import Reunion, ReunionBeneficiaire
from app.models.sanction import Sanction
from app.models.sport import SportOperation
from app.services.common import add_months, safe_pct, sum_of
from app.services.prets import interest_amount, is_overdue, remaining

logger = logging.getLogger(__name__)

OBJECTIF_COTISATIONS = 12_000_000
OBJECTIF_EPARGNES = 8_000_000
OBJECTIF_TRESORERIE = 5_000_000


def _alert(type_: str, titre: str, severite: str, **extra) -> dict:
    return {"type": type_, "titre": titre, "severite": severite, **extra}


"""
예산 경보 (순수 함수)

입력 (모두 FCFA 정수, 기간은 최근 3개월 / 그 이전 3개월):
- cotisations_recent, cotisations_precedent
- prets_retard_nombre, prets_retard_montant
- sanctions_impayees_nombre, sanctions_impayees_montant
- total_epargnes, total_prets
- membres_actifs
- aides_recent, aides_precedent

"""

def budget_alerts(
    *,
    cotisations_recent: int,
    cotisations_precedent: int,
    prets_retard_nombre: int,
    prets_retard_montant: int,
    sanctions_impayees_nombre: int,
    sanctions_impayees_montant: int,
    total_epargnes: int,
    total_prets: int,
    membres_actifs: int,
    aides_recent: int,
    aides_precedent: int,
) -> list[dict]:
    alerts = []

    if cotisations_precedent > 0:
        variation = safe_pct(cotisations_recent - cotisations_precedent, cotisations_precedent)
        baisse = -variation
        if baisse > 20:
            alerts.append(_alert("cotisations_baisse", "Baisse critique des cotisations", "critique",
                                 pourcentage=baisse))
        elif baisse > 10:
            alerts.append(_alert("cotisations_baisse", "Baisse significative des cotisations", "importante",
                                 pourcentage=baisse))
        elif variation > 15:
            alerts.append(_alert("cotisations_hausse", "Hausse des cotisations", "informative",
                                 pourcentage=variation))

    if prets_retard_nombre > 0:
        alerts.append(_alert(
            "prets_retard",
            f"{prets_retard_nombre} prêt(s) en retard de paiement",
            "critique" if prets_retard_nombre > 5 else "importante",
            montant=prets_retard_montant,
        ))

    if sanctions_impayees_montant > 50_000:
        alerts.append(_alert(
            "sanctions_impayees",
            f"{sanctions_impayees_nombre} sanction(s) impayée(s)",
            "critique" if sanctions_impayees_montant > 100_000 else "importante",
            montant=sanctions_impayees_montant,
        ))

    if total_epargnes > 0:
        ratio = safe_pct(total_prets, total_epargnes)
        if ratio > 80:
            alerts.append(_alert("ratio_epargnes_prets", "Ratio Prêts/Épargnes critique",
                                 "critique" if ratio > 90 else "importante", pourcentage=ratio))

    tresorerie = cotisations_recent + total_epargnes - total_prets - aides_recent
    par_membre = round(tresorerie / membres_actifs, 2) if membres_actifs > 0 else 0
    if par_membre < 50_000:
        alerts.append(_alert("tresorerie_faible", "Trésorerie par membre faible",
                             "critique" if par_membre < 30_000 else "importante",
                             montant=tresorerie, par_membre=par_membre))

    if aides_precedent > 0 and aides_recent > aides_precedent * 1.5:
        alerts.append(_alert("aides_augmentation", "Augmentation importante des aides", "informative",
                             montant=aides_recent,
                             pourcentage=safe_pct(aides_recent - aides_precedent, aides_precedent)))

    if not alerts:
        alerts.append(_alert("situation_saine", "Situation financière saine", "informative"))
    return alerts


def budget_alerts_for(db: Session, today: date | None = None) -> list[dict]:
    today = today or date.today()
    d3 = add_months(today, -3)
    d6 = add_months(today, -6)

    prets = db.scalars(select(Pret)).all()
    en_retard = [p for p in prets if is_overdue(p, today)]
    sanctions = [s for s in db.scalars(select(Sanction).where(Sanction.statut != "annule")).all()
                 if s.montant - s.montant_paye > 0]

    alerts = budget_alerts(
        cotisations_recent=sum_of(db, Cotisation.montant, Cotisation.date_paiement >= d3),
        cotisations_precedent=sum_of(db, Cotisation.montant, Cotisation.date_paiement >= d6,
                                     Cotisation.date_paiement < d3),
        prets_retard_nombre=len(en_retard),
        prets_retard_montant=sum(remaining(p) for p in en_retard),
        sanctions_impayees_nombre=len(sanctions),
        sanctions_impayees_montant=sum(s.montant - s.montant_paye for s in sanctions),
        total_epargnes=sum_of(db, Epargne.montant, Epargne.statut == "actif"),
        total_prets=sum(p.montant for p in prets if p.statut != "annule"),
        membres_actifs=db.scalar(select(func.count()).select_from(Membre).where(Membre.statut == "actif")) or 0,
        aides_recent=sum_of(db, Aide.montant, Aide.date_allocation >= d3, Aide.statut != "annule"),
        aides_precedent=sum_of(db, Aide.montant, Aide.date_allocation >= d6, Aide.date_allocation < d3,
                               Aide.statut != "annule"),
    )
    logger.debug("budget alerts computed: %s", [a["type"] for a in alerts])
    return alerts


def moving_average(values: list[float], window: int = 3) -> float:
    if len(values) < window:
        return 0.0
    last = values[-window:]
    return sum(last) / window


# 직전 값이 0보다 큰 달만 평균에 포함
def mean_growth(values: list[float]) -> float:
    rates = [(values[i] - values[i - 1]) / values[i - 1] for i in range(1, len(values)) if values[i - 1] > 0]
    return sum(rates) / len(rates) if rates else 0.0


def forecast(average: float, growth: float, horizon: int = 3) -> list[int]:
    return [max(0, round(average * (1 + growth * i))) for i in range(1, horizon + 1)]


def trend(growth: float) -> str:
    if growth > 0.05:
        return "hausse"
    if growth < -0.05:
        return "baisse"
    return "stable"


def _objective(label: str, objectif: int, actuel: int, predit: int) -> dict:
    return {
        "type": label,
        "objectif": objectif,
        "actuel": actuel,
        "predit": predit,
        "progression": safe_pct(predit, objectif),
        "atteint_prevu": predit >= objectif,
    }


"""
예측 (순수 함수)

- history: [{"mois": "YYYY-MM", "cotisations": int, "epargnes": int, "prets": int}, ...] (오래된 순)
- 이동평균(최근 3개월) * (1 + 평균 성장률 * i), i = 1..3, 음수는 0
- 전체 추세: (회비 성장률 + 저축 성장률) / 2 기준 ±5%

"""

def predictions(history: list[dict], start: date) -> dict:
    series = {k: [h[k] for h in history] for k in ("cotisations", "epargnes", "prets")}
    averages = {k: moving_average(v) for k, v in series.items()}
    growths = {k: mean_growth(v) for k, v in series.items()}
    forecasts = {k: forecast(averages[k], growths[k]) for k in series}
    tendance = trend((growths["cotisations"] + growths["epargnes"]) / 2)

    months = []
    for i in range(3):
        month = add_months(start, i + 1)
        months.append(
            {
                "mois": month.strftime("%Y-%m"),
                "cotisations": forecasts["cotisations"][i],
                "epargnes": forecasts["epargnes"][i],
                "prets": forecasts["prets"][i],
                "tendance": tendance,
            }
        )

    total = {k: sum(v) for k, v in series.items()}
    predit = {k: sum(forecasts[k]) for k in series}
    objectifs = [
        _objective("cotisations", OBJECTIF_COTISATIONS, total["cotisations"], total["cotisations"] + predit["cotisations"]),
        _objective("epargnes", OBJECTIF_EPARGNES, total["epargnes"], total["epargnes"] + predit["epargnes"]),
        _objective(
            "tresorerie",
            OBJECTIF_TRESORERIE,
            total["epargnes"] - total["prets"],
            total["epargnes"] + predit["epargnes"] - total["prets"],
        ),
    ]
    return {
        "historique": history,
        "moyennes": {k: round(v, 2) for k, v in averages.items()},
        "croissances": {k: round(v, 4) for k, v in growths.items()},
        "predictions": months,
        "tendance": tendance,
        "objectifs": objectifs,
    }


def monthly_history(db: Session, today: date | None = None, months: int = 12) -> list[dict]:
    today = today or date.today()
    first_of_month = today.replace(day=1)
    history = []
    for i in range(months - 1, -1, -1):
        start = add_months(first_of_month, -i)
        end = add_months(start, 1) - timedelta(days=1)
        history.append(
            {
                "mois": start.strftime("%Y-%m"),
                "cotisations": sum_of(db, Cotisation.montant,
                                      Cotisation.date_paiement >= start, Cotisation.date_paiement <= end),
                "epargnes": sum_of(db, Epargne.montant, Epargne.date_depot >= start, Epargne.date_depot <= end),
                "prets": sum_of(db, Pret.montant, Pret.date_pret >= start, Pret.date_pret <= end),
            }
        )
    return history


def predictions_for(db: Session, today: date | None = None) -> dict:
    today = today or date.today()
    return predictions(monthly_history(db, today), today.replace(day=1))


"""
재무 보고서

- exercice 지정 시 기간 [date_debut, date_fin], 아니면 전체 기간
- tontine  : 회비 합계 - 수혜자 지급액 합계
- prets    : 원금, 상환액, 이자, 진행 / 연체 건수
- epargnes : 활성 저축 합계
- sanctions: 부과 / 납부 / 미납 (취소 제외)
- sport    : 팀별 수입 / 지출

"""

def financial_report(db: Session, *, exercice: Exercice | None = None) -> dict:
    def between(column):
        if exercice is None:
            return []
        return [column >= exercice.date_debut, column <= exercice.date_fin]

    cotisations = sum_of(db, Cotisation.montant, Cotisation.statut.in_(["paye", "partiel"]),
                         *between(Cotisation.date_paiement))
    reunion_ids = select(Reunion.id)
    if exercice is not None:
        reunion_ids = reunion_ids.where(*between(Reunion.date_reunion))
    beneficiaires = sum_of(db, ReunionBeneficiaire.montant, ReunionBeneficiaire.reunion_id.in_(reunion_ids))

    prets = db.scalars(select(Pret).where(Pret.statut != "annule", *between(Pret.date_pret))).all()
    sanctions = db.scalars(select(Sanction).where(Sanction.statut != "annule", *between(Sanction.date_sanction))).all()

    sport = {}
    for equipe in ("e2d", "phoenix"):
        for kind in ("recette", "depense"):
            sport[f"{kind}s_{equipe}"] = sum_of(
                db, SportOperation.montant,
                SportOperation.equipe == equipe,
                SportOperation.type_operation == kind,
                *between(SportOperation.date_operation),
            )

    total_sanctions = sum(s.montant for s in sanctions)
    total_sanctions_paye = sum(s.montant_paye for s in sanctions)
    return {
        "exercice": exercice.nom if exercice else None,
        "tontine": {
            "cotisations": cotisations,
            "beneficiaires": beneficiaires,
            "solde": cotisations - beneficiaires,
        },
        "prets": {
            "total_pretes": sum(p.montant for p in prets),
            "total_rembourse": sum(p.montant_paye for p in prets),
            "interets": round(sum(interest_amount(p.montant, p.taux_interet, p.reconductions) for p in prets)),
            "en_cours": sum(1 for p in prets if p.statut in ("en_cours", "partiel", "reconduit") and not is_overdue(p)),
            "en_retard": sum(1 for p in prets if is_overdue(p)),
        },
        "epargnes": {
            "total_epargne": sum_of(db, Epargne.montant, Epargne.statut == "actif", *between(Epargne.date_depot)),
        },
        "sanctions": {
            "total": total_sanctions,
            "paye": total_sanctions_paye,
            "impaye": total_sanctions - total_sanctions_paye,
        },
        "aides": sum_of(db, Aide.montant, Aide.statut != "annule", *between(Aide.date_allocation)),
        "sport": sport,
    }


def dashboard_counters(db: Session) -> dict:
    def count(model, *conditions):
        stmt = select(func.count()).select_from(model)
        if conditions:
            stmt = stmt.where(*conditions)
        return db.scalar(stmt) or 0

    today = date.today()
    return {
        "membres_actifs": count(Membre, Membre.statut == "actif"),
        "membres_total": count(Membre),
        "prets_actifs": count(Pret, Pret.statut.in_(["en_cours", "partiel", "reconduit", "en_retard"])),
        "epargnes_total": sum_of(db, Epargne.montant, Epargne.statut == "actif"),
        "sanctions_impayees": count(Sanction, Sanction.statut.in_(["impaye", "partiel"])),
        "reunions_a_venir": count(Reunion, Reunion.date_reunion >= today, Reunion.statut == "planifie"),
    }
