"""
analytics.py

재무 분석 API (조회 전용).

- 대시보드 카운터
- 예산 경보
- 12개월 이력 기반 예측 / 목표 달성 예상
- 회계연도 재무 보고서

결과는 저장하지 않고 요청마다 다시 계산한다.
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_current_member, get_db, get_or_404, require_permission
from app.models.exercice import Exercice
from app.models.user import User
from app.services.analytics import budget_alerts_for, dashboard_counters, financial_report, predictions_for

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/dashboard")
def get_dashboard(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return dashboard_counters(db)


@router.get("/alertes")
def get_alerts(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("analytics", "read")),
):
    alerts = budget_alerts_for(db)
    return {"data": alerts, "meta": {"count": len(alerts)}}


@router.get("/predictions")
def get_predictions(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("analytics", "read")),
):
    return predictions_for(db)


# exercice_id 미지정 시 전체 기간
@router.get("/rapport")
def get_report(
    exercice_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("analytics", "read")),
):
    exercice = get_or_404(db, Exercice, exercice_id, "exercice") if exercice_id else None
    return financial_report(db, exercice=exercice)
