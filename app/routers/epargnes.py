"""
epargnes.py

저축(Epargne) API.

- 저축 입금 / 목록 / 인출, 회원별 합계
- 저축자별 이익 배분 조회 (대출 이자 총액을 저축 비율로 배분)
- 이익 배분표 CSV / Excel 내보내기

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.core.deps import get_current_member, get_db, get_or_404, require_permission
from app.models.epargne import Epargne
from app.models.user import User
from app.schemas.epargne import BeneficesResponse, EpargneCreate, EpargneResponse
from app.services.epargnes import create_epargne, epargnants_benefices, totals_by_membre, withdraw_epargne
from app.services.exports import csv_response, xlsx_response

router = APIRouter(prefix="/epargnes", tags=["epargnes"])

BENEFICES_HEADER = ["nom", "prenom", "total_epargne", "pourcentage", "gains_estimes"]


def _benefices_or_400(db: Session, exercice_id: uuid.UUID | None) -> dict:
    try:
        return epargnants_benefices(db, exercice_id=exercice_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _benefices_rows(result: dict):
    for r in result["epargnants"]:
        yield [r["nom"], r["prenom"], r["total_epargne"], r["pourcentage"], r["gains_estimes"]]


@router.get("", response_model=list[EpargneResponse])
def list_epargnes(
    membre_id: uuid.UUID | None = None,
    exercice_id: uuid.UUID | None = None,
    statut: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    stmt = select(Epargne).order_by(desc(Epargne.date_depot))
    if membre_id:
        stmt = stmt.where(Epargne.membre_id == membre_id)
    if exercice_id:
        stmt = stmt.where(Epargne.exercice_id == exercice_id)
    if statut:
        stmt = stmt.where(Epargne.statut == statut)
    return db.scalars(stmt).all()


# 회원별 활성 저축 합계 (저축액 내림차순)
@router.get("/totaux")
def get_totals(
    exercice_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    totals = totals_by_membre(db, exercice_id=exercice_id)
    rows = [{"membre_id": str(k), "total": v} for k, v in totals.items()]
    rows.sort(key=lambda r: r["total"], reverse=True)
    return {"data": rows, "meta": {"total_epargnes": sum(totals.values())}}


@router.post("", response_model=EpargneResponse)
def post_epargne(
    body: EpargneCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("epargnes", "write")),
):
    try:
        epargne = create_epargne(db, **body.model_dump())
        db.commit()
        db.refresh(epargne)
        return epargne
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/{epargne_id}/withdraw", response_model=EpargneResponse)
def post_withdraw(
    epargne_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("epargnes", "write")),
):
    epargne = get_or_404(db, Epargne, epargne_id, "epargne")
    try:
        withdraw_epargne(db, epargne)
        db.commit()
        db.refresh(epargne)
        return epargne
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


"""
저축자 이익 배분 API

- exercice_id 지정 시 해당 기간의 저축 / 대출만 대상
- 총저축이 0이면 모든 gains 0

"""
@router.get("/benefices", response_model=BeneficesResponse)
def get_benefices(
    exercice_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return _benefices_or_400(db, exercice_id)


@router.get("/benefices/export")
def export_benefices_csv(
    exercice_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("epargnes", "read")),
):
    result = _benefices_or_400(db, exercice_id)
    return csv_response("epargnes_benefices.csv", BENEFICES_HEADER, _benefices_rows(result))


@router.get("/benefices/export.xlsx")
def export_benefices_xlsx(
    exercice_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("epargnes", "read")),
):
    result = _benefices_or_400(db, exercice_id)
    return xlsx_response("epargnes_benefices.xlsx", "benefices", BENEFICES_HEADER, _benefices_rows(result))
