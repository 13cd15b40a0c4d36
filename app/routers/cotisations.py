"""
cotisations.py

회비(Cotisation) API 모음.

주요 기능:
- 회비 종류 생성 / 목록
- 회원별 개별 금액 설정
- 회비 납부 기록 생성 / 목록 / 삭제
- 종류별 회원 납부 현황 조회 (PAID / PARTIAL / UNPAID / NO_CHARGE), 회원 한 명 조회
- 납부 현황 CSV / Excel(xlsx) 내보내기
- 회계연도 마감 점검 (필수 회비 미납 → en_retard_annuel)

설계 원칙:
- 조회는 MEMBER 이상, 변경은 cotisations:write 권한 필요
- 비즈니스 로직은 service 계층(app.services.cotisations)에 위임

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.core.deps import get_current_member, get_db, get_or_404, require_permission
from app.models.cotisation import Cotisation, CotisationType
from app.models.membre import Membre
from app.models.user import User
from app.schemas.cotisation import (
    CotisationCreate,
    CotisationResponse,
    CotisationStatusRow,
    CotisationTypeCreate,
    CotisationTypeResponse,
    MembreConfigRequest,
    MembreConfigResponse,
)
from app.services.cotisations import (
    check_annual_closure,
    create_cotisation,
    create_type,
    set_membre_config,
    status_for_membre,
    status_table,
)
from app.services.exports import csv_response, xlsx_response

router = APIRouter(prefix="/cotisations", tags=["cotisations"])

STATUS_HEADER = ["type", "nom", "prenom", "status", "amount_due", "paid_amount"]


def _status_or_400(db: Session, type_cotisation_id: uuid.UUID, exercice_id: uuid.UUID | None):
    try:
        return status_table(db, type_cotisation_id=type_cotisation_id, exercice_id=exercice_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _status_rows(cotisation_type: CotisationType, rows: list[dict]):
    for r in rows:
        m = r["membre"]
        yield [cotisation_type.nom, m.nom, m.prenom, r["status"], r["amount_due"], r["paid_amount"]]


@router.get("/types", response_model=list[CotisationTypeResponse])
def list_types(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return db.scalars(select(CotisationType).order_by(CotisationType.nom)).all()


@router.post("/types", response_model=CotisationTypeResponse)
def post_type(
    body: CotisationTypeCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("cotisations", "write")),
):
    try:
        cotisation_type = create_type(db, **body.model_dump())
        db.commit()
        db.refresh(cotisation_type)
        return cotisation_type
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.put("/config", response_model=MembreConfigResponse)
def put_membre_config(
    body: MembreConfigRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("cotisations", "write")),
):
    try:
        config = set_membre_config(db, **body.model_dump())
        db.commit()
        db.refresh(config)
        return config
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("", response_model=list[CotisationResponse])
def list_cotisations(
    membre_id: uuid.UUID | None = None,
    type_cotisation_id: uuid.UUID | None = None,
    exercice_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    stmt = select(Cotisation).order_by(desc(Cotisation.date_paiement), desc(Cotisation.created_at))
    if membre_id:
        stmt = stmt.where(Cotisation.membre_id == membre_id)
    if type_cotisation_id:
        stmt = stmt.where(Cotisation.type_cotisation_id == type_cotisation_id)
    if exercice_id:
        stmt = stmt.where(Cotisation.exercice_id == exercice_id)
    return db.scalars(stmt).all()


@router.post("", response_model=CotisationResponse)
def post_cotisation(
    body: CotisationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_permission("cotisations", "write")),
):
    try:
        cotisation = create_cotisation(db, **body.model_dump(), created_by=user.id)
        db.commit()
        db.refresh(cotisation)
        return cotisation
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.delete("/{cotisation_id}")
def delete_cotisation(
    cotisation_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("cotisations", "write")),
):
    cotisation = get_or_404(db, Cotisation, cotisation_id, "cotisation")
    try:
        db.delete(cotisation)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return {"message": "Cotisation deleted", "data": {"id": str(cotisation_id)}}


"""
종류별 회원 납부 현황 조회 API

- 활성 회원 전원에 대해 예상 금액 / 납부 합계 / 상태 계산
- exercice_id 지정 시 해당 기간 납부만 합산

"""
@router.get("/status", response_model=list[CotisationStatusRow])
def get_status(
    type_cotisation_id: uuid.UUID = Query(...),
    exercice_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    _, rows = _status_or_400(db, type_cotisation_id, exercice_id)
    return [
        CotisationStatusRow(
            membre_id=r["membre"].id,
            nom=r["membre"].nom,
            prenom=r["membre"].prenom,
            amount_due=r["amount_due"],
            paid_amount=r["paid_amount"],
            status=r["status"],
        )
        for r in rows
    ]


@router.get("/status/membre/{membre_id}", response_model=CotisationStatusRow)
def get_membre_status(
    membre_id: uuid.UUID,
    type_cotisation_id: uuid.UUID = Query(...),
    exercice_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    membre = get_or_404(db, Membre, membre_id, "membre")
    cotisation_type = get_or_404(db, CotisationType, type_cotisation_id, "cotisation type")
    row = status_for_membre(db, membre=membre, cotisation_type=cotisation_type, exercice_id=exercice_id)
    return CotisationStatusRow(
        membre_id=membre.id,
        nom=membre.nom,
        prenom=membre.prenom,
        amount_due=row["amount_due"],
        paid_amount=row["paid_amount"],
        status=row["status"],
    )


@router.get("/status/export")
def export_status_csv(
    type_cotisation_id: uuid.UUID = Query(...),
    exercice_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("cotisations", "read")),
):
    cotisation_type, rows = _status_or_400(db, type_cotisation_id, exercice_id)
    return csv_response("cotisations_status.csv", STATUS_HEADER, _status_rows(cotisation_type, rows))


@router.get("/status/export.xlsx")
def export_status_xlsx(
    type_cotisation_id: uuid.UUID = Query(...),
    exercice_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("cotisations", "read")),
):
    cotisation_type, rows = _status_or_400(db, type_cotisation_id, exercice_id)
    return xlsx_response(
        "cotisations_status.xlsx", "cotisations_status", STATUS_HEADER, _status_rows(cotisation_type, rows)
    )


# 마감 7일 이내 기간의 필수 회비 미납 기록을 en_retard_annuel 로 표시
@router.post("/annual-check")
def run_annual_check(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("cotisations", "write")),
):
    try:
        summary = check_annual_closure(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return {"data": summary}
