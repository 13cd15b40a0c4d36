"""
prets.py

대출(Pret) API 모음.

주요 기능:
- 대출 생성 / 목록 / 상세
- 부분 상환 기록, 전액 상환
- 만기 연장(reconduction), 취소
- 연체 목록 조회 및 en_retard 일괄 표시
- 대출 현황 대시보드

상태 흐름: en_cours → partiel / reconduit / en_retard → rembourse (또는 annule)
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.core.deps import get_current_member, get_db, get_or_404, require_permission
from app.models.pret import Pret, PretPaiement
from app.models.user import User
from app.schemas.pret import (
    PretCreate,
    PretDashboard,
    PretPaiementCreate,
    PretPaiementResponse,
    PretResponse,
    ReconductionRequest,
    RemboursementTotalRequest,
)
from app.services.prets import (
    cancel_pret,
    create_pret,
    dashboard,
    list_overdue,
    mark_overdue,
    reconduct,
    record_payment,
    repay_in_full,
)

router = APIRouter(prefix="/prets", tags=["prets"])


@router.get("", response_model=list[PretResponse])
def list_prets(
    membre_id: uuid.UUID | None = None,
    statut: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    stmt = select(Pret).order_by(desc(Pret.date_pret))
    if membre_id:
        stmt = stmt.where(Pret.membre_id == membre_id)
    if statut:
        stmt = stmt.where(Pret.statut == statut)
    return db.scalars(stmt).all()


@router.get("/dashboard", response_model=PretDashboard)
def get_dashboard(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return dashboard(list(db.scalars(select(Pret)).all()))


@router.get("/overdue", response_model=list[PretResponse])
def get_overdue(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return list_overdue(db)


@router.post("/overdue/mark")
def post_mark_overdue(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("prets", "write")),
):
    try:
        count = mark_overdue(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return {"data": {"marked": count}}


@router.get("/{pret_id}", response_model=PretResponse)
def get_pret(
    pret_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return get_or_404(db, Pret, pret_id, "pret")


@router.get("/{pret_id}/paiements", response_model=list[PretPaiementResponse])
def list_paiements(
    pret_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    get_or_404(db, Pret, pret_id, "pret")
    return db.scalars(
        select(PretPaiement).where(PretPaiement.pret_id == pret_id).order_by(PretPaiement.date_paiement)
    ).all()


@router.post("", response_model=PretResponse)
def post_pret(
    body: PretCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("prets", "write")),
):
    try:
        pret = create_pret(db, **body.model_dump())
        db.commit()
        db.refresh(pret)
        return pret
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


"""
부분 상환 API

- 잔액을 넘는 금액은 거부 (400)
- 잔액이 0이 되면 rembourse

"""
@router.post("/{pret_id}/paiements", response_model=PretPaiementResponse)
def post_paiement(
    pret_id: uuid.UUID,
    body: PretPaiementCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("prets", "write")),
):
    pret = get_or_404(db, Pret, pret_id, "pret")
    try:
        paiement = record_payment(db, pret, **body.model_dump())
        db.commit()
        db.refresh(paiement)
        return paiement
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/{pret_id}/rembourser", response_model=PretResponse)
def post_rembourser(
    pret_id: uuid.UUID,
    body: RemboursementTotalRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("prets", "write")),
):
    pret = get_or_404(db, Pret, pret_id, "pret")
    try:
        repay_in_full(db, pret, mode_paiement=body.mode_paiement)
        db.commit()
        db.refresh(pret)
        return pret
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/{pret_id}/reconduire", response_model=PretResponse)
def post_reconduire(
    pret_id: uuid.UUID,
    body: ReconductionRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("prets", "write")),
):
    pret = get_or_404(db, Pret, pret_id, "pret")
    try:
        reconduct(db, pret, nouvelle_echeance=body.nouvelle_echeance)
        db.commit()
        db.refresh(pret)
        return pret
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/{pret_id}/annuler", response_model=PretResponse)
def post_annuler(
    pret_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("prets", "write")),
):
    pret = get_or_404(db, Pret, pret_id, "pret")
    try:
        cancel_pret(db, pret)
        db.commit()
        db.refresh(pret)
        return pret
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
