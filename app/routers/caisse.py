"""
caisse.py

현금 출납(fond de caisse) API.

- 입출금 기록 (entree / sortie)
- 현재 잔액: 직전 마감 실잔액 + 미마감 입금 - 미마감 출금
- 마감: 실잔액 입력 → 차액(ecart) 기록, 미마감 기록을 마감에 귀속
- 마감 이력 조회

"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_permission
from app.models.caisse import CaisseCloture, CaisseOperation
from app.models.user import User
from app.schemas.caisse import (
    BalanceResponse,
    ClotureRequest,
    ClotureResponse,
    OperationCreate,
    OperationResponse,
)
from app.services.caisse import add_operation, close_caisse, current_balance

router = APIRouter(prefix="/caisse", tags=["caisse"])


@router.get("/solde", response_model=BalanceResponse)
def get_balance(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("caisse", "read")),
):
    return current_balance(db)


@router.get("/operations", response_model=list[OperationResponse])
def list_operations(
    ouvertes: bool = False,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("caisse", "read")),
):
    stmt = select(CaisseOperation).order_by(desc(CaisseOperation.date_operation), desc(CaisseOperation.created_at))
    if ouvertes:
        stmt = stmt.where(CaisseOperation.cloture_id.is_(None))
    return db.scalars(stmt).all()


@router.post("/operations", response_model=OperationResponse)
def post_operation(
    body: OperationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_permission("caisse", "write")),
):
    try:
        operation = add_operation(db, **body.model_dump(), operateur_id=user.id)
        db.commit()
        db.refresh(operation)
        return operation
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("/clotures", response_model=list[ClotureResponse])
def list_clotures(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("caisse", "read")),
):
    return db.scalars(
        select(CaisseCloture).order_by(desc(CaisseCloture.date_cloture), desc(CaisseCloture.created_at))
    ).all()


@router.post("/clotures", response_model=ClotureResponse)
def post_cloture(
    body: ClotureRequest,
    db: Session = Depends(get_db),
    user: User = Depends(require_permission("caisse", "write")),
):
    try:
        cloture = close_caisse(db, **body.model_dump(), cloture_par=user.id)
        db.commit()
        db.refresh(cloture)
        return cloture
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
