"""
sanctions.py

제재(Sanction) API.

- 제재 종류 생성 / 목록 (contexte: reunion / sport)
- 제재 부과, 납부, 취소
- 카드(jaune / rouge) 제재 바로 부과
- 경기 기록의 카드 → 제재 일괄 동기화
- 미납 잔액 요약 (contexte 별)

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.core.deps import get_current_member, get_db, get_or_404, require_permission
from app.models.sanction import Sanction, SanctionType
from app.models.user import User
from app.schemas.sanction import (
    CardSanctionCreate,
    SanctionCreate,
    SanctionPaiementRequest,
    SanctionResponse,
    SanctionTypeCreate,
    SanctionTypeResponse,
)
from app.services.sanctions import (
    cancel_sanction,
    create_card_sanction,
    create_sanction,
    create_type,
    pay_sanction,
    summary_by_context,
    sync_cards_from_statistics,
)

router = APIRouter(prefix="/sanctions", tags=["sanctions"])


@router.get("/types", response_model=list[SanctionTypeResponse])
def list_types(
    contexte: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    stmt = select(SanctionType).order_by(SanctionType.contexte, SanctionType.nom)
    if contexte:
        stmt = stmt.where(SanctionType.contexte == contexte)
    return db.scalars(stmt).all()


@router.post("/types", response_model=SanctionTypeResponse)
def post_type(
    body: SanctionTypeCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sanctions", "write")),
):
    try:
        sanction_type = create_type(db, **body.model_dump())
        db.commit()
        db.refresh(sanction_type)
        return sanction_type
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("", response_model=list[SanctionResponse])
def list_sanctions(
    membre_id: uuid.UUID | None = None,
    statut: str | None = None,
    contexte: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    stmt = select(Sanction).order_by(desc(Sanction.date_sanction))
    if membre_id:
        stmt = stmt.where(Sanction.membre_id == membre_id)
    if statut:
        stmt = stmt.where(Sanction.statut == statut)
    if contexte:
        stmt = stmt.where(Sanction.contexte_sanction == contexte)
    return db.scalars(stmt).all()


@router.get("/summary")
def get_summary(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return summary_by_context(db)


@router.post("", response_model=SanctionResponse)
def post_sanction(
    body: SanctionCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sanctions", "write")),
):
    try:
        sanction = create_sanction(db, **body.model_dump())
        db.commit()
        db.refresh(sanction)
        return sanction
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/cards", response_model=SanctionResponse)
def post_card_sanction(
    body: CardSanctionCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sanctions", "write")),
):
    try:
        sanction = create_card_sanction(db, **body.model_dump())
        db.commit()
        db.refresh(sanction)
        return sanction
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


"""
카드 동기화 API

- 아직 동기화되지 않은 경기 기록의 카드 수만큼 제재 생성
- 회원 미연결 기록은 건너뛰고, 실패한 기록은 errors 로 집계

"""
@router.post("/sync-cards")
def post_sync_cards(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sanctions", "write")),
):
    try:
        result = sync_cards_from_statistics(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return {"data": result}


@router.post("/{sanction_id}/payer", response_model=SanctionResponse)
def post_payer(
    sanction_id: uuid.UUID,
    body: SanctionPaiementRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sanctions", "write")),
):
    sanction = get_or_404(db, Sanction, sanction_id, "sanction")
    try:
        pay_sanction(db, sanction, montant=body.montant)
        db.commit()
        db.refresh(sanction)
        return sanction
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/{sanction_id}/annuler", response_model=SanctionResponse)
def post_annuler(
    sanction_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sanctions", "write")),
):
    sanction = get_or_404(db, Sanction, sanction_id, "sanction")
    try:
        cancel_sanction(db, sanction)
        db.commit()
        db.refresh(sanction)
        return sanction
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
