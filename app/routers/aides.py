import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.core.deps import get_current_member, get_db, get_or_404, require_permission
from app.models.aide import Aide, AideType
from app.models.user import User
from app.schemas.aide import AideCreate, AideResponse, AideTypeCreate, AideTypeResponse
from app.services.aides import cancel_aide, create_aide, create_type, mark_paid

router = APIRouter(prefix="/aides", tags=["aides"])


@router.get("/types", response_model=list[AideTypeResponse])
def list_types(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return db.scalars(select(AideType).order_by(AideType.nom)).all()


@router.post("/types", response_model=AideTypeResponse)
def post_type(
    body: AideTypeCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("aides", "write")),
):
    try:
        aide_type = create_type(db, **body.model_dump())
        db.commit()
        db.refresh(aide_type)
        return aide_type
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("", response_model=list[AideResponse])
def list_aides(
    beneficiaire_id: uuid.UUID | None = None,
    statut: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    stmt = select(Aide).order_by(desc(Aide.date_allocation))
    if beneficiaire_id:
        stmt = stmt.where(Aide.beneficiaire_id == beneficiaire_id)
    if statut:
        stmt = stmt.where(Aide.statut == statut)
    return db.scalars(stmt).all()


# montant 미지정 시 종류의 기본 금액
@router.post("", response_model=AideResponse)
def post_aide(
    body: AideCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("aides", "write")),
):
    try:
        aide = create_aide(db, **body.model_dump())
        db.commit()
        db.refresh(aide)
        return aide
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/{aide_id}/verser", response_model=AideResponse)
def post_verser(
    aide_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("aides", "write")),
):
    aide = get_or_404(db, Aide, aide_id, "aide")
    try:
        mark_paid(db, aide)
        db.commit()
        db.refresh(aide)
        return aide
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/{aide_id}/annuler", response_model=AideResponse)
def post_annuler(
    aide_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("aides", "write")),
):
    aide = get_or_404(db, Aide, aide_id, "aide")
    try:
        cancel_aide(db, aide)
        db.commit()
        db.refresh(aide)
        return aide
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
