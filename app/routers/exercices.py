import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.core.deps import get_current_member, get_db, get_or_404, require_permission
from app.models.exercice import Exercice
from app.models.user import User
from app.schemas.exercice import ExerciceCreate, ExerciceResponse, ExerciceUpdate
from app.services.exercices import close_exercice, create_exercice, current_exercice, update_exercice

router = APIRouter(prefix="/exercices", tags=["exercices"])


@router.get("", response_model=list[ExerciceResponse])
def list_exercices(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return db.scalars(select(Exercice).order_by(desc(Exercice.date_debut))).all()


# 오늘 날짜가 속한 활성 기간 (없으면 null)
@router.get("/current", response_model=ExerciceResponse | None)
def get_current_exercice(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return current_exercice(db)


@router.post("", response_model=ExerciceResponse)
def post_exercice(
    body: ExerciceCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("exercices", "write")),
):
    try:
        exercice = create_exercice(db, **body.model_dump())
        db.commit()
        db.refresh(exercice)
        return exercice
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.patch("/{exercice_id}", response_model=ExerciceResponse)
def patch_exercice(
    exercice_id: uuid.UUID,
    body: ExerciceUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("exercices", "write")),
):
    exercice = get_or_404(db, Exercice, exercice_id, "exercice")
    try:
        update_exercice(db, exercice, body.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(exercice)
        return exercice
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/{exercice_id}/close", response_model=ExerciceResponse)
def post_close_exercice(
    exercice_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("exercices", "write")),
):
    exercice = get_or_404(db, Exercice, exercice_id, "exercice")
    try:
        close_exercice(db, exercice)
        db.commit()
        db.refresh(exercice)
        return exercice
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
