"""
membres.py

회원 명부(Membre) API.

- 목록 조회 (statut / e2d / phoenix / search 필터)
- 상세 + 이력(fiche) 조회
- 생성 / 수정 / 삭제 (write 권한 필요)
- 명부 CSV / Excel 내보내기

금전 기록이 있는 회원은 삭제 대신 statut=inactif 로 전환해야 한다.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import get_current_member, get_db, get_or_404, require_permission
from app.models.membre import Membre
from app.models.user import User
from app.schemas.membre import MembreCreate, MembreResponse, MembreUpdate
from app.services.exports import csv_response, xlsx_response
from app.services.membres import create_membre, delete_membre, list_membres, membre_fiche, update_membre

router = APIRouter(prefix="/membres", tags=["membres"])

EXPORT_HEADER = ["nom", "prenom", "email", "telephone", "statut", "fonction", "e2d", "phoenix", "date_inscription"]


def _export_rows(membres: list[Membre]):
    for m in membres:
        yield [
            m.nom, m.prenom, m.email, m.telephone, m.statut, m.fonction,
            "oui" if m.est_membre_e2d else "non",
            "oui" if m.est_adherent_phoenix else "non",
            m.date_inscription,
        ]


@router.get("", response_model=list[MembreResponse])
def get_membres(
    statut: str | None = None,
    e2d: bool | None = None,
    phoenix: bool | None = None,
    search: str | None = Query(default=None, max_length=100),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return list_membres(db, statut=statut, e2d=e2d, phoenix=phoenix, search=search)


@router.get("/export")
def export_membres_csv(
    statut: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("membres", "read")),
):
    return csv_response("membres.csv", EXPORT_HEADER, _export_rows(list_membres(db, statut=statut)))


@router.get("/export.xlsx")
def export_membres_xlsx(
    statut: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("membres", "read")),
):
    return xlsx_response("membres.xlsx", "membres", EXPORT_HEADER, _export_rows(list_membres(db, statut=statut)))


@router.get("/{membre_id}", response_model=MembreResponse)
def get_membre(
    membre_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return get_or_404(db, Membre, membre_id, "membre")


"""
회원 이력(fiche) 조회 API

- 회비 납부 합계, 활성 저축, 대출 잔액, 미납 제재, 회의 출석률

"""
@router.get("/{membre_id}/fiche")
def get_membre_fiche(
    membre_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    membre = get_or_404(db, Membre, membre_id, "membre")
    return membre_fiche(db, membre)


@router.post("", response_model=MembreResponse)
def post_membre(
    body: MembreCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("membres", "write")),
):
    try:
        membre = create_membre(db, **body.model_dump())
        db.commit()
        db.refresh(membre)
        return membre
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.patch("/{membre_id}", response_model=MembreResponse)
def patch_membre(
    membre_id: uuid.UUID,
    body: MembreUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("membres", "write")),
):
    membre = get_or_404(db, Membre, membre_id, "membre")
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No changes provided")
    try:
        update_membre(db, membre, changes)
        db.commit()
        db.refresh(membre)
        return membre
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.delete("/{membre_id}")
def remove_membre(
    membre_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("membres", "write")),
):
    membre = get_or_404(db, Membre, membre_id, "membre")
    try:
        delete_membre(db, membre)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
    return {"message": "Membre deleted", "data": {"id": str(membre_id)}}
