"""
vitrine.py

공개 페이지(vitrine) API.

공개 (인증 없음):
- 요금표 / 추천 후원 금액
- 가입 신청, 후원 의사 등록, 문의 메시지

관리자 (vitrine 권한):
- 가입 신청 목록 / 승인 (Membre 생성)
- 후원 목록 / 통화별 합계
- 문의 메시지 목록

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_or_404, require_permission
from app.models.admin_log import AdminAction
from app.models.user import User
from app.models.vitrine import AdhesionRequest, ContactMessage, Donation
from app.schemas.membre import MembreResponse
from app.schemas.vitrine import (
    AdhesionCreate,
    AdhesionResponse,
    ContactCreate,
    ContactResponse,
    DonationCreate,
    DonationResponse,
)
from app.services.admin_log import client_meta, write_admin_log
from app.services.vitrine import (
    approve_adhesion,
    create_adhesion,
    create_contact,
    create_donation,
    donation_totals,
    public_info,
)

router = APIRouter(prefix="/vitrine", tags=["vitrine"])


@router.get("/info")
def get_public_info():
    return public_info()


@router.post("/adhesions", response_model=AdhesionResponse)
def post_adhesion(body: AdhesionCreate, db: Session = Depends(get_db)):
    try:
        adhesion = create_adhesion(db, **body.model_dump())
        db.commit()
        db.refresh(adhesion)
        return adhesion
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/dons", response_model=DonationResponse)
def post_donation(body: DonationCreate, db: Session = Depends(get_db)):
    try:
        donation = create_donation(db, **body.model_dump())
        db.commit()
        db.refresh(donation)
        return donation
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/contact", response_model=ContactResponse)
def post_contact(body: ContactCreate, db: Session = Depends(get_db)):
    try:
        message = create_contact(db, **body.model_dump())
        db.commit()
        db.refresh(message)
        return message
    except Exception:
        db.rollback()
        raise


@router.get("/admin/adhesions", response_model=list[AdhesionResponse])
def list_adhesions(
    statut: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("vitrine", "read")),
):
    stmt = select(AdhesionRequest).order_by(desc(AdhesionRequest.created_at))
    if statut:
        stmt = stmt.where(AdhesionRequest.statut == statut)
    return db.scalars(stmt).all()


"""
가입 신청 승인 API

- 신청 정보로 Membre 생성 (type 에 따라 E2D / Phoenix 플래그)
- Phoenix 포함이면 PhoenixAdherent 도 생성
- 이미 처리된 신청은 400

"""
@router.post("/admin/adhesions/{adhesion_id}/approve", response_model=MembreResponse)
def post_approve_adhesion(
    adhesion_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_permission("vitrine", "write")),
):
    adhesion = get_or_404(db, AdhesionRequest, adhesion_id, "adhesion")
    try:
        membre = approve_adhesion(db, adhesion)
        write_admin_log(
            db,
            actor_id=user.id,
            action=AdminAction.APPROVE_ADHESION,
            details=f"adhesion={adhesion.id} membre={membre.id}",
            **client_meta(request),
        )
        db.commit()
        db.refresh(membre)
        return membre
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("/admin/dons", response_model=list[DonationResponse])
def list_donations(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("vitrine", "read")),
):
    return db.scalars(select(Donation).order_by(desc(Donation.created_at))).all()


@router.get("/admin/dons/totaux")
def get_donation_totals(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("vitrine", "read")),
):
    return donation_totals(db)


@router.get("/admin/messages", response_model=list[ContactResponse])
def list_messages(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("vitrine", "read")),
):
    return db.scalars(select(ContactMessage).order_by(desc(ContactMessage.created_at))).all()
