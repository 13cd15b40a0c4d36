"""
reunions.py

회의(Reunion) API 모음.

주요 기능:
- 회의 계획 / 목록 / 상세 / 수정
- 출석 기록 (회원별 upsert)
- 회의록(rapport) 항목 추가
- 수혜자(beneficiaire) 계산 설정, 수혜자 지정 및 지급
- 회의 마감 (선택적으로 결석자 제재)

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.core.deps import get_current_member, get_db, get_or_404, require_permission
from app.models.reunion import RapportSeance, Reunion, ReunionBeneficiaire, ReunionPresence
from app.models.user import User
from app.schemas.reunion import (
    BeneficiaireConfigRequest,
    BeneficiaireConfigResponse,
    BeneficiaireResponse,
    BeneficiairesRequest,
    ClotureReunionRequest,
    PresenceRequest,
    PresenceResponse,
    RapportCreate,
    RapportResponse,
    ReunionCreate,
    ReunionResponse,
    ReunionUpdate,
)
from app.services.reunions import (
    add_beneficiaires,
    add_rapport,
    close_reunion,
    create_reunion,
    current_config,
    pay_beneficiaire,
    save_config,
    set_presence,
    update_reunion,
)

router = APIRouter(prefix="/reunions", tags=["reunions"])


@router.get("", response_model=list[ReunionResponse])
def list_reunions(
    statut: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    stmt = select(Reunion).order_by(desc(Reunion.date_reunion))
    if statut:
        stmt = stmt.where(Reunion.statut == statut)
    return db.scalars(stmt).all()


@router.get("/config", response_model=BeneficiaireConfigResponse)
def get_config(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return current_config(db)


@router.put("/config", response_model=BeneficiaireConfigResponse)
def put_config(
    body: BeneficiaireConfigRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("reunions", "write")),
):
    try:
        config = save_config(db, **body.model_dump())
        db.commit()
        db.refresh(config)
        return config
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/beneficiaires/{beneficiaire_id}/payer", response_model=BeneficiaireResponse)
def post_pay_beneficiaire(
    beneficiaire_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("reunions", "write")),
):
    beneficiaire = get_or_404(db, ReunionBeneficiaire, beneficiaire_id, "beneficiaire")
    try:
        pay_beneficiaire(db, beneficiaire)
        db.commit()
        db.refresh(beneficiaire)
        return beneficiaire
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("/{reunion_id}", response_model=ReunionResponse)
def get_reunion(
    reunion_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return get_or_404(db, Reunion, reunion_id, "reunion")


@router.post("", response_model=ReunionResponse)
def post_reunion(
    body: ReunionCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("reunions", "write")),
):
    try:
        reunion = create_reunion(db, **body.model_dump())
        db.commit()
        db.refresh(reunion)
        return reunion
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.patch("/{reunion_id}", response_model=ReunionResponse)
def patch_reunion(
    reunion_id: uuid.UUID,
    body: ReunionUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("reunions", "write")),
):
    reunion = get_or_404(db, Reunion, reunion_id, "reunion")
    try:
        update_reunion(db, reunion, body.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(reunion)
        return reunion
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("/{reunion_id}/presences", response_model=list[PresenceResponse])
def list_presences(
    reunion_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    get_or_404(db, Reunion, reunion_id, "reunion")
    return db.scalars(select(ReunionPresence).where(ReunionPresence.reunion_id == reunion_id)).all()


@router.put("/{reunion_id}/presences", response_model=PresenceResponse)
def put_presence(
    reunion_id: uuid.UUID,
    body: PresenceRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("reunions", "write")),
):
    reunion = get_or_404(db, Reunion, reunion_id, "reunion")
    try:
        presence = set_presence(db, reunion, **body.model_dump())
        db.commit()
        db.refresh(presence)
        return presence
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("/{reunion_id}/rapports", response_model=list[RapportResponse])
def list_rapports(
    reunion_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    get_or_404(db, Reunion, reunion_id, "reunion")
    return db.scalars(
        select(RapportSeance).where(RapportSeance.reunion_id == reunion_id).order_by(RapportSeance.ordre)
    ).all()


@router.post("/{reunion_id}/rapports", response_model=RapportResponse)
def post_rapport(
    reunion_id: uuid.UUID,
    body: RapportCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("reunions", "write")),
):
    reunion = get_or_404(db, Reunion, reunion_id, "reunion")
    try:
        rapport = add_rapport(db, reunion, **body.model_dump())
        db.commit()
        db.refresh(rapport)
        return rapport
    except Exception:
        db.rollback()
        raise


@router.get("/{reunion_id}/beneficiaires", response_model=list[BeneficiaireResponse])
def list_beneficiaires(
    reunion_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    get_or_404(db, Reunion, reunion_id, "reunion")
    return db.scalars(select(ReunionBeneficiaire).where(ReunionBeneficiaire.reunion_id == reunion_id)).all()


"""
수혜자 지정 API

- 금액은 현재 설정(pourcentage / montant_fixe)으로 계산
- 이미 지정된 회원은 건너뜀

"""
@router.post("/{reunion_id}/beneficiaires", response_model=list[BeneficiaireResponse])
def post_beneficiaires(
    reunion_id: uuid.UUID,
    body: BeneficiairesRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("reunions", "write")),
):
    reunion = get_or_404(db, Reunion, reunion_id, "reunion")
    try:
        created = add_beneficiaires(db, reunion, body.membre_ids)
        db.commit()
        for b in created:
            db.refresh(b)
        return created
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/{reunion_id}/cloturer")
def post_cloturer(
    reunion_id: uuid.UUID,
    body: ClotureReunionRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("reunions", "write")),
):
    reunion = get_or_404(db, Reunion, reunion_id, "reunion")
    try:
        result = close_reunion(db, reunion, sanction_absents=body.sanction_absents)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
    return {
        "message": "Reunion closed",
        "data": {"id": str(reunion.id), "statut": result["reunion"].statut, "sanctions": result["sanctions"]},
    }
