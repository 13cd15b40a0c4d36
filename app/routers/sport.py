"""
sport.py

스포츠(E2D / Phoenix) API 모음.

주요 기능:
- 경기 일정 / 결과 관리
- 선수 경기 기록 (골, 도움, 카드, MOM), 경기 출석
- 팀 전적, 선수 순위
- Phoenix 가입자(adherent) 관리, 가입비 미납 목록
- Phoenix 훈련 일정과 훈련 출석, 경기 출전 명단(Jaune / Rouge)
- 팀별 수입 / 지출 기록 및 요약

카드 → 제재 동기화는 sanctions 라우터(/sanctions/sync-cards)에서 수행한다.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.core.deps import get_current_member, get_db, get_or_404, require_permission
from app.models.sport import (
    Match,
    MatchStatistic,
    PhoenixAdherent,
    PhoenixComposition,
    PhoenixEntrainement,
    PhoenixEntrainementPresence,
    SportOperation,
)
from app.models.user import User
from app.schemas.sport import (
    AdherentCreate,
    AdherentResponse,
    CompositionCreate,
    CompositionResponse,
    EntrainementCreate,
    EntrainementPresenceRequest,
    EntrainementPresenceResponse,
    EntrainementResponse,
    EntrainementUpdate,
    MatchCreate,
    MatchPresenceRequest,
    MatchResponse,
    MatchUpdate,
    SportOperationCreate,
    SportOperationResponse,
    StatisticCreate,
    StatisticResponse,
)
from app.services.sport import (
    add_composition,
    add_operation,
    add_phoenix_adherent,
    add_statistic,
    create_entrainement,
    create_match,
    mark_adhesion_paid,
    overdue_adherents,
    player_ranking_for,
    remove_composition,
    set_match_presence,
    set_training_presence,
    team_finances,
    team_record_for,
    training_presence_summary,
    update_entrainement,
    update_match,
)

router = APIRouter(prefix="/sport", tags=["sport"])


@router.get("/matchs", response_model=list[MatchResponse])
def list_matchs(
    equipe: str | None = None,
    statut: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    stmt = select(Match).order_by(desc(Match.date_match))
    if equipe:
        stmt = stmt.where(Match.equipe == equipe)
    if statut:
        stmt = stmt.where(Match.statut == statut)
    return db.scalars(stmt).all()


@router.post("/matchs", response_model=MatchResponse)
def post_match(
    body: MatchCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    try:
        match = create_match(db, **body.model_dump())
        db.commit()
        db.refresh(match)
        return match
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.patch("/matchs/{match_id}", response_model=MatchResponse)
def patch_match(
    match_id: uuid.UUID,
    body: MatchUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    match = get_or_404(db, Match, match_id, "match")
    try:
        update_match(db, match, body.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(match)
        return match
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("/matchs/{match_id}/statistics", response_model=list[StatisticResponse])
def list_statistics(
    match_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    get_or_404(db, Match, match_id, "match")
    return db.scalars(select(MatchStatistic).where(MatchStatistic.match_id == match_id)).all()


@router.post("/matchs/{match_id}/statistics", response_model=StatisticResponse)
def post_statistic(
    match_id: uuid.UUID,
    body: StatisticCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    match = get_or_404(db, Match, match_id, "match")
    try:
        stat = add_statistic(db, match, **body.model_dump())
        db.commit()
        db.refresh(stat)
        return stat
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.put("/matchs/{match_id}/presences")
def put_match_presence(
    match_id: uuid.UUID,
    body: MatchPresenceRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    match = get_or_404(db, Match, match_id, "match")
    try:
        presence = set_match_presence(db, match, **body.model_dump())
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
    return {"data": {"match_id": str(match.id), "membre_id": str(presence.membre_id), "present": presence.present}}


@router.get("/equipes/{equipe}/bilan")
def get_team_record(
    equipe: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    try:
        return team_record_for(db, equipe)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/equipes/{equipe}/finances")
def get_team_finances(
    equipe: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "read")),
):
    try:
        return team_finances(db, equipe)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


"""
선수 순위 API

- category: goals / assists / man_of_match / average_goals / efficiency / discipline / cards
- equipe 지정 시 해당 팀 경기 기록만 집계

"""
@router.get("/classement")
def get_ranking(
    category: str = "goals",
    equipe: str | None = None,
    limit: int = Query(default=20, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    try:
        return player_ranking_for(db, category=category, equipe=equipe, limit=limit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/phoenix/adherents", response_model=list[AdherentResponse])
def list_adherents(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    return db.scalars(select(PhoenixAdherent).order_by(desc(PhoenixAdherent.date_adhesion))).all()


@router.get("/phoenix/adherents/retard", response_model=list[AdherentResponse])
def list_overdue_adherents(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "read")),
):
    return overdue_adherents(db)


@router.post("/phoenix/adherents", response_model=AdherentResponse)
def post_adherent(
    body: AdherentCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    try:
        adherent = add_phoenix_adherent(db, **body.model_dump())
        db.commit()
        db.refresh(adherent)
        return adherent
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.post("/phoenix/adherents/{adherent_id}/payer", response_model=AdherentResponse)
def post_adherent_paid(
    adherent_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    adherent = get_or_404(db, PhoenixAdherent, adherent_id, "adherent")
    try:
        mark_adhesion_paid(db, adherent)
        db.commit()
        db.refresh(adherent)
        return adherent
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("/phoenix/entrainements", response_model=list[EntrainementResponse])
def list_entrainements(
    statut: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    stmt = select(PhoenixEntrainement).order_by(desc(PhoenixEntrainement.date_entrainement))
    if statut:
        stmt = stmt.where(PhoenixEntrainement.statut == statut)
    return db.scalars(stmt).all()


@router.post("/phoenix/entrainements", response_model=EntrainementResponse)
def post_entrainement(
    body: EntrainementCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    try:
        entrainement = create_entrainement(db, **body.model_dump())
        db.commit()
        db.refresh(entrainement)
        return entrainement
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.patch("/phoenix/entrainements/{entrainement_id}", response_model=EntrainementResponse)
def patch_entrainement(
    entrainement_id: uuid.UUID,
    body: EntrainementUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No changes provided")

    entrainement = get_or_404(db, PhoenixEntrainement, entrainement_id, "entrainement")
    try:
        update_entrainement(db, entrainement, changes)
        db.commit()
        db.refresh(entrainement)
        return entrainement
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


"""
훈련 출석 API

- GET  : 출석 목록 + 요약(meta: total / presents / absents / retards / taux_presence)
- PUT  : 회원 1명의 출석을 upsert (Phoenix 가입자만)

"""
@router.get("/phoenix/entrainements/{entrainement_id}/presences")
def list_training_presences(
    entrainement_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    get_or_404(db, PhoenixEntrainement, entrainement_id, "entrainement")
    presences = db.scalars(
        select(PhoenixEntrainementPresence).where(PhoenixEntrainementPresence.entrainement_id == entrainement_id)
    ).all()
    return {
        "data": [EntrainementPresenceResponse.model_validate(p).model_dump(mode="json") for p in presences],
        "meta": training_presence_summary(list(presences)),
    }


@router.put("/phoenix/entrainements/{entrainement_id}/presences", response_model=EntrainementPresenceResponse)
def put_training_presence(
    entrainement_id: uuid.UUID,
    body: EntrainementPresenceRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    entrainement = get_or_404(db, PhoenixEntrainement, entrainement_id, "entrainement")
    try:
        presence = set_training_presence(db, entrainement, **body.model_dump())
        db.commit()
        db.refresh(presence)
        return presence
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.get("/matchs/{match_id}/compositions", response_model=list[CompositionResponse])
def list_compositions(
    match_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_member),
):
    get_or_404(db, Match, match_id, "match")
    return db.scalars(
        select(PhoenixComposition)
        .where(PhoenixComposition.match_id == match_id)
        .order_by(PhoenixComposition.equipe_nom, desc(PhoenixComposition.est_capitaine))
    ).all()


@router.post("/matchs/{match_id}/compositions", response_model=CompositionResponse)
def post_composition(
    match_id: uuid.UUID,
    body: CompositionCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    match = get_or_404(db, Match, match_id, "match")
    try:
        line = add_composition(db, match, **body.model_dump())
        db.commit()
        db.refresh(line)
        return line
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise


@router.delete("/compositions/{composition_id}")
def delete_composition(
    composition_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    line = get_or_404(db, PhoenixComposition, composition_id, "composition")
    try:
        remove_composition(db, line)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return {"message": "Composition deleted", "data": {"id": str(composition_id)}}


@router.get("/operations", response_model=list[SportOperationResponse])
def list_operations(
    equipe: str | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "read")),
):
    stmt = select(SportOperation).order_by(desc(SportOperation.date_operation))
    if equipe:
        stmt = stmt.where(SportOperation.equipe == equipe)
    return db.scalars(stmt).all()


@router.post("/operations", response_model=SportOperationResponse)
def post_operation(
    body: SportOperationCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("sport", "write")),
):
    try:
        op = add_operation(db, **body.model_dump())
        db.commit()
        db.refresh(op)
        return op
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
