"""
services/sport.py

축구 클럽(E2D / Phoenix) 비즈니스 로직.

주요 기능:
- 경기 등록 / 결과 입력
- 선수별 경기 기록, 경기 출석
- 팀 전적 (승 / 무 / 패, 득실, 승률)
- 선수 순위 (골, 도움, MVP, 경기당 골, 효율, 징계 지수)
- Phoenix 연회비 가입자 관리 (미납 / 기한 초과 목록)
- Phoenix 훈련 일정, 훈련 출석 (지각, 사유) 과 출석 요약
- Phoenix 경기 출전 명단 (Jaune / Rouge, 포지션, 팀당 주장 1명)
- 팀별 수입 / 지출, 잔액

"""

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.membre import Membre
from app.models.sport import (
    Match,
    MatchPresence,
    MatchStatistic,
    PhoenixAdherent,
    PhoenixComposition,
    PhoenixEntrainement,
    PhoenixEntrainementPresence,
    SportOperation,
)
from app.services.common import safe_pct, sum_of

logger = logging.getLogger(__name__)

EQUIPES = ("e2d", "phoenix")
RANKING_CATEGORIES = ("goals", "assists", "man_of_match", "average_goals", "efficiency", "discipline", "cards")
POSTES = (
    "Gardien",
    "Défenseur central",
    "Défenseur droit",
    "Défenseur gauche",
    "Milieu défensif",
    "Milieu central",
    "Milieu offensif",
    "Ailier droit",
    "Ailier gauche",
    "Attaquant",
    "Avant-centre",
)
EQUIPES_INTERNES = ("Jaune", "Rouge")


def _check_equipe(equipe: str) -> None:
    if equipe not in EQUIPES:
        raise ValueError("equipe must be 'e2d' or 'phoenix'")


def create_match(db: Session, *, equipe: str, date_match: date, equipe_adverse: str, **fields) -> Match:
    _check_equipe(equipe)
    match = Match(
        equipe=equipe,
        date_match=date_match,
        equipe_adverse=equipe_adverse,
        **{k: v for k, v in fields.items() if v is not None},
    )
    if match.statut == "termine" and (match.score_equipe is None or match.score_adverse is None):
        raise ValueError("a finished match needs both scores")
    db.add(match)
    db.flush()
    logger.info("match created: %s vs %s (%s)", equipe, equipe_adverse, date_match)
    return match


def update_match(db: Session, match: Match, changes: dict) -> Match:
    for field, value in changes.items():
        setattr(match, field, value)
    if match.statut == "termine" and (match.score_equipe is None or match.score_adverse is None):
        raise ValueError("a finished match needs both scores")
    for score in (match.score_equipe, match.score_adverse):
        if score is not None and score < 0:
            raise ValueError("scores must not be negative")
    db.flush()
    return match


def add_statistic(db: Session, match: Match, *, player_name: str | None = None,
                  membre_id: uuid.UUID | None = None, **counters) -> MatchStatistic:
    if membre_id is not None:
        membre = db.get(Membre, membre_id)
        if membre is None:
            raise ValueError("membre not found")
        player_name = player_name or f"{membre.prenom} {membre.nom}"
    if not player_name:
        raise ValueError("player_name or membre_id is required")
    for key, value in counters.items():
        if isinstance(value, int) and not isinstance(value, bool) and value < 0:
            raise ValueError(f"{key} must not be negative")

    stat = MatchStatistic(match_id=match.id, membre_id=membre_id, player_name=player_name, **counters)
    db.add(stat)
    db.flush()
    return stat


def set_match_presence(db: Session, match: Match, *, membre_id: uuid.UUID, present: bool) -> MatchPresence:
    if db.get(Membre, membre_id) is None:
        raise ValueError("membre not found")
    presence = db.scalar(
        select(MatchPresence).where(MatchPresence.match_id == match.id, MatchPresence.membre_id == membre_id)
    )
    if presence is None:
        presence = MatchPresence(match_id=match.id, membre_id=membre_id)
        db.add(presence)
    presence.present = present
    db.flush()
    return presence


"""
팀 전적 집계 (순수 함수)

- statut='termine' 이고 두 점수가 모두 있는 경기만 대상
- pourcentage_victoires: 경기가 없으면 0

"""

def team_record(matches: list[Match]) -> dict:
    record = {"matchs": 0, "victoires": 0, "nuls": 0, "defaites": 0, "buts_pour": 0, "buts_contre": 0}
    for m in matches:
        if m.statut != "termine" or m.score_equipe is None or m.score_adverse is None:
            continue
        record["matchs"] += 1
        record["buts_pour"] += m.score_equipe
        record["buts_contre"] += m.score_adverse
        if m.score_equipe > m.score_adverse:
            record["victoires"] += 1
        elif m.score_equipe == m.score_adverse:
            record["nuls"] += 1
        else:
            record["defaites"] += 1
    record["difference"] = record["buts_pour"] - record["buts_contre"]
    record["pourcentage_victoires"] = safe_pct(record["victoires"], record["matchs"])
    return record


def team_record_for(db: Session, equipe: str) -> dict:
    _check_equipe(equipe)
    matches = db.scalars(select(Match).where(Match.equipe == equipe)).all()
    return {"equipe": equipe, **team_record(list(matches))}


"""
선수 순위

- 선수 키: membre_id 가 있으면 회원 기준, 없으면 player_name 기준
- total_cards = jaunes + rouges * 2
- efficiency  = (goals*3 + assists*2 - total_cards) / matchs
- discipline  = max(0, 10 - total_cards * 0.5)
- category 값 내림차순, cards 는 많은 순 (징계 대상 확인용)

"""

def player_ranking(stats: list[tuple[MatchStatistic, str]], category: str = "goals", limit: int = 20) -> list[dict]:
    if category not in RANKING_CATEGORIES:
        raise ValueError(f"category must be one of {', '.join(RANKING_CATEGORIES)}")

    players: dict = {}
    for stat, equipe in stats:
        key = stat.membre_id or stat.player_name
        p = players.setdefault(key, {
            "membre_id": str(stat.membre_id) if stat.membre_id else None,
            "player_name": stat.player_name,
            "equipe": equipe,
            "matchs": 0,
            "goals": 0,
            "assists": 0,
            "yellow_cards": 0,
            "red_cards": 0,
            "man_of_match": 0,
        })
        p["matchs"] += 1
        p["goals"] += stat.goals
        p["assists"] += stat.assists
        p["yellow_cards"] += stat.yellow_cards
        p["red_cards"] += stat.red_cards
        p["man_of_match"] += 1 if stat.man_of_match else 0

    rows = []
    for p in players.values():
        total_cards = p["yellow_cards"] + p["red_cards"] * 2
        n = p["matchs"]
        p["cards"] = total_cards
        p["average_goals"] = round(p["goals"] / n, 2) if n else 0.0
        p["efficiency"] = round((p["goals"] * 3 + p["assists"] * 2 - total_cards) / n, 2) if n else 0.0
        p["discipline"] = max(0.0, 10 - total_cards * 0.5)
        rows.append(p)

    rows.sort(key=lambda r: r[category], reverse=True)
    return rows[:limit]


def player_ranking_for(db: Session, *, category: str = "goals", equipe: str | None = None, limit: int = 20) -> list[dict]:
    stmt = select(MatchStatistic, Match.equipe).join(Match, Match.id == MatchStatistic.match_id)
    if equipe:
        _check_equipe(equipe)
        stmt = stmt.where(Match.equipe == equipe)
    rows = db.execute(stmt).all()
    return player_ranking([(stat, eq) for stat, eq in rows], category=category, limit=limit)


def add_phoenix_adherent(db: Session, *, membre_id: uuid.UUID, montant_adhesion: int,
                         adhesion_payee: bool = False, date_adhesion: date | None = None,
                         date_limite_paiement: date | None = None) -> PhoenixAdherent:
    membre = db.get(Membre, membre_id)
    if membre is None:
        raise ValueError("membre not found")
    if db.scalar(select(PhoenixAdherent).where(PhoenixAdherent.membre_id == membre_id)):
        raise ValueError("membre is already a Phoenix adherent")
    if montant_adhesion < 0:
        raise ValueError("montant_adhesion must not be negative")

    adherent = PhoenixAdherent(
        membre_id=membre_id,
        montant_adhesion=montant_adhesion,
        adhesion_payee=adhesion_payee,
        date_adhesion=date_adhesion or date.today(),
        date_limite_paiement=date_limite_paiement,
    )
    membre.est_adherent_phoenix = True
    db.add(adherent)
    db.flush()
    return adherent


def mark_adhesion_paid(db: Session, adherent: PhoenixAdherent) -> PhoenixAdherent:
    if adherent.adhesion_payee:
        raise ValueError("adhesion already paid")
    adherent.adhesion_payee = True
    db.flush()
    return adherent


def overdue_adherents(db: Session, today: date | None = None) -> list[PhoenixAdherent]:
    today = today or date.today()
    return list(
        db.scalars(
            select(PhoenixAdherent).where(
                PhoenixAdherent.adhesion_payee.is_(False),
                PhoenixAdherent.date_limite_paiement.is_not(None),
                PhoenixAdherent.date_limite_paiement < today,
            )
        ).all()
    )


def _require_adherent(db: Session, membre_id: uuid.UUID) -> None:
    if db.get(Membre, membre_id) is None:
        raise ValueError("membre not found")
    if db.scalar(select(PhoenixAdherent.id).where(PhoenixAdherent.membre_id == membre_id)) is None:
        raise ValueError("membre is not a Phoenix adherent")


"""
훈련 결과 검증

- 점수는 내부 청백전(type_entrainement='interne')에만 입력
- 끝난 청백전은 두 점수 필수, equipe_gagnante 는 점수로 계산 (Jaune / Rouge / nul)

"""

def _settle_entrainement(entrainement: PhoenixEntrainement) -> None:
    has_score = entrainement.score_jaune is not None or entrainement.score_rouge is not None
    if entrainement.type_entrainement != "interne":
        if has_score:
            raise ValueError("scores only apply to internal trainings")
        return
    if entrainement.statut != "termine":
        entrainement.equipe_gagnante = None
        return
    if entrainement.score_jaune is None or entrainement.score_rouge is None:
        raise ValueError("a finished internal training needs both scores")
    if entrainement.score_jaune > entrainement.score_rouge:
        entrainement.equipe_gagnante = "Jaune"
    elif entrainement.score_rouge > entrainement.score_jaune:
        entrainement.equipe_gagnante = "Rouge"
    else:
        entrainement.equipe_gagnante = "nul"


def create_entrainement(db: Session, *, date_entrainement: date, **fields) -> PhoenixEntrainement:
    entrainement = PhoenixEntrainement(
        date_entrainement=date_entrainement,
        **{k: v for k, v in fields.items() if v is not None},
    )
    entrainement.type_entrainement = entrainement.type_entrainement or "normal"
    entrainement.statut = entrainement.statut or "prevu"
    _settle_entrainement(entrainement)
    db.add(entrainement)
    db.flush()
    logger.info("phoenix training created: %s (%s)", date_entrainement, entrainement.type_entrainement)
    return entrainement


def update_entrainement(db: Session, entrainement: PhoenixEntrainement, changes: dict) -> PhoenixEntrainement:
    for field, value in changes.items():
        setattr(entrainement, field, value)
    _settle_entrainement(entrainement)
    db.flush()
    return entrainement


def set_training_presence(db: Session, entrainement: PhoenixEntrainement, *, membre_id: uuid.UUID,
                          present: bool, retard_minutes: int = 0,
                          excuse: str | None = None) -> PhoenixEntrainementPresence:
    if entrainement.statut == "annule":
        raise ValueError("training is annule")
    _require_adherent(db, membre_id)
    if retard_minutes < 0:
        raise ValueError("retard_minutes must not be negative")

    presence = db.scalar(
        select(PhoenixEntrainementPresence).where(
            PhoenixEntrainementPresence.entrainement_id == entrainement.id,
            PhoenixEntrainementPresence.membre_id == membre_id,
        )
    )
    if presence is None:
        presence = PhoenixEntrainementPresence(entrainement_id=entrainement.id, membre_id=membre_id)
        db.add(presence)
    presence.present = present
    # 결석이면 지각 시간은 의미 없음
    presence.retard_minutes = retard_minutes if present else 0
    presence.excuse = excuse
    db.flush()
    return presence


def training_presence_summary(presences: list[PhoenixEntrainementPresence]) -> dict:
    presents = sum(1 for p in presences if p.present)
    return {
        "total": len(presences),
        "presents": presents,
        "absents": len(presences) - presents,
        "retards": sum(1 for p in presences if p.present and p.retard_minutes > 0),
        "taux_presence": safe_pct(presents, len(presences)),
    }


"""
경기 출전 명단

- Phoenix 경기에만 작성, 취소된 경기는 불가
- 선수는 Phoenix 가입자여야 하고 한 경기에 한 번만 등록
- poste 는 정해진 포지션 목록 중 하나 (미지정 가능)
- Jaune / Rouge 각 팀의 주장은 한 명

"""

def add_composition(db: Session, match: Match, *, membre_id: uuid.UUID, equipe_nom: str = "Jaune",
                    poste: str | None = None, est_capitaine: bool = False) -> PhoenixComposition:
    if match.equipe != "phoenix":
        raise ValueError("compositions are only kept for Phoenix matches")
    if match.statut == "annule":
        raise ValueError("match is annule")
    if equipe_nom not in EQUIPES_INTERNES:
        raise ValueError("equipe_nom must be 'Jaune' or 'Rouge'")
    if poste is not None and poste not in POSTES:
        raise ValueError(f"unknown poste: {poste}")
    _require_adherent(db, membre_id)

    if db.scalar(
        select(PhoenixComposition.id).where(
            PhoenixComposition.match_id == match.id, PhoenixComposition.membre_id == membre_id
        )
    ):
        raise ValueError("membre is already in this composition")
    if est_capitaine and db.scalar(
        select(PhoenixComposition.id).where(
            PhoenixComposition.match_id == match.id,
            PhoenixComposition.equipe_nom == equipe_nom,
            PhoenixComposition.est_capitaine.is_(True),
        )
    ):
        raise ValueError(f"equipe {equipe_nom} already has a captain")

    line = PhoenixComposition(
        match_id=match.id,
        membre_id=membre_id,
        equipe_nom=equipe_nom,
        poste=poste,
        est_capitaine=est_capitaine,
    )
    db.add(line)
    db.flush()
    return line


def remove_composition(db: Session, line: PhoenixComposition) -> None:
    db.delete(line)
    db.flush()


def add_operation(db: Session, *, equipe: str, type_operation: str, montant: int, libelle: str,
                  date_operation: date | None = None) -> SportOperation:
    _check_equipe(equipe)
    if type_operation not in ("recette", "depense"):
        raise ValueError("type_operation must be 'recette' or 'depense'")
    if montant <= 0:
        raise ValueError("montant must be greater than 0")
    op = SportOperation(
        equipe=equipe,
        type_operation=type_operation,
        montant=montant,
        libelle=libelle,
        date_operation=date_operation or date.today(),
    )
    db.add(op)
    db.flush()
    return op


def team_finances(db: Session, equipe: str) -> dict:
    _check_equipe(equipe)
    recettes = sum_of(db, SportOperation.montant, SportOperation.equipe == equipe,
                      SportOperation.type_operation == "recette")
    depenses = sum_of(db, SportOperation.montant, SportOperation.equipe == equipe,
                      SportOperation.type_operation == "depense")
    result = {"equipe": equipe, "recettes": recettes, "depenses": depenses, "solde": recettes - depenses}
    if equipe == "phoenix":
        result["adhesions_payees"] = sum_of(
            db, PhoenixAdherent.montant_adhesion, PhoenixAdherent.adhesion_payee.is_(True)
        )
    return result
