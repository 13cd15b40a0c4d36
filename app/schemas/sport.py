import uuid
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Equipe = Literal["e2d", "phoenix"]
MatchStatut = Literal["prevu", "termine", "annule", "reporte"]


class MatchCreate(BaseModel):
    equipe: Equipe
    date_match: date
    heure_match: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    equipe_adverse: str = Field(..., min_length=2, max_length=100)
    lieu: Optional[str] = Field(default=None, max_length=255)
    type_match: Literal["amical", "championnat", "coupe", "tournoi"] = "amical"
    statut: MatchStatut = "prevu"
    score_equipe: Optional[int] = Field(default=None, ge=0)
    score_adverse: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=1000)


class MatchUpdate(BaseModel):
    date_match: Optional[date] = None
    heure_match: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    lieu: Optional[str] = Field(default=None, max_length=255)
    statut: Optional[MatchStatut] = None
    score_equipe: Optional[int] = Field(default=None, ge=0)
    score_adverse: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=1000)


class MatchResponse(BaseModel):
    id: uuid.UUID
    equipe: str
    date_match: date
    heure_match: Optional[str]
    equipe_adverse: str
    lieu: Optional[str]
    type_match: str
    statut: str
    score_equipe: Optional[int]
    score_adverse: Optional[int]
    notes: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class StatisticCreate(BaseModel):
    membre_id: Optional[uuid.UUID] = None
    player_name: Optional[str] = Field(default=None, max_length=100)
    goals: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    yellow_cards: int = Field(default=0, ge=0, le=2)
    red_cards: int = Field(default=0, ge=0, le=1)
    man_of_match: bool = False


class StatisticResponse(BaseModel):
    id: uuid.UUID
    match_id: uuid.UUID
    membre_id: Optional[uuid.UUID]
    player_name: str
    goals: int
    assists: int
    yellow_cards: int
    red_cards: int
    man_of_match: bool
    cards_synced: bool

    model_config = ConfigDict(from_attributes=True)


class MatchPresenceRequest(BaseModel):
    membre_id: uuid.UUID
    present: bool = True


class AdherentCreate(BaseModel):
    membre_id: uuid.UUID
    montant_adhesion: int = Field(..., ge=0)
    adhesion_payee: bool = False
    date_adhesion: Optional[date] = None
    date_limite_paiement: Optional[date] = None


class AdherentResponse(BaseModel):
    id: uuid.UUID
    membre_id: uuid.UUID
    date_adhesion: date
    montant_adhesion: int
    adhesion_payee: bool
    date_limite_paiement: Optional[date]

    model_config = ConfigDict(from_attributes=True)


class SportOperationCreate(BaseModel):
    equipe: Equipe
    type_operation: Literal["recette", "depense"]
    montant: int = Field(..., gt=0)
    libelle: str = Field(..., min_length=2, max_length=255)
    date_operation: Optional[date] = None


class SportOperationResponse(BaseModel):
    id: uuid.UUID
    equipe: str
    type_operation: str
    montant: int
    libelle: str
    date_operation: date

    model_config = ConfigDict(from_attributes=True)


TypeEntrainement = Literal["normal", "intensif", "technique", "physique", "interne"]
EquipeInterne = Literal["Jaune", "Rouge"]


class EntrainementCreate(BaseModel):
    date_entrainement: date
    heure_debut: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    heure_fin: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    lieu: Optional[str] = Field(default=None, max_length=255)
    type_entrainement: TypeEntrainement = "normal"
    statut: MatchStatut = "prevu"
    score_jaune: Optional[int] = Field(default=None, ge=0)
    score_rouge: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=1000)


class EntrainementUpdate(BaseModel):
    date_entrainement: Optional[date] = None
    heure_debut: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    heure_fin: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    lieu: Optional[str] = Field(default=None, max_length=255)
    statut: Optional[MatchStatut] = None
    score_jaune: Optional[int] = Field(default=None, ge=0)
    score_rouge: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=1000)


class EntrainementResponse(BaseModel):
    id: uuid.UUID
    date_entrainement: date
    heure_debut: Optional[str]
    heure_fin: Optional[str]
    lieu: Optional[str]
    type_entrainement: str
    statut: str
    score_jaune: Optional[int]
    score_rouge: Optional[int]
    equipe_gagnante: Optional[str]
    notes: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class EntrainementPresenceRequest(BaseModel):
    membre_id: uuid.UUID
    present: bool = True
    retard_minutes: int = Field(default=0, ge=0, le=240)
    excuse: Optional[str] = Field(default=None, max_length=255)


class EntrainementPresenceResponse(BaseModel):
    id: uuid.UUID
    entrainement_id: uuid.UUID
    membre_id: uuid.UUID
    present: bool
    retard_minutes: int
    excuse: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class CompositionCreate(BaseModel):
    membre_id: uuid.UUID
    equipe_nom: EquipeInterne = "Jaune"
    poste: Optional[str] = Field(default=None, max_length=50)
    est_capitaine: bool = False


class CompositionResponse(BaseModel):
    id: uuid.UUID
    match_id: uuid.UUID
    membre_id: uuid.UUID
    equipe_nom: str
    poste: Optional[str]
    est_capitaine: bool

    model_config = ConfigDict(from_attributes=True)
