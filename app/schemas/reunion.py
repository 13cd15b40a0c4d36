import uuid
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ReunionStatut = Literal["planifie", "en_cours", "terminee", "annulee"]


class ReunionCreate(BaseModel):
    date_reunion: date
    type_reunion: Literal["mensuelle", "extraordinaire", "assemblee_generale"] = "mensuelle"
    sujet: Optional[str] = Field(default=None, max_length=255)
    ordre_du_jour: Optional[str] = Field(default=None, max_length=2000)
    lieu_membre_id: Optional[uuid.UUID] = None
    lieu_description: Optional[str] = Field(default=None, max_length=255)


class ReunionUpdate(BaseModel):
    sujet: Optional[str] = Field(default=None, max_length=255)
    ordre_du_jour: Optional[str] = Field(default=None, max_length=2000)
    lieu_membre_id: Optional[uuid.UUID] = None
    lieu_description: Optional[str] = Field(default=None, max_length=255)
    statut: Optional[Literal["planifie", "en_cours", "annulee"]] = None


class ReunionResponse(BaseModel):
    id: uuid.UUID
    date_reunion: date
    type_reunion: str
    sujet: Optional[str]
    ordre_du_jour: Optional[str]
    lieu_membre_id: Optional[uuid.UUID]
    lieu_description: Optional[str]
    statut: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PresenceRequest(BaseModel):
    membre_id: uuid.UUID
    present: bool
    heure_arrivee: Optional[str] = Field(default=None, max_length=10, pattern=r"^\d{2}:\d{2}$")
    observations: Optional[str] = Field(default=None, max_length=255)


class PresenceResponse(BaseModel):
    id: uuid.UUID
    reunion_id: uuid.UUID
    membre_id: uuid.UUID
    present: bool
    heure_arrivee: Optional[str]
    observations: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class RapportCreate(BaseModel):
    sujet: str = Field(..., min_length=2, max_length=255)
    resolution: Optional[str] = Field(default=None, max_length=2000)


class RapportResponse(BaseModel):
    id: uuid.UUID
    reunion_id: uuid.UUID
    sujet: str
    resolution: Optional[str]
    ordre: int

    model_config = ConfigDict(from_attributes=True)


class BeneficiaireConfigRequest(BaseModel):
    mode_calcul: Literal["pourcentage", "montant_fixe"] = "pourcentage"
    pourcentage: Optional[float] = Field(default=None, ge=0, le=100)
    montant_fixe: Optional[int] = Field(default=None, gt=0)


class BeneficiaireConfigResponse(BaseModel):
    mode_calcul: str
    pourcentage: Optional[float]
    montant_fixe: Optional[int]

    model_config = ConfigDict(from_attributes=True)


class BeneficiairesRequest(BaseModel):
    membre_ids: list[uuid.UUID] = Field(..., min_length=1)


class BeneficiaireResponse(BaseModel):
    id: uuid.UUID
    reunion_id: uuid.UUID
    membre_id: uuid.UUID
    montant: int
    statut: str
    date_paiement: Optional[date]

    model_config = ConfigDict(from_attributes=True)


class ClotureReunionRequest(BaseModel):
    sanction_absents: bool = False
