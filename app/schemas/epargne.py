import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EpargneCreate(BaseModel):
    membre_id: uuid.UUID
    montant: int = Field(..., gt=0)
    date_depot: Optional[date] = None
    exercice_id: Optional[uuid.UUID] = None
    reunion_id: Optional[uuid.UUID] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class EpargneResponse(BaseModel):
    id: uuid.UUID
    membre_id: uuid.UUID
    montant: int
    date_depot: date
    statut: str
    exercice_id: Optional[uuid.UUID]
    reunion_id: Optional[uuid.UUID]
    notes: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EpargnantBenefice(BaseModel):
    membre_id: uuid.UUID
    nom: str
    prenom: str
    total_epargne: int
    pourcentage: float
    gains_estimes: int


class BeneficesResponse(BaseModel):
    total_interets: int
    total_epargnes: int
    epargnants: list[EpargnantBenefice]
