import uuid
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class AideTypeCreate(BaseModel):
    nom: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=255)
    montant_defaut: Optional[int] = Field(default=None, ge=0)
    mode_repartition: Literal["equitable", "proportionnel"] = "equitable"
    delai_remboursement: Optional[int] = Field(default=None, ge=0, description="jours")


class AideTypeResponse(BaseModel):
    id: uuid.UUID
    nom: str
    description: Optional[str]
    montant_defaut: Optional[int]
    mode_repartition: str
    delai_remboursement: Optional[int]

    model_config = ConfigDict(from_attributes=True)


class AideCreate(BaseModel):
    beneficiaire_id: uuid.UUID
    type_aide_id: uuid.UUID
    montant: Optional[int] = Field(default=None, gt=0)
    date_allocation: Optional[date] = None
    contexte_aide: Literal["reunion", "sport"] = "reunion"
    justificatif: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None, max_length=500)
    reunion_id: Optional[uuid.UUID] = None
    exercice_id: Optional[uuid.UUID] = None


class AideResponse(BaseModel):
    id: uuid.UUID
    beneficiaire_id: uuid.UUID
    type_aide_id: uuid.UUID
    montant: int
    date_allocation: date
    statut: str
    contexte_aide: str
    justificatif: Optional[str]
    notes: Optional[str]
    reunion_id: Optional[uuid.UUID]
    exercice_id: Optional[uuid.UUID]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
