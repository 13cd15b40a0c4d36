import uuid
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class OperationCreate(BaseModel):
    type_operation: Literal["entree", "sortie"]
    montant: int = Field(..., gt=0)
    libelle: str = Field(..., min_length=2, max_length=255)
    date_operation: Optional[date] = None
    categorie: Optional[str] = Field(default=None, max_length=50)


class OperationResponse(BaseModel):
    id: uuid.UUID
    type_operation: str
    montant: int
    libelle: str
    date_operation: date
    categorie: Optional[str]
    operateur_id: Optional[uuid.UUID]
    cloture_id: Optional[uuid.UUID]

    model_config = ConfigDict(from_attributes=True)


class BalanceResponse(BaseModel):
    solde_ouverture: int
    total_entrees: int
    total_sorties: int
    solde: int


class ClotureRequest(BaseModel):
    solde_reel: int = Field(..., ge=0)
    notes: Optional[str] = Field(default=None, max_length=500)
    date_cloture: Optional[date] = None


class ClotureResponse(BaseModel):
    id: uuid.UUID
    date_cloture: date
    solde_ouverture: int
    total_entrees: int
    total_sorties: int
    solde_theorique: int
    solde_reel: int
    ecart: int
    notes: Optional[str]
    cloture_par: Optional[uuid.UUID]

    model_config = ConfigDict(from_attributes=True)
