import uuid
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Contexte = Literal["reunion", "sport"]


class SanctionTypeCreate(BaseModel):
    nom: str = Field(..., min_length=2, max_length=100)
    montant: int = Field(..., ge=0)
    contexte: Contexte = "reunion"
    categorie: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = Field(default=None, max_length=255)


class SanctionTypeResponse(BaseModel):
    id: uuid.UUID
    nom: str
    montant: int
    contexte: str
    categorie: Optional[str]
    description: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class SanctionCreate(BaseModel):
    membre_id: uuid.UUID
    type_sanction_id: uuid.UUID
    # 미지정 시 종류의 기본 금액
    montant: Optional[int] = Field(default=None, ge=0)
    date_sanction: Optional[date] = None
    motif: Optional[str] = Field(default=None, min_length=10, max_length=1000)
    contexte_sanction: Optional[Contexte] = None
    reunion_id: Optional[uuid.UUID] = None


class CardSanctionCreate(BaseModel):
    membre_id: uuid.UUID
    card: Literal["jaune", "rouge"]
    motif: Optional[str] = Field(default=None, max_length=1000)
    date_sanction: Optional[date] = None


class SanctionPaiementRequest(BaseModel):
    montant: int = Field(..., gt=0)


class SanctionResponse(BaseModel):
    id: uuid.UUID
    membre_id: uuid.UUID
    type_sanction_id: uuid.UUID
    montant: int
    montant_paye: int
    date_sanction: date
    motif: Optional[str]
    statut: str
    contexte_sanction: str
    reunion_id: Optional[uuid.UUID]
    source_statistic_id: Optional[uuid.UUID]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
