import uuid
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CotisationTypeCreate(BaseModel):
    nom: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=255)
    montant_defaut: Optional[int] = Field(default=None, ge=0)
    obligatoire: bool = False


class CotisationTypeResponse(BaseModel):
    id: uuid.UUID
    nom: str
    description: Optional[str]
    montant_defaut: Optional[int]
    obligatoire: bool

    model_config = ConfigDict(from_attributes=True)


class MembreConfigRequest(BaseModel):
    membre_id: uuid.UUID
    type_cotisation_id: uuid.UUID
    montant_personnalise: int = Field(..., ge=0)


class MembreConfigResponse(MembreConfigRequest):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class CotisationCreate(BaseModel):
    membre_id: uuid.UUID
    type_cotisation_id: uuid.UUID
    # 미지정 시 회원 개별 금액 → 종류 기본 금액 순으로 적용
    montant: Optional[int] = Field(default=None, gt=0)
    date_paiement: Optional[date] = None
    statut: Literal["paye", "partiel", "en_attente"] = "paye"
    reunion_id: Optional[uuid.UUID] = None
    exercice_id: Optional[uuid.UUID] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class CotisationResponse(BaseModel):
    id: uuid.UUID
    membre_id: uuid.UUID
    type_cotisation_id: uuid.UUID
    montant: int
    date_paiement: date
    statut: str
    reunion_id: Optional[uuid.UUID]
    exercice_id: Optional[uuid.UUID]
    notes: Optional[str]
    created_by: Optional[uuid.UUID]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CotisationStatusRow(BaseModel):
    membre_id: uuid.UUID
    nom: str
    prenom: str
    amount_due: int
    paid_amount: int
    status: Literal["PAID", "PARTIAL", "UNPAID", "NO_CHARGE"]
