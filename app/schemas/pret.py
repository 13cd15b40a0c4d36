import uuid
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PaymentMode = Literal["especes", "virement", "mobile_money", "cheque"]


class PretCreate(BaseModel):
    membre_id: uuid.UUID
    avaliste_id: Optional[uuid.UUID] = None
    montant: int = Field(..., gt=0)
    taux_interet: float = Field(default=5.0, ge=0, le=50)
    date_pret: Optional[date] = None
    echeance: date
    notes: Optional[str] = Field(default=None, max_length=1000)


class PretResponse(BaseModel):
    id: uuid.UUID
    membre_id: uuid.UUID
    avaliste_id: Optional[uuid.UUID]
    montant: int
    taux_interet: float
    date_pret: date
    echeance: date
    reconductions: int
    montant_paye: int
    montant_total_du: int
    statut: str
    notes: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PretPaiementCreate(BaseModel):
    montant: int = Field(..., gt=0)
    date_paiement: Optional[date] = None
    mode_paiement: PaymentMode = "especes"
    notes: Optional[str] = Field(default=None, max_length=500)


class PretPaiementResponse(BaseModel):
    id: uuid.UUID
    pret_id: uuid.UUID
    montant_paye: int
    date_paiement: date
    mode_paiement: str
    notes: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class RemboursementTotalRequest(BaseModel):
    mode_paiement: PaymentMode = "especes"


class ReconductionRequest(BaseModel):
    # 미지정 시 기존 만기 + 2개월
    nouvelle_echeance: Optional[date] = None


class PretDashboard(BaseModel):
    total_prets: int
    total_en_cours: int
    total_paye: int
    total_en_retard: int
    total_interets: int
    nombre_prets: int
    nombre_en_cours: int
    nombre_rembourses: int
    nombre_en_retard: int
    nombre_annules: int
