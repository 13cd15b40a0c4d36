import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.schemas.membre import NAME_PATTERN, PHONE_PATTERN


class AdhesionCreate(BaseModel):
    nom: str = Field(..., min_length=2, max_length=50, pattern=NAME_PATTERN)
    prenom: str = Field(..., min_length=2, max_length=50, pattern=NAME_PATTERN)
    email: EmailStr
    telephone: str = Field(..., min_length=6, max_length=30, pattern=PHONE_PATTERN)
    message: Optional[str] = Field(default=None, max_length=1000)
    type_adhesion: Literal["e2d", "phoenix", "both"]
    # 미지정 시 요금표 금액, 지정했는데 요금과 다르면 거부
    montant_paye: Optional[int] = Field(default=None, gt=0)
    payment_method: Optional[str] = Field(default=None, max_length=30)


class AdhesionResponse(BaseModel):
    id: uuid.UUID
    nom: str
    prenom: str
    email: str
    telephone: str
    type_adhesion: str
    montant_paye: int
    payment_status: str
    statut: str
    membre_id: Optional[uuid.UUID]
    processed_at: Optional[datetime]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DonationCreate(BaseModel):
    donor_name: str = Field(..., min_length=2, max_length=100)
    donor_email: EmailStr
    donor_phone: Optional[str] = Field(default=None, max_length=30, pattern=PHONE_PATTERN)
    donor_message: Optional[str] = Field(default=None, max_length=1000)
    amount: int = Field(..., gt=0)
    currency: Literal["EUR", "XOF"] = "EUR"
    payment_method: Optional[str] = Field(default=None, max_length=30)
    recurring: Literal["once", "monthly", "yearly"] = "once"
    is_anonymous: bool = False


class DonationResponse(BaseModel):
    id: uuid.UUID
    donor_name: str
    donor_email: str
    amount: int
    currency: str
    payment_status: str
    recurring: str
    is_anonymous: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContactCreate(BaseModel):
    nom: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    objet: Optional[str] = Field(default=None, max_length=255)
    message: str = Field(..., min_length=10, max_length=2000)


class ContactResponse(BaseModel):
    id: uuid.UUID
    nom: str
    email: str
    objet: Optional[str]
    message: str
    statut: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
