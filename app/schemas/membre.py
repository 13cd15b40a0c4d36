import uuid
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

# 이름: 문자 / 공백 / - / ' 만 허용 (악센트 포함)
NAME_PATTERN = r"^[^\W\d_]+(?:[\s'\-][^\W\d_]+)*$"
PHONE_PATTERN = r"^[\d\s\-+()]*$"

MembreStatut = Literal["actif", "inactif", "suspendu"]


class MembreCreate(BaseModel):
    nom: str = Field(..., min_length=2, max_length=50, pattern=NAME_PATTERN)
    prenom: str = Field(..., min_length=2, max_length=50, pattern=NAME_PATTERN)
    email: Optional[EmailStr] = None
    telephone: Optional[str] = Field(default=None, max_length=30, pattern=PHONE_PATTERN)
    statut: MembreStatut = "actif"
    date_inscription: Optional[date] = None
    fonction: Optional[str] = Field(default=None, max_length=100)
    est_membre_e2d: bool = True
    est_adherent_phoenix: bool = False
    equipe_e2d: Optional[str] = Field(default=None, max_length=50)
    equipe_phoenix: Optional[str] = Field(default=None, max_length=50)


class MembreUpdate(BaseModel):
    nom: Optional[str] = Field(default=None, min_length=2, max_length=50, pattern=NAME_PATTERN)
    prenom: Optional[str] = Field(default=None, min_length=2, max_length=50, pattern=NAME_PATTERN)
    email: Optional[EmailStr] = None
    telephone: Optional[str] = Field(default=None, max_length=30, pattern=PHONE_PATTERN)
    statut: Optional[MembreStatut] = None
    fonction: Optional[str] = Field(default=None, max_length=100)
    est_membre_e2d: Optional[bool] = None
    est_adherent_phoenix: Optional[bool] = None
    equipe_e2d: Optional[str] = Field(default=None, max_length=50)
    equipe_phoenix: Optional[str] = Field(default=None, max_length=50)


class MembreResponse(BaseModel):
    id: uuid.UUID
    nom: str
    prenom: str
    email: Optional[str]
    telephone: Optional[str]
    statut: str
    date_inscription: date
    fonction: Optional[str]
    est_membre_e2d: bool
    est_adherent_phoenix: bool
    equipe_e2d: Optional[str]
    equipe_phoenix: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
