import uuid
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExerciceCreate(BaseModel):
    nom: str = Field(..., min_length=1, max_length=100, examples=["Exercice 2026"])
    date_debut: date
    date_fin: date
    statut: Literal["actif", "cloture"] = "actif"


class ExerciceUpdate(BaseModel):
    nom: Optional[str] = Field(default=None, min_length=1, max_length=100)
    date_debut: Optional[date] = None
    date_fin: Optional[date] = None


class ExerciceResponse(BaseModel):
    id: uuid.UUID
    nom: str
    date_debut: date
    date_fin: date
    statut: str

    model_config = ConfigDict(from_attributes=True)
