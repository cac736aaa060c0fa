"""
Schémas Pydantic pour les élèves.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

PHONE_PATTERN = re.compile(r"^[0-9]{10}$")


class StudentCreate(BaseModel):
    """Schéma de création d'un élève (POST /students)."""
    roll_number: str
    student_name: str
    email: EmailStr
    phone_number: str
    admission_year: int
    batch: str
    class_id: int

    @field_validator("roll_number", "student_name", "batch")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()

    @field_validator("roll_number")
    @classmethod
    def roll_number_upper(cls, v: str) -> str:
        return v.upper()

    @field_validator("phone_number")
    @classmethod
    def phone_ten_digits(cls, v: str) -> str:
        if not PHONE_PATTERN.match(v.strip()):
            raise ValueError("Le numéro de téléphone doit contenir 10 chiffres.")
        return v.strip()


class StudentUpdate(BaseModel):
    """Schéma de mise à jour d'un élève (PUT /students/{id}). Les champs absents ne sont pas modifiés."""
    roll_number: Optional[str] = None
    student_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None
    admission_year: Optional[int] = None
    batch: Optional[str] = None
    class_id: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("roll_number", "student_name", "batch")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip() if v else v

    @field_validator("phone_number")
    @classmethod
    def phone_ten_digits(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not PHONE_PATTERN.match(v.strip()):
            raise ValueError("Le numéro de téléphone doit contenir 10 chiffres.")
        return v.strip() if v else v


class StudentResponse(BaseModel):
    """Schéma de réponse pour un élève (GET /students)."""
    id: int
    roll_number: str
    student_name: str
    email: Optional[str]
    phone_number: Optional[str]
    admission_year: Optional[int]
    batch: Optional[str]
    class_id: Optional[int]
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
