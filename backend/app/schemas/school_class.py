"""
Schémas Pydantic pour les classes.
student_count est calculé côté serveur : il n'apparaît que dans la réponse.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class ClassCreate(BaseModel):
    name: str
    course_name: Optional[str] = None
    semester: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom de la classe ne peut pas être vide.")
        return v.strip()


class ClassUpdate(BaseModel):
    name: Optional[str] = None
    course_name: Optional[str] = None
    semester: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le nom de la classe ne peut pas être vide.")
        return v.strip() if v else v


class ClassResponse(BaseModel):
    id: int
    name: str
    course_name: Optional[str]
    semester: Optional[int]
    student_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
