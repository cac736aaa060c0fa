"""
Schémas Pydantic pour les salles.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class RoomCreate(BaseModel):
    room_number: str
    room_type: str = "Classroom"
    block_name: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)

    @field_validator("room_number", "room_type")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()


class RoomUpdate(BaseModel):
    room_number: Optional[str] = None
    room_type: Optional[str] = None
    block_name: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class RoomResponse(BaseModel):
    id: int
    room_number: str
    room_type: str
    block_name: Optional[str]
    capacity: Optional[int]
    is_active: bool

    model_config = {"from_attributes": True}
