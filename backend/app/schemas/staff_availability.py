"""
Schémas Pydantic pour les blocages de disponibilité du personnel.
La cohérence récurrent / ponctuel est contrôlée par le service (400).
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class StaffAvailabilityCreate(BaseModel):
    staff_id: Optional[int] = None
    timeslot_id: Optional[int] = None
    is_recurring: Optional[bool] = None
    day_of_week: Optional[str] = None
    date: Optional[str] = None
    reason: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = True


class StaffAvailabilityUpdate(BaseModel):
    staff_id: Optional[int] = None
    timeslot_id: Optional[int] = None
    is_recurring: Optional[bool] = None
    day_of_week: Optional[str] = None
    date: Optional[str] = None
    reason: Optional[str] = Field(default=None, max_length=255)
    is_active: Optional[bool] = None


class StaffAvailabilityResponse(BaseModel):
    id: int
    staff_id: int
    timeslot_id: int
    is_recurring: bool
    day_of_week: Optional[str]
    date: Optional[dt.date]
    reason: Optional[str]
    is_active: bool
