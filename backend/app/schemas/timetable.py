"""
Schémas Pydantic pour les entrées d'emploi du temps.

Les champs de création sont optionnels au niveau du schéma : leur présence et
la lisibilité de la date sont contrôlées par le pipeline de validation, qui
renvoie des messages métier (400) plutôt qu'une erreur Pydantic générique.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel


class TimetableEntryCreate(BaseModel):
    class_id: Optional[int] = None
    subject_code: Optional[str] = None
    staff_id: Optional[int] = None
    room_id: Optional[int] = None
    timeslot_id: Optional[int] = None
    date: Optional[str] = None
    is_lab: Optional[bool] = None


class TimetableEntryUpdate(TimetableEntryCreate):
    """Mise à jour partielle : les champs absents reprennent la valeur enregistrée."""


class TimetableEntryResponse(BaseModel):
    id: int
    class_id: int
    subject_code: str
    staff_id: int
    room_id: int
    timeslot_id: int
    date: dt.date
    day_of_week: str
    is_lab: bool
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class TimetableErrorResponse(BaseModel):
    """Corps renvoyé quand une entrée est refusée."""
    error: str
    code: str
    category: str
