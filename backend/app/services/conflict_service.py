"""
Détection des doubles réservations sur un même (date, créneau).

Trois dimensions indépendantes : la classe, l'enseignant et la salle.
Une seule correspondance sur l'une d'elles suffit à créer un conflit.
"""

from datetime import date
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.models.timetable import TimetableEntry


def find_conflicting_entry(
    db: Session,
    entry_date: date,
    timeslot_id: int,
    class_id: int,
    staff_id: int,
    room_id: int,
    exclude_id: Optional[int] = None,
) -> Optional[TimetableEntry]:
    """Retourne la première entrée en conflit, ou None. `exclude_id` ignore l'entrée en cours de modification."""
    stmt = select(TimetableEntry).where(
        TimetableEntry.entry_date == entry_date,
        TimetableEntry.timeslot_id == timeslot_id,
        or_(
            TimetableEntry.class_id == class_id,
            TimetableEntry.staff_id == staff_id,
            TimetableEntry.room_id == room_id,
        ),
    )
    if exclude_id is not None:
        stmt = stmt.where(TimetableEntry.id != exclude_id)
    return db.execute(stmt.order_by(TimetableEntry.id).limit(1)).scalars().first()


def has_conflict(
    db: Session,
    entry_date: date,
    timeslot_id: int,
    class_id: int,
    staff_id: int,
    room_id: int,
    exclude_id: Optional[int] = None,
) -> bool:
    return find_conflicting_entry(
        db, entry_date, timeslot_id, class_id, staff_id, room_id, exclude_id
    ) is not None
