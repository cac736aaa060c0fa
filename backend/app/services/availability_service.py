"""
Index de disponibilité du personnel.

Un enseignant est bloqué sur un créneau si un blocage actif existe :
- récurrent, pour le jour de la semaine de la date demandée ;
- ou ponctuel, pour la date exacte.
Les deux recherches sont indépendantes (OU logique).
"""

from datetime import date, datetime, timezone
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.staff_availability import StaffAvailability

# Table fixe : dimanche = 0 ... samedi = 6
WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

DateLike = Union[str, date, None]


def parse_entry_date(value: DateLike) -> Optional[date]:
    """
    Interprète une date ISO (AAAA-MM-JJ, éventuellement suivie d'une heure).
    Un horodatage avec décalage horaire est ramené à sa date UTC.
    Retourne None si la valeur est illisible : jamais de date par défaut.
    """
    if isinstance(value, datetime):
        return _utc_date(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return _utc_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        return None


def _utc_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def get_day_of_week(value: DateLike) -> Optional[str]:
    """Nom anglais du jour ('Monday', ...) pour une date calendaire, ou None si invalide."""
    parsed = parse_entry_date(value)
    if parsed is None:
        return None
    return WEEKDAYS[parsed.isoweekday() % 7]


def is_blocked_recurring(db: Session, staff_id: int, timeslot_id: int, day_of_week: str) -> bool:
    row = db.execute(
        select(StaffAvailability.id)
        .where(
            StaffAvailability.staff_id == staff_id,
            StaffAvailability.timeslot_id == timeslot_id,
            StaffAvailability.is_active.is_(True),
            StaffAvailability.is_recurring.is_(True),
            StaffAvailability.day_of_week == day_of_week,
        )
        .limit(1)
    ).first()
    return row is not None


def is_blocked_on_date(db: Session, staff_id: int, timeslot_id: int, block_date: date) -> bool:
    row = db.execute(
        select(StaffAvailability.id)
        .where(
            StaffAvailability.staff_id == staff_id,
            StaffAvailability.timeslot_id == timeslot_id,
            StaffAvailability.is_active.is_(True),
            StaffAvailability.is_recurring.is_(False),
            StaffAvailability.block_date == block_date,
        )
        .limit(1)
    ).first()
    return row is not None


def is_blocked(db: Session, staff_id: int, timeslot_id: int, value: DateLike) -> bool:
    """
    Indique si l'enseignant est indisponible sur ce créneau à cette date.
    Lève ValueError si la date est illisible.
    """
    entry_date = parse_entry_date(value)
    if entry_date is None:
        raise ValueError(f"Date invalide : {value!r}.")
    day_of_week = WEEKDAYS[entry_date.isoweekday() % 7]
    if is_blocked_recurring(db, staff_id, timeslot_id, day_of_week):
        return True
    return is_blocked_on_date(db, staff_id, timeslot_id, entry_date)
