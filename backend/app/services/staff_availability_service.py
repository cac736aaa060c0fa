"""
Service métier pour les blocages de disponibilité du personnel.

Un blocage récurrent ne garde que day_of_week, un blocage ponctuel ne garde
que la date : le champ inutilisé est remis à NULL à chaque écriture.
"""

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.staff import Staff
from app.models.staff_availability import StaffAvailability
from app.models.timeslot import Timeslot
from app.schemas.staff_availability import (
    StaffAvailabilityCreate,
    StaffAvailabilityResponse,
    StaffAvailabilityUpdate,
)
from app.services.availability_service import WEEKDAYS, parse_entry_date

logger = logging.getLogger(__name__)


def validate_block(payload: dict[str, Any]) -> Optional[str]:
    """Retourne le message d'erreur du premier contrôle échoué, ou None."""
    if payload.get("staff_id") is None or payload.get("timeslot_id") is None:
        return "staff_id et timeslot_id sont obligatoires."

    is_recurring = payload.get("is_recurring")
    if is_recurring is True:
        if not payload.get("day_of_week"):
            return "day_of_week est obligatoire pour un blocage récurrent."
        if payload["day_of_week"] not in WEEKDAYS:
            return f"Jour de la semaine invalide : {payload['day_of_week']}."
    elif is_recurring is False:
        if not payload.get("date"):
            return "date est obligatoire pour un blocage ponctuel."
        if parse_entry_date(payload["date"]) is None:
            return "Format de date invalide. Utilisez le format AAAA-MM-JJ."
    else:
        return "is_recurring doit valoir true ou false."
    return None


def create_block(db: Session, data: StaffAvailabilityCreate) -> StaffAvailabilityResponse:
    """Crée un blocage. Lève ValueError si le blocage est incohérent ou si l'enseignant ou le créneau n'existe pas."""
    payload = data.model_dump()
    error = validate_block(payload)
    if error:
        raise ValueError(error)
    _check_references(db, payload)

    block = StaffAvailability()
    _apply(block, payload)
    db.add(block)
    _commit(db)
    db.refresh(block)
    logger.info("Blocage %s créé pour l'enseignant %s.", block.id, block.staff_id)
    return _to_response(block)


def get_blocks(db: Session, staff_id: Optional[int] = None) -> list[StaffAvailabilityResponse]:
    stmt = select(StaffAvailability)
    if staff_id is not None:
        stmt = stmt.where(StaffAvailability.staff_id == staff_id)
    blocks = db.execute(stmt.order_by(StaffAvailability.id)).scalars().all()
    return [_to_response(b) for b in blocks]


def get_block(db: Session, block_id: int) -> Optional[StaffAvailabilityResponse]:
    block = db.get(StaffAvailability, block_id)
    if block is None:
        return None
    return _to_response(block)


def update_block(db: Session, block_id: int, data: StaffAvailabilityUpdate) -> Optional[StaffAvailabilityResponse]:
    """
    Fusionne les champs fournis avec le blocage enregistré puis revalide l'ensemble.
    Retourne None si introuvable, lève ValueError si le résultat est incohérent.
    """
    block = db.get(StaffAvailability, block_id)
    if block is None:
        return None

    payload = {
        "staff_id": block.staff_id,
        "timeslot_id": block.timeslot_id,
        "is_recurring": block.is_recurring,
        "day_of_week": block.day_of_week,
        "date": block.block_date,
        "reason": block.reason,
        "is_active": block.is_active,
    }
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            payload[field] = value

    error = validate_block(payload)
    if error:
        raise ValueError(error)
    _check_references(db, payload)

    _apply(block, payload)
    _commit(db)
    db.refresh(block)
    return _to_response(block)


def delete_block(db: Session, block_id: int) -> bool:
    block = db.get(StaffAvailability, block_id)
    if block is None:
        return False
    db.delete(block)
    db.commit()
    return True


def _check_references(db: Session, payload: dict[str, Any]) -> None:
    if db.get(Staff, payload["staff_id"]) is None:
        raise ValueError(f"Enseignant {payload['staff_id']} introuvable.")
    if db.get(Timeslot, payload["timeslot_id"]) is None:
        raise ValueError(f"Créneau {payload['timeslot_id']} introuvable.")


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Blocage refusé par la base : %s", exc)
        raise ValueError("Enseignant ou créneau introuvable.")


def _apply(block: StaffAvailability, payload: dict[str, Any]) -> None:
    block.staff_id = payload["staff_id"]
    block.timeslot_id = payload["timeslot_id"]
    block.is_recurring = payload["is_recurring"]
    block.reason = payload.get("reason")
    block.is_active = True if payload.get("is_active") is None else payload["is_active"]
    if block.is_recurring:
        block.day_of_week = payload["day_of_week"]
        block.block_date = None
    else:
        block.day_of_week = None
        block.block_date = parse_entry_date(payload["date"])


def _to_response(block: StaffAvailability) -> StaffAvailabilityResponse:
    return StaffAvailabilityResponse(
        id=block.id,
        staff_id=block.staff_id,
        timeslot_id=block.timeslot_id,
        is_recurring=block.is_recurring,
        day_of_week=block.day_of_week,
        date=block.block_date,
        reason=block.reason,
        is_active=block.is_active,
    )
