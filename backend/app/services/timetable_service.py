"""
Service métier pour l'emploi du temps : lecture, création et modification
validées, suppression sans contrôle.
"""

import datetime as dt
import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.timetable import TimetableEntry
from app.schemas.timetable import TimetableEntryCreate, TimetableEntryResponse, TimetableEntryUpdate
from app.services.availability_service import get_day_of_week, parse_entry_date
from app.services.result import Err, ErrorCategory, Ok, Result
from app.services.timetable_validation import timetable_conflict_error, validate_timetable_entry

logger = logging.getLogger(__name__)


def list_entries(
    db: Session,
    class_id: Optional[int] = None,
    entry_date: Optional[dt.date] = None,
) -> list[TimetableEntryResponse]:
    """Retourne les entrées triées par date puis créneau, filtrées si demandé."""
    stmt = select(TimetableEntry)
    if class_id is not None:
        stmt = stmt.where(TimetableEntry.class_id == class_id)
    if entry_date is not None:
        stmt = stmt.where(TimetableEntry.entry_date == entry_date)
    entries = db.execute(
        stmt.order_by(TimetableEntry.entry_date, TimetableEntry.timeslot_id, TimetableEntry.id)
    ).scalars().all()
    return [_to_response(e) for e in entries]


def get_entry(db: Session, entry_id: int) -> Optional[TimetableEntryResponse]:
    entry = db.get(TimetableEntry, entry_id)
    if entry is None:
        return None
    return _to_response(entry)


def create_entry(db: Session, data: TimetableEntryCreate) -> Result[TimetableEntryResponse]:
    """
    Valide puis insère une entrée.
    is_lab vaut false s'il n'est pas fourni.
    """
    payload = data.model_dump()
    if payload.get("is_lab") is None:
        payload["is_lab"] = False

    error = validate_timetable_entry(db, payload)
    if error is not None:
        logger.info("Entrée refusée (%s) : %s", error.code, error.message)
        return error

    entry = TimetableEntry()
    _apply(entry, payload)
    db.add(entry)
    committed = _commit(db)
    if committed is not None:
        return committed
    db.refresh(entry)
    logger.info(
        "Entrée %s créée : classe %s, créneau %s le %s",
        entry.id, entry.class_id, entry.timeslot_id, entry.entry_date,
    )
    return Ok(_to_response(entry))


def update_entry(
    db: Session,
    entry_id: int,
    data: TimetableEntryUpdate,
) -> Optional[Result[TimetableEntryResponse]]:
    """
    Fusionne les champs fournis avec les valeurs enregistrées, puis relance
    la validation complète (l'entrée elle-même est exclue des conflits).
    Retourne None si l'entrée est introuvable.
    """
    entry = db.get(TimetableEntry, entry_id)
    if entry is None:
        return None

    payload = _stored_payload(entry)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            payload[field] = value

    error = validate_timetable_entry(db, payload, exclude_id=entry_id)
    if error is not None:
        logger.info("Modification de l'entrée %s refusée (%s) : %s", entry_id, error.code, error.message)
        return error

    _apply(entry, payload)
    committed = _commit(db)
    if committed is not None:
        return committed
    db.refresh(entry)
    logger.info("Entrée %s modifiée.", entry_id)
    return Ok(_to_response(entry))


def delete_entry(db: Session, entry_id: int) -> bool:
    """Supprime une entrée. Retourne True si supprimée, False si introuvable."""
    entry = db.get(TimetableEntry, entry_id)
    if entry is None:
        return False
    db.delete(entry)
    db.commit()
    logger.info("Entrée %s supprimée.", entry_id)
    return True


def _commit(db: Session) -> Optional[Err]:
    """Valide la transaction ; une violation d'unicité (écriture concurrente) devient un conflit,
    une clé étrangère orpheline une erreur de recherche."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _is_foreign_key_violation(exc):
            logger.warning("Référence inexistante lors de l'enregistrement : %s", exc)
            return Err(
                ErrorCategory.LOOKUP,
                "reference_not_found",
                "La classe, la matière, l'enseignant, la salle ou le créneau référencé n'existe plus.",
            )
        logger.warning("Contrainte d'unicité violée lors de l'enregistrement : %s", exc)
        return timetable_conflict_error()
    return None


def _is_foreign_key_violation(exc: IntegrityError) -> bool:
    # 23503 : foreign_key_violation (PostgreSQL) ; SQLite ne fournit que le message
    if getattr(exc.orig, "pgcode", None) == "23503":
        return True
    return "foreign key" in str(exc.orig).lower()


def _stored_payload(entry: TimetableEntry) -> dict[str, Any]:
    return {
        "class_id": entry.class_id,
        "subject_code": entry.subject_code,
        "staff_id": entry.staff_id,
        "room_id": entry.room_id,
        "timeslot_id": entry.timeslot_id,
        "date": entry.entry_date,
        "is_lab": entry.is_lab,
    }


def _apply(entry: TimetableEntry, payload: dict[str, Any]) -> None:
    entry.class_id = payload["class_id"]
    entry.subject_code = payload["subject_code"]
    entry.staff_id = payload["staff_id"]
    entry.room_id = payload["room_id"]
    entry.timeslot_id = payload["timeslot_id"]
    entry.entry_date = parse_entry_date(payload["date"])
    entry.is_lab = bool(payload["is_lab"])


def _to_response(entry: TimetableEntry) -> TimetableEntryResponse:
    return TimetableEntryResponse(
        id=entry.id,
        class_id=entry.class_id,
        subject_code=entry.subject_code,
        staff_id=entry.staff_id,
        room_id=entry.room_id,
        timeslot_id=entry.timeslot_id,
        date=entry.entry_date,
        day_of_week=get_day_of_week(entry.entry_date),
        is_lab=entry.is_lab,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )
