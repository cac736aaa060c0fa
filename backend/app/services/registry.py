"""
Registre des ressources : accès en lecture seule aux matières, salles, classes,
enseignants, créneaux et effectifs.

Aucune valeur par défaut n'est inventée : une référence absente ou une erreur
de la base est renvoyée telle quelle sous forme d'Err(LOOKUP).
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.room import Room
from app.models.school_class import SchoolClass
from app.models.staff import Staff
from app.models.student import Student
from app.models.subject import Subject
from app.models.timeslot import Timeslot
from app.services.result import Err, ErrorCategory, Ok, Result

logger = logging.getLogger(__name__)


def get_subject(db: Session, subject_code: str) -> Result[Subject]:
    """Retourne la matière `subject_code`, ou une erreur de recherche."""
    try:
        subject = db.get(Subject, subject_code)
    except SQLAlchemyError as exc:
        return _store_failure("la matière", exc)
    if subject is None:
        return Err(ErrorCategory.LOOKUP, "subject_not_found", f"Matière '{subject_code}' introuvable.")
    return Ok(subject)


def get_room(db: Session, room_id: int) -> Result[Room]:
    """Retourne la salle `room_id`, ou une erreur de recherche."""
    try:
        room = db.get(Room, room_id)
    except SQLAlchemyError as exc:
        return _store_failure("la salle", exc)
    if room is None:
        return Err(ErrorCategory.LOOKUP, "room_not_found", f"Salle {room_id} introuvable.")
    return Ok(room)


def count_active_students(db: Session, class_id: int) -> Result[int]:
    """Compte les élèves actifs rattachés à la classe."""
    try:
        count = db.execute(
            select(func.count())
            .select_from(Student)
            .where(Student.class_id == class_id, Student.is_active.is_(True))
        ).scalar()
    except SQLAlchemyError as exc:
        return _store_failure("l'effectif de la classe", exc)
    return Ok(count or 0)


# (modèle, code d'erreur, libellé) pour les références vérifiées avant écriture
_REFERENCES = (
    ("class_id", SchoolClass, "class_not_found", "Classe {} introuvable."),
    ("staff_id", Staff, "staff_not_found", "Enseignant {} introuvable."),
    ("timeslot_id", Timeslot, "timeslot_not_found", "Créneau {} introuvable."),
)


def check_references(db: Session, class_id: int, staff_id: int, timeslot_id: int) -> Optional[Err]:
    """Vérifie que la classe, l'enseignant et le créneau existent. Retourne la première erreur, ou None."""
    ids = {"class_id": class_id, "staff_id": staff_id, "timeslot_id": timeslot_id}
    for field, model, code, message in _REFERENCES:
        try:
            row = db.get(model, ids[field])
        except SQLAlchemyError as exc:
            return _store_failure(f"la référence {field}", exc)
        if row is None:
            return Err(ErrorCategory.LOOKUP, code, message.format(ids[field]))
    return None


def _store_failure(what: str, exc: SQLAlchemyError) -> Err:
    logger.warning("Échec de lecture (%s) : %s", what, exc)
    detail = str(getattr(exc, "orig", None) or exc)
    return Err(ErrorCategory.LOOKUP, "lookup_failed", f"Impossible de charger {what} : {detail}")
