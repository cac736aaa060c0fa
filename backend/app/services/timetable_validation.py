"""
Pipeline de validation d'une entrée d'emploi du temps.

Les contrôles s'exécutent dans un ordre fixe ; le premier échec est renvoyé.
Modifier cet ordre change l'erreur visible par l'utilisateur :

     1. champs obligatoires                     → INPUT    (400)
     2. date lisible                            → INPUT    (400)
     3. matière existante                       → LOOKUP   (400)
     4. is_lab cohérent avec la matière         → RULE     (422)
     5. salle existante                         → LOOKUP   (400)
     6. capacité de la salle renseignée         → RULE     (422)
     7. matière de labo ⇒ salle de labo         → RULE     (422)
     8. capacité ≥ effectif actif de la classe  → RULE     (422)
     9. classe, enseignant et créneau existants → LOOKUP   (400)
    10. synchronisation de l'effectif (écriture immédiate, idempotente)
    11. double réservation classe/enseignant/salle → CONFLICT (409)
    12. indisponibilité récurrente de l'enseignant → CONFLICT (409)
    13. indisponibilité ponctuelle de l'enseignant → CONFLICT (409)
"""

import logging
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.services import availability_service, conflict_service, registry, roster_service
from app.services.result import Err, ErrorCategory

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("class_id", "subject_code", "staff_id", "room_id", "timeslot_id", "date")


def validate_timetable_entry(
    db: Session,
    payload: Mapping[str, Any],
    exclude_id: Optional[int] = None,
) -> Optional[Err]:
    """
    Valide une affectation (classe, matière, enseignant, salle, créneau, date).

    Retourne None si l'entrée peut être enregistrée, sinon la première erreur.
    `exclude_id` est l'identifiant de l'entrée modifiée (ignorée par la
    détection de conflits).
    """
    missing = [field for field in REQUIRED_FIELDS if _is_blank(payload.get(field))]
    if missing:
        return Err(
            ErrorCategory.INPUT,
            "missing_fields",
            f"Champs obligatoires manquants : {', '.join(missing)}.",
        )

    entry_date = availability_service.parse_entry_date(payload["date"])
    if entry_date is None:
        return Err(
            ErrorCategory.INPUT,
            "invalid_date",
            "Format de date invalide. Utilisez le format AAAA-MM-JJ.",
        )
    day_of_week = availability_service.get_day_of_week(entry_date)

    class_id = payload["class_id"]
    staff_id = payload["staff_id"]
    room_id = payload["room_id"]
    timeslot_id = payload["timeslot_id"]
    is_lab = bool(payload.get("is_lab") or False)

    subject_result = registry.get_subject(db, payload["subject_code"])
    if subject_result.is_err:
        return subject_result
    subject = subject_result.value

    if is_lab != bool(subject.is_lab):
        if subject.is_lab:
            message = f"La matière {subject.subject_code} est une matière de laboratoire : is_lab doit valoir true."
        else:
            message = f"La matière {subject.subject_code} n'est pas une matière de laboratoire : is_lab doit valoir false."
        return Err(ErrorCategory.RULE, "lab_flag_mismatch", message)

    room_result = registry.get_room(db, room_id)
    if room_result.is_err:
        return room_result
    room = room_result.value

    if room.capacity is None:
        return Err(
            ErrorCategory.RULE,
            "capacity_not_configured",
            f"La capacité de la salle {room.room_number} n'est pas configurée.",
        )

    if subject.is_lab and not is_lab_room(room.room_type):
        return Err(
            ErrorCategory.RULE,
            "lab_room_required",
            f"La matière {subject.subject_code} doit être planifiée dans une salle de laboratoire.",
        )

    count_result = registry.count_active_students(db, class_id)
    if count_result.is_err:
        return count_result
    student_count = count_result.value
    if room.capacity < student_count:
        return Err(
            ErrorCategory.RULE,
            "room_too_small",
            f"La salle {room.room_number} ({room.capacity} places) est trop petite "
            f"pour la classe ({student_count} élèves).",
        )

    reference_error = registry.check_references(db, class_id, staff_id, timeslot_id)
    if reference_error is not None:
        return reference_error

    sync_result = roster_service.sync_class_count(db, class_id)
    if sync_result.is_err:
        return sync_result

    if conflict_service.has_conflict(db, entry_date, timeslot_id, class_id, staff_id, room_id, exclude_id):
        return timetable_conflict_error()

    if availability_service.is_blocked_recurring(db, staff_id, timeslot_id, day_of_week):
        return Err(
            ErrorCategory.CONFLICT,
            "staff_unavailable_recurring",
            f"L'enseignant est indisponible chaque {day_of_week} sur ce créneau.",
        )

    if availability_service.is_blocked_on_date(db, staff_id, timeslot_id, entry_date):
        return Err(
            ErrorCategory.CONFLICT,
            "staff_unavailable_date",
            f"L'enseignant est indisponible le {entry_date.isoformat()} sur ce créneau.",
        )

    return None


def is_lab_room(room_type: Optional[str]) -> bool:
    """Une salle est un laboratoire si son type contient le mot-clé configuré (casse ignorée)."""
    return settings.LAB_ROOM_KEYWORD.lower() in (room_type or "").lower()


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def timetable_conflict_error() -> Err:
    return Err(
        ErrorCategory.CONFLICT,
        "timetable_conflict",
        "Conflit d'emploi du temps : la classe, l'enseignant ou la salle est déjà "
        "réservé sur ce créneau à cette date.",
    )
