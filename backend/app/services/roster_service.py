"""
Synchronisation de l'effectif des classes (student_count).

Le compteur est toujours recalculé depuis la table students, jamais incrémenté :
l'appel est idempotent et peut être répété sans risque.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.school_class import SchoolClass
from app.services.registry import count_active_students
from app.services.result import Ok, Result

logger = logging.getLogger(__name__)


class RosterSyncError(ValueError):
    """L'effectif n'a pas pu être relu depuis la base."""


def sync_class_count(db: Session, class_id: Optional[int]) -> Result[Optional[int]]:
    """
    Recalcule et enregistre l'effectif actif de la classe.
    Retourne Ok(nouvel effectif), Ok(None) si aucune classe n'est concernée,
    ou l'erreur de lecture du registre.
    """
    if class_id is None:
        return Ok(None)

    count_result = count_active_students(db, class_id)
    if count_result.is_err:
        return count_result
    count = count_result.value

    school_class = db.get(SchoolClass, class_id)
    if school_class is None:
        logger.warning("Synchronisation effectif : classe %s introuvable.", class_id)
        return Ok(count)

    if school_class.student_count != count:
        logger.info("Classe %s : effectif %s → %s", class_id, school_class.student_count, count)
    school_class.student_count = count
    db.commit()
    return Ok(count)


def sync_class_count_or_raise(db: Session, class_id: Optional[int]) -> Optional[int]:
    """Variante pour les services CRUD : lève RosterSyncError si l'effectif ne peut pas être lu."""
    result = sync_class_count(db, class_id)
    if result.is_err:
        raise RosterSyncError(result.message)
    return result.value


def sync_all_class_counts(db: Session) -> int:
    """Recalcule l'effectif de toutes les classes. Retourne le nombre de classes traitées."""
    class_ids = db.execute(select(SchoolClass.id).order_by(SchoolClass.id)).scalars().all()
    for class_id in class_ids:
        sync_class_count_or_raise(db, class_id)
    return len(class_ids)
