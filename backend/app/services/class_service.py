"""
Service métier pour la gestion des classes.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.school_class import SchoolClass
from app.models.timetable import TimetableEntry
from app.schemas.school_class import ClassCreate, ClassResponse, ClassUpdate
from app.services.roster_service import sync_class_count_or_raise

logger = logging.getLogger(__name__)


def create_class(db: Session, data: ClassCreate) -> ClassResponse:
    """
    Crée une nouvelle classe (effectif initial : 0).
    Lève une ValueError si le nom existe déjà.
    """
    school_class = SchoolClass(
        name=data.name,
        course_name=data.course_name,
        semester=data.semester,
        student_count=0,
    )
    db.add(school_class)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError(f"Une classe avec le nom '{data.name}' existe déjà.")
    db.refresh(school_class)
    return ClassResponse.model_validate(school_class)


def get_classes(db: Session) -> list[ClassResponse]:
    """Retourne toutes les classes, triées par nom."""
    classes = db.execute(
        select(SchoolClass).order_by(SchoolClass.name)
    ).scalars().all()
    return [ClassResponse.model_validate(c) for c in classes]


def get_class(db: Session, class_id: int) -> Optional[ClassResponse]:
    """Retourne une classe par son ID, ou None si inexistante."""
    school_class = db.get(SchoolClass, class_id)
    if school_class is None:
        return None
    return ClassResponse.model_validate(school_class)


def update_class(db: Session, class_id: int, data: ClassUpdate) -> Optional[ClassResponse]:
    """Met à jour les champs fournis d'une classe."""
    school_class = db.get(SchoolClass, class_id)
    if school_class is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(school_class, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Une classe avec ce nom existe déjà.")
    db.refresh(school_class)
    return ClassResponse.model_validate(school_class)


def delete_class(db: Session, class_id: int) -> bool:
    """
    Supprime une classe.
    Bloqué si la classe figure encore dans l'emploi du temps.
    Retourne True si supprimé, False si introuvable.
    """
    school_class = db.get(SchoolClass, class_id)
    if school_class is None:
        return False

    scheduled_entry_id = db.execute(
        select(TimetableEntry.id)
        .where(TimetableEntry.class_id == class_id)
        .limit(1)
    ).scalar()

    if scheduled_entry_id:
        raise ValueError(
            "Impossible de supprimer cette classe : elle figure encore dans l'emploi du temps."
        )

    db.delete(school_class)
    db.commit()
    return True


def refresh_student_count(db: Session, class_id: int) -> Optional[ClassResponse]:
    """Force le recalcul de l'effectif. Retourne None si la classe est introuvable."""
    school_class = db.get(SchoolClass, class_id)
    if school_class is None:
        return None
    sync_class_count_or_raise(db, class_id)
    db.refresh(school_class)
    return ClassResponse.model_validate(school_class)
