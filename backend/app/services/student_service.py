"""
Service métier pour les élèves.
Chaque écriture resynchronise l'effectif des classes concernées.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.student import Student
from app.schemas.student import StudentCreate, StudentUpdate
from app.services.roster_service import sync_class_count_or_raise

logger = logging.getLogger(__name__)


def get_students(db: Session, class_id: Optional[int] = None) -> list[Student]:
    """Retourne les élèves triés par matricule, éventuellement filtrés par classe."""
    stmt = select(Student)
    if class_id is not None:
        stmt = stmt.where(Student.class_id == class_id)
    return list(db.execute(stmt.order_by(Student.roll_number)).scalars().all())


def get_student(db: Session, student_id: int) -> Optional[Student]:
    return db.get(Student, student_id)


def create_student(db: Session, data: StudentCreate) -> Student:
    """
    Crée un élève actif dans sa classe.
    Lève une ValueError si le matricule existe déjà.
    """
    student = Student(
        roll_number=data.roll_number,
        student_name=data.student_name,
        email=data.email.lower(),
        phone_number=data.phone_number,
        admission_year=data.admission_year,
        batch=data.batch,
        class_id=data.class_id,
        is_active=True,
    )
    db.add(student)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError(f"Un élève avec le matricule '{data.roll_number}' existe déjà.")
    db.refresh(student)
    sync_class_count_or_raise(db, student.class_id)
    return student


def update_student(db: Session, student_id: int, data: StudentUpdate) -> Optional[Student]:
    """
    Met à jour les champs fournis.
    Changement de classe : l'ancienne et la nouvelle classe sont recalculées ;
    sinon l'ancienne classe est recalculée (le statut actif a pu changer).
    """
    student = db.get(Student, student_id)
    if student is None:
        return None

    old_class_id = student.class_id
    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(student, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Un élève avec ce matricule existe déjà.")
    db.refresh(student)

    new_class_id = update_data.get("class_id")
    if new_class_id is not None and new_class_id != old_class_id:
        sync_class_count_or_raise(db, old_class_id)
        sync_class_count_or_raise(db, new_class_id)
    elif old_class_id is not None:
        sync_class_count_or_raise(db, old_class_id)
    return student


def delete_student(db: Session, student_id: int) -> bool:
    """Supprime un élève et recalcule l'effectif de sa classe. Retourne False si introuvable."""
    student = db.get(Student, student_id)
    if student is None:
        return False

    class_id = student.class_id
    db.delete(student)
    db.commit()
    sync_class_count_or_raise(db, class_id)
    return True
