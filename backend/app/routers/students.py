"""
Router pour les élèves.
Toute création, modification ou suppression recalcule l'effectif des classes concernées.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from app.services import student_service
from app.services.roster_service import RosterSyncError

router = APIRouter(prefix="/api/v1/students", tags=["Élèves"])


@router.get("", response_model=List[StudentResponse], summary="Lister les élèves")
def list_students(class_id: Optional[int] = None, db: Session = Depends(get_db)):
    """Retourne les élèves triés par matricule, filtrables par classe."""
    return student_service.get_students(db, class_id=class_id)


@router.get("/{student_id}", response_model=StudentResponse, summary="Détail d'un élève")
def get_student(student_id: int, db: Session = Depends(get_db)):
    student = student_service.get_student(db, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


@router.post("", response_model=StudentResponse, status_code=201, summary="Inscrire un élève")
def create_student(data: StudentCreate, db: Session = Depends(get_db)):
    try:
        return student_service.create_student(db, data)
    except RosterSyncError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/{student_id}", response_model=StudentResponse, summary="Modifier un élève")
def update_student(student_id: int, data: StudentUpdate, db: Session = Depends(get_db)):
    """Met à jour les champs fournis d'un élève. Les champs absents ne sont pas modifiés."""
    try:
        student = student_service.update_student(db, student_id, data)
    except RosterSyncError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


@router.delete("/{student_id}", status_code=204, summary="Supprimer un élève")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    try:
        deleted = student_service.delete_student(db, student_id)
    except RosterSyncError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
