"""
Router pour la gestion des classes.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.school_class import ClassCreate, ClassResponse, ClassUpdate
from app.services import class_service
from app.services.roster_service import RosterSyncError

router = APIRouter(prefix="/api/v1/classes", tags=["Classes"])


@router.post("", response_model=ClassResponse, status_code=201, summary="Créer une classe")
def create_class(data: ClassCreate, db: Session = Depends(get_db)):
    """Crée une nouvelle classe avec un nom unique."""
    try:
        return class_service.create_class(db, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("", response_model=List[ClassResponse], summary="Lister les classes")
def list_classes(db: Session = Depends(get_db)):
    """Retourne toutes les classes avec leur effectif actif."""
    return class_service.get_classes(db)


@router.get("/{class_id}", response_model=ClassResponse, summary="Détail d'une classe")
def get_class(class_id: int, db: Session = Depends(get_db)):
    school_class = class_service.get_class(db, class_id)
    if school_class is None:
        raise HTTPException(status_code=404, detail="Classe introuvable.")
    return school_class


@router.put("/{class_id}", response_model=ClassResponse, summary="Modifier une classe")
def update_class(class_id: int, data: ClassUpdate, db: Session = Depends(get_db)):
    try:
        result = class_service.update_class(db, class_id, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Classe introuvable.")
    return result


@router.delete("/{class_id}", status_code=204, summary="Supprimer une classe")
def delete_class(class_id: int, db: Session = Depends(get_db)):
    """
    Supprime une classe définitivement.
    Bloqué si la classe figure encore dans l'emploi du temps.
    """
    try:
        success = class_service.delete_class(db, class_id)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not success:
        raise HTTPException(status_code=404, detail="Classe introuvable.")


@router.post("/{class_id}/sync-count", response_model=ClassResponse, summary="Recalculer l'effectif")
def sync_count(class_id: int, db: Session = Depends(get_db)):
    """Recalcule student_count à partir des élèves actifs."""
    try:
        result = class_service.refresh_student_count(db, class_id)
    except RosterSyncError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Classe introuvable.")
    return result
