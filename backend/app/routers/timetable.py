"""
Router pour l'emploi du temps.
Les refus du moteur de validation sont renvoyés sous la forme
{"error": message, "code": ..., "category": ...} avec le code HTTP de leur catégorie
(400 saisie / référence, 422 règle métier, 409 conflit).
"""

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.timetable import (
    TimetableEntryCreate,
    TimetableEntryResponse,
    TimetableEntryUpdate,
    TimetableErrorResponse,
)
from app.services import timetable_service
from app.services.result import Err

router = APIRouter(prefix="/api/v1/timetable", tags=["Emploi du temps"])

_ERROR_RESPONSES = {
    400: {"model": TimetableErrorResponse, "description": "Champ manquant, date invalide ou référence introuvable"},
    409: {"model": TimetableErrorResponse, "description": "Double réservation ou enseignant indisponible"},
    422: {"model": TimetableErrorResponse, "description": "Règle métier violée"},
}


def _error_response(error: Err) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_body())


@router.get("", response_model=List[TimetableEntryResponse], summary="Lister l'emploi du temps")
def list_entries(
    class_id: Optional[int] = None,
    date: Optional[dt.date] = None,
    db: Session = Depends(get_db),
):
    """Retourne les entrées triées par date et créneau, filtrables par classe et par date."""
    return timetable_service.list_entries(db, class_id=class_id, entry_date=date)


@router.get("/class/{class_id}", response_model=List[TimetableEntryResponse], summary="Emploi du temps d'une classe")
def list_entries_for_class(class_id: int, db: Session = Depends(get_db)):
    return timetable_service.list_entries(db, class_id=class_id)


@router.get("/{entry_id}", response_model=TimetableEntryResponse, summary="Détail d'une entrée")
def get_entry(entry_id: int, db: Session = Depends(get_db)):
    entry = timetable_service.get_entry(db, entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entrée d'emploi du temps introuvable.")
    return entry


@router.post(
    "",
    response_model=TimetableEntryResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Planifier un cours",
)
def create_entry(data: TimetableEntryCreate, db: Session = Depends(get_db)):
    """
    Valide puis enregistre une affectation classe / matière / enseignant / salle / créneau / date.
    Le premier contrôle échoué est renvoyé.
    """
    result = timetable_service.create_entry(db, data)
    if result.is_err:
        return _error_response(result)
    return result.value


@router.put(
    "/{entry_id}",
    response_model=TimetableEntryResponse,
    responses=_ERROR_RESPONSES,
    summary="Modifier une entrée",
)
def update_entry(entry_id: int, data: TimetableEntryUpdate, db: Session = Depends(get_db)):
    """Les champs absents reprennent la valeur enregistrée, puis l'entrée complète est revalidée."""
    result = timetable_service.update_entry(db, entry_id, data)
    if result is None:
        raise HTTPException(status_code=404, detail="Entrée d'emploi du temps introuvable.")
    if result.is_err:
        return _error_response(result)
    return result.value


@router.delete("/{entry_id}", status_code=204, summary="Supprimer une entrée")
def delete_entry(entry_id: int, db: Session = Depends(get_db)):
    """Suppression sans revalidation."""
    if not timetable_service.delete_entry(db, entry_id):
        raise HTTPException(status_code=404, detail="Entrée d'emploi du temps introuvable.")
