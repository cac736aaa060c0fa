"""
Router pour les blocages de disponibilité du personnel (indisponibilités).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.staff_availability import (
    StaffAvailabilityCreate,
    StaffAvailabilityResponse,
    StaffAvailabilityUpdate,
)
from app.services import staff_availability_service

router = APIRouter(prefix="/api/v1/staff-availability", tags=["Disponibilités"])


@router.post("", response_model=StaffAvailabilityResponse, status_code=201, summary="Créer un blocage")
def create_block(data: StaffAvailabilityCreate, db: Session = Depends(get_db)):
    """Crée un blocage récurrent (day_of_week) ou ponctuel (date)."""
    try:
        return staff_availability_service.create_block(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=List[StaffAvailabilityResponse], summary="Lister les blocages")
def list_blocks(staff_id: Optional[int] = None, db: Session = Depends(get_db)):
    return staff_availability_service.get_blocks(db, staff_id=staff_id)


@router.get("/{block_id}", response_model=StaffAvailabilityResponse, summary="Détail d'un blocage")
def get_block(block_id: int, db: Session = Depends(get_db)):
    block = staff_availability_service.get_block(db, block_id)
    if block is None:
        raise HTTPException(status_code=404, detail="Blocage introuvable.")
    return block


@router.put("/{block_id}", response_model=StaffAvailabilityResponse, summary="Modifier un blocage")
def update_block(block_id: int, data: StaffAvailabilityUpdate, db: Session = Depends(get_db)):
    try:
        result = staff_availability_service.update_block(db, block_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Blocage introuvable.")
    return result


@router.delete("/{block_id}", status_code=204, summary="Supprimer un blocage")
def delete_block(block_id: int, db: Session = Depends(get_db)):
    if not staff_availability_service.delete_block(db, block_id):
        raise HTTPException(status_code=404, detail="Blocage introuvable.")
