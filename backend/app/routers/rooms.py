"""
Router pour les salles.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.room import RoomCreate, RoomResponse, RoomUpdate
from app.services import room_service

router = APIRouter(prefix="/api/v1/rooms", tags=["Salles"])


@router.post("", response_model=RoomResponse, status_code=201, summary="Créer une salle")
def create_room(data: RoomCreate, db: Session = Depends(get_db)):
    try:
        return room_service.create_room(db, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("", response_model=List[RoomResponse], summary="Lister les salles")
def list_rooms(room_type: Optional[str] = None, db: Session = Depends(get_db)):
    return room_service.get_rooms(db, room_type=room_type)


@router.get("/{room_id}", response_model=RoomResponse, summary="Détail d'une salle")
def get_room(room_id: int, db: Session = Depends(get_db)):
    room = room_service.get_room(db, room_id)
    if room is None:
        raise HTTPException(status_code=404, detail="Salle introuvable.")
    return room


@router.put("/{room_id}", response_model=RoomResponse, summary="Modifier une salle")
def update_room(room_id: int, data: RoomUpdate, db: Session = Depends(get_db)):
    """Met à jour les champs fournis, par exemple la capacité."""
    try:
        result = room_service.update_room(db, room_id, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Salle introuvable.")
    return result
