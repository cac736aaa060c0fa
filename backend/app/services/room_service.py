"""
Service métier pour les salles.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.room import Room
from app.schemas.room import RoomCreate, RoomResponse, RoomUpdate


def create_room(db: Session, data: RoomCreate) -> RoomResponse:
    """Crée une salle. Lève une ValueError si le numéro existe déjà."""
    room = Room(
        room_number=data.room_number,
        room_type=data.room_type,
        block_name=data.block_name,
        capacity=data.capacity,
        is_active=True,
    )
    db.add(room)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError(f"La salle '{data.room_number}' existe déjà.")
    db.refresh(room)
    return RoomResponse.model_validate(room)


def get_rooms(db: Session, room_type: Optional[str] = None) -> list[RoomResponse]:
    stmt = select(Room)
    if room_type:
        stmt = stmt.where(Room.room_type == room_type)
    rooms = db.execute(stmt.order_by(Room.room_number)).scalars().all()
    return [RoomResponse.model_validate(r) for r in rooms]


def get_room(db: Session, room_id: int) -> Optional[RoomResponse]:
    room = db.get(Room, room_id)
    if room is None:
        return None
    return RoomResponse.model_validate(room)


def update_room(db: Session, room_id: int, data: RoomUpdate) -> Optional[RoomResponse]:
    """Met à jour les champs fournis (ex. renseigner la capacité après coup)."""
    room = db.get(Room, room_id)
    if room is None:
        return None

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(room, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Une salle avec ce numéro existe déjà.")
    db.refresh(room)
    return RoomResponse.model_validate(room)
