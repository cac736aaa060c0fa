"""
Modèle SQLAlchemy pour les salles.
La capacité peut rester NULL à la création, mais doit être renseignée
avant qu'une classe puisse y être planifiée.
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from app.database import Base


class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    room_number = Column(String(20), unique=True, nullable=False)
    room_type = Column(String(50), nullable=False, default="Classroom")  # Classroom, Computer Lab, ...
    block_name = Column(String(50), nullable=True)
    capacity = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
