"""
Modèle SQLAlchemy pour les créneaux horaires (fenêtres récurrentes partagées par toutes les dates).
"""

from sqlalchemy import Boolean, Column, Integer, String

from app.database import Base


class Timeslot(Base):
    __tablename__ = "timeslots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    day_of_week = Column(String(10), nullable=True)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)
    slot_number = Column(Integer, nullable=False, default=1)
    is_break = Column(Boolean, nullable=False, default=False)
