"""
Modèle SQLAlchemy pour le personnel enseignant.
Référencé par les créneaux d'emploi du temps et les blocages de disponibilité.
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from app.database import Base


class Staff(Base):
    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_name = Column(String(150), nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
