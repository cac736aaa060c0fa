"""
Modèle SQLAlchemy pour les matières (données de référence, lecture seule pour l'emploi du temps).
"""

from sqlalchemy import Boolean, Column, Integer, String

from app.database import Base


class Subject(Base):
    __tablename__ = "subjects"

    subject_code = Column(String(20), primary_key=True)
    subject_name = Column(String(150), nullable=False)
    credits = Column(Integer, nullable=True)
    is_lab = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
