"""
Modèle SQLAlchemy pour les classes.
Nommé school_class pour éviter le conflit avec le mot-clé Python 'class'.
"""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.database import Base


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    course_name = Column(String(150), nullable=True)
    semester = Column(Integer, nullable=True)
    # Dérivé : recalculé par roster_service, jamais fourni par le client
    student_count = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
