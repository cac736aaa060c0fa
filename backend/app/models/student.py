"""
Modèle SQLAlchemy pour la table students.
Un élève appartient à une seule classe (class_id).
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func

from app.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    roll_number = Column(String(20), unique=True, nullable=False)
    student_name = Column(String(150), nullable=False)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(10), nullable=True)
    admission_year = Column(Integer, nullable=True)
    batch = Column(String(20), nullable=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
