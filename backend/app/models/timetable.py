"""
Modèle SQLAlchemy pour les entrées d'emploi du temps.

Invariant : pour un même (date, créneau), chaque ressource (classe, enseignant,
salle) apparaît au plus une fois. Le moteur de validation le vérifie avant
l'insertion ; les contraintes UNIQUE servent de filet en cas d'écritures concurrentes.
"""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint, func

from app.database import Base


class TimetableEntry(Base):
    __tablename__ = "timetable_entries"
    __table_args__ = (
        UniqueConstraint("entry_date", "timeslot_id", "class_id", name="uq_timetable_slot_class"),
        UniqueConstraint("entry_date", "timeslot_id", "staff_id", name="uq_timetable_slot_staff"),
        UniqueConstraint("entry_date", "timeslot_id", "room_id", name="uq_timetable_slot_room"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_code = Column(String(20), ForeignKey("subjects.subject_code"), nullable=False)
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    timeslot_id = Column(Integer, ForeignKey("timeslots.id"), nullable=False)
    entry_date = Column(Date, nullable=False)
    is_lab = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
