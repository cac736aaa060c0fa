"""
Modèle SQLAlchemy pour les blocages de disponibilité du personnel.

Malgré le nom de table, chaque ligne décrit une INDISPONIBILITÉ :
- récurrente (is_recurring=True)  : bloque le créneau chaque semaine au jour day_of_week
- ponctuelle (is_recurring=False) : bloque le créneau à la date précise block_date
Exactement un des deux champs est renseigné (contrainte CHECK).
"""

from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String, func

from app.database import Base


class StaffAvailability(Base):
    __tablename__ = "staff_availability"
    __table_args__ = (
        CheckConstraint(
            "(is_recurring AND day_of_week IS NOT NULL AND block_date IS NULL) OR "
            "(NOT is_recurring AND block_date IS NOT NULL AND day_of_week IS NULL)",
            name="ck_staff_availability_recurring_xor_date",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True)
    timeslot_id = Column(Integer, ForeignKey("timeslots.id", ondelete="CASCADE"), nullable=False)
    is_recurring = Column(Boolean, nullable=False)
    day_of_week = Column(String(10), nullable=True)   # Monday..Sunday si récurrent
    block_date = Column(Date, nullable=True)          # date précise sinon
    reason = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
