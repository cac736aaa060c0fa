# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.

from app.models.school_class import SchoolClass  # noqa: F401  — doit précéder student
from app.models.student import Student  # noqa: F401
from app.models.staff import Staff  # noqa: F401
from app.models.subject import Subject  # noqa: F401
from app.models.room import Room  # noqa: F401
from app.models.timeslot import Timeslot  # noqa: F401
from app.models.staff_availability import StaffAvailability  # noqa: F401
from app.models.timetable import TimetableEntry  # noqa: F401
