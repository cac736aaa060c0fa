"""
Configuration partagée pour tous les tests.

- client     : API avec la dépendance get_db remplacée par un MagicMock
               (les services sont patchés dans chaque test).
- db_session : vraie session SQLAlchemy sur SQLite en mémoire, pour tester
               le moteur de validation et les services sans PostgreSQL.
- fk_session : même base, clés étrangères appliquées (PRAGMA foreign_keys).
"""

import datetime as dt
import os

os.environ.setdefault("SCHEDULER_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest.mock import MagicMock

import app.models  # noqa: F401
from app.database import Base, get_db
from app.main import app
from app.models import (
    Room,
    SchoolClass,
    Staff,
    StaffAvailability,
    Student,
    Subject,
    Timeslot,
    TimetableEntry,
)


@pytest.fixture
def client():
    """Client HTTP de test avec la BDD mockée."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _sqlite_session(foreign_keys=False):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if foreign_keys:
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def db_session():
    """Session sur une base SQLite en mémoire, tables créées à partir des modèles."""
    yield from _sqlite_session()


@pytest.fixture
def fk_session():
    """Comme db_session, mais SQLite vérifie les clés étrangères (comme PostgreSQL)."""
    yield from _sqlite_session(foreign_keys=True)


class Factory:
    """Insère des lignes de référence avec des valeurs par défaut raisonnables."""

    def __init__(self, db):
        self.db = db
        self._roll = 0

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def school_class(self, class_id, name=None, student_count=0):
        return self._save(SchoolClass(id=class_id, name=name or f"Classe {class_id}", student_count=student_count))

    def students(self, class_id, count, is_active=True):
        created = []
        for _ in range(count):
            self._roll += 1
            created.append(Student(
                roll_number=f"R{self._roll:04d}",
                student_name=f"Élève {self._roll}",
                class_id=class_id,
                is_active=is_active,
            ))
        self.db.add_all(created)
        self.db.commit()
        return created

    def subject(self, code="CS101", is_lab=False):
        return self._save(Subject(subject_code=code, subject_name=f"Matière {code}", is_lab=is_lab))

    def room(self, room_id, capacity=60, room_type="Classroom"):
        return self._save(Room(id=room_id, room_number=f"R{room_id}", room_type=room_type, capacity=capacity))

    def staff(self, staff_id):
        return self._save(Staff(id=staff_id, staff_name=f"Enseignant {staff_id}"))

    def timeslot(self, timeslot_id, start="09:00", end="10:30"):
        return self._save(Timeslot(id=timeslot_id, start_time=start, end_time=end))

    def recurring_block(self, staff_id, timeslot_id, day_of_week, is_active=True):
        return self._save(StaffAvailability(
            staff_id=staff_id, timeslot_id=timeslot_id, is_recurring=True,
            day_of_week=day_of_week, is_active=is_active,
        ))

    def date_block(self, staff_id, timeslot_id, block_date, is_active=True):
        return self._save(StaffAvailability(
            staff_id=staff_id, timeslot_id=timeslot_id, is_recurring=False,
            block_date=dt.date.fromisoformat(block_date), is_active=is_active,
        ))

    def entry(self, class_id, staff_id, room_id, timeslot_id, entry_date, subject_code="CS101", is_lab=False):
        return self._save(TimetableEntry(
            class_id=class_id, subject_code=subject_code, staff_id=staff_id, room_id=room_id,
            timeslot_id=timeslot_id, entry_date=dt.date.fromisoformat(entry_date), is_lab=is_lab,
        ))


@pytest.fixture
def factory(db_session):
    return Factory(db_session)


def _populate_campus(factory):
    factory.school_class(1)
    factory.students(1, 30)
    factory.room(10, capacity=40, room_type="Classroom")
    factory.room(11, capacity=40, room_type="Computer Lab")
    factory.subject("CS101", is_lab=False)
    factory.subject("CS102", is_lab=True)
    factory.staff(7)
    factory.staff(8)
    factory.timeslot(3)
    factory.timeslot(4, start="10:45", end="12:15")
    return factory


@pytest.fixture
def campus(factory):
    """
    Jeu de données minimal et valide :
    classe 1 (30 élèves), salles 10 (classe, 40 places) et 11 (labo, 40 places),
    matières CS101 (cours) et CS102 (labo), enseignants 7 et 8, créneaux 3 et 4.
    """
    return _populate_campus(factory)


@pytest.fixture
def fk_campus(fk_session):
    """Même jeu de données que campus, sur la session qui applique les clés étrangères."""
    return _populate_campus(Factory(fk_session))
