"""
Tests d'intégration API pour le CRUD des élèves.
"""

from datetime import datetime
from unittest.mock import patch

from app.models.student import Student
from app.services.roster_service import RosterSyncError


# --- Helpers ---

def make_student(**kwargs) -> Student:
    return Student(
        id=kwargs.get("id", 1),
        roll_number=kwargs.get("roll_number", "CS001"),
        student_name=kwargs.get("student_name", "Priya Sharma"),
        email=kwargs.get("email", "priya@campus.edu"),
        phone_number=kwargs.get("phone_number", "9876543211"),
        admission_year=kwargs.get("admission_year", 2023),
        batch=kwargs.get("batch", "B"),
        class_id=kwargs.get("class_id", 1),
        is_active=kwargs.get("is_active", True),
        created_at=datetime.now(),
    )


BODY = {
    "roll_number": "CS001",
    "student_name": "Priya Sharma",
    "email": "priya@campus.edu",
    "phone_number": "9876543211",
    "admission_year": 2023,
    "batch": "B",
    "class_id": 1,
}


def test_create_student_succes(client):
    """Inscription valide → 201."""
    with patch("app.routers.students.student_service.create_student") as mock:
        mock.return_value = make_student()
        response = client.post("/api/v1/students", json=BODY)

    assert response.status_code == 201
    assert response.json()["roll_number"] == "CS001"
    assert response.json()["class_id"] == 1


def test_create_student_sans_classe(client):
    """class_id absent → 422."""
    body = {k: v for k, v in BODY.items() if k != "class_id"}
    response = client.post("/api/v1/students", json=body)
    assert response.status_code == 422


def test_create_student_email_invalide(client):
    response = client.post("/api/v1/students", json={**BODY, "email": "pas-un-email"})
    assert response.status_code == 422


def test_create_student_matricule_duplique(client):
    """Matricule existant → 409."""
    with patch("app.routers.students.student_service.create_student") as mock:
        mock.side_effect = ValueError("Un élève avec le matricule 'CS001' existe déjà.")
        response = client.post("/api/v1/students", json=BODY)

    assert response.status_code == 409
    assert "existe déjà" in response.json()["detail"]


def test_list_students(client):
    with patch("app.routers.students.student_service.get_students") as mock:
        mock.return_value = [make_student(), make_student(id=2, roll_number="CS002")]
        response = client.get("/api/v1/students?class_id=1")

    assert response.status_code == 200
    assert len(response.json()) == 2
    assert mock.call_args.kwargs == {"class_id": 1}


def test_get_student_introuvable(client):
    with patch("app.routers.students.student_service.get_student") as mock:
        mock.return_value = None
        response = client.get("/api/v1/students/42")
    assert response.status_code == 404


def test_update_student_succes(client):
    with patch("app.routers.students.student_service.update_student") as mock:
        mock.return_value = make_student(class_id=2)
        response = client.put("/api/v1/students/1", json={"class_id": 2})

    assert response.status_code == 200
    assert response.json()["class_id"] == 2


def test_update_student_introuvable(client):
    with patch("app.routers.students.student_service.update_student") as mock:
        mock.return_value = None
        response = client.put("/api/v1/students/1", json={"batch": "C"})
    assert response.status_code == 404


def test_delete_student(client):
    with patch("app.routers.students.student_service.delete_student") as mock:
        mock.return_value = True
        response = client.delete("/api/v1/students/1")
    assert response.status_code == 204


def test_delete_student_introuvable(client):
    with patch("app.routers.students.student_service.delete_student") as mock:
        mock.return_value = False
        response = client.delete("/api/v1/students/1")
    assert response.status_code == 404


def test_delete_student_effectif_illisible(client):
    with patch("app.routers.students.student_service.delete_student") as mock:
        mock.side_effect = RosterSyncError("Impossible de charger l'effectif de la classe : db down")
        response = client.delete("/api/v1/students/1")
    assert response.status_code == 400


def test_create_student_effectif_illisible_n_est_pas_un_doublon(client):
    with patch("app.routers.students.student_service.create_student") as mock:
        mock.side_effect = RosterSyncError("Impossible de charger l'effectif de la classe : db down")
        response = client.post("/api/v1/students", json=BODY)
    assert response.status_code == 400
