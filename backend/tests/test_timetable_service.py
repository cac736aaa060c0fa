"""
Tests du service d'emploi du temps : création, fusion-puis-revalidation, suppression.
"""

import datetime as dt
from unittest.mock import patch

from app.models.timetable import TimetableEntry
from app.schemas.timetable import TimetableEntryCreate, TimetableEntryUpdate
from app.services.result import ErrorCategory
from app.services.timetable_service import (
    create_entry,
    delete_entry,
    get_entry,
    list_entries,
    update_entry,
)

WEDNESDAY = "2024-02-14"


def make_create(**overrides):
    data = {
        "class_id": 1,
        "subject_code": "CS101",
        "staff_id": 7,
        "room_id": 10,
        "timeslot_id": 3,
        "date": WEDNESDAY,
    }
    data.update(overrides)
    return TimetableEntryCreate(**data)


# --- create_entry ---

def test_create_entry_succes(db_session, campus):
    result = create_entry(db_session, make_create())
    assert not result.is_err
    entry = result.value
    assert entry.id is not None
    assert entry.date == dt.date(2024, 2, 14)
    assert entry.day_of_week == "Wednesday"
    assert entry.is_lab is False
    assert db_session.get(TimetableEntry, entry.id) is not None


def test_create_entry_refusee_rien_n_est_insere(db_session, campus):
    result = create_entry(db_session, make_create(room_id=404))
    assert result.is_err
    assert result.code == "room_not_found"
    assert list_entries(db_session) == []


def test_deuxieme_entree_partageant_une_ressource_refusee(db_session, campus):
    campus.school_class(2)
    assert not create_entry(db_session, make_create()).is_err

    for shared in (
        {"class_id": 1, "staff_id": 8, "room_id": 11, "subject_code": "CS102"},
        {"class_id": 2, "staff_id": 7, "room_id": 11, "subject_code": "CS102"},
        {"class_id": 2, "staff_id": 8, "room_id": 10},
    ):
        overrides = dict(shared)
        if overrides.get("subject_code") == "CS102":
            overrides["is_lab"] = True
        result = create_entry(db_session, make_create(**overrides))
        assert result.is_err
        assert result.code == "timetable_conflict"


def test_ressources_distinctes_coexistent(db_session, campus):
    campus.school_class(2)
    assert not create_entry(db_session, make_create()).is_err
    result = create_entry(db_session, make_create(
        class_id=2, staff_id=8, room_id=11, subject_code="CS102", is_lab=True,
    ))
    assert not result.is_err
    assert len(list_entries(db_session, entry_date=dt.date(2024, 2, 14))) == 2


def test_contrainte_unicite_filet_de_securite(db_session, campus):
    """Deux écritures concurrentes validées : la contrainte UNIQUE transforme la seconde en conflit."""
    assert not create_entry(db_session, make_create()).is_err
    with patch("app.services.timetable_service.validate_timetable_entry", return_value=None):
        result = create_entry(db_session, make_create(staff_id=8))
    assert result.is_err
    assert result.code == "timetable_conflict"
    assert result.status_code == 409
    assert len(list_entries(db_session)) == 1


def test_enseignant_inexistant_erreur_de_recherche(fk_session, fk_campus):
    result = create_entry(fk_session, make_create(staff_id=999))
    assert result.is_err
    assert result.category == ErrorCategory.LOOKUP
    assert result.code == "staff_not_found"
    assert result.status_code == 400
    assert list_entries(fk_session) == []


def test_cle_etrangere_orpheline_au_commit_n_est_pas_un_conflit(fk_session, fk_campus):
    """Référence supprimée entre la validation et l'écriture : erreur de recherche, pas 409."""
    with patch("app.services.timetable_service.validate_timetable_entry", return_value=None):
        result = create_entry(fk_session, make_create(staff_id=999))
    assert result.is_err
    assert result.category == ErrorCategory.LOOKUP
    assert result.code == "reference_not_found"
    assert result.status_code == 400
    assert list_entries(fk_session) == []


def test_contrainte_unicite_reste_un_conflit_avec_cles_etrangeres(fk_session, fk_campus):
    assert not create_entry(fk_session, make_create()).is_err
    with patch("app.services.timetable_service.validate_timetable_entry", return_value=None):
        result = create_entry(fk_session, make_create(staff_id=8))
    assert result.code == "timetable_conflict"


# --- update_entry ---

def test_update_entry_inexistante(db_session, campus):
    assert update_entry(db_session, 999, TimetableEntryUpdate(room_id=11)) is None


def test_update_entry_payload_identique_idempotent(db_session, campus):
    created = create_entry(db_session, make_create()).value
    result = update_entry(db_session, created.id, TimetableEntryUpdate(**make_create().model_dump()))
    assert not result.is_err
    updated = result.value
    assert updated.model_dump(exclude={"updated_at", "created_at"}) == created.model_dump(
        exclude={"updated_at", "created_at"}
    )


def test_update_entry_champs_absents_repris(db_session, campus):
    created = create_entry(db_session, make_create()).value
    result = update_entry(db_session, created.id, TimetableEntryUpdate(timeslot_id=4))
    assert not result.is_err
    assert result.value.timeslot_id == 4
    assert result.value.room_id == 10
    assert result.value.date == dt.date(2024, 2, 14)


def test_update_entry_revalidation_complete(db_session, campus):
    created = create_entry(db_session, make_create()).value
    result = update_entry(db_session, created.id, TimetableEntryUpdate(subject_code="CS102"))
    assert result.is_err
    assert result.code == "lab_flag_mismatch"
    assert get_entry(db_session, created.id).subject_code == "CS101"


def test_update_entry_conflit_avec_une_autre_entree(db_session, campus):
    campus.school_class(2)
    create_entry(db_session, make_create())
    other = create_entry(db_session, make_create(class_id=2, staff_id=8, timeslot_id=4)).value
    result = update_entry(db_session, other.id, TimetableEntryUpdate(timeslot_id=3))
    assert result.is_err
    assert result.code == "timetable_conflict"


# --- delete_entry / lectures ---

def test_delete_entry(db_session, campus):
    created = create_entry(db_session, make_create()).value
    assert delete_entry(db_session, created.id) is True
    assert get_entry(db_session, created.id) is None
    assert delete_entry(db_session, created.id) is False


def test_list_entries_filtre_par_classe(db_session, campus):
    campus.school_class(2)
    create_entry(db_session, make_create())
    create_entry(db_session, make_create(class_id=2, staff_id=8, room_id=10, timeslot_id=4))
    assert [e.class_id for e in list_entries(db_session, class_id=2)] == [2]
    assert [e.timeslot_id for e in list_entries(db_session)] == [3, 4]
