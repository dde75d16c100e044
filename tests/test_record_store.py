"""
Tests for the record store: joint id/filter matching, partial updates and
the user cascade delete.
"""
import pytest

from app.core.access_policy import candidate_filter
from app.core.errors import Conflict, NotFound, Unexpected, ValidationError
from app.db.models.application import Application
from app.db.models.user import User
from app.services.record_store import RecordStore

from conftest import actor_for, make_user


def add_applications(db, owner, count):
    for i in range(count):
        db.add(Application(candidate_id=owner.id, company=f"Company {i}", role="Eng"))
    db.commit()


def test_get_requires_id_and_filter_to_match(db_session, recruiter, co2_candidate):
    store = RecordStore(db_session)
    with pytest.raises(NotFound):
        store.get(User, co2_candidate.id, candidate_filter(actor_for(recruiter)))


def test_delete_user_cascade_is_complete_and_precise(db_session, candidate, co1_candidate):
    add_applications(db_session, candidate, 3)
    add_applications(db_session, co1_candidate, 2)

    removed = RecordStore(db_session).delete_user(candidate.id)

    assert removed == 3
    assert db_session.get(User, candidate.id) is None
    assert db_session.query(Application).filter(Application.candidate_id == candidate.id).count() == 0
    assert db_session.query(Application).filter(Application.candidate_id == co1_candidate.id).count() == 2


def test_delete_user_with_loaded_applications(db_session, candidate):
    add_applications(db_session, candidate, 2)
    assert len(candidate.applications) == 2

    RecordStore(db_session).delete_user(candidate.id)
    assert db_session.query(Application).count() == 0


def test_delete_user_rolls_back_on_failure(db_session, candidate, monkeypatch):
    add_applications(db_session, candidate, 2)
    store = RecordStore(db_session)

    def broken_delete(instance):
        raise RuntimeError("disk full")

    monkeypatch.setattr(db_session, "delete", broken_delete)
    with pytest.raises(Unexpected):
        store.delete_user(candidate.id)
    monkeypatch.undo()

    db_session.expire_all()
    assert db_session.get(User, candidate.id) is not None
    assert db_session.query(Application).filter(Application.candidate_id == candidate.id).count() == 2


def test_update_absent_fields_untouched_and_null_clears(db_session, co1_candidate):
    co1_candidate.skills = "python"
    co1_candidate.location = "Berlin"
    db_session.commit()

    updated = RecordStore(db_session).update(User, co1_candidate.id, {"location": None})

    assert updated.location is None
    assert updated.skills == "python"


def test_update_null_required_field_is_rejected(db_session, co1_candidate):
    with pytest.raises(ValidationError):
        RecordStore(db_session).update(User, co1_candidate.id, {"name": None})


def test_update_unknown_field_is_rejected(db_session, co1_candidate):
    with pytest.raises(ValidationError):
        RecordStore(db_session).update(User, co1_candidate.id, {"is_admin": True})


def test_create_duplicate_email_is_conflict(db_session, candidate):
    with pytest.raises(Conflict):
        RecordStore(db_session).create(User, name="Twin", email=candidate.email, role="candidate")
    # session is usable after the rollback
    assert db_session.query(User).count() == 1


def test_update_to_taken_email_is_conflict(db_session, candidate, co1_candidate):
    with pytest.raises(Conflict):
        RecordStore(db_session).update(User, co1_candidate.id, {"email": candidate.email})


def test_update_and_delete_missing_record_is_not_found(db_session):
    store = RecordStore(db_session)
    with pytest.raises(NotFound):
        store.update(Application, 42, {"notes": "x"})
    with pytest.raises(NotFound):
        store.delete(Application, 42)


def test_find_applies_filters(db_session, candidate):
    make_user(db_session, "bob@example.com")
    found = RecordStore(db_session).find(User, User.email == candidate.email)
    assert [u.id for u in found] == [candidate.id]
