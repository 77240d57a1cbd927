import uuid

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from melba.errors import DuplicateKeyError, MalformedIdentityError, NotFoundError, PersistenceFault
from melba.models import ContactSubmission, NewsletterSubscription, db
from melba.services.records import (
    create_record,
    get_record,
    list_records,
    parse_record_id,
    update_record,
)


def test_parse_record_id_accepts_uuid_forms():
    value = uuid.uuid4()

    assert parse_record_id(value.hex) == value.hex
    assert parse_record_id(str(value)) == value.hex
    assert parse_record_id(str(value).upper()) == value.hex


@pytest.mark.parametrize("raw", [None, "", "42", "not-a-uuid", True, "g" * 32])
def test_parse_record_id_rejects_malformed(raw):
    with pytest.raises(MalformedIdentityError):
        parse_record_id(raw)


def test_create_assigns_identity_and_timestamp(app):
    with app.app_context():
        record = create_record(
            ContactSubmission, {"name": "Ada", "email": "ada@example.com", "message": "Hi"}
        )

        assert len(record.id) == 32
        assert record.created_at is not None
        assert record.phone == ""


def test_duplicate_unique_value_maps_to_duplicate_key(app):
    with app.app_context():
        create_record(NewsletterSubscription, {"email": "reader@example.com"})

        with pytest.raises(DuplicateKeyError):
            create_record(NewsletterSubscription, {"email": "reader@example.com"})

        # The session is usable again after the rollback.
        assert NewsletterSubscription.query.count() == 1


def test_not_found_uses_given_message(app):
    with app.app_context():
        with pytest.raises(NotFoundError) as excinfo:
            get_record(ContactSubmission, uuid.uuid4().hex, "Contact message not found.")

    assert excinfo.value.message == "Contact message not found."


def test_database_failure_maps_to_persistence_fault(app, monkeypatch):
    def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    with app.app_context():
        monkeypatch.setattr(db.session, "commit", broken_commit)
        with pytest.raises(PersistenceFault) as excinfo:
            create_record(
                ContactSubmission, {"name": "Ada", "email": "ada@example.com", "message": "Hi"}
            )

    assert excinfo.value.status_code == 500


def test_other_integrity_errors_are_server_faults(app, monkeypatch):
    def broken_commit():
        raise IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: message"))

    with app.app_context():
        monkeypatch.setattr(db.session, "commit", broken_commit)
        with pytest.raises(PersistenceFault):
            create_record(ContactSubmission, {"name": "Ada", "email": "a@b.co", "message": "Hi"})


def test_update_and_list_order(app):
    with app.app_context():
        first = create_record(ContactSubmission, {"name": "A", "email": "a@b.co", "message": "1"})
        updated = update_record(ContactSubmission, first.id, {"subject": "Hello"})

        assert updated.subject == "Hello"
        assert [r.id for r in list_records(ContactSubmission, "created_at")] == [first.id]
