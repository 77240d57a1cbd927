from datetime import datetime

import pytest
from werkzeug.datastructures import MultiDict

from melba.errors import ValidationError
from melba.utils.validation import (
    DATETIME,
    EMAIL,
    INTEGER,
    LIST,
    FieldSpec,
    join_labels,
    validate_payload,
)

PERSON_FIELDS = (
    FieldSpec("firstName", "first name", required=True),
    FieldSpec("lastName", "last name", required=True),
    FieldSpec("email", "email", type=EMAIL, required=True),
    FieldSpec("phone", "phone"),
)


def test_join_labels_uses_serial_comma():
    assert join_labels(["email"]) == "Email"
    assert join_labels(["first name", "email"]) == "First name and email"
    assert join_labels(["first name", "last name", "email"]) == "First name, last name, and email"


def test_missing_required_fields_share_one_message():
    result = validate_payload(PERSON_FIELDS, {"phone": "555-0100"})

    assert not result.ok
    assert result.message == "First name, last name, and email are required."
    assert set(result.errors) == {"firstName", "lastName", "email"}
    assert result.values == {}


def test_whitespace_only_counts_as_missing():
    result = validate_payload(PERSON_FIELDS, {"firstName": "   ", "lastName": "Hopper", "email": "g@h.io"})

    assert result.message == "First name is required."


@pytest.mark.parametrize(
    "email",
    ["not-an-email", "a@b", "a@@b.com", "a b@c.com", " grace@example.com", "grace@example.com ", "@example.com"],
)
def test_malformed_email_is_rejected(email):
    result = validate_payload(PERSON_FIELDS, {"firstName": "Grace", "lastName": "Hopper", "email": email})

    assert result.errors == {"email": "Please enter a valid email address."}


def test_values_are_stripped_and_email_lowercased():
    result = validate_payload(
        PERSON_FIELDS, {"firstName": "  Grace ", "lastName": "Hopper", "email": "Grace@Example.COM"}
    )

    assert result.ok
    assert result.values == {
        "first_name": "Grace",
        "last_name": "Hopper",
        "email": "grace@example.com",
        "phone": "",
    }


def test_integer_range_and_parsing():
    fields = (FieldSpec("age", "age", type=INTEGER, required=True, min_value=12, max_value=80),)

    assert validate_payload(fields, {"age": "17"}).values == {"age": 17}
    assert validate_payload(fields, {"age": 17.0}).values == {"age": 17}
    assert validate_payload(fields, {"age": 5}).errors == {"age": "Age must be between 12 and 80."}
    assert validate_payload(fields, {"age": 81}).errors == {"age": "Age must be between 12 and 80."}
    assert validate_payload(fields, {"age": "twelve"}).errors == {"age": "Age must be a whole number."}
    assert validate_payload(fields, {"age": True}).errors == {"age": "Age must be a whole number."}


def test_optional_integer_defaults_to_none():
    fields = (FieldSpec("age", "age", type=INTEGER, min_value=16, max_value=80),)

    assert validate_payload(fields, {}).values == {"age": None}
    assert validate_payload(fields, {"age": ""}).values == {"age": None}


def test_list_field_accepts_single_string_and_drops_blanks():
    fields = (FieldSpec("tutorSubjects", "subject", type=LIST, required=True),)

    assert validate_payload(fields, {"tutorSubjects": "Math"}).values == {"tutor_subjects": ["Math"]}
    assert validate_payload(fields, {"tutorSubjects": ["Math", " ", "Art "]}).values == {
        "tutor_subjects": ["Math", "Art"]
    }


def test_required_list_reports_its_own_message():
    fields = (
        FieldSpec("email", "email", type=EMAIL, required=True),
        FieldSpec(
            "volunteerInterests",
            "area of interest",
            type=LIST,
            required=True,
            empty_message="Please select at least one area of interest.",
        ),
    )

    result = validate_payload(fields, {"email": "a@b.co", "volunteerInterests": []})

    assert result.errors == {"volunteerInterests": "Please select at least one area of interest."}
    assert result.message == "Please select at least one area of interest."


def test_list_field_reads_repeated_form_keys():
    fields = (FieldSpec("volunteerInterests", "area of interest", type=LIST, required=True),)
    form = MultiDict([("volunteerInterests", "Tutoring"), ("volunteerInterests", "Events")])

    assert validate_payload(fields, form).values == {"volunteer_interests": ["Tutoring", "Events"]}

    bracketed = MultiDict([("volunteerInterests[]", "Mentoring")])
    assert validate_payload(fields, bracketed).values == {"volunteer_interests": ["Mentoring"]}


def test_choices_and_max_length():
    fields = (
        FieldSpec("experienceLevel", "experience level", choices=("Basic Concepts", "Advanced")),
        FieldSpec("title", "title", max_length=5),
    )

    result = validate_payload(fields, {"experienceLevel": "Guru", "title": "Too long"})

    assert result.errors["experienceLevel"] == "Experience level must be one of: Basic Concepts, Advanced."
    assert result.errors["title"] == "Title cannot exceed 5 characters."


def test_datetime_field_normalizes_to_naive_utc():
    fields = (FieldSpec("eventDate", "event date", type=DATETIME, required=True),)

    assert validate_payload(fields, {"eventDate": "2030-05-01T18:00:00Z"}).values == {
        "event_date": datetime(2030, 5, 1, 18, 0)
    }
    assert validate_payload(fields, {"eventDate": "next friday"}).errors == {
        "eventDate": "Invalid event date format."
    }


def test_partial_mode_skips_blank_fields():
    result = validate_payload(PERSON_FIELDS, {"firstName": "", "lastName": "Byron"}, partial=True)

    assert result.ok
    assert result.values == {"last_name": "Byron"}


def test_raise_for_errors_carries_field_messages():
    result = validate_payload(PERSON_FIELDS, None)

    with pytest.raises(ValidationError) as excinfo:
        result.raise_for_errors()

    assert excinfo.value.status_code == 400
    assert excinfo.value.to_dict()["errors"]["email"] == "Email is required."
