"""Registry of the public forms accepted by the site.

Each :class:`SubmissionKind` bundles the persisted model, the field rules,
the public and admin URLs and the notification wording. Adding a form means
adding one entry to :data:`SUBMISSION_KINDS`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import (
    BootcampRegistration,
    CareerApplication,
    CareerFundInquiry,
    BecomePartnerInquiry,
    CareerPartnerInquiry,
    ContactSubmission,
    EnrollmentApplication,
    FundInternshipInquiry,
    JoinTeamRegistration,
    NewsletterSubscription,
    TutorApplication,
    VolunteerApplication,
)
from ..utils.validation import EMAIL, INTEGER, LIST, FieldSpec

BOOTCAMP_EXPERIENCE_LEVELS = ("No Experience", "Basic Concepts", "Intermediate", "Advanced")
SPONSORSHIP_LEVELS = ("Full", "Half", "Quarter", "Custom")


@dataclass(frozen=True)
class SubmissionKind:
    name: str
    model: Any
    fields: tuple[FieldSpec, ...]
    title: str
    success_message: str
    public_paths: tuple[str, ...]
    admin_path: str
    name_fields: tuple[str, ...] = ("first_name", "last_name")
    order_by: str = "-created_at"
    unique_field: str | None = None
    admin_template: str = "submission_admin"
    receipt_template: str = "submission_receipt"
    receipt_subject: str = "We received your {title}"
    redirect_endpoint: str | None = None

    @property
    def endpoint(self) -> str:
        return self.name.replace("-", "_")

    @property
    def not_found_message(self) -> str:
        return f"{self.title} not found."

    def display_name(self, values: Mapping[str, Any]) -> str:
        # Used in mail Subject headers: no line breaks.
        parts = [str(values.get(key) or "") for key in self.name_fields]
        name = " ".join(" ".join(parts).split())
        return name or str(values.get("email") or "")

    def labelled_values(self, record_values: Mapping[str, Any]) -> list[tuple[str, str]]:
        """Return ``(label, text)`` rows for the notification body."""

        rows = []
        for spec in self.fields:
            value = record_values.get(spec.attribute)
            if value in (None, "", []):
                continue
            if isinstance(value, (list, tuple)):
                value = ", ".join(str(item) for item in value)
            label = spec.label[:1].upper() + spec.label[1:]
            rows.append((label, str(value)))
        return rows


_FIRST_NAME = FieldSpec("firstName", "first name", required=True)
_LAST_NAME = FieldSpec("lastName", "last name", required=True)
_EMAIL = FieldSpec("email", "email", type=EMAIL, required=True)
_PHONE = FieldSpec("phone", "phone")
_MESSAGE = FieldSpec("message", "message")


SUBMISSION_KINDS: tuple[SubmissionKind, ...] = (
    SubmissionKind(
        name="volunteer",
        model=VolunteerApplication,
        title="Volunteer application",
        success_message="Volunteer application submitted successfully!",
        public_paths=("/api/volunteer", "/applications/volunteer"),
        admin_path="applications/volunteer",
        fields=(
            _FIRST_NAME,
            _LAST_NAME,
            _EMAIL,
            FieldSpec(
                "volunteerInterests",
                "area of interest",
                type=LIST,
                required=True,
                empty_message="Please select at least one area of interest.",
            ),
            _PHONE,
            FieldSpec("address", "address"),
            FieldSpec("availability", "availability"),
            _MESSAGE,
        ),
    ),
    SubmissionKind(
        name="enrollment",
        model=EnrollmentApplication,
        title="Enrollment application",
        success_message="Enrollment application submitted successfully!",
        public_paths=("/api/enrollment", "/applications/enrollment"),
        admin_path="applications/enrollment",
        fields=(
            _FIRST_NAME,
            _LAST_NAME,
            _EMAIL,
            FieldSpec("age", "age", type=INTEGER, required=True, min_value=12, max_value=80),
            FieldSpec("programInterest", "program interest", required=True),
            _PHONE,
            FieldSpec("school", "school"),
            FieldSpec("gradeLevel", "grade level"),
            _MESSAGE,
        ),
    ),
    SubmissionKind(
        name="tutor",
        model=TutorApplication,
        title="Tutor application",
        success_message="Tutor application submitted successfully!",
        public_paths=("/api/tutor", "/applications/tutor"),
        admin_path="applications/tutor",
        fields=(
            _FIRST_NAME,
            _LAST_NAME,
            _EMAIL,
            FieldSpec(
                "tutorSubjects",
                "subject",
                type=LIST,
                required=True,
                empty_message="Please select at least one subject.",
            ),
            _PHONE,
            FieldSpec("age", "age", type=INTEGER, min_value=16, max_value=80),
            FieldSpec("experience", "experience"),
            FieldSpec("tutorAvailability", "availability"),
            _MESSAGE,
        ),
    ),
    SubmissionKind(
        name="career-apply",
        model=CareerApplication,
        title="Internship application",
        success_message="Internship application submitted successfully!",
        public_paths=("/api/career/apply", "/applications/career/apply"),
        admin_path="applications/career/apply",
        fields=(
            _FIRST_NAME,
            _LAST_NAME,
            FieldSpec("age", "age", type=INTEGER, required=True, min_value=16, max_value=80),
            _EMAIL,
            FieldSpec("interest", "area of interest", required=True),
            _PHONE,
            FieldSpec("coverLetter", "cover letter"),
        ),
    ),
    SubmissionKind(
        name="career-fund",
        model=CareerFundInquiry,
        title="Career funding inquiry",
        success_message="Thank you for your interest in funding internships! We'll be in touch soon.",
        public_paths=("/api/career/fund",),
        admin_path="applications/career/fund",
        name_fields=("name",),
        fields=(
            FieldSpec("name", "name", required=True),
            _EMAIL,
            FieldSpec("sponsorshipLevel", "sponsorship level", required=True),
            _PHONE,
            _MESSAGE,
        ),
    ),
    SubmissionKind(
        name="career-partner",
        model=CareerPartnerInquiry,
        title="Partnership inquiry",
        success_message="Thank you for your interest in partnering with us! We'll be in touch soon.",
        public_paths=("/api/career/partner",),
        admin_path="applications/career/partner-inquiries",
        name_fields=("organization_name",),
        fields=(
            FieldSpec("organizationName", "organization name", required=True),
            FieldSpec("contactName", "contact name", required=True),
            _EMAIL,
            FieldSpec("partnershipType", "partnership type", required=True),
            _PHONE,
            _MESSAGE,
        ),
    ),
    SubmissionKind(
        name="fund-internship",
        model=FundInternshipInquiry,
        title="Internship funding inquiry",
        success_message="Internship funding inquiry submitted successfully!",
        public_paths=("/applications/career/fund-internships", "/api/career/fund-internships"),
        admin_path="applications/career/fund-internships",
        name_fields=("name",),
        fields=(
            FieldSpec("name", "name", required=True),
            _EMAIL,
            FieldSpec(
                "sponsorshipLevel",
                "sponsorship level",
                required=True,
                choices=SPONSORSHIP_LEVELS,
            ),
            _PHONE,
            _MESSAGE,
        ),
    ),
    SubmissionKind(
        name="become-partner",
        model=BecomePartnerInquiry,
        title="Partner inquiry",
        success_message="Partner inquiry submitted successfully!",
        public_paths=("/applications/career/partner", "/api/career/become-partner"),
        admin_path="applications/career/partner",
        name_fields=("organization_name",),
        fields=(
            FieldSpec("organizationName", "organization name", required=True),
            FieldSpec("contactName", "contact name", required=True),
            _EMAIL,
            FieldSpec("partnershipType", "partnership type", required=True),
            _PHONE,
            _MESSAGE,
        ),
    ),
    SubmissionKind(
        name="join-team",
        model=JoinTeamRegistration,
        title="Sports team registration",
        success_message="Sports team registration submitted successfully!",
        public_paths=("/applications/sports/join-team", "/api/sports/join-team"),
        admin_path="applications/sports/join-team",
        fields=(
            _FIRST_NAME,
            _LAST_NAME,
            FieldSpec("age", "age", type=INTEGER, required=True, min_value=12, max_value=80),
            _EMAIL,
            FieldSpec("teamSportInterest", "sport", required=True),
            _PHONE,
            FieldSpec("teamExperienceLevel", "experience level"),
            _MESSAGE,
        ),
    ),
    SubmissionKind(
        name="bootcamp",
        model=BootcampRegistration,
        title="Bootcamp registration",
        success_message="Bootcamp registration submitted successfully!",
        public_paths=("/applications/bootcamp", "/api/bootcamp"),
        admin_path="applications/bootcamp",
        fields=(
            _FIRST_NAME,
            _LAST_NAME,
            FieldSpec("age", "age", type=INTEGER, required=True, min_value=16, max_value=50),
            _EMAIL,
            FieldSpec("program", "program", required=True),
            FieldSpec(
                "experienceLevel",
                "experience level",
                required=True,
                choices=BOOTCAMP_EXPERIENCE_LEVELS,
            ),
            _PHONE,
            _MESSAGE,
        ),
    ),
    SubmissionKind(
        name="contact",
        model=ContactSubmission,
        title="Contact message",
        success_message="Thank you for reaching out! We'll get back to you soon.",
        public_paths=("/contact", "/api/contact"),
        admin_path="contact-forms",
        name_fields=("name",),
        redirect_endpoint="main.contact",
        fields=(
            FieldSpec("name", "name", required=True),
            _EMAIL,
            FieldSpec("message", "message", required=True),
            _PHONE,
            FieldSpec("subject", "subject"),
        ),
    ),
    SubmissionKind(
        name="newsletter",
        model=NewsletterSubscription,
        title="Newsletter subscription",
        success_message=(
            "Thanks for subscribing! You'll now receive the latest stories "
            "and updates from {organization}."
        ),
        public_paths=("/subscribe", "/api/subscribe"),
        admin_path="subscribers",
        name_fields=(),
        order_by="-subscribed_at",
        unique_field="email",
        admin_template="newsletter_admin",
        receipt_template="newsletter_welcome",
        receipt_subject="Welcome to the {organization} newsletter",
        fields=(_EMAIL,),
    ),
)

_BY_NAME = {kind.name: kind for kind in SUBMISSION_KINDS}


def get_kind(name: str) -> SubmissionKind:
    """Return the registered kind or raise ``KeyError``."""

    return _BY_NAME[name]


__all__ = [
    "SubmissionKind",
    "SUBMISSION_KINDS",
    "BOOTCAMP_EXPERIENCE_LEVELS",
    "SPONSORSHIP_LEVELS",
    "get_kind",
]
