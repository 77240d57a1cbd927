"""Applications and registrations submitted from the public program pages."""

from __future__ import annotations

from . import db
from .mixins import RecordMixin


class VolunteerApplication(RecordMixin, db.Model):
    __tablename__ = "volunteer_applications"

    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False, default="")
    address = db.Column(db.Text, nullable=False, default="")
    volunteer_interests = db.Column(db.JSON, nullable=False, default=list)
    availability = db.Column(db.Text, nullable=False, default="")
    message = db.Column(db.Text, nullable=False, default="")


class EnrollmentApplication(RecordMixin, db.Model):
    __tablename__ = "enrollment_applications"

    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False, default="")
    school = db.Column(db.String(200), nullable=False, default="")
    grade_level = db.Column(db.String(60), nullable=False, default="")
    program_interest = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False, default="")

    __table_args__ = (
        db.CheckConstraint("age BETWEEN 12 AND 80", name="ck_enrollment_applications_age"),
    )


class TutorApplication(RecordMixin, db.Model):
    __tablename__ = "tutor_applications"

    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    age = db.Column(db.Integer, nullable=True)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False, default="")
    tutor_subjects = db.Column(db.JSON, nullable=False, default=list)
    experience = db.Column(db.Text, nullable=False, default="")
    tutor_availability = db.Column(db.Text, nullable=False, default="")
    message = db.Column(db.Text, nullable=False, default="")


class CareerApplication(RecordMixin, db.Model):
    """Internship "apply now" form on the career development page."""

    __tablename__ = "career_applications"

    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False, default="")
    interest = db.Column(db.String(200), nullable=False)
    cover_letter = db.Column(db.Text, nullable=False, default="")

    __table_args__ = (
        db.CheckConstraint("age BETWEEN 16 AND 80", name="ck_career_applications_age"),
    )


class JoinTeamRegistration(RecordMixin, db.Model):
    __tablename__ = "join_team_registrations"

    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False, default="")
    team_sport_interest = db.Column(db.String(120), nullable=False)
    team_experience_level = db.Column(db.String(120), nullable=False, default="")
    message = db.Column(db.Text, nullable=False, default="")

    __table_args__ = (
        db.CheckConstraint("age BETWEEN 12 AND 80", name="ck_join_team_registrations_age"),
    )


class BootcampRegistration(RecordMixin, db.Model):
    __tablename__ = "bootcamp_registrations"

    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False, default="")
    program = db.Column(db.String(200), nullable=False)
    experience_level = db.Column(db.String(40), nullable=False)
    message = db.Column(db.Text, nullable=False, default="")

    __table_args__ = (
        db.CheckConstraint("age BETWEEN 16 AND 50", name="ck_bootcamp_registrations_age"),
    )
