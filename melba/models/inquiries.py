"""Sponsor, partner and general contact inquiries."""

from __future__ import annotations

from . import db
from .mixins import RecordMixin


class CareerFundInquiry(RecordMixin, db.Model):
    """Offer to fund internships (individual or organisation)."""

    __tablename__ = "career_fund_inquiries"

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False, default="")
    sponsorship_level = db.Column(db.String(120), nullable=False)
    message = db.Column(db.Text, nullable=False, default="")


class CareerPartnerInquiry(RecordMixin, db.Model):
    __tablename__ = "career_partner_inquiries"

    organization_name = db.Column(db.String(200), nullable=False)
    contact_name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False, default="")
    partnership_type = db.Column(db.String(120), nullable=False)
    message = db.Column(db.Text, nullable=False, default="")


class ContactSubmission(RecordMixin, db.Model):
    __tablename__ = "contact_submissions"

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False, default="")
    subject = db.Column(db.String(200), nullable=False, default="")
    message = db.Column(db.Text, nullable=False)


class FundInternshipInquiry(RecordMixin, db.Model):
    """Sponsorship pledge sent from the "fund an internship" page."""

    __tablename__ = "fund_internship_inquiries"

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False, default="")
    sponsorship_level = db.Column(db.String(20), nullable=False)
    message = db.Column(db.Text, nullable=False, default="")

    __table_args__ = (
        db.CheckConstraint(
            "sponsorship_level IN ('Full', 'Half', 'Quarter', 'Custom')",
            name="ck_fund_internship_inquiries_sponsorship_level",
        ),
    )


class BecomePartnerInquiry(RecordMixin, db.Model):
    __tablename__ = "become_partner_inquiries"

    organization_name = db.Column(db.String(200), nullable=False)
    contact_name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=False, default="")
    partnership_type = db.Column(db.String(120), nullable=False)
    message = db.Column(db.Text, nullable=False, default="")
