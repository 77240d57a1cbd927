"""Programs shown on the public programs page."""

from __future__ import annotations

from . import db
from .mixins import SluggedMixin, TimestampedMixin

PROGRAM_STATUSES = ("Active", "Upcoming", "Closed")


class Program(SluggedMixin, TimestampedMixin, db.Model):
    __tablename__ = "programs"

    title = db.Column(db.String(150), nullable=False)
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    age_range = db.Column(db.String(60), nullable=False, default="")
    status = db.Column(db.String(20), nullable=False, default="Active", server_default="Active")
    short_description = db.Column(db.Text, nullable=False)
    full_description = db.Column(db.Text, nullable=False, default="")
    image = db.Column(db.String(512), nullable=True)

    __table_args__ = (
        db.CheckConstraint(
            "status IN ('Active', 'Upcoming', 'Closed')", name="ck_programs_status"
        ),
    )

    def __repr__(self) -> str:  # pragma: no cover - string helper
        return f"<Program {self.slug}>"
