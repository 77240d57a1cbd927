"""Initial schema: submissions, newsletter, posts and programs."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202601150001"
down_revision = None
branch_labels = None
depends_on = None


def _identity() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    ]


def _optional_text(name: str, type_=None) -> sa.Column:
    return sa.Column(name, type_ or sa.Text(), nullable=False, server_default="")


def _person() -> list[sa.Column]:
    return [
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
    ]


def _email() -> sa.Column:
    return sa.Column("email", sa.String(length=255), nullable=False)


def _phone() -> sa.Column:
    return _optional_text("phone", sa.String(length=40))


SUBMISSION_TABLES = (
    "volunteer_applications",
    "enrollment_applications",
    "tutor_applications",
    "career_applications",
    "join_team_registrations",
    "bootcamp_registrations",
    "career_fund_inquiries",
    "career_partner_inquiries",
    "fund_internship_inquiries",
    "become_partner_inquiries",
    "contact_submissions",
)


def upgrade() -> None:
    op.create_table(
        "volunteer_applications",
        *_identity(),
        *_person(),
        _email(),
        _phone(),
        _optional_text("address"),
        sa.Column("volunteer_interests", sa.JSON(), nullable=False),
        _optional_text("availability"),
        _optional_text("message"),
    )
    op.create_table(
        "enrollment_applications",
        *_identity(),
        *_person(),
        sa.Column("age", sa.Integer(), nullable=False),
        _email(),
        _phone(),
        _optional_text("school", sa.String(length=200)),
        _optional_text("grade_level", sa.String(length=60)),
        sa.Column("program_interest", sa.String(length=200), nullable=False),
        _optional_text("message"),
        sa.CheckConstraint("age BETWEEN 12 AND 80", name="ck_enrollment_applications_age"),
    )
    op.create_table(
        "tutor_applications",
        *_identity(),
        *_person(),
        sa.Column("age", sa.Integer(), nullable=True),
        _email(),
        _phone(),
        sa.Column("tutor_subjects", sa.JSON(), nullable=False),
        _optional_text("experience"),
        _optional_text("tutor_availability"),
        _optional_text("message"),
    )
    op.create_table(
        "career_applications",
        *_identity(),
        *_person(),
        sa.Column("age", sa.Integer(), nullable=False),
        _email(),
        _phone(),
        sa.Column("interest", sa.String(length=200), nullable=False),
        _optional_text("cover_letter"),
        sa.CheckConstraint("age BETWEEN 16 AND 80", name="ck_career_applications_age"),
    )
    op.create_table(
        "join_team_registrations",
        *_identity(),
        *_person(),
        sa.Column("age", sa.Integer(), nullable=False),
        _email(),
        _phone(),
        sa.Column("team_sport_interest", sa.String(length=120), nullable=False),
        _optional_text("team_experience_level", sa.String(length=120)),
        _optional_text("message"),
        sa.CheckConstraint("age BETWEEN 12 AND 80", name="ck_join_team_registrations_age"),
    )
    op.create_table(
        "bootcamp_registrations",
        *_identity(),
        *_person(),
        sa.Column("age", sa.Integer(), nullable=False),
        _email(),
        _phone(),
        sa.Column("program", sa.String(length=200), nullable=False),
        sa.Column("experience_level", sa.String(length=40), nullable=False),
        _optional_text("message"),
        sa.CheckConstraint("age BETWEEN 16 AND 50", name="ck_bootcamp_registrations_age"),
    )
    op.create_table(
        "career_fund_inquiries",
        *_identity(),
        sa.Column("name", sa.String(length=200), nullable=False),
        _email(),
        _phone(),
        sa.Column("sponsorship_level", sa.String(length=120), nullable=False),
        _optional_text("message"),
    )
    op.create_table(
        "career_partner_inquiries",
        *_identity(),
        sa.Column("organization_name", sa.String(length=200), nullable=False),
        sa.Column("contact_name", sa.String(length=200), nullable=False),
        _email(),
        _phone(),
        sa.Column("partnership_type", sa.String(length=120), nullable=False),
        _optional_text("message"),
    )
    op.create_table(
        "fund_internship_inquiries",
        *_identity(),
        sa.Column("name", sa.String(length=200), nullable=False),
        _email(),
        _phone(),
        sa.Column("sponsorship_level", sa.String(length=20), nullable=False),
        _optional_text("message"),
        sa.CheckConstraint(
            "sponsorship_level IN ('Full', 'Half', 'Quarter', 'Custom')",
            name="ck_fund_internship_inquiries_sponsorship_level",
        ),
    )
    op.create_table(
        "become_partner_inquiries",
        *_identity(),
        sa.Column("organization_name", sa.String(length=200), nullable=False),
        sa.Column("contact_name", sa.String(length=200), nullable=False),
        _email(),
        _phone(),
        sa.Column("partnership_type", sa.String(length=120), nullable=False),
        _optional_text("message"),
    )
    op.create_table(
        "contact_submissions",
        *_identity(),
        sa.Column("name", sa.String(length=200), nullable=False),
        _email(),
        _phone(),
        _optional_text("subject", sa.String(length=200)),
        sa.Column("message", sa.Text(), nullable=False),
    )
    for table in SUBMISSION_TABLES:
        op.create_index(f"ix_{table}_created_at", table, ["created_at"])
        op.create_index(f"ix_{table}_email", table, ["email"])

    op.create_table(
        "newsletter_subscriptions",
        *_identity(),
        _email(),
        sa.Column("subscribed_at", sa.DateTime(), nullable=False),
    )
    op.create_index(
        "ix_newsletter_subscriptions_email", "newsletter_subscriptions", ["email"], unique=True
    )
    op.create_index(
        "ix_newsletter_subscriptions_created_at", "newsletter_subscriptions", ["created_at"]
    )

    op.create_table(
        "posts",
        *_identity(),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("type", sa.String(length=10), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=200), nullable=False),
        _optional_text("content"),
        sa.Column("image", sa.String(length=512), nullable=True),
        sa.Column("event_date", sa.DateTime(), nullable=True),
        sa.Column("location", sa.String(length=100), nullable=True),
        sa.UniqueConstraint("type", "slug", name="uq_posts_type_slug"),
        sa.CheckConstraint("type IN ('blog', 'event')", name="ck_posts_type"),
    )
    op.create_index("ix_posts_type", "posts", ["type"])
    op.create_index("ix_posts_event_date", "posts", ["event_date"])
    op.create_index("ix_posts_created_at", "posts", ["created_at"])

    op.create_table(
        "programs",
        *_identity(),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("title", sa.String(length=150), nullable=False),
        sa.Column("slug", sa.String(length=200), nullable=False),
        _optional_text("age_range", sa.String(length=60)),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Active"),
        sa.Column("short_description", sa.Text(), nullable=False),
        _optional_text("full_description"),
        sa.Column("image", sa.String(length=512), nullable=True),
        sa.CheckConstraint(
            "status IN ('Active', 'Upcoming', 'Closed')", name="ck_programs_status"
        ),
    )
    op.create_index("ix_programs_slug", "programs", ["slug"], unique=True)
    op.create_index("ix_programs_created_at", "programs", ["created_at"])


def downgrade() -> None:
    op.drop_table("programs")
    op.drop_table("posts")
    op.drop_table("newsletter_subscriptions")
    for table in reversed(SUBMISSION_TABLES):
        op.drop_table(table)
