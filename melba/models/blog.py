"""Blog posts and events share one table, told apart by ``type``."""

from __future__ import annotations

from . import db
from .mixins import SluggedMixin, TimestampedMixin

POST_TYPES = ("blog", "event")
TITLE_MAX_LENGTH = 100


class Post(SluggedMixin, TimestampedMixin, db.Model):
    """Content entity managed from the admin dashboard."""

    __tablename__ = "posts"

    type = db.Column(db.String(10), nullable=False, index=True)
    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    slug = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False, default="")
    image = db.Column(db.String(512), nullable=True)
    event_date = db.Column(db.DateTime, nullable=True, index=True)
    location = db.Column(db.String(100), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("type", "slug", name="uq_posts_type_slug"),
        db.CheckConstraint("type IN ('blog', 'event')", name="ck_posts_type"),
    )

    def __repr__(self) -> str:  # pragma: no cover - string helper
        return f"<Post {self.type}:{self.slug}>"

    @property
    def is_event(self) -> bool:
        return self.type == "event"
