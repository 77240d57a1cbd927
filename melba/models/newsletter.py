"""Newsletter subscriptions collected from the site footer."""

from __future__ import annotations

from datetime import datetime

from . import db
from .mixins import RecordMixin


class NewsletterSubscription(RecordMixin, db.Model):
    __tablename__ = "newsletter_subscriptions"

    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    subscribed_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
