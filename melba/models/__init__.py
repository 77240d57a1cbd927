from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

from .applications import (
    BootcampRegistration,
    CareerApplication,
    EnrollmentApplication,
    JoinTeamRegistration,
    TutorApplication,
    VolunteerApplication,
)
from .inquiries import (
    BecomePartnerInquiry,
    CareerFundInquiry,
    CareerPartnerInquiry,
    ContactSubmission,
    FundInternshipInquiry,
)
from .newsletter import NewsletterSubscription
from .blog import Post
from .program import Program

__all__ = [
    'db',
    'VolunteerApplication',
    'EnrollmentApplication',
    'TutorApplication',
    'CareerApplication',
    'JoinTeamRegistration',
    'BootcampRegistration',
    'CareerFundInquiry',
    'CareerPartnerInquiry',
    'FundInternshipInquiry',
    'BecomePartnerInquiry',
    'ContactSubmission',
    'NewsletterSubscription',
    'Post',
    'Program',
]
