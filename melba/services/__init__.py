
from .email_service import OutboxTransport, SMTPTransport
from .submission_kinds import SUBMISSION_KINDS, get_kind
from .submissions import SubmissionOutcome, process_submission

__all__ = [
    'OutboxTransport',
    'SMTPTransport',
    'SUBMISSION_KINDS',
    'get_kind',
    'SubmissionOutcome',
    'process_submission',
]
