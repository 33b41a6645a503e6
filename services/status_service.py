"""
Display status derivation for assignments and mentoring sessions.

Statuses are never stored; they are computed on every read from stored
timestamps and the viewing user's relation to the entity. Every function
here is pure: ``now`` may be injected, otherwise the current UTC time is used.
"""

from utils.time_helpers import utcnow

PENDING = 'pending'
SUBMITTED = 'submitted'
GRADED = 'graded'
OVERDUE = 'overdue'

SCHEDULED = 'scheduled'
COMPLETED = 'completed'
CANCELLED = 'cancelled'
EXPIRED = 'expired'


def assignment_status(assignment, viewer_id=None, now=None):
    """Status of an assignment for a viewer: graded > submitted > overdue > pending"""
    now = now or utcnow()

    if viewer_id is not None:
        submission = assignment.submission_for(viewer_id)
        if submission is not None:
            return GRADED if submission.grade else SUBMITTED

    if now > assignment.due_date:
        return OVERDUE
    return PENDING


def is_past_due(assignment, now=None):
    return (now or utcnow()) > assignment.due_date


def assignment_counts(assignment):
    """Submission and graded totals shown alongside an assignment"""
    submissions = assignment.submissions
    return {
        'submissionCount': len(submissions),
        'gradedCount': sum(1 for s in submissions if s.grade),
    }


def mentoring_status(session, now=None):
    """Cancelled/completed pass through; otherwise expired once the start time is behind us"""
    if session.status in (CANCELLED, COMPLETED):
        return session.status

    now = now or utcnow()
    if session.scheduled_date < now:
        return EXPIRED
    return SCHEDULED
