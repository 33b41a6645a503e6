"""
Database models package for the Campus Portal backend
"""

from .user import User
from .assignments import Assignment, Submission
from .attendance import Attendance, AttendanceEntry
from .leave import LeaveRequest
from .mentoring import MentoringSession, MentoringAttendee, mentoring_invitation
from .notification import Notification, RelatedModel, RelatedRef

__all__ = [
    'User', 'Assignment', 'Submission', 'Attendance', 'AttendanceEntry',
    'LeaveRequest', 'MentoringSession', 'MentoringAttendee', 'mentoring_invitation',
    'Notification', 'RelatedModel', 'RelatedRef'
]
