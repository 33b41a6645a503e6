"""
Mentoring service for the Campus Portal backend
Scheduling, updates, attendance, feedback and cancellation of sessions
"""

from flask import current_app

from database import db
from models.mentoring import MentoringAttendee, MentoringSession
from models.notification import RelatedRef
from models.user import User
from services.email_service import EmailService
from services.events import Email, Notify, Push
from services.status_service import COMPLETED, SCHEDULED, mentoring_status
from utils.db_helpers import get_or_404
from utils.errors import ConflictError, ForbiddenError, ValidationError
from utils.permissions import can_view_mentoring, ensure, is_creator_or_admin
from utils.validators import parse_datetime, parse_int, require_fields, require_text

UPDATABLE_FIELDS = {
    'title': 'title',
    'description': 'description',
    'duration': 'duration',
    'meetingLink': 'meeting_link',
    'location': 'location',
    'topic': 'topic',
    'notes': 'notes',
}
# Changes to these are announced to the invited students
LOGISTICS_FIELDS = ('scheduledDate', 'meetingLink', 'location')

SESSION_CLOSED = 'SESSION_CLOSED'

class MentoringService:
    """Mentoring service class"""

    @staticmethod
    def present(session):
        data = session.to_dict()
        data['status'] = mentoring_status(session)
        return data

    @staticmethod
    def _resolve_students(raw_ids):
        if not isinstance(raw_ids, list) or not raw_ids:
            raise ValidationError("Please select at least one student")

        ids = list(dict.fromkeys(parse_int(value, 'Student') for value in raw_ids))
        students = User.query.filter(
            User.id.in_(ids), User.role == 'student', User.is_active.is_(True)
        ).all()
        found = {s.id for s in students}
        missing = [i for i in ids if i not in found]
        if missing:
            raise ValidationError(f"Unknown students: {', '.join(str(i) for i in missing)}")
        return sorted(students, key=lambda s: ids.index(s.id))

    @staticmethod
    def create(user, data):
        """Schedule a session; attendees are derived 1:1 from the invited students"""
        require_fields(data, ['title', 'topic', 'scheduledDate', 'students'])
        require_text(data, ['title', 'topic', 'description', 'meetingLink', 'location'])
        students = MentoringService._resolve_students(data['students'])

        duration = 60
        if data.get('duration') not in (None, ''):
            duration = parse_int(data['duration'], 'Duration', minimum=1)

        session = MentoringSession(
            title=data['title'].strip(),
            description=data.get('description'),
            faculty_id=user.id,
            scheduled_date=parse_datetime(data['scheduledDate'], 'Scheduled date'),
            duration=duration,
            meeting_link=data.get('meetingLink'),
            location=data.get('location'),
            topic=data['topic'].strip(),
            students=students,
            attendees=[MentoringAttendee(student_id=s.id, attended=False) for s in students]
        )
        db.session.add(session)
        db.session.commit()
        current_app.logger.info("Mentoring session %s scheduled by %s", session.id, user.id)

        student_ids = [s.id for s in students]
        events = [Notify(
            recipients=student_ids,
            type='mentoring',
            title='New Mentoring Session Scheduled',
            message=(f'A mentoring session on "{session.topic}" has been scheduled for '
                     f'{session.scheduled_date:%d %b %Y %H:%M} UTC'),
            related=RelatedRef.mentoring_session(session.id),
            priority='high',
            sender_id=user.id
        )]
        for student in students:
            subject, html = EmailService.mentoring_scheduled(session, student, user.name)
            events.append(Email(student.email, subject, html))
        events.append(Push(student_ids, {
            'type': 'mentoring_scheduled',
            'message': f'New mentoring session scheduled: {session.topic}',
            'sessionId': session.id
        }))
        return session, events

    @staticmethod
    def list_for(user):
        """Faculty see their sessions, students their invitations, admins everything"""
        query = MentoringSession.query
        if user.is_student:
            query = query.filter(MentoringSession.students.any(User.id == user.id))
        elif not user.is_admin:
            query = query.filter_by(faculty_id=user.id)
        return query.order_by(MentoringSession.scheduled_date.asc(), MentoringSession.id.asc()).all()

    @staticmethod
    def get_for(user, session_id):
        session = get_or_404(MentoringSession, session_id, 'Mentoring session')
        ensure(can_view_mentoring(user, session), "Not authorized to view this session")
        return session

    @staticmethod
    def _owned_open(user, session_id, action):
        session = get_or_404(MentoringSession, session_id, 'Mentoring session')
        if not is_creator_or_admin(user, session.faculty_id):
            raise ForbiddenError(f"Not authorized to {action} this session")
        if session.is_closed():
            raise ConflictError(f"Session is already {session.status}", code=SESSION_CLOSED)
        return session

    @staticmethod
    def update(user, session_id, data):
        """Edit session details; status may only move from scheduled to completed"""
        session = MentoringService._owned_open(user, session_id, 'update')
        if 'students' in data:
            raise ValidationError("Invited students cannot be changed after scheduling")
        require_text(data, ['title', 'topic', 'description', 'meetingLink', 'location', 'notes'])

        before = {
            'scheduledDate': session.scheduled_date,
            'meetingLink': session.meeting_link,
            'location': session.location,
        }

        for key, attribute in UPDATABLE_FIELDS.items():
            if key not in data:
                continue
            value = data[key]
            if key in ('title', 'topic'):
                if not value or not str(value).strip():
                    raise ValidationError(f"{key.capitalize()} cannot be empty")
                value = str(value).strip()
            elif key == 'duration':
                value = parse_int(value, 'Duration', minimum=1)
            setattr(session, attribute, value)

        if 'scheduledDate' in data:
            session.scheduled_date = parse_datetime(data['scheduledDate'], 'Scheduled date')

        status = data.get('status')
        if status not in (None, '', SCHEDULED):
            if status != COMPLETED:
                raise ValidationError("Status can only be changed to completed; cancel the session instead")
            session.status = COMPLETED

        db.session.commit()

        after = {
            'scheduledDate': session.scheduled_date,
            'meetingLink': session.meeting_link,
            'location': session.location,
        }
        events = []
        if any(before[key] != after[key] for key in LOGISTICS_FIELDS if key in data):
            student_ids = session.student_ids()
            events.append(Notify(
                recipients=student_ids,
                type='mentoring',
                title='Mentoring Session Updated',
                message=f'The mentoring session "{session.title}" has been updated',
                related=RelatedRef.mentoring_session(session.id),
                sender_id=user.id
            ))
            events.append(Push(student_ids, {
                'type': 'mentoring_updated',
                'message': f'Mentoring session updated: {session.topic}',
                'sessionId': session.id
            }))
        return session, events

    @staticmethod
    def _invited_attendee(user, session_id):
        session = get_or_404(MentoringSession, session_id, 'Mentoring session')
        attendee = session.attendee_for(user.id)
        if attendee is None:
            raise ForbiddenError("You are not invited to this session")
        if session.status == 'cancelled':
            raise ConflictError("Session has been cancelled", code=SESSION_CLOSED)
        return session, attendee

    @staticmethod
    def mark_attendance(user, session_id):
        """Idempotently mark the invited student as attended"""
        session, attendee = MentoringService._invited_attendee(user, session_id)
        if not attendee.attended:
            attendee.attended = True
            db.session.commit()
        return session

    @staticmethod
    def add_feedback(user, session_id, data):
        """Store the student's feedback, replacing any earlier feedback"""
        require_text(data, ['feedback'])
        feedback = (data.get('feedback') or '').strip()
        if not feedback:
            raise ValidationError("Please provide feedback")

        session, attendee = MentoringService._invited_attendee(user, session_id)
        attendee.feedback = feedback
        db.session.commit()
        return session

    @staticmethod
    def cancel(user, session_id):
        """Cancel a scheduled session and tell the invited students"""
        session = MentoringService._owned_open(user, session_id, 'cancel')
        session.status = 'cancelled'
        db.session.commit()
        current_app.logger.info("Mentoring session %s cancelled by %s", session.id, user.id)

        students = list(session.students)
        student_ids = [s.id for s in students]
        events = [Notify(
            recipients=student_ids,
            type='mentoring',
            title='Mentoring Session Cancelled',
            message=(f'The mentoring session "{session.title}" scheduled for '
                     f'{session.scheduled_date:%d %b %Y %H:%M} UTC has been cancelled'),
            related=RelatedRef.mentoring_session(session.id),
            priority='high',
            sender_id=user.id
        )]
        for student in students:
            subject, html = EmailService.mentoring_cancelled(session, student)
            events.append(Email(student.email, subject, html))
        events.append(Push(student_ids, {
            'type': 'mentoring_cancelled',
            'message': f'Mentoring session cancelled: {session.topic}',
            'sessionId': session.id
        }))
        return session, events
