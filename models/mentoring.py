"""
Mentoring models for the Campus Portal backend
"""

from database import db
from utils.time_helpers import utcnow

mentoring_invitation = db.Table(
    'mentoring_invitation',
    db.Column('session_id', db.Integer, db.ForeignKey('mentoring_session.id', ondelete='CASCADE'), primary_key=True),
    db.Column('student_id', db.Integer, db.ForeignKey('user.id'), primary_key=True)
)

class MentoringSession(db.Model):
    """Faculty-led mentoring session with invited students"""
    __tablename__ = 'mentoring_session'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    faculty_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    scheduled_date = db.Column(db.DateTime, nullable=False)
    duration = db.Column(db.Integer, nullable=False, default=60)  # minutes
    meeting_link = db.Column(db.String(255), nullable=True)
    location = db.Column(db.String(200), nullable=True)
    topic = db.Column(db.String(200), nullable=False)
    status = db.Column(db.String(10), nullable=False, default='scheduled')
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    faculty = db.relationship('User', foreign_keys=[faculty_id])
    students = db.relationship('User', secondary=mentoring_invitation, order_by='User.id')
    attendees = db.relationship(
        'MentoringAttendee',
        backref='session',
        order_by='MentoringAttendee.id',
        cascade='all, delete-orphan'
    )

    __table_args__ = (
        db.Index('ix_mentoring_faculty_date', 'faculty_id', 'scheduled_date'),
    )

    def is_closed(self):
        """Completed and cancelled are terminal"""
        return self.status in ('completed', 'cancelled')

    def is_invited(self, student_id):
        return any(student.id == student_id for student in self.students)

    def attendee_for(self, student_id):
        for attendee in self.attendees:
            if attendee.student_id == student_id:
                return attendee
        return None

    def student_ids(self):
        return [student.id for student in self.students]

    def to_dict(self):
        """Convert session to dictionary"""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'faculty': self.faculty.to_summary() if self.faculty else self.faculty_id,
            'students': [student.to_summary() for student in self.students],
            'scheduledDate': self.scheduled_date.isoformat() if self.scheduled_date else None,
            'duration': self.duration,
            'meetingLink': self.meeting_link,
            'location': self.location,
            'topic': self.topic,
            'notes': self.notes,
            'attendees': [attendee.to_dict() for attendee in self.attendees],
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<MentoringSession {self.id}: {self.topic}>'

class MentoringAttendee(db.Model):
    """Attendance and feedback of one invited student"""
    __tablename__ = 'mentoring_attendee'

    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.Integer, db.ForeignKey('mentoring_session.id', ondelete='CASCADE'), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    attended = db.Column(db.Boolean, nullable=False, default=False)
    feedback = db.Column(db.Text, nullable=True)

    student = db.relationship('User', foreign_keys=[student_id])

    __table_args__ = (db.UniqueConstraint('session_id', 'student_id', name='unique_session_attendee'),)

    def to_dict(self):
        return {
            'student': self.student.to_summary() if self.student else self.student_id,
            'attended': self.attended,
            'feedback': self.feedback
        }
