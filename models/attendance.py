"""
Attendance models for the Campus Portal backend
One Attendance row per class session, holding per-student entries
"""

from database import db
from utils.time_helpers import utcnow

class Attendance(db.Model):
    """Attendance sheet for a single class session"""
    __tablename__ = 'attendance'

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False)
    subject = db.Column(db.String(100), nullable=False)
    department = db.Column(db.String(100), nullable=False)
    semester = db.Column(db.Integer, nullable=False)
    session = db.Column(db.String(10), nullable=False)  # 'morning' or 'afternoon'
    faculty_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    faculty = db.relationship('User', foreign_keys=[faculty_id])
    records = db.relationship(
        'AttendanceEntry',
        backref='attendance',
        order_by='AttendanceEntry.id',
        cascade='all, delete-orphan'
    )

    # Unique constraint to prevent marking the same session twice
    __table_args__ = (
        db.UniqueConstraint('date', 'subject', 'department', 'semester', 'session',
                            name='unique_attendance_session'),
    )

    def entry_for(self, student_id):
        """Return the entry recorded for a student, if any"""
        for entry in self.records:
            if entry.student_id == student_id:
                return entry
        return None

    def to_dict(self):
        """Convert attendance sheet to dictionary"""
        return {
            'id': self.id,
            'date': self.date.isoformat() if self.date else None,
            'subject': self.subject,
            'department': self.department,
            'semester': self.semester,
            'session': self.session,
            'faculty': {'id': self.faculty.id, 'name': self.faculty.name} if self.faculty else None,
            'records': [entry.to_dict() for entry in self.records],
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<Attendance {self.subject} {self.date} {self.session}>'

class AttendanceEntry(db.Model):
    """Per-student status within an attendance sheet"""
    __tablename__ = 'attendance_entry'

    id = db.Column(db.Integer, primary_key=True)
    attendance_id = db.Column(db.Integer, db.ForeignKey('attendance.id', ondelete='CASCADE'), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    status = db.Column(db.String(10), nullable=False)  # 'present', 'absent' or 'late'
    marked_by = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)

    student = db.relationship('User', foreign_keys=[student_id])

    def is_present(self):
        """Check if student was present"""
        return self.status == 'present'

    def to_dict(self):
        return {
            'student': self.student.to_summary() if self.student else self.student_id,
            'status': self.status,
            'markedBy': self.marked_by
        }
