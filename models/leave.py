"""
Leave request model for the Campus Portal backend
"""

from database import db
from utils.time_helpers import utcnow

class LeaveRequest(db.Model):
    """Student leave request reviewed once by faculty or admin"""
    __tablename__ = 'leave_request'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    reason = db.Column(db.Text, nullable=False)
    leave_type = db.Column(db.String(10), nullable=False, default='casual')
    status = db.Column(db.String(10), nullable=False, default='pending')
    attachments = db.Column(db.JSON, nullable=False, default=list)
    reviewed_by = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    reviewed_at = db.Column(db.DateTime, nullable=True)
    comments = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    student = db.relationship('User', foreign_keys=[student_id])
    reviewer = db.relationship('User', foreign_keys=[reviewed_by])

    __table_args__ = (
        db.Index('ix_leave_student_status_start', 'student_id', 'status', 'start_date'),
    )

    def is_pending(self):
        return self.status == 'pending'

    def to_dict(self):
        """Convert leave request to dictionary"""
        student = None
        if self.student:
            student = self.student.to_summary()
            student['department'] = self.student.department
            student['semester'] = self.student.semester
        return {
            'id': self.id,
            'student': student or self.student_id,
            'startDate': self.start_date.isoformat() if self.start_date else None,
            'endDate': self.end_date.isoformat() if self.end_date else None,
            'reason': self.reason,
            'leaveType': self.leave_type,
            'status': self.status,
            'attachments': list(self.attachments or []),
            'reviewedBy': self.reviewer.to_summary() if self.reviewer else None,
            'reviewedAt': self.reviewed_at.isoformat() if self.reviewed_at else None,
            'comments': self.comments,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<LeaveRequest {self.id} {self.status}>'
