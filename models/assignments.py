"""
Assignment models for the Campus Portal backend
Assignment with its ordered list of student submissions
"""

from database import db
from utils.time_helpers import utcnow

class Assignment(db.Model):
    """Assignment distributed to a department/semester cohort"""
    __tablename__ = 'assignment'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    subject = db.Column(db.String(100), nullable=False)
    department = db.Column(db.String(100), nullable=False)
    semester = db.Column(db.Integer, nullable=False)
    due_date = db.Column(db.DateTime, nullable=False)
    max_marks = db.Column(db.Integer, nullable=False, default=100)
    attachments = db.Column(db.JSON, nullable=False, default=list)
    created_by = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True, index=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    creator = db.relationship('User', foreign_keys=[created_by])
    submissions = db.relationship(
        'Submission',
        backref='assignment',
        order_by='Submission.id',
        cascade='all, delete-orphan'
    )

    __table_args__ = (
        db.Index('ix_assignment_cohort_due', 'department', 'semester', 'due_date'),
    )

    def submission_for(self, student_id):
        """Return the submission made by a student, if any"""
        if student_id is None:
            return None
        for submission in self.submissions:
            if submission.student_id == student_id:
                return submission
        return None

    def find_submission(self, submission_id):
        """Locate a submission of this assignment by id"""
        try:
            submission_id = int(submission_id)
        except (TypeError, ValueError):
            return None
        for submission in self.submissions:
            if submission.id == submission_id:
                return submission
        return None

    def to_dict(self):
        """Convert assignment to dictionary"""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'subject': self.subject,
            'department': self.department,
            'semester': self.semester,
            'dueDate': self.due_date.isoformat() if self.due_date else None,
            'maxMarks': self.max_marks,
            'attachments': list(self.attachments or []),
            'createdBy': self.creator.to_summary() if self.creator else self.created_by,
            'submissions': [s.to_dict() for s in self.submissions],
            'isActive': self.is_active,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<Assignment {self.id}: {self.title}>'

class Submission(db.Model):
    """A student's submission for an assignment"""
    __tablename__ = 'submission'

    id = db.Column(db.Integer, primary_key=True)
    assignment_id = db.Column(db.Integer, db.ForeignKey('assignment.id', ondelete='CASCADE'), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    file_url = db.Column(db.String(255), nullable=False)
    file_name = db.Column(db.String(255), nullable=True)
    submitted_at = db.Column(db.DateTime, default=utcnow)
    grade = db.Column(db.String(2), nullable=True)
    feedback = db.Column(db.Text, default='')
    graded_at = db.Column(db.DateTime, nullable=True)
    graded_by = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    status = db.Column(db.String(10), nullable=False, default='submitted')

    student = db.relationship('User', foreign_keys=[student_id])
    grader = db.relationship('User', foreign_keys=[graded_by])

    # At most one submission per student per assignment
    __table_args__ = (db.UniqueConstraint('assignment_id', 'student_id', name='unique_assignment_student_submission'),)

    def apply_grade(self, grade, feedback, grader_id, graded_at):
        """Record a grade in place"""
        self.grade = grade
        self.feedback = feedback or ''
        self.graded_at = graded_at
        self.graded_by = grader_id
        self.status = 'graded'

    def to_dict(self):
        return {
            'id': self.id,
            'student': self.student.to_summary() if self.student else self.student_id,
            'fileUrl': self.file_url,
            'fileName': self.file_name,
            'submittedAt': self.submitted_at.isoformat() if self.submitted_at else None,
            'grade': self.grade,
            'feedback': self.feedback,
            'gradedAt': self.graded_at.isoformat() if self.graded_at else None,
            'gradedBy': self.graded_by,
            'status': self.status
        }

    def __repr__(self):
        return f'<Submission {self.assignment_id}/{self.student_id} {self.status}>'
