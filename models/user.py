"""
User model for the Campus Portal backend
Students, faculty and administrators share one table keyed by role
"""

from database import db
from utils.time_helpers import utcnow
from werkzeug.security import generate_password_hash, check_password_hash

class User(db.Model):
    """Portal user account"""
    __tablename__ = 'user'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(10), nullable=False, default='student', index=True)
    student_id = db.Column(db.String(30), nullable=True)
    faculty_id = db.Column(db.String(30), nullable=True)
    department = db.Column(db.String(100), nullable=False, index=True)
    semester = db.Column(db.Integer, nullable=True)
    phone_number = db.Column(db.String(20), nullable=True)
    profile_picture = db.Column(db.String(255), nullable=True)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    def set_password(self, password):
        """Set password hash"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check password against hash"""
        return check_password_hash(self.password_hash, password)

    @property
    def is_student(self):
        return self.role == 'student'

    @property
    def is_faculty(self):
        return self.role == 'faculty'

    @property
    def is_admin(self):
        return self.role == 'admin'

    @staticmethod
    def students_in(department, semester):
        """Active students of a department/semester cohort"""
        return User.query.filter_by(
            role='student',
            department=department,
            semester=semester,
            is_active=True
        ).all()

    def to_summary(self):
        """Short form embedded in other payloads"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'studentId': self.student_id,
        }

    def to_dict(self):
        """Convert user to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'studentId': self.student_id,
            'facultyId': self.faculty_id,
            'department': self.department,
            'semester': self.semester,
            'phoneNumber': self.phone_number,
            'profilePicture': self.profile_picture,
            'isActive': self.is_active,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
