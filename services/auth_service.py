"""
Authentication service for the Campus Portal backend
Handles registration, login, bearer tokens and profile updates
"""

from datetime import timedelta

import jwt
from flask import current_app
from sqlalchemy import func

from database import db
from models.user import User
from utils.db_helpers import commit_or_conflict
from utils.errors import AuthenticationError, ValidationError
from utils.time_helpers import utcnow
from utils.validators import (
    check, require_fields, require_text, parse_int, validate_email, validate_name,
    validate_password, validate_role, validate_semester
)

PROFILE_FIELDS = {
    'name': 'name',
    'phoneNumber': 'phone_number',
    'department': 'department',
    'semester': 'semester',
    'profilePicture': 'profile_picture',
}

class AuthService:
    """Authentication service class"""

    @staticmethod
    def register(data):
        """Create a user account and return (user, token)"""
        require_fields(data, ['name', 'email', 'password', 'department'])
        require_text(data, ['name', 'email', 'password', 'role', 'department',
                            'studentId', 'facultyId', 'phoneNumber'])

        email = data['email'].strip().lower()
        role = (data.get('role') or 'student').strip().lower()
        check(validate_name(data['name']))
        check(validate_email(email))
        check(validate_password(data['password']))
        check(validate_role(role))

        semester = None
        if role == 'student':
            if data.get('semester') in (None, ''):
                raise ValidationError("Semester is required for students")
            check(validate_semester(data['semester']))
            semester = int(data['semester'])

        if User.query.filter(func.lower(User.email) == email).first():
            raise ValidationError("Email already registered", code='EMAIL_TAKEN')

        user = User(
            name=data['name'].strip(),
            email=email,
            role=role,
            department=data['department'].strip(),
            semester=semester,
            student_id=data.get('studentId') if role == 'student' else None,
            faculty_id=data.get('facultyId') if role == 'faculty' else None,
            phone_number=data.get('phoneNumber')
        )
        user.set_password(data['password'])
        db.session.add(user)
        commit_or_conflict('EMAIL_TAKEN', "Email already registered")

        current_app.logger.info("Registered %s user %s", role, user.id)
        return user, AuthService.issue_token(user)

    @staticmethod
    def authenticate(email, password):
        """Verify credentials and return (user, token)"""
        if not email or not password:
            raise ValidationError("Please provide an email and password")
        require_text({'email': email, 'password': password}, ['email', 'password'])

        normalized = email.strip().lower()
        user = User.query.filter(func.lower(User.email) == normalized).first()
        if not user or not user.is_active or not user.check_password(password):
            raise AuthenticationError("Invalid credentials")

        return user, AuthService.issue_token(user)

    @staticmethod
    def issue_token(user):
        """Sign a bearer token carrying the user's id and role"""
        now = utcnow()
        payload = {
            'id': user.id,
            'role': user.role,
            'iat': now,
            'exp': now + timedelta(hours=current_app.config['JWT_EXPIRES_HOURS'])
        }
        return jwt.encode(payload, current_app.config['JWT_SECRET'],
                          algorithm=current_app.config['JWT_ALGORITHM'])

    @staticmethod
    def decode_token(token):
        """Verify a bearer token and return its claims"""
        if not token:
            raise AuthenticationError("Not authorized, no token")
        try:
            return jwt.decode(token, current_app.config['JWT_SECRET'],
                              algorithms=[current_app.config['JWT_ALGORITHM']])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Token is invalid")

    @staticmethod
    def user_from_token(token):
        """Resolve the active user a token was issued to"""
        claims = AuthService.decode_token(token)
        user = db.session.get(User, claims.get('id'))
        if user is None or not user.is_active:
            raise AuthenticationError("User no longer exists")
        return user

    @staticmethod
    def update_profile(user, data):
        """Update editable profile fields; email and role stay fixed"""
        require_text(data, ['name', 'phoneNumber', 'department', 'profilePicture'])
        for key, attribute in PROFILE_FIELDS.items():
            if key not in data:
                continue
            value = data[key]
            if key == 'name':
                check(validate_name(value))
                value = value.strip()
            elif key == 'department':
                if not value or not str(value).strip():
                    raise ValidationError("Department is required")
                value = str(value).strip()
            elif key == 'semester':
                if value in (None, ''):
                    if user.is_student:
                        raise ValidationError("Semester is required for students")
                    value = None
                else:
                    check(validate_semester(value))
                    value = parse_int(value, 'Semester')
            setattr(user, attribute, value)

        db.session.commit()
        return user
