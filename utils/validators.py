"""
Validation utilities for the Campus Portal backend
"""

import re
from datetime import datetime, date, timezone

from utils.errors import ValidationError

ROLES = ('student', 'faculty', 'admin')
GRADES = ('A+', 'A', 'B+', 'B', 'C+', 'C', 'D', 'F')
ATTENDANCE_STATUSES = ('present', 'absent', 'late')
ATTENDANCE_SESSIONS = ('morning', 'afternoon')
LEAVE_TYPES = ('sick', 'casual', 'emergency', 'other')
LEAVE_DECISIONS = ('approved', 'rejected')

EMAIL_PATTERN = re.compile(r'^\S+@\S+\.\S+$')

def require_fields(data, fields, message='Please provide all required fields'):
    """Raise ValidationError unless every field is present and non-empty"""
    missing = [f for f in fields if data.get(f) in (None, '', [])]
    if missing:
        raise ValidationError(message)

def require_text(data, fields):
    """Raise ValidationError when any given field is present but not a string"""
    for field in fields:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{field} must be text")

def validate_name(name, field_name="Name"):
    """Validate person name"""
    if not name or len(name.strip()) == 0:
        return False, f"{field_name} is required"

    if len(name) > 100:
        return False, f"{field_name} must be 100 characters or less"

    return True, f"Valid {field_name.lower()}"

def validate_email(email):
    """Validate email address format"""
    if not email or not EMAIL_PATTERN.match(email.strip()):
        return False, "Please provide a valid email"

    if len(email) > 120:
        return False, "Email must be 120 characters or less"

    return True, "Valid email"

def validate_password(password):
    """Validate password strength"""
    if not password:
        return False, "Password is required"

    if len(password) < 6:
        return False, "Password must be at least 6 characters long"

    if len(password) > 128:
        return False, "Password must be 128 characters or less"

    return True, "Valid password"

def validate_role(role):
    if role not in ROLES:
        return False, f"Role must be one of: {', '.join(ROLES)}"
    return True, "Valid role"

def validate_semester(semester):
    """Validate semester number"""
    try:
        sem_int = int(semester)
        if sem_int < 1 or sem_int > 8:
            return False, "Semester must be between 1 and 8"
        return True, "Valid semester"
    except (ValueError, TypeError):
        return False, "Semester must be a number"

def validate_grade(grade):
    """Validate a letter grade"""
    if grade not in GRADES:
        return False, f"Grade must be one of: {', '.join(GRADES)}"
    return True, "Valid grade"

def validate_attendance_status(status):
    """Validate attendance status"""
    if status not in ATTENDANCE_STATUSES:
        return False, f"Attendance status must be one of: {', '.join(ATTENDANCE_STATUSES)}"

    return True, "Valid attendance status"

def validate_attendance_session(session):
    if session not in ATTENDANCE_SESSIONS:
        return False, f"Session must be one of: {', '.join(ATTENDANCE_SESSIONS)}"
    return True, "Valid session"

def validate_leave_type(leave_type):
    if leave_type not in LEAVE_TYPES:
        return False, f"Leave type must be one of: {', '.join(LEAVE_TYPES)}"
    return True, "Valid leave type"

def check(result):
    """Raise ValidationError for a failed (is_valid, message) pair"""
    is_valid, message = result
    if not is_valid:
        raise ValidationError(message)

def parse_datetime(value, field_name='Date'):
    """Parse an ISO-8601 string into a naive UTC datetime"""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"{field_name} must be an ISO 8601 date or datetime")
    else:
        raise ValidationError(f"{field_name} is required")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed

def parse_date(value, field_name='Date'):
    """Parse YYYY-MM-DD (or a full ISO datetime) into a date"""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str) and len(value.strip()) >= 10:
        try:
            return datetime.strptime(value.strip()[:10], '%Y-%m-%d').date()
        except ValueError:
            pass
    if isinstance(value, datetime):
        return value.date()
    raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")

def parse_int(value, field_name, minimum=None):
    """Parse an integer field, enforcing an optional lower bound"""
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field_name} must be at least {minimum}")
    return number
