"""
Attendance service for the Campus Portal backend
Session marking, student views and statistics
"""

from flask import current_app

from database import db
from models.attendance import Attendance, AttendanceEntry
from models.user import User
from utils.db_helpers import commit_or_conflict
from utils.errors import ConflictError, ValidationError
from utils.validators import (
    check, parse_date, parse_int, require_fields, require_text, validate_attendance_session,
    validate_attendance_status, validate_semester
)

ALREADY_MARKED_MESSAGE = "Attendance already marked for this session"

class AttendanceService:
    """Attendance service class"""

    @staticmethod
    def mark(user, data):
        """Create the attendance sheet for one (date, subject, department, semester, session)"""
        require_fields(data, ['date', 'subject', 'department', 'semester', 'session', 'records'])
        require_text(data, ['subject', 'department', 'session'])

        session_date = parse_date(data['date'])
        check(validate_semester(data['semester']))
        semester = int(data['semester'])
        check(validate_attendance_session(data['session']))

        records = data['records']
        if not isinstance(records, list):
            raise ValidationError("Records must be a list")

        entries = []
        seen = set()
        for record in records:
            if not isinstance(record, dict) or record.get('student') in (None, '') or not record.get('status'):
                raise ValidationError("Each record needs a student and a status")
            student_id = parse_int(record['student'], 'Student')
            check(validate_attendance_status(record['status']))
            if student_id in seen:
                raise ValidationError(f"Student {student_id} appears more than once")
            seen.add(student_id)
            entries.append(AttendanceEntry(student_id=student_id, status=record['status'], marked_by=user.id))

        known = {s.id for s in User.query.filter(User.id.in_(seen), User.role == 'student').all()}
        unknown = seen - known
        if unknown:
            raise ValidationError(f"Unknown students: {', '.join(str(i) for i in sorted(unknown))}")

        key = dict(
            date=session_date,
            subject=data['subject'].strip(),
            department=data['department'].strip(),
            semester=semester,
            session=data['session']
        )
        if Attendance.query.filter_by(**key).first():
            raise ConflictError(ALREADY_MARKED_MESSAGE, code='ALREADY_MARKED')

        attendance = Attendance(faculty_id=user.id, records=entries, **key)
        db.session.add(attendance)
        # The unique constraint settles concurrent marks of the same session
        commit_or_conflict('ALREADY_MARKED', ALREADY_MARKED_MESSAGE)

        current_app.logger.info(
            "Attendance %s marked by %s (%d students)", attendance.id, user.id, len(entries)
        )
        return attendance, []

    @staticmethod
    def _student_sheets(user):
        """Sheets of the student's cohort that include an entry for them"""
        sheets = (Attendance.query
            .filter_by(department=user.department, semester=user.semester)
            .join(AttendanceEntry)
            .filter(AttendanceEntry.student_id == user.id)
            .order_by(Attendance.date.desc(), Attendance.id.desc())
            .all())
        return [(sheet, sheet.entry_for(user.id)) for sheet in sheets]

    @staticmethod
    def list_for(user=None):
        """Students see their own statuses, faculty the sheets they marked"""
        if user is not None and user.is_student:
            return [{
                'date': sheet.date.isoformat(),
                'subject': sheet.subject,
                'session': sheet.session,
                'status': entry.status if entry else 'absent'
            } for sheet, entry in AttendanceService._student_sheets(user)]

        query = Attendance.query.order_by(Attendance.date.desc(), Attendance.id.desc())
        if user is not None:
            query = query.filter_by(faculty_id=user.id)
        else:
            query = query.limit(current_app.config['DEMO_ATTENDANCE_LIMIT'])
        return [sheet.to_dict() for sheet in query.all()]

    @staticmethod
    def stats(user):
        """Overall and subject-wise attendance for a student"""
        total_classes = 0
        present_count = 0
        late_count = 0
        subject_wise = {}

        for sheet, entry in AttendanceService._student_sheets(user):
            if entry is None:
                continue
            total_classes += 1
            bucket = subject_wise.setdefault(sheet.subject, {'total': 0, 'present': 0})
            bucket['total'] += 1
            if entry.is_present():
                present_count += 1
                bucket['present'] += 1
            elif entry.status == 'late':
                late_count += 1

        overall = (present_count / total_classes) * 100 if total_classes else 0.0
        return {
            'totalClasses': total_classes,
            'presentCount': present_count,
            'absentCount': total_classes - present_count,
            'lateCount': late_count,
            'overallPercentage': f"{overall:.2f}",
            'belowThreshold': total_classes > 0 and overall < current_app.config['ATTENDANCE_THRESHOLD'],
            'subjectWise': [{
                'subject': subject,
                'total': counts['total'],
                'present': counts['present'],
                'percentage': f"{(counts['present'] / counts['total']) * 100:.2f}"
            } for subject, counts in subject_wise.items()]
        }

    @staticmethod
    def students(department=None, semester=None):
        """Active students available for marking"""
        query = User.query.filter_by(role='student', is_active=True)
        if department:
            query = query.filter_by(department=department)
        if semester not in (None, ''):
            query = query.filter_by(semester=parse_int(semester, 'Semester'))
        students = query.order_by(User.name.asc()).all()
        return [{
            'id': s.id,
            'name': s.name,
            'studentId': s.student_id,
            'email': s.email,
            'department': s.department,
            'semester': s.semester
        } for s in students]

    @staticmethod
    def sheets_for_export(user, subject=None, department=None, semester=None):
        """Sheets marked by the faculty member, optionally filtered"""
        query = Attendance.query
        if not user.is_admin:
            query = query.filter_by(faculty_id=user.id)
        if subject:
            query = query.filter_by(subject=subject)
        if department:
            query = query.filter_by(department=department)
        if semester not in (None, ''):
            query = query.filter_by(semester=parse_int(semester, 'Semester'))
        return query.order_by(Attendance.date.asc(), Attendance.session.asc()).all()
