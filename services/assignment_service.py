"""
Assignment service for the Campus Portal backend
Distribution, submission and grading of assignments
"""

from flask import current_app

from database import db
from models.assignments import Assignment, Submission
from models.notification import RelatedRef
from models.user import User
from services.email_service import EmailService
from services.events import Email, Notify, Push
from services.status_service import assignment_counts, assignment_status, is_past_due
from utils.db_helpers import commit_or_conflict, get_or_404
from utils.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from utils.permissions import can_view_assignment, ensure, is_creator_or_admin
from utils.time_helpers import utcnow
from utils.uploads import discard_uploads, remove_upload, save_upload, save_uploads
from utils.validators import (
    check, parse_datetime, parse_int, require_fields, require_text, validate_grade,
    validate_semester
)

class AssignmentService:
    """Assignment service class"""

    @staticmethod
    def present(assignment, viewer_id=None):
        """Assignment payload with the viewer-relative status and counts"""
        data = assignment.to_dict()
        data['status'] = assignment_status(assignment, viewer_id)
        data.update(assignment_counts(assignment))
        return data

    @staticmethod
    def create(user, data, files=None):
        """Create an assignment and notify every student of the cohort"""
        require_fields(data, ['title', 'description', 'subject', 'dueDate'])
        require_text(data, ['title', 'description', 'subject', 'department'])

        department = data.get('department') or user.department
        semester = data.get('semester') or user.semester
        if semester in (None, ''):
            raise ValidationError("Please provide semester")
        check(validate_semester(semester))

        max_marks = 100
        if data.get('maxMarks') not in (None, ''):
            max_marks = parse_int(data['maxMarks'], 'Max marks', minimum=1)

        due_date = parse_datetime(data['dueDate'], 'Due date')

        attachments = [
            {'fileName': name, 'fileUrl': path, 'uploadedAt': utcnow().isoformat()}
            for path, name in save_uploads(files or [], 'assignments')
        ]

        assignment = Assignment(
            title=data['title'].strip(),
            description=data['description'],
            subject=data['subject'].strip(),
            department=department,
            semester=int(semester),
            due_date=due_date,
            max_marks=max_marks,
            attachments=attachments,
            created_by=user.id
        )
        db.session.add(assignment)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            discard_uploads(a['fileUrl'] for a in attachments)
            raise

        student_ids = [s.id for s in User.students_in(assignment.department, assignment.semester)]
        current_app.logger.info(
            "Assignment %s created by %s for %d students", assignment.id, user.id, len(student_ids)
        )

        events = []
        if student_ids:
            message = f'New assignment "{assignment.title}" has been posted for {assignment.subject}'
            events.append(Notify(
                recipients=student_ids,
                type='new_assignment',
                title='New Assignment Posted',
                message=message,
                related=RelatedRef.assignment(assignment.id),
                sender_id=user.id
            ))
            events.append(Push(student_ids, {
                'type': 'new_assignment',
                'message': message,
                'assignmentId': assignment.id
            }))
        return assignment, events

    @staticmethod
    def list_for(user=None):
        """Assignments visible to the viewer, newest first"""
        query = Assignment.query
        if user is not None and user.is_student:
            query = query.filter_by(department=user.department, semester=user.semester, is_active=True)
        elif user is not None:
            query = query.filter_by(created_by=user.id)
        else:
            query = query.filter_by(is_active=True)

        assignments = (query
            .order_by(Assignment.created_at.desc(), Assignment.id.desc())
            .limit(current_app.config['ASSIGNMENT_LIST_LIMIT'])
            .all())
        viewer_id = user.id if user is not None else None
        return [AssignmentService.present(a, viewer_id) for a in assignments]

    @staticmethod
    def get_for(user, assignment_id):
        assignment = get_or_404(Assignment, assignment_id, 'Assignment')
        ensure(can_view_assignment(user, assignment), "Not authorized to view this assignment")
        return assignment

    @staticmethod
    def submit(user, assignment_id, file_storage):
        """Record a student's submission"""
        assignment = get_or_404(Assignment, assignment_id, 'Assignment')
        ensure(can_view_assignment(user, assignment), "Not authorized to submit to this assignment")

        if is_past_due(assignment):
            raise ConflictError("Assignment submission deadline has passed", code='DEADLINE_PASSED')

        if assignment.submission_for(user.id) is not None:
            raise ConflictError("You have already submitted this assignment", code='DUPLICATE_SUBMISSION')

        if file_storage is None or not file_storage.filename:
            raise ValidationError("Please upload a file")

        path, name = save_upload(file_storage, 'submissions')
        assignment.submissions.append(Submission(
            student_id=user.id,
            file_url=path,
            file_name=name,
            submitted_at=utcnow(),
            status='submitted'
        ))
        # Two concurrent submits race on the unique constraint
        try:
            commit_or_conflict('DUPLICATE_SUBMISSION', "You have already submitted this assignment")
        except ConflictError:
            remove_upload(path)
            raise

        events = [
            Notify(
                recipients=[assignment.created_by],
                type='assignment_submitted',
                title='New Assignment Submission',
                message=f'{user.name} submitted "{assignment.title}"',
                related=RelatedRef.assignment(assignment.id),
                sender_id=user.id
            ),
            Push([assignment.created_by], {
                'type': 'assignment_submitted',
                'message': f'New submission for {assignment.title}',
                'assignmentId': assignment.id
            }),
        ]
        return assignment, events

    @staticmethod
    def grade(user, assignment_id, submission_id, data):
        """Grade a submission in place and notify the student"""
        grade = data.get('grade')
        if not grade:
            raise ValidationError("Please provide a grade")
        check(validate_grade(grade))

        assignment = get_or_404(Assignment, assignment_id, 'Assignment')
        if not is_creator_or_admin(user, assignment.created_by):
            raise ForbiddenError("Not authorized to grade this assignment")

        submission = assignment.find_submission(submission_id)
        if submission is None:
            raise NotFoundError("Submission not found")

        feedback = data.get('feedback') or ''
        submission.apply_grade(grade, feedback, user.id, utcnow())
        db.session.commit()

        student = submission.student
        subject, html = EmailService.assignment_graded(assignment, grade, feedback)
        events = [
            Notify(
                recipients=[student.id],
                type='assignment_graded',
                title='Assignment Graded',
                message=f'Your submission for "{assignment.title}" has been graded: {grade}',
                related=RelatedRef.assignment(assignment.id),
                priority='high',
                sender_id=user.id
            ),
            Email(student.email, subject, html),
            Push([student.id], {
                'type': 'assignment_graded',
                'message': f'Your assignment "{assignment.title}" has been graded',
                'grade': grade,
                'assignmentId': assignment.id
            }),
        ]
        return assignment, events

    @staticmethod
    def delete(user, assignment_id):
        assignment = get_or_404(Assignment, assignment_id, 'Assignment')
        if not is_creator_or_admin(user, assignment.created_by):
            raise ForbiddenError("Not authorized to delete this assignment")

        db.session.delete(assignment)
        db.session.commit()
        current_app.logger.info("Assignment %s deleted by %s", assignment_id, user.id)
