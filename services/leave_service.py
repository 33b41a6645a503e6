"""
Leave service for the Campus Portal backend
Leave request creation, review and withdrawal
"""

from flask import current_app

from database import db
from models.leave import LeaveRequest
from models.notification import RelatedRef
from models.user import User
from services.email_service import EmailService
from services.events import Email, Notify, Push
from utils.db_helpers import get_or_404
from utils.errors import ConflictError, ForbiddenError, ValidationError
from utils.permissions import can_view_leave, ensure
from utils.time_helpers import utcnow
from utils.uploads import discard_uploads, save_uploads
from utils.validators import (
    LEAVE_DECISIONS, check, parse_datetime, require_fields, require_text, validate_leave_type
)

class LeaveService:
    """Leave service class"""

    @staticmethod
    def create(user, data, files=None):
        """File a leave request and notify the department's reviewers"""
        require_fields(data, ['startDate', 'endDate', 'reason'])
        require_text(data, ['reason', 'leaveType'])

        start_date = parse_datetime(data['startDate'], 'Start date')
        end_date = parse_datetime(data['endDate'], 'End date')
        if end_date < start_date:
            raise ValidationError("End date cannot be before start date")

        leave_type = data.get('leaveType') or 'casual'
        check(validate_leave_type(leave_type))

        files = list(files or [])
        if len(files) > current_app.config['MAX_LEAVE_ATTACHMENTS']:
            raise ValidationError(
                f"At most {current_app.config['MAX_LEAVE_ATTACHMENTS']} attachments are allowed"
            )
        attachments = [path for path, _ in save_uploads(files, 'leaves')]

        leave_request = LeaveRequest(
            student_id=user.id,
            start_date=start_date,
            end_date=end_date,
            reason=data['reason'],
            leave_type=leave_type,
            attachments=attachments
        )
        db.session.add(leave_request)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            discard_uploads(attachments)
            raise

        reviewers = User.query.filter(
            User.role.in_(['faculty', 'admin']),
            User.department == user.department,
            User.is_active.is_(True)
        ).all()

        events = []
        if reviewers:
            events.append(Notify(
                recipients=[r.id for r in reviewers],
                type='leave',
                title='New Leave Request',
                message=(f"{user.name} has requested leave from {start_date:%d %b %Y} "
                         f"to {end_date:%d %b %Y}"),
                related=RelatedRef.leave_request(leave_request.id),
                sender_id=user.id
            ))
        return leave_request, events

    @staticmethod
    def list_for(user):
        """Students see their own requests, reviewers their department's"""
        query = LeaveRequest.query
        if user.is_student:
            query = query.filter_by(student_id=user.id)
        else:
            query = query.join(User, User.id == LeaveRequest.student_id).filter(
                User.role == 'student',
                User.department == user.department
            )
        return query.order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()).all()

    @staticmethod
    def get_for(user, leave_id):
        leave_request = get_or_404(LeaveRequest, leave_id, 'Leave request')
        ensure(can_view_leave(user, leave_request), "Not authorized to view this leave request")
        return leave_request

    @staticmethod
    def review(user, leave_id, data):
        """Approve or reject a pending request; reviewed requests are immutable"""
        require_text(data, ['comments'])
        status = data.get('status')
        if status not in LEAVE_DECISIONS:
            raise ValidationError(f"Status must be one of: {', '.join(LEAVE_DECISIONS)}")

        leave_request = get_or_404(LeaveRequest, leave_id, 'Leave request')
        if not leave_request.is_pending():
            raise ConflictError(
                f"Leave request has already been {leave_request.status}", code='ALREADY_REVIEWED'
            )

        # Conditional update so a concurrent reviewer cannot overwrite the first decision
        updated = LeaveRequest.query.filter_by(id=leave_request.id, status='pending').update({
            'status': status,
            'comments': data.get('comments'),
            'reviewed_by': user.id,
            'reviewed_at': utcnow()
        }, synchronize_session=False)
        if updated != 1:
            db.session.rollback()
            raise ConflictError("Leave request has already been reviewed", code='ALREADY_REVIEWED')
        db.session.commit()
        db.session.refresh(leave_request)
        current_app.logger.info("Leave request %s %s by %s", leave_request.id, status, user.id)

        student = leave_request.student
        subject, html = EmailService.leave_decision(leave_request, user.name)
        events = [
            Notify(
                recipients=[student.id],
                type='leave',
                title=f"Leave Request {status.capitalize()}",
                message=f"Your leave request has been {status}",
                related=RelatedRef.leave_request(leave_request.id),
                priority='high',
                sender_id=user.id
            ),
            Email(student.email, subject, html),
            Push([student.id], {
                'type': f'leave_{status}',
                'message': f"Your leave request has been {status}",
                'leaveId': leave_request.id
            }),
        ]
        return leave_request, events

    @staticmethod
    def delete(user, leave_id):
        """Withdraw one's own pending request"""
        leave_request = get_or_404(LeaveRequest, leave_id, 'Leave request')
        if leave_request.student_id != user.id:
            raise ForbiddenError("Not authorized to delete this leave request")
        if not leave_request.is_pending():
            raise ConflictError("Cannot delete a leave request that has been reviewed", code='NOT_PENDING')

        db.session.delete(leave_request)
        db.session.commit()
