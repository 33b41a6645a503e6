"""
Notification service for the Campus Portal backend
Writes notification rows for domain events and serves the recipient's inbox
"""

from database import db
from models.notification import Notification, PRIORITIES
from utils.db_helpers import bulk_insert
from utils.errors import NotFoundError, ValidationError

class NotificationService:
    """Notification writer and inbox queries"""

    @staticmethod
    def notify(recipients, event):
        """Create one notification per recipient with a single bulk insert.

        ``recipients`` may be a single user id or an iterable of ids; the
        event supplies type, title, message, related reference, priority and
        sender. Re-sending the same event creates new rows.
        """
        if isinstance(recipients, int):
            recipients = [recipients]

        priority = event.priority if event.priority in PRIORITIES else 'normal'
        rows = []
        for recipient_id in recipients:
            notification = Notification(
                recipient_id=recipient_id,
                sender_id=event.sender_id,
                type=event.type,
                title=event.title,
                message=event.message,
                priority=priority,
                is_read=False
            )
            notification.related = event.related
            rows.append(notification)

        return bulk_insert(rows)

    @staticmethod
    def list_for(user, is_read=None):
        """Recipient's notifications, newest first"""
        query = Notification.query.filter_by(recipient_id=user.id)
        if is_read is not None:
            query = query.filter_by(is_read=is_read)
        return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()

    @staticmethod
    def unread_count(user):
        """Count unread notifications"""
        return Notification.query.filter_by(recipient_id=user.id, is_read=False).count()

    @staticmethod
    def _owned(user, notification_id):
        try:
            notification_id = int(notification_id)
        except (TypeError, ValueError):
            raise ValidationError("Invalid notification id")

        notification = Notification.query.filter_by(id=notification_id, recipient_id=user.id).first()
        if not notification:
            raise NotFoundError("Notification not found")
        return notification

    @staticmethod
    def mark_read(user, notification_id):
        """Mark a specific notification as read"""
        notification = NotificationService._owned(user, notification_id)
        notification.is_read = True
        db.session.commit()
        return notification

    @staticmethod
    def mark_all_read(user):
        """Mark all notifications as read, returning how many changed"""
        updated = Notification.query.filter_by(
            recipient_id=user.id,
            is_read=False
        ).update({'is_read': True})
        db.session.commit()
        return updated

    @staticmethod
    def delete(user, notification_id):
        """Delete one of the recipient's notifications"""
        notification = NotificationService._owned(user, notification_id)
        db.session.delete(notification)
        db.session.commit()

    @staticmethod
    def parse_read_filter(value):
        """Interpret the ?isRead= query parameter"""
        if value is None or value == '':
            return None
        lowered = str(value).strip().lower()
        if lowered in ('true', '1', 'yes'):
            return True
        if lowered in ('false', '0', 'no'):
            return False
        raise ValidationError("isRead must be true or false")
