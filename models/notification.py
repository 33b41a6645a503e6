"""
Notification model for the Campus Portal backend
"""

import enum
from dataclasses import dataclass

from database import db
from utils.time_helpers import utcnow

class RelatedModel(enum.Enum):
    """Entity kinds a notification can point back to"""
    ASSIGNMENT = 'Assignment'
    LEAVE_REQUEST = 'LeaveRequest'
    MENTORING_SESSION = 'MentoringSession'

@dataclass(frozen=True)
class RelatedRef:
    kind: RelatedModel
    id: int

    @classmethod
    def assignment(cls, assignment_id):
        return cls(RelatedModel.ASSIGNMENT, assignment_id)

    @classmethod
    def leave_request(cls, leave_id):
        return cls(RelatedModel.LEAVE_REQUEST, leave_id)

    @classmethod
    def mentoring_session(cls, session_id):
        return cls(RelatedModel.MENTORING_SESSION, session_id)

PRIORITIES = ('low', 'normal', 'high')

class Notification(db.Model):
    """Per-recipient notification created as a side effect of a domain event"""
    __tablename__ = 'notification'

    id = db.Column(db.Integer, primary_key=True)
    recipient_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), nullable=False)
    sender_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    type = db.Column(db.String(40), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    related_id = db.Column(db.Integer, nullable=True)
    related_model = db.Column(
        db.Enum(RelatedModel, name='related_model', values_callable=lambda kinds: [k.value for k in kinds]),
        nullable=True
    )
    priority = db.Column(db.String(10), nullable=False, default='normal')
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    sender = db.relationship('User', foreign_keys=[sender_id])

    __table_args__ = (
        db.Index('ix_notification_recipient_read', 'recipient_id', 'is_read', 'created_at'),
    )

    @property
    def related(self):
        """Tagged back-reference to the entity that triggered this notification"""
        if self.related_model is None or self.related_id is None:
            return None
        return RelatedRef(self.related_model, self.related_id)

    @related.setter
    def related(self, ref):
        self.related_model = ref.kind if ref else None
        self.related_id = ref.id if ref else None

    def to_dict(self):
        """Convert notification to dictionary"""
        return {
            'id': self.id,
            'recipient': self.recipient_id,
            'sender': {'id': self.sender.id, 'name': self.sender.name} if self.sender else None,
            'type': self.type,
            'title': self.title,
            'message': self.message,
            'relatedId': self.related_id,
            'relatedModel': self.related_model.value if self.related_model else None,
            'priority': self.priority,
            'isRead': self.is_read,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<Notification {self.type} -> {self.recipient_id}>'
