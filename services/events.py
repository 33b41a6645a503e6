"""
Post-commit side effects.

Mutating service operations return ``(result, events)``. The events are
plain records describing notifications to write, socket pushes and emails;
routes hand them to the EventDispatcher only after the domain write has
been committed. A failing side effect is logged and dropped, it never turns
a successful mutation into a failed response.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from flask import current_app

from database import db
from models.notification import RelatedRef


@dataclass
class Notify:
    """Persist one Notification per recipient"""
    recipients: List[int]
    type: str
    title: str
    message: str
    related: Optional[RelatedRef] = None
    priority: str = 'normal'
    sender_id: Optional[int] = None


@dataclass
class Push:
    """Emit a real-time event to the rooms of the given users"""
    user_ids: List[int]
    payload: dict = field(default_factory=dict)
    event: str = 'notification'


@dataclass
class Email:
    """Best-effort outbound email"""
    to: str
    subject: str
    html: str


class EventDispatcher:
    """Runs post-commit events against the notification writer, socket server and mailer"""

    def __init__(self, notifier=None, pusher=None, mailer=None):
        if notifier is None:
            from services.notification_service import NotificationService
            notifier = NotificationService.notify
        if pusher is None:
            from services.realtime_service import push
            pusher = push
        if mailer is None:
            from services.email_service import EmailService
            mailer = EmailService.send

        self.notifier = notifier
        self.pusher = pusher
        self.mailer = mailer

    def dispatch(self, events):
        """Process events in order; returns the number that succeeded"""
        delivered = 0
        for event in events or []:
            try:
                self._handle(event)
                delivered += 1
            except Exception:
                if isinstance(event, Notify):
                    db.session.rollback()
                current_app.logger.exception("Side effect %s failed", type(event).__name__)
        return delivered

    def _handle(self, event):
        if isinstance(event, Notify):
            self.notifier(event.recipients, event)
        elif isinstance(event, Push):
            self.pusher(event.user_ids, event.event, event.payload)
        elif isinstance(event, Email):
            self.mailer(event.to, event.subject, event.html)
        else:
            raise TypeError(f"Unknown event type: {type(event).__name__}")


def init_dispatcher(app, dispatcher=None):
    app.extensions['event_dispatcher'] = dispatcher or EventDispatcher()


def dispatch_events(events):
    """Hand events to the application's dispatcher"""
    dispatcher = current_app.extensions.get('event_dispatcher')
    if dispatcher is None:
        current_app.logger.warning("No event dispatcher configured; dropping %d events", len(events or []))
        return 0
    return dispatcher.dispatch(events)
