"""
Tests for the notification writer, the inbox and post-commit event dispatch
"""

import unittest
from unittest import mock

from database import db
from models.notification import Notification, RelatedRef
from services.email_service import mail
from services.events import Email, EventDispatcher, Notify, Push, dispatch_events
from services.notification_service import NotificationService
from tests.base import AppTestCase
from utils.errors import NotFoundError, ValidationError

def announcement(recipients=(), **overrides):
    data = dict(type='new_assignment', title='New Assignment Posted', message='Trees is out',
                related=RelatedRef.assignment(7))
    data.update(overrides)
    return Notify(recipients=list(recipients), **data)

class TestNotificationWriter(AppTestCase):

    def setUp(self):
        super().setUp()
        self.students = [self.make_user(f'Student {n}') for n in ('One', 'Two', 'Three')]

    def test_one_row_per_recipient(self):
        created = NotificationService.notify([s.id for s in self.students], announcement())
        self.assertEqual(created, 3)

        rows = Notification.query.order_by(Notification.recipient_id).all()
        self.assertEqual([n.recipient_id for n in rows], [s.id for s in self.students])
        for row in rows:
            self.assertFalse(row.is_read)
            self.assertEqual(row.priority, 'normal')
            self.assertEqual(row.related, RelatedRef.assignment(7))
            self.assertIsNotNone(row.created_at)

    def test_single_recipient_id(self):
        NotificationService.notify(self.students[0].id, announcement(priority='high'))
        notification = Notification.query.one()
        self.assertEqual(notification.recipient_id, self.students[0].id)
        self.assertEqual(notification.priority, 'high')

    def test_empty_recipients_is_a_no_op(self):
        self.assertEqual(NotificationService.notify([], announcement()), 0)
        self.assertEqual(Notification.query.count(), 0)

    def test_resending_is_not_deduplicated(self):
        NotificationService.notify([self.students[0].id], announcement())
        NotificationService.notify([self.students[0].id], announcement())
        self.assertEqual(Notification.query.count(), 2)

class TestInbox(AppTestCase):

    def setUp(self):
        super().setUp()
        self.owner = self.make_user('Student One')
        self.other = self.make_user('Student Two')
        NotificationService.notify([self.owner.id, self.other.id], announcement())
        NotificationService.notify([self.owner.id], announcement(title='Second'))

    def test_list_and_filter(self):
        inbox = NotificationService.list_for(self.owner)
        self.assertEqual(len(inbox), 2)
        self.assertEqual(inbox[0].title, 'Second')

        NotificationService.mark_read(self.owner, inbox[0].id)
        self.assertEqual([n.title for n in NotificationService.list_for(self.owner, is_read=False)],
                         ['New Assignment Posted'])
        self.assertEqual(NotificationService.unread_count(self.owner), 1)

    def test_mark_all_read(self):
        self.assertEqual(NotificationService.mark_all_read(self.owner), 2)
        self.assertEqual(NotificationService.unread_count(self.owner), 0)
        self.assertEqual(NotificationService.unread_count(self.other), 1)

    def test_cannot_touch_another_users_notification(self):
        foreign = NotificationService.list_for(self.other)[0]
        with self.assertRaises(NotFoundError):
            NotificationService.mark_read(self.owner, foreign.id)
        with self.assertRaises(NotFoundError):
            NotificationService.delete(self.owner, foreign.id)

    def test_delete(self):
        target = NotificationService.list_for(self.owner)[0]
        NotificationService.delete(self.owner, target.id)
        self.assertIsNone(db.session.get(Notification, target.id))

    def test_read_filter_parsing(self):
        self.assertIsNone(NotificationService.parse_read_filter(None))
        self.assertTrue(NotificationService.parse_read_filter('true'))
        self.assertFalse(NotificationService.parse_read_filter('false'))
        with self.assertRaises(ValidationError):
            NotificationService.parse_read_filter('maybe')

class TestEventDispatcher(AppTestCase):

    def test_routes_each_event(self):
        notifier, pusher, mailer = mock.Mock(), mock.Mock(), mock.Mock()
        dispatcher = EventDispatcher(notifier=notifier, pusher=pusher, mailer=mailer)
        notify = announcement(recipients=[1])
        delivered = dispatcher.dispatch([
            notify,
            Push([1], {'type': 'new_assignment'}),
            Email('a@b.c', 'Subject', '<p>Hi</p>'),
        ])

        self.assertEqual(delivered, 3)
        notifier.assert_called_once_with([1], notify)
        pusher.assert_called_once_with([1], 'notification', {'type': 'new_assignment'})
        mailer.assert_called_once_with('a@b.c', 'Subject', '<p>Hi</p>')

    def test_failures_are_isolated(self):
        """A failing side effect is logged and the remaining events still run"""
        notifier = mock.Mock(side_effect=RuntimeError('database down'))
        pusher = mock.Mock()
        mailer = mock.Mock(side_effect=OSError('smtp down'))
        dispatcher = EventDispatcher(notifier=notifier, pusher=pusher, mailer=mailer)

        with self.assertLogs(self.app.logger, level='ERROR'):
            delivered = dispatcher.dispatch([
                announcement(recipients=[1]),
                Email('a@b.c', 'Subject', '<p>Hi</p>'),
                Push([1], {'type': 'x'}),
            ])
        self.assertEqual(delivered, 1)
        pusher.assert_called_once()

    def test_default_dispatcher_writes_and_mails(self):
        student = self.make_user('Student One')
        with mail.record_messages() as outbox:
            delivered = dispatch_events([
                announcement(recipients=[student.id]),
                Email(student.email, 'Assignment Graded: Trees', '<p>B+</p>'),
                Email(None, 'Nobody', '<p>skipped</p>'),
            ])
        self.assertEqual(delivered, 3)
        self.assertEqual(Notification.query.filter_by(recipient_id=student.id).count(), 1)
        self.assertEqual(len(outbox), 1)
        self.assertEqual(outbox[0].recipients, [student.email])

if __name__ == '__main__':
    unittest.main()
