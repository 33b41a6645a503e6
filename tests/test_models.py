"""
Unit tests for database models
"""

import unittest
from datetime import date

from sqlalchemy.exc import IntegrityError

from database import db
from models.assignments import Submission
from models.attendance import Attendance, AttendanceEntry
from models.notification import Notification, RelatedModel, RelatedRef
from models.user import User
from tests.base import AppTestCase

class TestModels(AppTestCase):

    def test_user_model(self):
        """Test User password hashing and serialization"""
        user = self.make_user('Asha Rao', password='password123')

        self.assertTrue(user.check_password('password123'))
        self.assertFalse(user.check_password('wrongpassword'))
        self.assertTrue(user.is_student)
        self.assertFalse(user.is_admin)

        data = user.to_dict()
        self.assertEqual(data['email'], 'asha.rao@portal.test')
        self.assertEqual(data['semester'], 3)
        self.assertNotIn('password_hash', data)
        self.assertEqual(str(user), '<User asha.rao@portal.test (student)>')

    def test_students_in_cohort(self):
        self.make_user('Student One')
        self.make_user('Student Two', semester=5)
        self.make_user('Student Three', department='ECE')
        inactive = self.make_user('Student Four')
        inactive.is_active = False
        db.session.commit()

        names = [u.name for u in User.students_in('CSE', 3)]
        self.assertEqual(names, ['Student One'])

    def test_one_submission_per_student(self):
        faculty = self.make_user('Dr Kumar', role='faculty')
        student = self.make_user('Student One')
        assignment = self.make_assignment(faculty)

        db.session.add(Submission(assignment_id=assignment.id, student_id=student.id, file_url='a.pdf'))
        db.session.commit()

        db.session.add(Submission(assignment_id=assignment.id, student_id=student.id, file_url='b.pdf'))
        with self.assertRaises(IntegrityError):
            db.session.commit()
        db.session.rollback()

    def test_deleting_assignment_removes_submissions(self):
        faculty = self.make_user('Dr Kumar', role='faculty')
        student = self.make_user('Student One')
        assignment = self.make_assignment(faculty)
        assignment.submissions.append(Submission(student_id=student.id, file_url='a.pdf'))
        db.session.commit()

        db.session.delete(assignment)
        db.session.commit()
        self.assertEqual(Submission.query.count(), 0)

    def test_attendance_session_is_unique(self):
        faculty = self.make_user('Dr Kumar', role='faculty')
        student = self.make_user('Student One')
        key = dict(date=date(2024, 3, 1), subject='DS', department='CSE', semester=3, session='morning')

        db.session.add(Attendance(faculty_id=faculty.id, records=[
            AttendanceEntry(student_id=student.id, status='present', marked_by=faculty.id)
        ], **key))
        db.session.commit()

        # Same tuple in the afternoon is a different session
        db.session.add(Attendance(faculty_id=faculty.id, **dict(key, session='afternoon')))
        db.session.commit()

        db.session.add(Attendance(faculty_id=faculty.id, **key))
        with self.assertRaises(IntegrityError):
            db.session.commit()
        db.session.rollback()
        self.assertEqual(Attendance.query.count(), 2)

    def test_notification_related_reference(self):
        student = self.make_user('Student One')
        notification = Notification(
            recipient_id=student.id, type='leave', title='Leave', message='Approved'
        )
        notification.related = RelatedRef.leave_request(42)
        db.session.add(notification)
        db.session.commit()

        stored = db.session.get(Notification, notification.id)
        self.assertEqual(stored.related, RelatedRef(RelatedModel.LEAVE_REQUEST, 42))
        data = stored.to_dict()
        self.assertEqual(data['relatedModel'], 'LeaveRequest')
        self.assertEqual(data['relatedId'], 42)
        self.assertFalse(data['isRead'])

    def test_notification_without_reference(self):
        student = self.make_user('Student One')
        notification = Notification(recipient_id=student.id, type='system', title='Hi', message='Hello')
        notification.related = None
        db.session.add(notification)
        db.session.commit()

        self.assertIsNone(notification.related)
        self.assertIsNone(notification.to_dict()['relatedModel'])

if __name__ == '__main__':
    unittest.main()
