"""
Unit tests for derived display statuses
"""

import unittest
from datetime import datetime, timedelta

from models.assignments import Assignment, Submission
from models.mentoring import MentoringSession
from services.status_service import (
    assignment_counts, assignment_status, is_past_due, mentoring_status
)

NOW = datetime(2024, 3, 1, 12, 0, 0)

class TestAssignmentStatus(unittest.TestCase):

    def make_assignment(self, due_date, submissions=()):
        assignment = Assignment(title='Essay', due_date=due_date)
        for submission in submissions:
            assignment.submissions.append(submission)
        return assignment

    def test_pending_before_due_date(self):
        assignment = self.make_assignment(NOW + timedelta(days=1))
        self.assertEqual(assignment_status(assignment, viewer_id=7, now=NOW), 'pending')

    def test_overdue_after_due_date(self):
        assignment = self.make_assignment(NOW - timedelta(seconds=1))
        self.assertEqual(assignment_status(assignment, viewer_id=7, now=NOW), 'overdue')
        self.assertTrue(is_past_due(assignment, now=NOW))

    def test_due_date_equal_to_now_is_not_overdue(self):
        assignment = self.make_assignment(NOW)
        self.assertEqual(assignment_status(assignment, now=NOW), 'pending')
        self.assertFalse(is_past_due(assignment, now=NOW))

    def test_submitted_wins_over_overdue(self):
        """A submission counts even when the due date has passed"""
        assignment = self.make_assignment(
            NOW - timedelta(days=2), [Submission(student_id=7, file_url='a.pdf')]
        )
        self.assertEqual(assignment_status(assignment, viewer_id=7, now=NOW), 'submitted')

    def test_graded_wins_over_submitted(self):
        assignment = self.make_assignment(
            NOW + timedelta(days=2), [Submission(student_id=7, file_url='a.pdf', grade='B+')]
        )
        self.assertEqual(assignment_status(assignment, viewer_id=7, now=NOW), 'graded')

    def test_other_students_submission_is_ignored(self):
        assignment = self.make_assignment(
            NOW + timedelta(days=2), [Submission(student_id=8, file_url='a.pdf', grade='A')]
        )
        self.assertEqual(assignment_status(assignment, viewer_id=7, now=NOW), 'pending')

    def test_anonymous_viewer_sees_deadline_status(self):
        assignment = self.make_assignment(
            NOW - timedelta(days=1), [Submission(student_id=8, file_url='a.pdf')]
        )
        self.assertEqual(assignment_status(assignment, now=NOW), 'overdue')

    def test_counts(self):
        assignment = self.make_assignment(NOW, [
            Submission(student_id=1, file_url='a.pdf', grade='A'),
            Submission(student_id=2, file_url='b.pdf'),
            Submission(student_id=3, file_url='c.pdf', grade='C'),
        ])
        self.assertEqual(assignment_counts(assignment), {'submissionCount': 3, 'gradedCount': 2})

class TestMentoringStatus(unittest.TestCase):

    def test_future_session_is_scheduled(self):
        session = MentoringSession(status='scheduled', scheduled_date=NOW + timedelta(hours=1))
        self.assertEqual(mentoring_status(session, now=NOW), 'scheduled')

    def test_past_session_is_expired(self):
        session = MentoringSession(status='scheduled', scheduled_date=NOW - timedelta(minutes=1))
        self.assertEqual(mentoring_status(session, now=NOW), 'expired')

    def test_cancelled_and_completed_pass_through(self):
        for status in ('cancelled', 'completed'):
            session = MentoringSession(status=status, scheduled_date=NOW + timedelta(days=1))
            self.assertEqual(mentoring_status(session, now=NOW), status)
            session.scheduled_date = NOW - timedelta(days=1)
            self.assertEqual(mentoring_status(session, now=NOW), status)

if __name__ == '__main__':
    unittest.main()
