"""
Shared fixtures for the test suite
"""

import unittest
from datetime import timedelta

from app import create_app
from config import TestingConfig
from database import db
from models.assignments import Assignment
from models.user import User
from services.auth_service import AuthService
from utils.time_helpers import utcnow

class AppTestCase(unittest.TestCase):
    """Fresh application and in-memory database per test"""

    def setUp(self):
        """Set up test fixtures"""
        self.app = create_app(TestingConfig)
        self.app_context = self.app.app_context()
        self.app_context.push()
        db.create_all()
        self.client = self.app.test_client()

    def tearDown(self):
        """Clean up after tests"""
        db.session.remove()
        db.drop_all()
        self.app_context.pop()

    def make_user(self, name, role='student', department='CSE', semester=3, password='secret123'):
        email = name.lower().replace(' ', '.') + '@portal.test'
        user = User(
            name=name,
            email=email,
            role=role,
            department=department,
            semester=semester if role == 'student' else None
        )
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    def make_assignment(self, creator, due_in=timedelta(days=7), **overrides):
        data = dict(
            title='Linked Lists',
            description='Implement a linked list',
            subject='Data Structures',
            department=creator.department,
            semester=3,
            due_date=utcnow() + due_in,
            created_by=creator.id
        )
        data.update(overrides)
        assignment = Assignment(**data)
        db.session.add(assignment)
        db.session.commit()
        return assignment

    def headers_for(self, user):
        return {'Authorization': f'Bearer {AuthService.issue_token(user)}'}
