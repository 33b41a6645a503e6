#!/usr/bin/env python3
"""
Sample data generator for the Campus Portal backend
Creates demo accounts and records for local development
"""

from datetime import timedelta

from app import create_app
from database import db
from models.assignments import Assignment
from models.mentoring import MentoringAttendee, MentoringSession
from models.user import User
from utils.time_helpers import utcnow

DEPARTMENT = 'Computer Science'

def create_sample_data():
    """Create sample data for the system"""
    app = create_app()

    with app.app_context():
        if User.query.first():
            print("Database already contains users, skipping sample data.")
            return

        print("Creating sample data...")

        admin = User(name='Portal Admin', email='admin@portal.local', role='admin',
                     department=DEPARTMENT)
        admin.set_password('admin123')

        faculty_data = [
            {'name': 'Dr. John Smith', 'email': 'john.smith@portal.local', 'faculty_id': 'FAC001'},
            {'name': 'Prof. Sarah Johnson', 'email': 'sarah.johnson@portal.local', 'faculty_id': 'FAC002'},
        ]
        faculty = []
        for data in faculty_data:
            member = User(role='faculty', department=DEPARTMENT, **data)
            member.set_password('password123')
            faculty.append(member)

        students_data = [
            {'name': 'Aarav Kumar', 'student_id': 'CS2301'},
            {'name': 'Diya Sharma', 'student_id': 'CS2302'},
            {'name': 'Rohan Mehta', 'student_id': 'CS2303'},
            {'name': 'Sneha Rao', 'student_id': 'CS2304'},
        ]
        students = []
        for data in students_data:
            email = data['name'].lower().replace(' ', '.') + '@portal.local'
            student = User(role='student', department=DEPARTMENT, semester=3, email=email, **data)
            student.set_password('student123')
            students.append(student)

        db.session.add_all([admin] + faculty + students)
        db.session.commit()
        print(f"✓ Created 1 admin, {len(faculty)} faculty and {len(students)} students")

        now = utcnow()
        assignment = Assignment(
            title='Linked List Implementation',
            description='Implement a singly linked list with insert, delete and search.',
            subject='Data Structures',
            department=DEPARTMENT,
            semester=3,
            due_date=now + timedelta(days=7),
            max_marks=50,
            created_by=faculty[0].id
        )
        db.session.add(assignment)

        session = MentoringSession(
            title='Career Guidance',
            description='Internship planning for the coming semester.',
            faculty_id=faculty[1].id,
            scheduled_date=now + timedelta(days=3),
            duration=45,
            location='Room 204',
            topic='Internships',
            students=students[:2],
            attendees=[MentoringAttendee(student_id=s.id, attended=False) for s in students[:2]]
        )
        db.session.add(session)
        db.session.commit()
        print("✓ Created 1 assignment and 1 mentoring session")

        print("\nSample data created successfully!")
        print("Admin login: admin@portal.local / admin123")
        print("Faculty login: john.smith@portal.local / password123")
        print("Student login: aarav.kumar@portal.local / student123")

if __name__ == '__main__':
    create_sample_data()
