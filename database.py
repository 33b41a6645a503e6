"""
Database configuration and initialization for the Campus Portal backend
"""

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine
import sqlite3

# Initialize SQLAlchemy instance
db = SQLAlchemy()

@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite"""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

def init_db(app):
    """Create all tables within the application context"""
    with app.app_context():
        # Import all models to ensure they are registered
        from models import (
            User, Assignment, Submission, Attendance, AttendanceEntry,
            LeaveRequest, MentoringSession, MentoringAttendee, Notification
        )

        db.create_all()
        app.logger.info("Database initialized")

def reset_database(app):
    """Reset database - WARNING: This will delete all data"""
    with app.app_context():
        db.drop_all()
        db.create_all()
        app.logger.warning("Database reset completed")
