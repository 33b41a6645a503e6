"""
Database helper utilities for the Campus Portal backend
"""

from database import db
from sqlalchemy.exc import IntegrityError
from utils.errors import ConflictError, NotFoundError

def commit_or_conflict(code, message):
    """Commit the session, turning a constraint violation into a ConflictError"""
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(message, code=code)

def get_or_404(model, object_id, label=None):
    """Load a row by primary key or raise NotFoundError"""
    try:
        object_id = int(object_id)
    except (TypeError, ValueError):
        object_id = None

    obj = db.session.get(model, object_id) if object_id is not None else None
    if obj is None:
        raise NotFoundError(f"{label or model.__name__} not found")
    return obj

def bulk_insert(objects):
    """Insert many rows in a single flush and commit"""
    if not objects:
        return 0
    try:
        db.session.bulk_save_objects(objects)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return len(objects)
