"""
Ownership and scoping predicates used by the services before any mutation
"""

from utils.errors import ForbiddenError

def is_creator_or_admin(user, owner_id):
    """Creator-only operations, with the admin override"""
    return user is not None and (user.is_admin or user.id == owner_id)

def in_cohort(user, department, semester):
    """Student belongs to the department/semester an entity is scoped to"""
    return user.department == department and user.semester == semester

def can_view_assignment(user, assignment):
    if user.is_student:
        return in_cohort(user, assignment.department, assignment.semester)
    return is_creator_or_admin(user, assignment.created_by)

def can_view_leave(user, leave_request):
    if user.is_student:
        return leave_request.student_id == user.id
    return user.is_faculty or user.is_admin

def can_view_mentoring(user, session):
    return (
        user.is_admin
        or session.faculty_id == user.id
        or (user.is_student and session.is_invited(user.id))
    )

def ensure(allowed, message):
    """Raise ForbiddenError when a predicate fails"""
    if not allowed:
        raise ForbiddenError(message)
