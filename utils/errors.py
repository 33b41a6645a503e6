"""
Error taxonomy shared by services and routes
"""

VALIDATION = 'VALIDATION'
NOT_FOUND = 'NOT_FOUND'
FORBIDDEN = 'FORBIDDEN'
CONFLICT = 'CONFLICT'
UNAUTHENTICATED = 'UNAUTHENTICATED'


class ServiceError(Exception):
    """Base class for failures surfaced to clients as a JSON error envelope"""

    kind = VALIDATION
    status_code = 400

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code or self.kind

    def to_dict(self):
        return {'success': False, 'message': self.message, 'code': self.code}


class ValidationError(ServiceError):
    kind = VALIDATION
    status_code = 400


class NotFoundError(ServiceError):
    kind = NOT_FOUND
    status_code = 404


class ForbiddenError(ServiceError):
    kind = FORBIDDEN
    status_code = 403


class ConflictError(ServiceError):
    kind = CONFLICT
    status_code = 400


class AuthenticationError(ServiceError):
    kind = UNAUTHENTICATED
    status_code = 401
