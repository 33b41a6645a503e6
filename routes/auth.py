"""
Authentication routes for the Campus Portal backend
Handles registration, login and profile, and provides the auth decorators
"""

from functools import wraps

from flask import Blueprint, g, jsonify, request

from services.auth_service import AuthService
from utils.errors import AuthenticationError, ForbiddenError

auth_bp = Blueprint('auth', __name__)

def _bearer_token():
    header = request.headers.get('Authorization', '')
    if header.lower().startswith('bearer '):
        return header.split(' ', 1)[1].strip()
    return None

def request_data():
    """JSON body, or form fields for multipart requests"""
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()

# Authentication decorators
def token_required(f):
    """Require a valid bearer token; the user is exposed as g.current_user"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.current_user = AuthService.user_from_token(_bearer_token())
        return f(*args, **kwargs)
    return decorated_function

def optional_token(f):
    """Resolve the user when a valid token is sent, otherwise continue anonymously"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.current_user = None
        token = _bearer_token()
        if token:
            try:
                g.current_user = AuthService.user_from_token(token)
            except AuthenticationError:
                g.current_user = None
        return f(*args, **kwargs)
    return decorated_function

def roles_required(*roles):
    """Require one of the given roles; implies token_required"""
    def decorator(f):
        @wraps(f)
        @token_required
        def decorated_function(*args, **kwargs):
            user = g.current_user
            if user.role not in roles:
                raise ForbiddenError(f"User role '{user.role}' is not authorized to access this route")
            return f(*args, **kwargs)
        return decorated_function
    return decorator

@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account and return a token"""
    user, token = AuthService.register(request_data())
    return jsonify({'success': True, 'token': token, 'user': user.to_dict()}), 201

@auth_bp.route('/login', methods=['POST'])
def login():
    data = request_data()
    user, token = AuthService.authenticate(data.get('email'), data.get('password'))
    return jsonify({'success': True, 'token': token, 'user': user.to_dict()})

@auth_bp.route('/me', methods=['GET'])
@token_required
def me():
    return jsonify({'success': True, 'user': g.current_user.to_dict()})

@auth_bp.route('/profile', methods=['PUT'])
@token_required
def update_profile():
    """Edit the current user's profile"""
    user = AuthService.update_profile(g.current_user, request_data())
    return jsonify({'success': True, 'message': 'Profile updated successfully', 'user': user.to_dict()})
