"""
Real-time delivery over Socket.IO.

Each authenticated connection joins a room named after its user id and is
recorded in a ConnectionRegistry owned by the application. Pushes go to the
rooms of the target users; a user with no open connection simply misses the
push (the stored Notification remains the durable record).
"""

import logging

from flask import current_app, request
from flask_socketio import SocketIO, emit, join_room

from utils.errors import AuthenticationError

logger = logging.getLogger(__name__)

socketio = SocketIO()


class ConnectionRegistry:
    """Maps user ids to their live socket ids for the lifetime of the process"""

    def __init__(self):
        self._by_user = {}
        self._by_sid = {}

    def add(self, user_id, sid):
        self._by_user.setdefault(user_id, set()).add(sid)
        self._by_sid[sid] = user_id

    def remove(self, sid):
        """Forget one connection; returns the user it belonged to"""
        user_id = self._by_sid.pop(sid, None)
        if user_id is None:
            return None
        sids = self._by_user.get(user_id)
        if sids is not None:
            sids.discard(sid)
            if not sids:
                del self._by_user[user_id]
        return user_id

    def user_for(self, sid):
        return self._by_sid.get(sid)

    def is_online(self, user_id):
        return bool(self._by_user.get(user_id))

    def __len__(self):
        return len(self._by_sid)


def room_for(user_id):
    return str(user_id)


def init_realtime(app, registry=None):
    """Attach the socket server and a fresh connection registry to the app"""
    app.extensions['connection_registry'] = registry or ConnectionRegistry()
    socketio.init_app(app, cors_allowed_origins=[app.config['FRONTEND_URL']])


def get_registry():
    return current_app.extensions['connection_registry']


def _handshake_token(auth):
    """Token from the Socket.IO auth payload, ?token= or a bearer header"""
    if isinstance(auth, dict) and auth.get('token'):
        return auth['token']
    if request.args.get('token'):
        return request.args['token']
    header = request.headers.get('Authorization', '')
    if header.lower().startswith('bearer '):
        return header.split(' ', 1)[1].strip()
    return None


@socketio.on('connect')
def handle_connect(auth=None):
    from services.auth_service import AuthService

    try:
        user = AuthService.user_from_token(_handshake_token(auth))
    except AuthenticationError as e:
        logger.info("Socket connection refused: %s", e.message)
        raise ConnectionRefusedError('Authentication error')

    get_registry().add(user.id, request.sid)
    join_room(room_for(user.id))
    logger.info("User connected: %s", user.id)


@socketio.on('disconnect')
def handle_disconnect(reason=None):
    user_id = get_registry().remove(request.sid)
    logger.info("User disconnected: %s", user_id)


@socketio.on('typing')
def handle_typing(data):
    """Relay a typing indicator to everyone else in the given room"""
    if not isinstance(data, dict) or not data.get('roomId'):
        return
    emit('user_typing', {
        'userId': get_registry().user_for(request.sid),
        'isTyping': bool(data.get('isTyping'))
    }, to=str(data['roomId']), include_self=False)


@socketio.on('notification_read')
def handle_notification_read(notification_id):
    # UI signal only; the read flag is persisted through the HTTP API
    emit('notification_read_confirmed', notification_id)


def push(user_ids, event, payload):
    """Emit ``event`` to each target user's room; returns rooms reached"""
    if isinstance(user_ids, int):
        user_ids = [user_ids]

    registry = get_registry()
    delivered = 0
    for user_id in dict.fromkeys(user_ids):
        if not registry.is_online(user_id):
            continue
        socketio.emit(event, payload, to=room_for(user_id))
        delivered += 1
    return delivered
