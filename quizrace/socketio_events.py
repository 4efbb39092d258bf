from flask_socketio import join_room, leave_room, emit
from quizrace import socketio
from quizrace.services.sessions import get_session, get_session_by_room_code

NAMESPACE = '/ws'


def session_room(session_id) -> str:
    return f"session:{session_id}"


def notify_session_changed(session_id, reason: str = 'state') -> None:
    """Tell subscribed clients to re-fetch session, progress and leaderboard."""
    socketio.emit(
        'state_update',
        {'session_id': session_id, 'reason': reason},
        to=session_room(session_id),
        namespace=NAMESPACE,
    )


def _resolve_session(data):
    data = data or {}
    if data.get('session_id') is not None:
        try:
            return get_session(int(data['session_id']))
        except (TypeError, ValueError, OverflowError):
            return None
    if data.get('room_code'):
        return get_session_by_room_code(data['room_code'])
    return None


def handle_connect():
    emit('connected', {'message': f'Connected to {NAMESPACE}'})


def handle_join_session(data):
    quiz_session = _resolve_session(data)
    if quiz_session is None:
        emit('error', {'message': 'Session not found'})
        return
    room = session_room(quiz_session.id)
    join_room(room)
    emit('joined', {'room': room, 'session_id': quiz_session.id, 'status': quiz_session.status})


def handle_leave_session(data):
    quiz_session = _resolve_session(data)
    if quiz_session is None:
        emit('error', {'message': 'Session not found'})
        return
    room = session_room(quiz_session.id)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = [NAMESPACE, '/'] if testing else [NAMESPACE]
    for ns in namespaces:
        socketio.on_event('connect', handle_connect, namespace=ns)
        socketio.on_event('join_session', handle_join_session, namespace=ns)
        socketio.on_event('leave_session', handle_leave_session, namespace=ns)
        socketio.on_event('ping', handle_ping, namespace=ns)
