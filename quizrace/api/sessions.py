from flask import Blueprint, jsonify, request
from quizrace.auth import current_owner
from quizrace.errors import InvalidArgument, NotFound
from quizrace.services.sessions import (
    create_session,
    end_session,
    get_session,
    get_session_by_room_code,
    start_session,
)
from quizrace.services.players import join_session
from quizrace.services.leaderboard import rank
from quizrace.socketio_events import notify_session_changed

sessions = Blueprint('sessions', __name__)


@sessions.route('/create', methods=['POST'])
def create():
    """
    Creates a waiting session from a built-in or custom question set.
    """
    data = request.get_json(silent=True) or {}
    question_set_id = data.get('question_set_id')
    if question_set_id is None or question_set_id == '':
        raise InvalidArgument('question_set_id is required')
    quiz_session = create_session(question_set_id, owner=current_owner())
    return jsonify(quiz_session.to_dict()), 201


@sessions.route('/<int:session_id>', methods=['GET'])
def get_one(session_id):
    quiz_session = get_session(session_id)
    return jsonify(quiz_session.to_dict() if quiz_session else None)


@sessions.route('/code/<string:room_code>', methods=['GET'])
def get_by_room_code(room_code):
    quiz_session = get_session_by_room_code(room_code)
    return jsonify(quiz_session.to_dict() if quiz_session else None)


@sessions.route('/<int:session_id>/start', methods=['POST'])
def start(session_id):
    quiz_session = start_session(session_id)
    notify_session_changed(quiz_session.id, 'status')
    return jsonify(quiz_session.to_dict())


@sessions.route('/<int:session_id>/end', methods=['POST'])
def end(session_id):
    quiz_session = end_session(session_id)
    notify_session_changed(quiz_session.id, 'status')
    return jsonify(quiz_session.to_dict())


@sessions.route('/<int:session_id>/join', methods=['POST'])
def join(session_id):
    """
    Adds a named player to a session that is still waiting for its host.
    """
    data = request.get_json(silent=True) or {}
    player = join_session(session_id, data.get('name'))
    notify_session_changed(session_id, 'player_joined')
    return jsonify(player.to_dict()), 201


@sessions.route('/join', methods=['POST'])
def join_by_room_code():
    """
    Same as joining by id, but with the room code players type in.
    """
    data = request.get_json(silent=True) or {}
    room_code = data.get('room_code')
    if not room_code:
        raise InvalidArgument('room_code is required')
    quiz_session = get_session_by_room_code(room_code)
    if quiz_session is None:
        raise NotFound('Session not found')
    player = join_session(quiz_session.id, data.get('name'))
    notify_session_changed(quiz_session.id, 'player_joined')
    return jsonify(player.to_dict()), 201


@sessions.route('/<int:session_id>/leaderboard', methods=['GET'])
def leaderboard(session_id):
    return jsonify(rank(session_id))
