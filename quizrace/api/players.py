from flask import Blueprint, jsonify, request
from quizrace.api import int_field
from quizrace.errors import InvalidArgument
from quizrace.services.answers import answers_for, give_up, submit_answer
from quizrace.services.players import get_player
from quizrace.services.progress import next_question, progress_of
from quizrace.socketio_events import notify_session_changed

players = Blueprint('players', __name__)


@players.route('/<int:player_id>', methods=['GET'])
def get_one(player_id):
    player = get_player(player_id)
    return jsonify(player.to_dict() if player else None)


@players.route('/<int:player_id>/answers', methods=['GET'])
def list_answers(player_id):
    return jsonify([a.to_dict() for a in answers_for(player_id)])


@players.route('/<int:player_id>/answers', methods=['POST'])
def submit(player_id):
    """
    Records an answer. Every call is stored, including repeats.
    """
    data = request.get_json(silent=True) or {}
    answer = submit_answer(player_id, int_field(data, 'question_index'), int_field(data, 'answer'))
    notify_session_changed(answer.session_id, 'answer')
    return jsonify({'is_correct': answer.is_correct, 'answer_id': answer.id}), 201


@players.route('/<int:player_id>/give-up', methods=['POST'])
def give_up_question(player_id):
    data = request.get_json(silent=True) or {}
    answer = give_up(player_id, int_field(data, 'question_index'))
    notify_session_changed(answer.session_id, 'answer')
    return jsonify({'is_correct': answer.is_correct, 'answer_id': answer.id}), 201


@players.route('/<int:player_id>/progress', methods=['GET'])
def progress(player_id):
    return jsonify(progress_of(player_id))


@players.route('/<int:player_id>/next', methods=['GET'])
def next_unanswered_question(player_id):
    current = request.args.get('current', type=int)
    if current is None:
        raise InvalidArgument('current is required')
    return jsonify(next_question(player_id, current))
