from flask import Blueprint, jsonify, request
from quizrace.auth import current_owner
from quizrace.services.catalog import (
    create_question_set,
    delete_question_set,
    list_question_sets,
)

question_sets = Blueprint('question_sets', __name__)


@question_sets.route('', methods=['GET'])
def list_sets():
    """
    Lists the caller's own sets followed by the built-in ones.
    """
    return jsonify(list_question_sets(current_owner()))


@question_sets.route('', methods=['POST'])
def create():
    data = request.get_json(silent=True) or {}
    question_set = create_question_set(
        current_owner(),
        data.get('name'),
        data.get('description'),
        data.get('questions'),
        is_public=data.get('is_public', False),
    )
    return jsonify(question_set.to_dict()), 201


@question_sets.route('/<int:set_id>', methods=['DELETE'])
def delete(set_id):
    delete_question_set(set_id, current_owner())
    return jsonify({'success': True})
