"""The answer ledger.

Every submission becomes a new ``Answer`` row: wrong answers, repeats of an
already correct answer and give-ups alike. Nothing here updates or deletes
rows; progress and ranking are folded from the full history.
"""

from typing import List

from flask import current_app

from quizrace import db
from quizrace.errors import InvalidArgument, InvalidState, NotFound
from quizrace.models import Answer, SESSION_ACTIVE, is_bigint
from . import clock
from .catalog import GIVE_UP_SENTINEL
from .players import get_player
from .sessions import get_session


def submit_answer(player_id, question_index, value) -> Answer:
    player = get_player(player_id)
    if player is None:
        raise NotFound('Player not found')
    quiz_session = get_session(player.session_id)
    if quiz_session is None:
        raise NotFound('Session not found')
    if quiz_session.status != SESSION_ACTIVE:
        raise InvalidState('Game is not active')

    if not is_bigint(question_index):
        raise InvalidArgument('question_index must be a 64-bit integer')
    if not is_bigint(value):
        raise InvalidArgument('answer must be a 64-bit integer')
    questions = quiz_session.questions
    if not 0 <= question_index < len(questions):
        raise InvalidArgument(f'question_index must be between 0 and {len(questions) - 1}')

    is_correct = value != GIVE_UP_SENTINEL and value == questions[question_index]['answer']
    answer = Answer(
        session_id=quiz_session.id,
        player_id=player.id,
        question_index=question_index,
        value=value,
        is_correct=is_correct,
        submitted_at=clock.now_ms(),
    )
    db.session.add(answer)
    db.session.commit()
    current_app.logger.info(
        f"[answer] session={quiz_session.id} player={player.id} q={question_index} correct={is_correct}"
    )
    return answer


def give_up(player_id, question_index) -> Answer:
    """Record a give-up. Counts as answered, never as correct."""
    return submit_answer(player_id, question_index, GIVE_UP_SENTINEL)


def answers_for(player_id) -> List[Answer]:
    if not is_bigint(player_id):
        return []
    return (
        Answer.query.filter_by(player_id=player_id)
        .order_by(Answer.submitted_at, Answer.id)
        .all()
    )
