import json
from typing import Optional

from flask import current_app

from quizrace import db
from quizrace.errors import InvalidState, NotFound
from quizrace.models import QuizSession, SESSION_ACTIVE, SESSION_ENDED, SESSION_WAITING, is_bigint
from .catalog import resolve_questions
from .room_codes import canonical_room_code, insert_with_room_code

# Prior states accepted by each transition when strict mode is on
_STRICT_SOURCES = {
    SESSION_ACTIVE: (SESSION_WAITING, SESSION_ACTIVE),
    SESSION_ENDED: (SESSION_WAITING, SESSION_ACTIVE, SESSION_ENDED),
}


def create_session(question_set_id, owner=None) -> QuizSession:
    """Create a waiting session holding a copy of the set's questions."""
    questions = resolve_questions(question_set_id, owner)
    quiz_session = QuizSession(
        status=SESSION_WAITING,
        questions_json=json.dumps(questions),
        question_set_id=str(question_set_id),
    )
    insert_with_room_code(
        quiz_session,
        max_attempts=int(current_app.config.get('ROOM_CODE_MAX_ATTEMPTS', 0)),
    )
    current_app.logger.info(
        f"[session-create] session={quiz_session.id} code={quiz_session.room_code} set={question_set_id} questions={len(questions)}"
    )
    return quiz_session


def get_session(session_id) -> Optional[QuizSession]:
    if not is_bigint(session_id):
        return None
    return db.session.get(QuizSession, session_id)


def get_session_by_room_code(room_code) -> Optional[QuizSession]:
    code = canonical_room_code(room_code)
    if not code:
        return None
    return QuizSession.query.filter_by(room_code=code).first()


def require_session(session_id) -> QuizSession:
    quiz_session = get_session(session_id)
    if quiz_session is None:
        raise NotFound('Session not found')
    return quiz_session


def _transition(session_id, target: str) -> QuizSession:
    quiz_session = require_session(session_id)
    previous = quiz_session.status
    if current_app.config.get('STRICT_SESSION_TRANSITIONS') and previous not in _STRICT_SOURCES[target]:
        raise InvalidState(f'Cannot move session from {previous} to {target}')
    quiz_session.status = target
    db.session.add(quiz_session)
    db.session.commit()
    current_app.logger.info(f"[session-{target}] session={quiz_session.id} {previous} -> {target}")
    return quiz_session


def start_session(session_id) -> QuizSession:
    return _transition(session_id, SESSION_ACTIVE)


def end_session(session_id) -> QuizSession:
    return _transition(session_id, SESSION_ENDED)
