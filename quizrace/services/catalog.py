"""Built-in and user-owned question sets.

Built-in sets are module constants keyed by string ids. Custom sets live in
the ``question_set`` table and are keyed by integer ids. Either kind is copied
by value when a session is created, so nothing here can reach a running game.
"""

import copy
from typing import List, Optional

from flask import current_app

from quizrace import db
from quizrace.errors import Forbidden, InvalidArgument, NotFound, Unauthorized
from quizrace.models import QuestionSet, is_bigint

# Reserved give-up value. Custom sets may not use it as an answer.
GIVE_UP_SENTINEL = -999999

BUILTIN_QUESTION_SETS = (
    {
        'id': 'basic-arithmetic',
        'name': 'Arithmetic warm-up',
        'description': 'Ten quick sums to learn where the buttons are',
        'questions': (
            {'question': '15 + 27', 'answer': 42},
            {'question': '-8 × 9', 'answer': -72},
            {'question': '100 - 43', 'answer': 57},
            {'question': '144 ÷ 12', 'answer': 12},
            {'question': '23 + 56', 'answer': 79},
            {'question': '7 × 8', 'answer': 56},
            {'question': '91 - 38', 'answer': 53},
            {'question': '81 ÷ -9', 'answer': -9},
            {'question': '34 + 29', 'answer': 63},
            {'question': '12 × 5', 'answer': 60},
        ),
    },
)


def _owner_id(owner) -> Optional[int]:
    if owner is None or not getattr(owner, 'is_authenticated', True):
        return None
    return owner.id


def builtin_question_set(set_id) -> Optional[dict]:
    for entry in BUILTIN_QUESTION_SETS:
        if entry['id'] == set_id:
            return entry
    return None


def _custom_set_by_id(set_id) -> Optional[QuestionSet]:
    try:
        pk = int(set_id)
    except (TypeError, ValueError, OverflowError):
        return None
    if not is_bigint(pk):
        return None
    return db.session.get(QuestionSet, pk)


def list_question_sets(owner=None) -> List[dict]:
    """Sets the caller can start a session from: their own first, then built-ins."""
    builtins = [{
        'id': entry['id'],
        'name': entry['name'],
        'description': entry['description'],
        'question_count': len(entry['questions']),
        'is_custom': False,
        'is_owner': False,
    } for entry in BUILTIN_QUESTION_SETS]

    uid = _owner_id(owner)
    if uid is None:
        return builtins

    custom = QuestionSet.query.filter_by(user_id=uid).order_by(QuestionSet.id).all()
    return [{
        'id': s.id,
        'name': s.name,
        'description': s.description,
        'question_count': len(s.questions),
        'is_custom': True,
        'is_owner': True,
    } for s in custom] + builtins


def resolve_questions(set_id, owner=None) -> List[dict]:
    """Return a detached copy of the questions of ``set_id``.

    Built-in ids win over custom ids. A custom set resolves only when it is
    public or owned by ``owner``.
    """
    builtin = builtin_question_set(set_id)
    if builtin is not None:
        return [dict(q) for q in builtin['questions']]

    custom = _custom_set_by_id(set_id)
    if custom is None or not (custom.is_public or custom.user_id == _owner_id(owner)):
        raise NotFound('Question set not found')
    return copy.deepcopy(custom.questions)


def validate_questions(questions) -> List[dict]:
    if not isinstance(questions, (list, tuple)) or not questions:
        raise InvalidArgument('At least one question is required')
    cleaned = []
    for idx, item in enumerate(questions):
        if not isinstance(item, dict):
            raise InvalidArgument(f'Question {idx} must be an object')
        prompt = item.get('question')
        answer = item.get('answer')
        if not isinstance(prompt, str) or not prompt.strip():
            raise InvalidArgument(f'Question {idx} needs a prompt')
        if not is_bigint(answer):
            raise InvalidArgument(f'Question {idx} needs a 64-bit integer answer')
        if answer == GIVE_UP_SENTINEL:
            raise InvalidArgument(f'Question {idx} uses the reserved answer {GIVE_UP_SENTINEL}')
        cleaned.append({'question': prompt.strip(), 'answer': answer})
    return cleaned


def create_question_set(owner, name, description, questions, is_public=False) -> QuestionSet:
    uid = _owner_id(owner)
    if uid is None:
        raise Unauthorized('Must be logged in')
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgument('Name is required')

    question_set = QuestionSet(
        user_id=uid,
        name=name.strip(),
        description=(description or '').strip(),
        is_public=bool(is_public),
    )
    question_set.questions = validate_questions(questions)
    db.session.add(question_set)
    db.session.commit()
    current_app.logger.info(
        f"[question-set-create] set={question_set.id} owner={uid} questions={len(question_set.questions)}"
    )
    return question_set


def delete_question_set(set_id, owner) -> None:
    uid = _owner_id(owner)
    if uid is None:
        raise Unauthorized('Must be logged in')
    question_set = _custom_set_by_id(set_id)
    if question_set is None:
        raise NotFound('Question set not found')
    if question_set.user_id != uid:
        raise Forbidden('Not authorized')
    db.session.delete(question_set)
    db.session.commit()
    current_app.logger.info(f"[question-set-delete] set={set_id} owner={uid}")
