"""Room code generation and the uniqueness gate.

Codes are drawn uniformly from an alphabet without look-alike glyphs. The
indexed lookup skips codes already taken; the unique index on
``quiz_session.room_code`` is the conditional write that settles a race
between two creators who drew the same free code.
"""

import random
from typing import Callable, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from quizrace import db
from quizrace.errors import RoomCodeExhausted
from quizrace.models import QuizSession

# Uppercase letters without I and O, digits without 0 and 1
ROOM_CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
ROOM_CODE_LENGTH = 6

_rng = random.SystemRandom()


def draw_room_code(rng=None) -> str:
    rng = rng or _rng
    return ''.join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))


def canonical_room_code(code: str) -> str:
    return (code or '').strip().upper()


def is_valid_room_code(code: str) -> bool:
    return len(code) == ROOM_CODE_LENGTH and all(c in ROOM_CODE_ALPHABET for c in code)


def code_in_use(code: str) -> bool:
    return db.session.query(QuizSession.id).filter_by(room_code=code).first() is not None


def insert_with_room_code(
    quiz_session: QuizSession,
    max_attempts: int = 0,
    draw: Optional[Callable[[], str]] = None,
) -> QuizSession:
    """Assign a free room code to ``quiz_session`` and commit it.

    The code is claimed by the same commit that inserts the row. A unique
    violation means another creator claimed the code first; the transaction
    is rolled back and a new code drawn. Integrity errors that leave the code
    free are re-raised. ``max_attempts`` of 0 never gives up.
    """
    draw = draw or draw_room_code
    attempts = 0
    while True:
        attempts += 1
        if max_attempts and attempts > max_attempts:
            raise RoomCodeExhausted(f'No free room code after {max_attempts} attempts')

        code = draw()
        if code_in_use(code):
            current_app.logger.warning(f"[room-code-collision] code={code} attempt={attempts} stage=lookup")
            continue

        quiz_session.room_code = code
        db.session.add(quiz_session)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            # Some other constraint failed; redrawing would never fix it
            if not code_in_use(code):
                raise
            current_app.logger.warning(f"[room-code-collision] code={code} attempt={attempts} stage=commit")
            continue
        return quiz_session
