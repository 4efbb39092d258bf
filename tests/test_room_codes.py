import random

import pytest
from sqlalchemy.exc import IntegrityError

from quizrace import db
from quizrace.errors import RoomCodeExhausted
from quizrace.models import QuizSession
from quizrace.services import room_codes
from quizrace.services.room_codes import (
    ROOM_CODE_ALPHABET,
    canonical_room_code,
    draw_room_code,
    insert_with_room_code,
    is_valid_room_code,
)
from quizrace.services.sessions import create_session, get_session_by_room_code


def _blank_session(code=None):
    return QuizSession(status='waiting', questions_json='[]', room_code=code)


def test_alphabet_has_no_ambiguous_glyphs():
    assert len(ROOM_CODE_ALPHABET) == len(set(ROOM_CODE_ALPHABET)) == 32
    for glyph in 'IO01':
        assert glyph not in ROOM_CODE_ALPHABET


def test_drawn_codes_are_six_alphabet_characters():
    rng = random.Random(7)
    for _ in range(500):
        code = draw_room_code(rng)
        assert len(code) == 6
        assert is_valid_room_code(code)


def test_canonical_room_code():
    assert canonical_room_code(' k7m2qx ') == 'K7M2QX'
    assert canonical_room_code(None) == ''


def test_lookup_collision_redraws(flask_app):
    db.session.add(_blank_session('AAAAAA'))
    db.session.commit()

    draws = iter(['AAAAAA', 'AAAAAA', 'BBBBBB'])
    created = insert_with_room_code(_blank_session(), draw=lambda: next(draws))
    assert created.room_code == 'BBBBBB'
    assert QuizSession.query.count() == 2


def test_commit_conflict_redraws(flask_app, monkeypatch):
    """A concurrent creator claimed the code between lookup and insert."""
    db.session.add(_blank_session('CCCCCC'))
    db.session.commit()
    # First lookup sees a stale view, so only the unique index catches the clash
    real_code_in_use = room_codes.code_in_use
    lookups = []

    def stale_then_real(code):
        lookups.append(code)
        return False if len(lookups) == 1 else real_code_in_use(code)

    monkeypatch.setattr(room_codes, 'code_in_use', stale_then_real)

    draws = iter(['CCCCCC', 'DDDDDD'])
    created = insert_with_room_code(_blank_session(), draw=lambda: next(draws))
    assert created.room_code == 'DDDDDD'
    codes = sorted(s.room_code for s in QuizSession.query.all())
    assert codes == ['CCCCCC', 'DDDDDD']


def test_other_integrity_errors_are_not_retried(flask_app):
    draws = []

    def counting_draw():
        draws.append(1)
        return 'HHHHHH'

    broken = QuizSession(status='waiting', questions_json=None)
    with pytest.raises(IntegrityError):
        insert_with_room_code(broken, draw=counting_draw)
    assert len(draws) == 1
    assert QuizSession.query.count() == 0


def test_attempt_cap(flask_app):
    db.session.add(_blank_session('EEEEEE'))
    db.session.commit()
    with pytest.raises(RoomCodeExhausted):
        insert_with_room_code(_blank_session(), max_attempts=3, draw=lambda: 'EEEEEE')
    assert QuizSession.query.count() == 1


def test_create_session_uses_patched_draw(flask_app, monkeypatch):
    draws = iter(['FFFFFF', 'FFFFFF', 'GGGGGG'])
    monkeypatch.setattr(room_codes, 'draw_room_code', lambda rng=None: next(draws))
    first = create_session('basic-arithmetic')
    second = create_session('basic-arithmetic')
    assert (first.room_code, second.room_code) == ('FFFFFF', 'GGGGGG')
    assert get_session_by_room_code('gggggg').id == second.id


def test_many_sessions_have_unique_codes(flask_app):
    codes = [create_session('basic-arithmetic').room_code for _ in range(50)]
    assert len(set(codes)) == 50
    assert all(is_valid_room_code(c) for c in codes)
