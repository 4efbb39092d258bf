from typing import Optional

from flask import current_app

from quizrace import db
from quizrace.errors import InvalidArgument, InvalidState
from quizrace.models import PLAYER_NAME_LEN, Player, SESSION_WAITING, is_bigint
from . import clock
from .sessions import require_session


def join_session(session_id, name) -> Player:
    """Admit a player into a session that has not started yet.

    Names are not unique within a session; players are told apart by id.
    """
    quiz_session = require_session(session_id)
    if quiz_session.status != SESSION_WAITING:
        raise InvalidState('Game has already started')

    if not isinstance(name, str) or not name.strip():
        raise InvalidArgument('Player name is required')
    # Never longer than the column, whatever the config says
    max_len = min(int(current_app.config.get('PLAYER_NAME_MAX_LEN', PLAYER_NAME_LEN)), PLAYER_NAME_LEN)
    name = name.strip()[:max_len]

    player = Player(session_id=quiz_session.id, name=name, joined_at=clock.now_ms())
    db.session.add(player)
    db.session.commit()
    current_app.logger.info(f"[player-join] session={quiz_session.id} player={player.id}")
    return player


def get_player(player_id) -> Optional[Player]:
    if not is_bigint(player_id):
        return None
    return db.session.get(Player, player_id)
