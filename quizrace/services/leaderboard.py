"""Leaderboard aggregation.

Ranks players by number of correct submissions, then by estimated time spent
solving. The time for a correct answer runs from the latest earlier
submission on a lower-numbered question, or from the moment the player
joined. Submissions on higher-numbered questions never anchor a start time,
which keeps the estimate sane for players who skip ahead and come back.
"""

from typing import Iterable, List, Sequence

from quizrace.models import Answer, Player
from .sessions import get_session


def start_time_for(answer, answers: Sequence, joined_at: int) -> int:
    earlier = [
        prev.submitted_at for prev in answers
        if prev.question_index < answer.question_index and prev.submitted_at < answer.submitted_at
    ]
    return max(earlier) if earlier else joined_at


def total_solve_time(answers: Sequence, joined_at: int) -> int:
    return sum(
        a.submitted_at - start_time_for(a, answers, joined_at)
        for a in answers if a.is_correct
    )


def build_entry(player, answers: Iterable, total_questions: int) -> dict:
    answers = list(answers)
    return {
        'player_id': player.id,
        'name': player.name,
        'correct_count': sum(1 for a in answers if a.is_correct),
        'total_time': total_solve_time(answers, player.joined_at),
        'questions_answered': len({a.question_index for a in answers}),
        'total_questions': total_questions,
    }


def sort_entries(entries: Iterable[dict]) -> List[dict]:
    return sorted(entries, key=lambda e: (-e['correct_count'], e['total_time']))


def rank(session_id) -> List[dict]:
    quiz_session = get_session(session_id)
    if quiz_session is None:
        return []
    total_questions = quiz_session.total_questions

    entries = []
    for player in Player.query.filter_by(session_id=quiz_session.id).order_by(Player.id).all():
        answers = Answer.query.filter_by(session_id=quiz_session.id, player_id=player.id).all()
        entries.append(build_entry(player, answers, total_questions))
    return sort_entries(entries)
