from typing import Iterable, List, Optional

from .answers import answers_for
from .players import get_player
from .sessions import get_session


def next_unanswered(current_index: int, total: int, answered) -> Optional[int]:
    """First unanswered index after ``current_index``, wrapping to the start.

    Scans current+1 .. total-1, then 0 .. current-1. Returns None when every
    other question is answered.
    """
    answered = set(answered)
    for i in range(current_index + 1, total):
        if i not in answered:
            return i
    for i in range(0, min(current_index, total)):
        if i not in answered:
            return i
    return None


def summarize(answers: Iterable, total_questions: int) -> dict:
    answers = list(answers)
    answered = sorted({a.question_index for a in answers})
    return {
        'answered_question_indices': answered,
        # Counts correct submissions, so repeats can push it past total_questions
        'correct_count': sum(1 for a in answers if a.is_correct),
        'total_questions': total_questions,
        'all_answered': len(answered) == total_questions,
    }


def skipped_questions(progress: dict) -> List[int]:
    answered = set(progress['answered_question_indices'])
    return [i for i in range(progress['total_questions']) if i not in answered]


def progress_of(player_id) -> Optional[dict]:
    player = get_player(player_id)
    if player is None:
        return None
    quiz_session = get_session(player.session_id)
    if quiz_session is None:
        return None
    progress = summarize(answers_for(player.id), quiz_session.total_questions)
    progress['session'] = quiz_session.to_dict()
    return progress


def next_question(player_id, current_index: int) -> Optional[dict]:
    progress = progress_of(player_id)
    if progress is None:
        return None
    return {
        'current_index': current_index,
        'next_index': next_unanswered(
            current_index,
            progress['total_questions'],
            progress['answered_question_indices'],
        ),
        'skipped': skipped_questions(progress),
        'all_answered': progress['all_answered'],
    }
