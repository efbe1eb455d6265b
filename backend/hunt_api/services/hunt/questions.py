from typing import Optional

from flask import current_app
from sqlalchemy import and_, exists, func

from hunt_api import db
from hunt_api.errors import NoAvailableQuestionsError, NotFoundError
from hunt_api.models import SQL_INT_MAX, AnsweredQuestion, Question
from . import storage_errors

TERMINAL_RESULTS = ('Correct', 'Wrong')


def count_available_questions(group_id: str, difficulty: int) -> int:
    """Questions at this difficulty the group has not answered Correct or Wrong."""
    terminal_answer = and_(
        AnsweredQuestion.question_id == Question.id,
        AnsweredQuestion.group_id == group_id,
        AnsweredQuestion.result.in_(TERMINAL_RESULTS),
    )
    return (
        db.session.query(func.count(func.distinct(Question.id)))
        .select_from(Question)
        .outerjoin(AnsweredQuestion, terminal_answer)
        .filter(Question.difficulty == difficulty, AnsweredQuestion.id.is_(None))
        .scalar()
    ) or 0


def _pick_unanswered(level: int, group_id: str) -> Optional[Question]:
    answered = exists().where(and_(
        AnsweredQuestion.group_id == group_id,
        AnsweredQuestion.question_id == Question.id,
    ))
    return (
        Question.query
        .filter(Question.difficulty == level, ~answered)
        .order_by(func.random())
        .first()
    )


def _sample_unanswered(level: int, group_id: str) -> Optional[Question]:
    max_attempts = int(current_app.config.get('QUESTION_SELECT_MAX_ATTEMPTS', 20))
    for attempt in range(1, max_attempts + 1):
        question = Question.query.filter_by(difficulty=level).order_by(func.random()).first()
        if question is None:
            return None
        seen = AnsweredQuestion.query.filter_by(group_id=group_id, question_id=question.id).first()
        if seen is None:
            return question
        current_app.logger.debug(f"[question] {question.id} already answered by {group_id}, retrying ({attempt}/{max_attempts})")
    return None


def select_question(level: int, group_id: str) -> Question:
    """Random question at `level` that `group_id` has never answered."""
    if level > SQL_INT_MAX:
        raise NotFoundError('No matching question found')
    with storage_errors('[question]'):
        if db.session.query(Question.id).filter_by(difficulty=level).first() is None:
            raise NotFoundError('No matching question found')
        if current_app.config.get('QUESTION_SELECTION_MODE') == 'sample':
            question = _sample_unanswered(level, group_id)
        else:
            question = _pick_unanswered(level, group_id)
    if question is None:
        raise NoAvailableQuestionsError('No available questions after multiple attempts.')
    current_app.logger.info(f"[question] group={group_id} level={level} -> {question.id}")
    return question
