from flask import current_app

from hunt_api import db
from hunt_api.errors import ValidationError
from hunt_api.models import AnsweredQuestion, Question
from . import storage_errors


def register_answer(group_id, question_id, result, challenger_answer=None) -> str:
    """Record one answer attempt and bump the question's counter.

    The final question is never stored per group, only counted. Returns the
    name of the counter that was incremented.
    """
    if not group_id or not question_id or not result:
        raise ValidationError('Invalid data')

    if question_id != current_app.config.get('FINAL_QUESTION_ID'):
        with storage_errors('[answer]', expose_details=False):
            db.session.add(AnsweredQuestion(
                group_id=group_id,
                question_id=question_id,
                result=result,
                challenger_answer=challenger_answer,
            ))
            db.session.commit()

    if result == 'Correct':
        column, counter = Question.collect_count, 'CollectCount'
    else:
        column, counter = Question.wrong_count, 'WrongCount'
    with storage_errors('[answer]', expose_details=False):
        # Increment in SQL so concurrent answers never overwrite each other
        Question.query.filter_by(id=question_id).update({column: column + 1}, synchronize_session=False)
        db.session.commit()

    current_app.logger.info(f"[answer] group={group_id} question={question_id} result={result} counter={counter}")
    return counter
