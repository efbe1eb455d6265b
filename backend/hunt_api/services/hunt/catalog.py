from typing import Iterable, List, Tuple

from hunt_api import db
from hunt_api.errors import ValidationError
from hunt_api.models import Question
from . import storage_errors

# Enough questions per level to register a challenge at every difficulty
SAMPLE_CATALOG_SIZES = {1: 10, 2: 10, 3: 8, 4: 3, 5: 1}


def sample_questions() -> List[Question]:
    questions = []
    for difficulty, size in SAMPLE_CATALOG_SIZES.items():
        for n in range(1, size + 1):
            questions.append(Question(
                id=f'lv{difficulty}_q{n}',
                difficulty=difficulty,
                content=f'Sample question {n} for level {difficulty}',
                answer=str(n),
                collect_count=0,
                wrong_count=0,
            ))
    return questions


def import_questions(rows: Iterable[dict]) -> Tuple[int, int]:
    """Upsert catalog rows keyed by ID. Answer counters are left untouched.

    Returns (created, updated).
    """
    created = updated = 0
    with storage_errors('[catalog]'):
        for index, row in enumerate(rows):
            if not isinstance(row, dict) or not row.get('ID') or row.get('Difficulty') is None:
                raise ValidationError(f'Question #{index} needs an ID and a Difficulty')
            try:
                difficulty = int(row['Difficulty'])
            except (TypeError, ValueError):
                raise ValidationError(f"Question {row['ID']} has an invalid Difficulty") from None

            question = Question.query.filter_by(id=str(row['ID'])).first()
            if question is None:
                question = Question(id=str(row['ID']), collect_count=0, wrong_count=0)
                db.session.add(question)
                created += 1
            else:
                updated += 1
            question.difficulty = difficulty
            question.content = row.get('Content')
            question.answer = row.get('Answer')
        db.session.commit()
    return created, updated
