import math
from datetime import datetime, timezone
from typing import Optional

from flask import current_app

from hunt_api import db
from hunt_api.errors import (
    DuplicateGroupError,
    InsufficientQuestionsError,
    NotFoundError,
    ValidationError,
)
from hunt_api.models import SQL_INT_MAX, Challenge, ClearTime, Group, generate_id, parse_iso, utc_now_iso
from . import storage_errors
from .questions import count_available_questions

# Snacks handed out for the first clear, by challenge difficulty
SNACKS_BY_DIFFICULTY = {1: 3, 2: 4, 3: 5}
REQUIRED_QUESTIONS_BY_DIFFICULTY = {1: 7, 2: 7, 3: 6, 4: 1, 5: 1}
CHALLENGE_RESULTS = ('Cleared', 'Failed')


def snack_count_for(difficulty: int) -> int:
    return SNACKS_BY_DIFFICULTY.get(difficulty, 0)


def required_questions_for(difficulty: int) -> Optional[int]:
    return REQUIRED_QUESTIONS_BY_DIFFICULTY.get(difficulty)


def elapsed_seconds(start_time: str, now: Optional[datetime] = None) -> int:
    now = now or datetime.now(timezone.utc)
    return math.floor((now - parse_iso(start_time)).total_seconds())


def _as_int(value, field: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f'Invalid {field}')
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f'Invalid {field}') from None
    if abs(number) > SQL_INT_MAX:
        raise ValidationError(f'Invalid {field}')
    return number


def find_or_create_group(name: str, player_count: int, dup_check) -> Optional[str]:
    """Return the id of the group called `name`, creating it if needed.

    Returns None when the name is taken and `dup_check` is falsy; nothing is
    written in that case. A repeat registration bumps ChallengesCount.
    """
    existing = Group.query.filter_by(name=name).first()
    if existing is not None:
        if not dup_check:
            return None
        group_id = existing.group_id
        Group.query.filter_by(group_id=group_id).update(
            {Group.challenges_count: Group.challenges_count + 1}, synchronize_session=False)
        db.session.commit()
        return group_id

    group_id = generate_id()
    db.session.add(Group(
        group_id=group_id,
        name=name,
        player_count=player_count,
        challenges_count=1,
        was_cleared='0',
        snack_state='0',
    ))
    db.session.commit()
    return group_id


def register_challenge(group_name, player_count, difficulty, dup_check=False) -> Challenge:
    if not group_name or player_count is None or difficulty is None:
        raise ValidationError('Missing required fields')
    player_count = _as_int(player_count, 'playerCount')
    difficulty = _as_int(difficulty, 'difficulty')
    required = required_questions_for(difficulty)
    if required is None:
        raise ValidationError('Invalid difficulty level')

    with storage_errors('[register]', 'Error registering challenge'):
        group_id = find_or_create_group(group_name, player_count, dup_check)
        if group_id is None:
            raise DuplicateGroupError('Group name already exists. Set dupCheck to true to proceed.')

        available = count_available_questions(group_id, difficulty)
        if available < required:
            current_app.logger.warning(
                f"[register] group={group_name} difficulty={difficulty} available={available} required={required}")
            raise InsufficientQuestionsError('Not enough available questions')

        challenge = Challenge(
            challenge_id=generate_id(),
            group_id=group_id,
            difficulty=difficulty,
            room_id=current_app.config.get('DEFAULT_ROOM_ID', 'Web'),
            state='Pending',
            start_time=utc_now_iso(),
        )
        db.session.add(challenge)
        db.session.commit()

    current_app.logger.info(
        f"[register] group={group_name} ({group_id}) challenge={challenge.challenge_id} difficulty={difficulty}")
    return challenge


def find_active_challenge(room_code: str) -> Optional[Challenge]:
    """Most recently started challenge still pending in the given room."""
    return (
        Challenge.query
        .filter_by(room_id=room_code, state='Pending')
        .order_by(Challenge.start_time.desc())
        .first()
    )


def finish_challenge(room_code, result, now: Optional[datetime] = None) -> Optional[int]:
    """Close the active challenge of a room.

    On a clear, the group's clear flag and snack tier are set if still unset
    and the clear time is recorded. Returns the elapsed seconds for a clear,
    None for a failure.
    """
    if not room_code:
        raise ValidationError('Room code is required')
    if result not in CHALLENGE_RESULTS:
        raise ValidationError('Invalid result value. Must be "Cleared" or "Failed".')

    with storage_errors('[finish]'):
        challenge = find_active_challenge(room_code)
        if challenge is None:
            raise NotFoundError(f'No pending challenge for room {room_code}')
        group = challenge.group
        if group is None:
            raise NotFoundError('Group not found')
        challenge_id = challenge.challenge_id
        group_id = group.group_id
        group_name = group.name
        difficulty = challenge.difficulty

        challenge.state = result
        db.session.commit()
        current_app.logger.info(f"[finish] room={room_code} challenge={challenge_id} -> {result}")
        if result != 'Cleared':
            return None

        group = Group.query.filter_by(group_id=group_id).first()
        if group.mark_cleared(snack_count_for(difficulty)):
            db.session.commit()
            current_app.logger.info(
                f"[finish] group={group_name} cleared, snack_state={group.snack_state}")

        start_time = db.session.query(Challenge.start_time).filter_by(challenge_id=challenge_id).scalar()
        if start_time is None:
            raise NotFoundError('Challenge not found')
        elapsed = elapsed_seconds(start_time, now)
        db.session.add(ClearTime(
            elapsed_time=elapsed,
            challenge_id=challenge_id,
            difficulty=difficulty,
            group_name=group_name,
        ))
        db.session.commit()
    return elapsed
