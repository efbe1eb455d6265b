from hunt_api import db
from datetime import datetime, timezone
import uuid

# Largest value an INTEGER column holds on SQLite and Postgres BIGINT
SQL_INT_MAX = 2 ** 63 - 1

# Column names mirror the tables the event frontends already read


def generate_id():
    """Opaque, collision-resistant identifier for groups and challenges."""
    return str(uuid.uuid4())


def utc_now_iso():
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_iso(value):
    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class Group(db.Model):
    __tablename__ = 'Groups'
    group_id = db.Column('GroupId', db.String(36), primary_key=True, default=generate_id)
    name = db.Column('Name', db.String(128), unique=True, nullable=False, index=True)
    player_count = db.Column('PlayerCount', db.Integer, nullable=False, default=0)
    challenges_count = db.Column('ChallengesCount', db.Integer, nullable=False, default=1)
    was_cleared = db.Column('WasCleared', db.String(1), nullable=False, default='0')
    snack_state = db.Column('SnackState', db.String(8), nullable=False, default='0')

    def mark_cleared(self, snack_count):
        """Record a cleared challenge. Both flags are set once and never downgraded.

        Returns True if either flag changed.
        """
        changed = False
        if self.was_cleared == '0':
            self.was_cleared = '1'
            changed = True
        if self.snack_state == '0' and snack_count:
            self.snack_state = str(snack_count)
            changed = True
        return changed

    def to_dict(self):
        return {
            'GroupId': self.group_id,
            'Name': self.name,
            'PlayerCount': self.player_count,
            'ChallengesCount': self.challenges_count,
            'WasCleared': self.was_cleared,
            'SnackState': self.snack_state,
        }


class Challenge(db.Model):
    __tablename__ = 'Challenges'
    challenge_id = db.Column('ChallengeId', db.String(36), primary_key=True, default=generate_id)
    group_id = db.Column('GroupId', db.String(36), db.ForeignKey('Groups.GroupId'), nullable=False, index=True)
    difficulty = db.Column('Difficulty', db.Integer, nullable=False)
    room_id = db.Column('RoomId', db.String(64), nullable=False, index=True)
    state = db.Column('State', db.String(16), nullable=False, default='Pending')  # Pending, Cleared, Failed
    start_time = db.Column('StartTime', db.String(32), nullable=False, default=utc_now_iso)
    group = db.relationship('Group', backref=db.backref('challenges', lazy='dynamic'))

    def to_dict(self):
        return {
            'ChallengeId': self.challenge_id,
            'GroupId': self.group_id,
            'Difficulty': self.difficulty,
            'RoomId': self.room_id,
            'State': self.state,
            'StartTime': self.start_time,
        }


class Question(db.Model):
    __tablename__ = 'Questions'
    id = db.Column('ID', db.String(64), primary_key=True)
    difficulty = db.Column('Difficulty', db.Integer, nullable=False, index=True)
    content = db.Column('Content', db.Text, nullable=True)
    answer = db.Column('Answer', db.Text, nullable=True)
    collect_count = db.Column('CollectCount', db.Integer, nullable=False, default=0)
    wrong_count = db.Column('WrongCount', db.Integer, nullable=False, default=0)

    def to_dict(self):
        return {
            'ID': self.id,
            'Difficulty': self.difficulty,
            'Content': self.content,
            'Answer': self.answer,
            'CollectCount': self.collect_count,
            'WrongCount': self.wrong_count,
        }


class AnsweredQuestion(db.Model):
    # Append-only: one row per attempt, repeats included
    __tablename__ = 'AnsweredQuestions'
    id = db.Column('Id', db.Integer, primary_key=True)
    group_id = db.Column('GroupId', db.String(36), nullable=False, index=True)
    question_id = db.Column('QuestionId', db.String(64), nullable=False, index=True)
    result = db.Column('Result', db.String(16), nullable=False)
    challenger_answer = db.Column('ChallengerAnswer', db.Text, nullable=True)


class ClearTime(db.Model):
    __tablename__ = 'ClearTimes'
    id = db.Column('Id', db.Integer, primary_key=True)
    elapsed_time = db.Column('ElapsedTime', db.Integer, nullable=False)
    challenge_id = db.Column('ChallengeId', db.String(36), nullable=False, index=True)
    difficulty = db.Column('Difficulty', db.Integer, nullable=False)
    group_name = db.Column('GroupName', db.String(128), nullable=False)
