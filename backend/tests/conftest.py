import os
import sys
import pytest

# Ensure the backend root (containing the `hunt_api` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from hunt_api import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    API_KEY = None
    CORS_ORIGINS = ['https://web.save-the-uoa.soshosai.com']
    FORCE_HTTPS = False
    FINAL_QUESTION_ID = 'lv5_q1'
    DEFAULT_ROOM_ID = 'Web'
    QUESTION_SELECTION_MODE = 'query'
    QUESTION_SELECT_MAX_ATTEMPTS = 20
    LOG_LEVEL = 'DEBUG'


def _make_app(config_class):
    application = create_app(config_class)
    with application.app_context():
        # Ensure models are imported so tables are created
        import hunt_api.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def flask_app():
    yield from _make_app(TestConfig)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_app():
    """Build an app from a TestConfig override, e.g. make_app(API_KEY='k')."""
    apps = []

    def factory(**overrides):
        config_class = type('OverrideConfig', (TestConfig,), overrides)
        gen = _make_app(config_class)
        application = next(gen)
        apps.append(gen)
        return application

    yield factory
    for gen in apps:
        next(gen, None)


@pytest.fixture()
def add_questions(flask_app):
    """Insert questions: add_questions(difficulty, count, prefix='lv') -> list of ids."""
    from hunt_api.models import Question

    def factory(difficulty, count, prefix=None, **fields):
        prefix = prefix or f'lv{difficulty}_q'
        existing = Question.query.filter_by(difficulty=difficulty).count()
        ids = []
        for n in range(existing + 1, existing + count + 1):
            question = Question(id=f'{prefix}{n}', difficulty=difficulty,
                                collect_count=0, wrong_count=0, **fields)
            db.session.add(question)
            ids.append(question.id)
        db.session.commit()
        return ids

    return factory
