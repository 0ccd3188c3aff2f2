import os
import sys
import random
import threading
import time
from contextlib import contextmanager
import pytest

# Ensure the backend root (containing the `cinequiz` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from cinequiz import create_app, db, load_movies, SEED_MOVIES
from cinequiz.services.games import QuestionMetadata


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    INITIAL_LIVES = 2
    LOG_LEVEL = 'DEBUG'
    BCRYPT_LOG_ROUNDS = 4


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import cinequiz.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def movies(flask_app):
    load_movies(SEED_MOVIES)
    return {m['id']: m for m in SEED_MOVIES}


@pytest.fixture()
def user(flask_app):
    from cinequiz.models import User
    u = User(username='alice')
    u.set_password('password')
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture()
def auth_client(client, user):
    res = client.post('/login', json={'username': 'alice', 'password': 'password'})
    assert res.status_code == 200
    return client


class AnswerGate:
    """Blocks ``check`` for one answer string until released."""

    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()


class FakeQuestionSource:
    """Question source over a plain ``{id: title}`` mapping."""

    def __init__(self, titles, seed=0, check_delay=0.0):
        self.titles = dict(titles)
        self.rng = random.Random(seed)
        self.check_delay = check_delay
        self.picks = []
        self.gates = {}

    def pick_unseen(self, excluding):
        candidates = sorted(set(self.titles) - set(excluding))
        if not candidates:
            return None
        choice = self.rng.choice(candidates)
        self.picks.append(choice)
        return choice

    def check(self, question_id, answer):
        gate = self.gates.get(answer)
        if gate is not None:
            gate.entered.set()
            gate.release.wait(5)
        if self.check_delay:
            time.sleep(self.check_delay)
        return answer.strip().casefold() == self.titles[question_id].casefold()

    def describe(self, question_id):
        return QuestionMetadata(id=question_id, title=self.titles[question_id])


class InMemoryGameStore:
    def __init__(self, user_ids=()):
        self.users = set(user_ids)
        self.games = {}
        self.puts = 0
        self.fail_on_put = None
        self.locked_users = []

    def user_exists(self, user_id, lock=False):
        if lock:
            self.locked_users.append(user_id)
        return user_id in self.users

    def get(self, user_id, lock=False):
        return self.games.get(user_id)

    def put(self, user_id, game):
        if self.fail_on_put is not None:
            raise self.fail_on_put
        self.puts += 1
        self.games[user_id] = game

    @contextmanager
    def atomic(self):
        yield self


@pytest.fixture()
def fake_source():
    return FakeQuestionSource({1: 'Alien', 2: 'Heat', 3: 'Jaws'})


@pytest.fixture()
def fake_store():
    return InMemoryGameStore(user_ids={7, 8})
