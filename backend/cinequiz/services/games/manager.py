import logging
import threading
import weakref
from contextlib import contextmanager
from dataclasses import replace

from .errors import EntityNotFound, GameAlreadyActive, MissingAnswer, NoActiveGame, SourceUnavailable
from .scoring import apply_answer
from .types import AnswerReview, GameState, GameView

INITIAL_LIVES = 2


class UserLocks:
    """Registry of one lock per user id.

    Operations on the same user queue behind each other; different users get
    different locks and never wait on one another. Entries live only while a
    caller holds or waits on the lock, so the registry stays bounded by the
    users currently being served.
    """

    def __init__(self):
        self._locks = weakref.WeakValueDictionary()
        self._registry_lock = threading.Lock()

    def __len__(self):
        with self._registry_lock:
            return len(self._locks)

    def _lock_for(self, user_id) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[user_id] = lock
            return lock

    @contextmanager
    def hold(self, user_id):
        lock = self._lock_for(user_id)
        with lock:
            yield


class GameSessionManager:
    """Runs the movie quiz for each user.

    A user has at most one active game. Each operation loads the user's game,
    computes the new state and writes it back while holding that user's lock,
    with the store's ``put`` as the only commit point.
    """

    def __init__(self, question_source, store, initial_lives: int = INITIAL_LIVES, logger: logging.Logger = None):
        if initial_lives < 1:
            raise ValueError('initial_lives must be at least 1')
        self.question_source = question_source
        self.store = store
        self.initial_lives = initial_lives
        self.logger = logger or logging.getLogger(__name__)
        self.locks = UserLocks()

    def create_game(self, user_id) -> GameView:
        with self.locks.hold(user_id), self.store.atomic():
            if not self.store.user_exists(user_id, lock=True):
                raise EntityNotFound()
            existing = self.store.get(user_id, lock=True)
            if existing is not None and existing.is_active:
                raise GameAlreadyActive()
            first_question = self.question_source.pick_unseen(set())
            if first_question is None:
                raise SourceUnavailable('No movies available to ask about.')
            game = GameState(
                user_id=user_id,
                lives=self.initial_lives,
                current_question_id=first_question,
            )
            self.store.put(user_id, game)
        self.logger.info(f"[game-create] user={user_id} lives={game.lives}")
        return game.view()

    def submit_answer(self, user_id, answer) -> AnswerReview:
        if not isinstance(answer, str) or not answer.strip():
            raise MissingAnswer()

        with self.locks.hold(user_id), self.store.atomic():
            if not self.store.user_exists(user_id, lock=True):
                raise EntityNotFound()
            game = self.store.get(user_id, lock=True)
            if game is None or not game.is_active:
                raise NoActiveGame()

            retired = game.current_question_id
            is_correct = self.question_source.check(retired, answer)
            revealed = None if is_correct else self.question_source.describe(retired)

            seen = game.seen_question_ids | {retired}
            updated = apply_answer(game, is_correct)
            if updated.is_active:
                updated = self._advance(updated, seen, retired)
            else:
                updated = replace(updated, seen_question_ids=frozenset(seen))
            self.store.put(user_id, updated)

        self.logger.info(
            f"[game-answer] user={user_id} correct={is_correct} lives={updated.lives} "
            f"combo={updated.combo} active={updated.is_active}"
        )
        if not updated.is_active:
            self.logger.info(f"[game-over] user={user_id} record={updated.record}")
        return AnswerReview(is_correct=is_correct, game=updated.view(), revealed_question=revealed)

    def _advance(self, game: GameState, seen: frozenset, retired) -> GameState:
        """Attach the next question, starting a new cycle once every movie was asked."""
        next_question = self.question_source.pick_unseen(seen)
        if next_question is None:
            self.logger.info(f"[question-cycle] user={game.user_id} pool exhausted, starting new cycle")
            seen = frozenset()
            next_question = self.question_source.pick_unseen({retired})
            if next_question is None:
                next_question = self.question_source.pick_unseen(set())
            if next_question is None:
                raise SourceUnavailable('No movies available to ask about.')
        return replace(game, current_question_id=next_question, seen_question_ids=frozenset(seen))
