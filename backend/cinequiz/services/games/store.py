"""SQLAlchemy-backed session store: one ``Game`` row per user."""
import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from cinequiz import db
from cinequiz.models import Game, User
from .errors import StoreUnavailable
from .types import GameState


class GameStore:
    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)

    def user_exists(self, user_id: int, lock: bool = False) -> bool:
        """Whether the user exists.

        With ``lock`` the user row is read ``FOR UPDATE``. That row exists even
        before the first game, so it serialises a user's operations across
        processes until ``put`` commits or ``atomic`` rolls back.
        """
        try:
            if lock:
                return User.query.filter_by(id=user_id).with_for_update().first() is not None
            return db.session.get(User, user_id) is not None
        except SQLAlchemyError as exc:
            self._fail('user-exists', user_id, exc)

    def get(self, user_id: int, lock: bool = False) -> Optional[GameState]:
        """Load the user's game.

        With ``lock`` the row is read ``FOR UPDATE`` and stays locked until
        ``put`` commits or ``atomic`` rolls back.
        """
        try:
            query = Game.query.filter_by(user_id=user_id)
            if lock:
                query = query.with_for_update()
            row = query.first()
        except SQLAlchemyError as exc:
            self._fail('get', user_id, exc)
        if row is None:
            return None
        return GameState(
            user_id=row.user_id,
            lives=row.lives,
            combo=row.combo,
            record=row.record,
            is_active=row.is_active,
            current_question_id=row.current_movie_id,
            seen_question_ids=frozenset(row.seen_ids),
        )

    def put(self, user_id: int, game: GameState) -> None:
        try:
            row = Game.query.filter_by(user_id=user_id).first()
            if row is None:
                row = Game(user_id=user_id)
            row.lives = game.lives
            row.combo = game.combo
            row.record = game.record
            row.is_active = game.is_active
            row.current_movie_id = game.current_question_id
            row.seen_ids = game.seen_question_ids
            db.session.add(row)
            db.session.commit()
        except SQLAlchemyError as exc:
            self._fail('put', user_id, exc)

    @contextmanager
    def atomic(self):
        """Roll back whatever the block left uncommitted if it raises."""
        try:
            yield self
        except Exception:
            db.session.rollback()
            raise

    def _fail(self, op: str, user_id: int, exc: Exception):
        db.session.rollback()
        self.logger.error(f"[store-{op}] failed user={user_id}: {exc}")
        raise StoreUnavailable() from exc
