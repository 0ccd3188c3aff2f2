"""Movie-backed question source.

Questions are rows of the ``movie`` table; a question id is a movie id.
"""
import logging
import random
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from cinequiz import db
from cinequiz.models import Movie
from .errors import SourceUnavailable
from .types import QuestionMetadata


def normalize_title(text: str) -> str:
    """Case-insensitive form of a title with whitespace trimmed and collapsed."""
    return ' '.join((text or '').split()).casefold()


class MovieQuestionSource:
    def __init__(self, rng: random.Random = None, logger: logging.Logger = None):
        self.rng = rng or random.Random()
        self.logger = logger or logging.getLogger(__name__)

    def pick_unseen(self, excluding: Iterable[int]) -> Optional[int]:
        """Pick a movie id uniformly at random, skipping ``excluding``.

        Returns ``None`` when every movie has been excluded.
        """
        excluded = set(excluding or ())
        try:
            query = db.session.query(Movie.id)
            if excluded:
                query = query.filter(Movie.id.notin_(sorted(excluded)))
            candidates = [row.id for row in query.order_by(Movie.id).all()]
        except SQLAlchemyError as exc:
            db.session.rollback()
            self.logger.error(f"[question-pick] failed excluded={len(excluded)}: {exc}")
            raise SourceUnavailable() from exc
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def check(self, question_id: int, answer: str) -> bool:
        movie = self._get(question_id)
        return normalize_title(answer) == normalize_title(movie.title)

    def describe(self, question_id: int) -> QuestionMetadata:
        movie = self._get(question_id)
        return QuestionMetadata(
            id=movie.id,
            title=movie.title,
            poster_path=movie.poster_path,
            release_date=movie.release_date,
        )

    def _get(self, question_id: int) -> Movie:
        try:
            movie = db.session.get(Movie, question_id)
        except SQLAlchemyError as exc:
            db.session.rollback()
            self.logger.error(f"[question-load] failed movie={question_id}: {exc}")
            raise SourceUnavailable() from exc
        if movie is None:
            raise SourceUnavailable(f'Movie {question_id} is missing from the catalog.')
        return movie
