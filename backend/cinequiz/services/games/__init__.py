"""Game domain services: scoring, question selection and session storage.

This package contains the movie quiz logic that HTTP routes call into,
keeping transport concerns separated from core game mechanics.
"""
from .errors import (
    ErrorKind,
    GameError,
    EntityNotFound,
    GameAlreadyActive,
    NoActiveGame,
    MissingAnswer,
    StoreUnavailable,
    SourceUnavailable,
)
from .manager import GameSessionManager, INITIAL_LIVES
from .types import AnswerReview, GameState, GameView, QuestionMetadata
