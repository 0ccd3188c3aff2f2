from dataclasses import dataclass, field
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of one user's game.

    ``current_question_id`` is the movie the player must identify right now;
    it is ``None`` once the game is over.
    """
    user_id: int
    lives: int
    combo: int = 0
    record: int = 0
    is_active: bool = True
    current_question_id: Optional[int] = None
    seen_question_ids: FrozenSet[int] = field(default_factory=frozenset)

    def view(self) -> 'GameView':
        return GameView(lives=self.lives, record=self.record, combo=self.combo, is_active=self.is_active)


@dataclass(frozen=True)
class GameView:
    lives: int
    record: int
    combo: int
    is_active: bool

    def to_dict(self):
        return {
            'lives': self.lives,
            'record': self.record,
            'combo': self.combo,
            'isActive': self.is_active,
        }


@dataclass(frozen=True)
class QuestionMetadata:
    id: int
    title: str
    poster_path: Optional[str] = None
    release_date: Optional[str] = None

    def to_dict(self):
        return {
            'title': self.title,
            'posterPath': self.poster_path,
            'releaseDate': self.release_date,
            'id': self.id,
        }


@dataclass(frozen=True)
class AnswerReview:
    is_correct: bool
    game: GameView
    revealed_question: Optional[QuestionMetadata] = None

    def to_dict(self):
        payload = {
            'isCorrect': self.is_correct,
            'game': self.game.to_dict(),
        }
        if self.revealed_question is not None:
            payload['movie'] = self.revealed_question.to_dict()
        return payload
