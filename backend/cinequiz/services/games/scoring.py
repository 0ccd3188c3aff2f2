from dataclasses import replace

from .types import GameState


def apply_answer(game: GameState, is_correct: bool) -> GameState:
    """Return the game state that follows one answer.

    A correct answer extends the combo and may raise the record. A wrong one
    breaks the combo and costs a life; losing the last life ends the game and
    clears the current question. Finished games are returned untouched.
    """
    if not game.is_active:
        return game
    if is_correct:
        combo = game.combo + 1
        return replace(game, combo=combo, record=max(game.record, combo))
    lives = max(0, game.lives - 1)
    if lives == 0:
        return replace(game, combo=0, lives=0, is_active=False, current_question_id=None)
    return replace(game, combo=0, lives=lives)
