from enum import Enum


class ErrorKind(Enum):
    ENTITY_NOT_FOUND = 'EntityNotFound'
    GAME_ALREADY_ACTIVE = 'GameAlreadyActive'
    NO_ACTIVE_GAME = 'NoActiveGame'
    MISSING_ANSWER = 'MissingAnswer'
    STORE_UNAVAILABLE = 'StoreUnavailable'
    SOURCE_UNAVAILABLE = 'SourceUnavailable'


class GameError(Exception):
    """Base class for failures raised by the game services.

    Each subclass carries an ``ErrorKind`` and the HTTP status the API layer
    answers with, so routes never have to inspect exception types themselves.
    """

    kind: ErrorKind
    status = 400
    default_message = 'Game operation failed.'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def name(self) -> str:
        return self.kind.value

    def __str__(self) -> str:
        return f"{self.name}. {self.message}"


class EntityNotFound(GameError):
    kind = ErrorKind.ENTITY_NOT_FOUND
    status = 404
    default_message = 'The user was not found in database.'


class GameAlreadyActive(GameError):
    kind = ErrorKind.GAME_ALREADY_ACTIVE
    status = 409
    default_message = 'Cannot create a new game if there is one active.'


class NoActiveGame(GameError):
    kind = ErrorKind.NO_ACTIVE_GAME
    status = 409
    default_message = 'There is no active game for this user.'


class MissingAnswer(GameError):
    kind = ErrorKind.MISSING_ANSWER
    status = 400
    default_message = 'Required field: answer.'


class StoreUnavailable(GameError):
    kind = ErrorKind.STORE_UNAVAILABLE
    status = 503
    default_message = 'Unsuccessful database operation.'


class SourceUnavailable(GameError):
    kind = ErrorKind.SOURCE_UNAVAILABLE
    status = 503
    default_message = 'Movie catalog is unavailable.'
