"""Typed domain exceptions for game rule violations.

All expected failures (unknown players, wrong turn, out-of-range guesses,
actions outside the allowed game state) use subclasses of GameRuleError.
Each subclass carries the ErrorCode that the facade reports back to the
caller, so the facade can catch the base class once and convert it into
an error result.

EntityUnavailableError sits outside that hierarchy: a closed or
vanished entity is an infrastructure fault, not an invalid move, and it
propagates to the caller unchanged.
"""

from typing import ClassVar

from guess.logic.enums import ErrorCode


class GameRuleError(Exception):
    """Base exception for expected game rule violations.

    Raised by entities and registries, caught at the facade boundary
    (guess.api) and converted to ActionError results.
    """

    code: ClassVar[ErrorCode]

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code.value)


class PlayerNotFoundError(GameRuleError):
    """Referenced player is not registered on the server (or not on the roster)."""

    code = ErrorCode.PLAYER_NOT_FOUND


class PlayerNameTakenError(GameRuleError):
    """A live player is already registered under this name."""

    code = ErrorCode.PLAYER_NAME_TAKEN


class GameNotFoundError(GameRuleError):
    """Player has no current game, or no game exists to join."""

    code = ErrorCode.GAME_NOT_FOUND


class GameInProgressError(GameRuleError):
    """The player already hosts a live game."""

    code = ErrorCode.GAME_IN_PROGRESS


class PlayerNotHostError(GameRuleError):
    """Host-only action attempted by a regular player."""

    code = ErrorCode.PLAYER_NOT_HOST


class PlayerIsHostError(GameRuleError):
    """Action not available to the host (the host ends the game instead of leaving)."""

    code = ErrorCode.PLAYER_IS_HOST


class PlayerInGameError(GameRuleError):
    """Player is already on the roster, or already occupies another live game."""

    code = ErrorCode.PLAYER_IN_GAME


class InvalidActionForStateError(GameRuleError):
    """Action is not valid in the current game state."""

    code = ErrorCode.INVALID_ACTION_FOR_STATE


class WrongTurnError(GameRuleError):
    """Play attempted by a player who is not the current actor."""

    code = ErrorCode.WRONG_TURN


class OutOfRangeError(GameRuleError):
    """Guess outside the configured [1, max_guess] range."""

    code = ErrorCode.OUT_OF_RANGE


class InvalidConfigurationError(GameRuleError):
    """Configuration options contain unknown keys or invalid values."""

    code = ErrorCode.INVALID_CONFIGURATION


class EntityUnavailableError(Exception):
    """Raised when a player or game entity was closed or vanished mid-call.

    Attributes:
        entity: Kind of entity ("player" or "game").
        name: Identity of the entity.

    """

    def __init__(self, *, entity: str, name: str) -> None:
        self.entity = entity
        self.name = name
        super().__init__(f"{entity} {name!r} is unavailable")
