"""Per-game configuration for the guessing game."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, PositiveInt, ValidationError

from guess.logic.exceptions import InvalidConfigurationError

DEFAULT_MAX_POINTS = 300
DEFAULT_MAX_GUESS = 100


class GameSettings(BaseModel):
    """
    Configuration for a single game.

    - max_points: the game ends at the end of a round in which any player's
      running total reaches this value.
    - max_guess: upper bound of the guess domain; guesses and assigned numbers
      lie in [1, max_guess].
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_points: PositiveInt = DEFAULT_MAX_POINTS
    max_guess: PositiveInt = DEFAULT_MAX_GUESS

    def is_valid_guess(self, guess: object) -> bool:
        """Whole numbers in [1, max_guess]; bools, floats and strings never qualify."""
        if isinstance(guess, bool) or not isinstance(guess, int):
            return False
        return 1 <= guess <= self.max_guess


def apply_settings(current: GameSettings, options: dict[str, Any]) -> GameSettings:
    """Return a new GameSettings with options merged over the current values.

    Raises InvalidConfigurationError for unknown option names or invalid values.
    """
    try:
        return GameSettings.model_validate({**current.model_dump(), **options})
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
        raise InvalidConfigurationError(f"invalid configuration: {fields or exc}") from None
