"""Guessing game server configuration via environment variables."""

from pydantic import Field, PositiveInt
from pydantic_settings import BaseSettings

from guess.logic.settings import DEFAULT_MAX_GUESS, DEFAULT_MAX_POINTS, GameSettings


class GuessServerSettings(BaseSettings):
    model_config = {"env_prefix": "GUESS_"}

    log_dir: str | None = Field(default=None, min_length=1)
    # Only for local debugging; production draws are unseeded.
    rng_seed: int | None = None
    default_max_points: PositiveInt = DEFAULT_MAX_POINTS
    default_max_guess: PositiveInt = DEFAULT_MAX_GUESS

    @property
    def game_settings(self) -> GameSettings:
        """Configuration every newly hosted game starts with."""
        return GameSettings(max_points=self.default_max_points, max_guess=self.default_max_guess)
