"""
Pydantic models for game logic data structures.

Contains the per-round scoring ledger (Round, Bonus) and the closed set of
bonus reasons. All models are frozen; updates produce new instances via
model_copy so a Round handed out in a snapshot can never be mutated by the
owning player entity afterwards.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class ExactMatch(BaseModel):
    """Guess equals the assigned number."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["exact_match"] = "exact_match"


class ReverseMatch(BaseModel):
    """Guess equals the assigned number with its digits reversed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["reverse_match"] = "reverse_match"


class OtherMatch(BaseModel):
    """Guess equals the number assigned to another player this round."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["other_match"] = "other_match"
    player: str


BonusReason = Annotated[ExactMatch | ReverseMatch | OtherMatch, Field(discriminator="kind")]


class Bonus(BaseModel):
    """A point bonus awarded to a player in a round."""

    model_config = ConfigDict(frozen=True)

    value: NonNegativeInt
    reason: BonusReason


class Round(BaseModel):
    """
    One player's scoring unit within a game round.

    Lifecycle: created with the assigned number when the game starts a round,
    updated with the guess when the player plays, bonuses appended after the
    guess, and finally closed by computing points. A closed round is never
    changed again.
    """

    model_config = ConfigDict(frozen=True)

    round: NonNegativeInt
    assigned: int
    guess: int | None = None
    points: int | None = None
    bonuses: tuple[Bonus, ...] = ()

    @property
    def is_closed(self) -> bool:
        return self.points is not None

    @property
    def bonus_points(self) -> int:
        return sum(bonus.value for bonus in self.bonuses)

    def with_guess(self, guess: int) -> "Round":
        if self.is_closed:
            raise ValueError(f"round {self.round} is already closed")
        return self.model_copy(update={"guess": guess})

    def with_bonus(self, bonus: Bonus) -> "Round":
        if self.guess is None:
            raise ValueError(f"round {self.round} has no guess yet")
        if self.is_closed:
            raise ValueError(f"round {self.round} is already closed")
        return self.model_copy(update={"bonuses": (*self.bonuses, bonus)})

    def closed(self, points: int) -> "Round":
        if self.guess is None:
            raise ValueError(f"round {self.round} has no guess yet")
        if self.is_closed:
            raise ValueError(f"round {self.round} is already closed")
        return self.model_copy(update={"points": points})
