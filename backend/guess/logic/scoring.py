"""
Round scoring for the guessing game.

Base points reward closeness: 100 - |guess - assigned|. The result is not
clamped, so a guess domain wider than 100 can produce negative base points.

Bonuses, in evaluation order:
1. exact match (guess == assigned): 50
2. reverse match, only when 1 did not fire (guess == assigned with its
   decimal digits reversed, leading zeros dropped, e.g. 40 -> 4): 25
3. other match, one per other player whose current assigned number equals
   the guess: 25 each, independent of 1 and 2
"""

from collections.abc import Mapping

from guess.logic.types import Bonus, ExactMatch, OtherMatch, ReverseMatch, Round

BASE_POINTS = 100
EXACT_MATCH_BONUS = 50
REVERSE_MATCH_BONUS = 25
OTHER_MATCH_BONUS = 25


def round_points(assigned: int, guess: int) -> int:
    """Base points for a guess, independent of bonuses."""
    return BASE_POINTS - abs(guess - assigned)


def reverse_digits(number: int) -> int:
    """Reverse the decimal digits of a positive number (47 -> 74, 10 -> 1)."""
    return int(str(number)[::-1])


def calculate_bonuses(assigned: int, guess: int, others: Mapping[str, int]) -> list[Bonus]:
    """
    Compute every bonus a guess earns.

    `others` maps each other player's name to their current assigned number,
    in roster order; other-match bonuses follow that order.
    """
    bonuses: list[Bonus] = []
    if guess == assigned:
        bonuses.append(Bonus(value=EXACT_MATCH_BONUS, reason=ExactMatch()))
    elif guess == reverse_digits(assigned):
        bonuses.append(Bonus(value=REVERSE_MATCH_BONUS, reason=ReverseMatch()))

    bonuses.extend(
        Bonus(value=OTHER_MATCH_BONUS, reason=OtherMatch(player=name))
        for name, other_assigned in others.items()
        if other_assigned == guess
    )
    return bonuses


def total_round_points(round_data: Round) -> int:
    """Final points for a round with a recorded guess: base points plus all bonuses."""
    if round_data.guess is None:
        raise ValueError(f"round {round_data.round} has no guess yet")
    return round_points(round_data.assigned, round_data.guess) + round_data.bonus_points
