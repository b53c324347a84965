import pytest

from guess.logic.scoring import (
    EXACT_MATCH_BONUS,
    OTHER_MATCH_BONUS,
    REVERSE_MATCH_BONUS,
    calculate_bonuses,
    reverse_digits,
    round_points,
    total_round_points,
)
from guess.logic.types import Bonus, ExactMatch, OtherMatch, ReverseMatch, Round


class TestRoundPoints:
    @pytest.mark.parametrize(
        ("assigned", "guess", "expected"),
        [
            (47, 47, 100),
            (47, 74, 73),
            (74, 47, 73),
            (1, 100, 1),
        ],
    )
    def test_base_points_decrease_with_distance(self, assigned, guess, expected):
        assert round_points(assigned, guess) == expected

    def test_not_clamped_for_wide_guess_domain(self):
        assert round_points(400, 1) == -299


class TestReverseDigits:
    @pytest.mark.parametrize(
        ("number", "expected"),
        [(47, 74), (7, 7), (123, 321), (10, 1), (40, 4), (100, 1)],
    )
    def test_reverse(self, number, expected):
        assert reverse_digits(number) == expected


class TestCalculateBonuses:
    def test_exact_match(self):
        bonuses = calculate_bonuses(47, 47, {})
        assert bonuses == [Bonus(value=EXACT_MATCH_BONUS, reason=ExactMatch())]

    def test_reverse_match(self):
        bonuses = calculate_bonuses(47, 74, {})
        assert bonuses == [Bonus(value=REVERSE_MATCH_BONUS, reason=ReverseMatch())]

    def test_palindrome_only_scores_exact_match(self):
        """A guess equal to a palindromic number is exact; reverse match is suppressed."""
        bonuses = calculate_bonuses(44, 44, {})
        assert [b.reason.kind for b in bonuses] == ["exact_match"]

    def test_reverse_match_drops_trailing_zero(self):
        bonuses = calculate_bonuses(10, 1, {})
        assert [b.reason.kind for b in bonuses] == ["reverse_match"]

    def test_no_bonus_for_plain_miss(self):
        assert calculate_bonuses(47, 50, {"Bob": 12}) == []

    def test_other_match_names_each_matching_player(self):
        bonuses = calculate_bonuses(30, 47, {"Ada": 47, "Bob": 12, "Cy": 47})
        assert bonuses == [
            Bonus(value=OTHER_MATCH_BONUS, reason=OtherMatch(player="Ada")),
            Bonus(value=OTHER_MATCH_BONUS, reason=OtherMatch(player="Cy")),
        ]

    def test_other_match_combines_with_exact_match(self):
        bonuses = calculate_bonuses(47, 47, {"Bob": 47})
        assert [b.reason.kind for b in bonuses] == ["exact_match", "other_match"]
        assert sum(b.value for b in bonuses) == EXACT_MATCH_BONUS + OTHER_MATCH_BONUS


class TestTotalRoundPoints:
    def test_base_plus_bonuses(self):
        played = Round(round=0, assigned=47, guess=74).with_bonus(
            Bonus(value=REVERSE_MATCH_BONUS, reason=ReverseMatch()),
        )
        assert total_round_points(played) == 98

    def test_requires_guess(self):
        with pytest.raises(ValueError, match="no guess"):
            total_round_points(Round(round=0, assigned=47))
