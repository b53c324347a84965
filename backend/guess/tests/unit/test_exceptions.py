"""Tests for the domain exception hierarchy."""

import pytest

from guess.logic.enums import ErrorCode
from guess.logic.exceptions import (
    EntityUnavailableError,
    GameRuleError,
    InvalidActionForStateError,
    OutOfRangeError,
    PlayerNameTakenError,
)


class TestGameRuleError:
    @pytest.mark.parametrize("cls", GameRuleError.__subclasses__())
    def test_every_subclass_has_an_error_code(self, cls):
        assert isinstance(cls.code, ErrorCode)

    def test_codes_are_unique(self):
        codes = [cls.code for cls in GameRuleError.__subclasses__()]
        assert len(codes) == len(set(codes))
        assert set(codes) == set(ErrorCode)

    def test_message_defaults_to_code(self):
        assert str(PlayerNameTakenError()) == "player_name_taken"

    def test_custom_message(self):
        err = OutOfRangeError("guess must be between 1 and 100, got 0")
        assert str(err) == "guess must be between 1 and 100, got 0"
        assert err.code == ErrorCode.OUT_OF_RANGE

    def test_caught_as_base_class(self):
        with pytest.raises(GameRuleError):
            raise InvalidActionForStateError


class TestEntityUnavailableError:
    """Verify EntityUnavailableError carries the entity identity and is NOT a GameRuleError."""

    def test_stores_entity_and_name(self):
        err = EntityUnavailableError(entity="game", name="Ada")
        assert err.entity == "game"
        assert err.name == "Ada"
        assert str(err) == "game 'Ada' is unavailable"

    def test_not_a_rule_error(self):
        assert not issubclass(EntityUnavailableError, GameRuleError)

    def test_requires_keyword_arguments(self):
        with pytest.raises(TypeError):
            EntityUnavailableError("game", "Ada")  # type: ignore[misc]
