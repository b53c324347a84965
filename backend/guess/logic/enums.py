"""
String enum definitions for guessing game concepts.
"""

from enum import StrEnum


class GameState(StrEnum):
    """Lifecycle state of a single game session."""

    SETTING_UP = "setting_up"
    IN_PLAY = "in_play"
    ENDED = "ended"


class PlayerRole(StrEnum):
    """A roster member's standing in one game."""

    HOST = "host"
    PLAYER = "player"


class ErrorCode(StrEnum):
    """Expected failure kinds surfaced to callers as error results."""

    PLAYER_NOT_FOUND = "player_not_found"
    PLAYER_NAME_TAKEN = "player_name_taken"
    GAME_NOT_FOUND = "game_not_found"
    GAME_IN_PROGRESS = "game_in_progress"
    PLAYER_NOT_HOST = "player_not_host"
    PLAYER_IS_HOST = "player_is_host"
    PLAYER_IN_GAME = "player_in_game"
    INVALID_ACTION_FOR_STATE = "invalid_action_for_state"
    WRONG_TURN = "wrong_turn"
    OUT_OF_RANGE = "out_of_range"
    INVALID_CONFIGURATION = "invalid_configuration"
