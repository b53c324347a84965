"""Result models returned by entities and facade verbs.

Every facade verb returns one of these models instead of raising for
expected failures. Each model carries a literal `kind` discriminator so
callers (chat bot adapters, tests) can dispatch on it, and the union
`ActionResult` can be validated back from plain dicts.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from guess.logic.enums import ErrorCode, GameState
from guess.logic.settings import GameSettings
from guess.logic.types import Round


class PlayerStanding(BaseModel):
    """A player's score at a round boundary."""

    model_config = ConfigDict(frozen=True)

    name: str
    round_points: int | None = None
    total_points: int


class Ok(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["ok"] = "ok"


class Hosted(BaseModel):
    """A new game was created with the caller as host."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["hosted"] = "hosted"
    game_id: str
    host: str
    name: str


class NextTurn(BaseModel):
    """The game continues in the same round with the named player."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["next_turn"] = "next_turn"
    round: int
    turn: int
    player: str


class NextRound(BaseModel):
    """A round closed and a new one started; standings describe the closed round."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["next_round"] = "next_round"
    round: int
    turn: int
    player: str
    standings: tuple[PlayerStanding, ...]


class GameEnded(BaseModel):
    """The win condition was met; standings carry final totals."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["game_ended"] = "game_ended"
    standings: tuple[PlayerStanding, ...]

    @property
    def winners(self) -> list[str]:
        top = max(standing.total_points for standing in self.standings)
        return [standing.name for standing in self.standings if standing.total_points == top]


class ActionError(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    code: ErrorCode
    message: str = ""


class PlayerList(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["player_list"] = "player_list"
    players: tuple[str, ...]


class PlayerInfo(BaseModel):
    """Snapshot of a player's identity and scoring ledger (rounds newest-first)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["player_info"] = "player_info"
    name: str
    points: int
    rounds: tuple[Round, ...]
    game_id: str | None = None


class GameInfo(BaseModel):
    """Snapshot of a game's state machine and roster."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["game_info"] = "game_info"
    game_id: str
    host: str
    name: str
    state: GameState
    players: tuple[str, ...]
    round: int
    turn: int
    config: GameSettings
    standings: tuple[PlayerStanding, ...] = ()
    summary: str


class ServerInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["server_info"] = "server_info"
    players: tuple[str, ...]
    games: tuple[str, ...]


TurnResult = NextTurn | NextRound | GameEnded

ActionResult = Annotated[
    Ok | Hosted | NextTurn | NextRound | GameEnded | ActionError | PlayerList | PlayerInfo | GameInfo | ServerInfo,
    Field(discriminator="kind"),
]
