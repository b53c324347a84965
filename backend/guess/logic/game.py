"""
Game entity: the turn-based state machine for one game session.

States:
- SETTING_UP (initial): roster open, configuration mutable.
- IN_PLAY: rounds proceed; roster closed, configuration immutable.
- ENDED: game concluded; roster visible, configuration mutable, players may
  join or leave, and the host may start or restart.

All public coroutines run under the game's asyncio.Lock, one request at a
time. Guards are checked before anything is written, so a rejected call
leaves the game and its players untouched. While holding its own lock the
game awaits player entities (their locks are independent), never the reverse.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from guess.logic.enums import GameState, PlayerRole
from guess.logic.exceptions import (
    EntityUnavailableError,
    InvalidActionForStateError,
    OutOfRangeError,
    PlayerInGameError,
    PlayerIsHostError,
    PlayerNotFoundError,
    PlayerNotHostError,
    WrongTurnError,
)
from guess.logic.results import GameEnded, GameInfo, NextRound, NextTurn, PlayerStanding, TurnResult
from guess.logic.scoring import calculate_bonuses
from guess.logic.settings import GameSettings, apply_settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from guess.logic.player import PlayerEntity
    from guess.logic.rng import NumberSource

logger = structlog.get_logger()

_CONFIGURABLE_STATES = frozenset({GameState.SETTING_UP, GameState.ENDED})
_ROSTER_OPEN_STATES = frozenset({GameState.SETTING_UP, GameState.ENDED})
_STARTABLE_STATES = frozenset({GameState.SETTING_UP, GameState.ENDED})
_RESTARTABLE_STATES = frozenset({GameState.IN_PLAY, GameState.ENDED})
_PLAYABLE_STATES = frozenset({GameState.IN_PLAY})

# Returns the live entity for a player name or raises a GameRuleError.
PlayerLookup = Callable[[str], "PlayerEntity"]


class GameEntity:
    """One hosted game: roster, configuration, round and turn counters."""

    def __init__(
        self,
        *,
        host: str,
        lookup_player: PlayerLookup,
        number_source: NumberSource,
        name: str | None = None,
        settings: GameSettings | None = None,
    ) -> None:
        self._host = host
        self._name = name or host
        self._players: list[str] = [host]
        self._turn_order: tuple[str, ...] = ()
        self._round = 0
        self._turn = 0
        self._settings = settings or GameSettings()
        self._state = GameState.SETTING_UP
        self._lookup_player = lookup_player
        self._number_source = number_source
        self._lock = asyncio.Lock()
        self._closed = False

    # --- Identity and plain accessors (no awaits, safe without the lock) ---

    @property
    def game_id(self) -> str:
        """Games are identified by their host."""
        return self._host

    @property
    def host(self) -> str:
        return self._host

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def players(self) -> tuple[str, ...]:
        return tuple(self._players)

    @property
    def round(self) -> int:
        return self._round

    @property
    def turn(self) -> int:
        return self._turn

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def summary(self) -> str:
        prefix = f"{self._host}'s game"
        if self._state == GameState.SETTING_UP:
            return f"{prefix}: Setting up"
        if self._state == GameState.ENDED:
            return f"{prefix}: Ended"
        return f"{prefix}: Round {self._round + 1}, {self._turn_order[self._turn]}'s turn"

    def close(self) -> None:
        """Mark the game as torn down; later calls raise EntityUnavailableError."""
        if not self._closed:
            self._closed = True
            logger.info("game closed", game=self.game_id)

    @contextlib.asynccontextmanager
    async def _serialized(self) -> AsyncIterator[None]:
        async with self._lock:
            if self._closed:
                raise EntityUnavailableError(entity="game", name=self.game_id)
            yield

    # --- Queries ---

    async def info(self) -> GameInfo:
        async with self._serialized():
            return GameInfo(
                game_id=self.game_id,
                host=self._host,
                name=self._name,
                state=self._state,
                players=tuple(self._players),
                round=self._round,
                turn=self._turn,
                config=self._settings,
                standings=tuple(await self._standings(self._players)),
                summary=self.summary,
            )

    async def role(self, player_name: str) -> PlayerRole:
        async with self._serialized():
            if player_name == self._host:
                return PlayerRole.HOST
            if player_name in self._players:
                return PlayerRole.PLAYER
            raise PlayerNotFoundError(f"{player_name} is not in {self._host}'s game")

    # --- Setup ---

    async def configure(self, options: dict[str, Any]) -> GameSettings:
        async with self._serialized():
            self._require_state(_CONFIGURABLE_STATES, "configure")
            self._settings = apply_settings(self._settings, options)
            logger.info("game configured", game=self.game_id, config=self._settings)
            return self._settings

    async def add_player(self, player_name: str) -> None:
        async with self._serialized():
            self._require_state(_ROSTER_OPEN_STATES, "add_player")
            if player_name in self._players:
                raise PlayerInGameError(f"{player_name} is already in {self._host}'s game")
            self._players.append(player_name)
            logger.info("player joined game", game=self.game_id, player=player_name)

    async def remove_player(self, player_name: str) -> None:
        async with self._serialized():
            self._require_state(_ROSTER_OPEN_STATES, "remove_player")
            if player_name == self._host:
                raise PlayerIsHostError(f"{player_name} hosts this game and must end it instead")
            if player_name not in self._players:
                raise PlayerNotFoundError(f"{player_name} is not in {self._host}'s game")
            self._players.remove(player_name)
            logger.info("player left game", game=self.game_id, player=player_name)

    # --- Play ---

    async def start(self, caller: str) -> NextTurn:
        """Start round 0 with the current roster as turn order.

        Ledgers are cleared first so scores left over from an earlier game
        (or an earlier session of this one) never count towards max_points.
        """
        async with self._serialized():
            self._require_state(_STARTABLE_STATES, "start")
            self._require_host(caller, "start")
            order = await self._begin()
            logger.info("game started", game=self.game_id, players=list(order))
            return NextTurn(round=self._round, turn=self._turn, player=order[0])

    async def restart(self, caller: str) -> NextTurn:
        """Reset every player's ledger and start again at round 0 with the current roster."""
        async with self._serialized():
            self._require_state(_RESTARTABLE_STATES, "restart")
            self._require_host(caller, "restart")
            order = await self._begin()
            logger.info("game restarted", game=self.game_id, players=list(order))
            return NextTurn(round=self._round, turn=self._turn, player=order[0])

    async def play(self, player_name: str, guess: int) -> TurnResult:
        async with self._serialized():
            self._require_state(_PLAYABLE_STATES, "play")
            if not self._settings.is_valid_guess(guess):
                raise OutOfRangeError(
                    f"guess must be a whole number between 1 and {self._settings.max_guess}, got {guess!r}",
                )
            if self._turn_order[self._turn] != player_name:
                raise WrongTurnError(f"it is {self._turn_order[self._turn]}'s turn")

            entities = self._resolve(self._turn_order)
            actor = entities[self._turn]
            others: dict[str, int] = {}
            for entity in entities:
                if entity is actor:
                    continue
                current = await entity.current_round()
                if current is not None:
                    others[entity.name] = current.assigned

            played = await actor.record_guess(guess)
            for bonus in calculate_bonuses(played.assigned, guess, others):
                await actor.add_bonus(bonus)
            closed = await actor.close_round()
            logger.info(
                "turn played",
                game=self.game_id,
                player=player_name,
                round=self._round,
                guess=guess,
                assigned=closed.assigned,
                points=closed.points,
            )

            if self._turn < len(self._turn_order) - 1:
                self._turn += 1
                return NextTurn(round=self._round, turn=self._turn, player=self._turn_order[self._turn])
            return await self._end_round(entities)

    # --- Private helpers ---

    def _require_state(self, allowed: frozenset[GameState], action: str) -> None:
        if self._state not in allowed:
            raise InvalidActionForStateError(f"cannot {action} while game is {self._state.value}")

    def _require_host(self, caller: str, action: str) -> None:
        if caller != self._host:
            raise PlayerNotHostError(f"only {self._host} can {action} this game")

    def _resolve(self, names: tuple[str, ...] | list[str]) -> list[PlayerEntity]:
        """Look up the live entity for every name before any state is written."""
        entities = []
        for player_name in names:
            try:
                entity = self._lookup_player(player_name)
            except PlayerNotFoundError:
                raise EntityUnavailableError(entity="player", name=player_name) from None
            if entity.closed:
                raise EntityUnavailableError(entity="player", name=player_name)
            entities.append(entity)
        return entities

    async def _begin(self) -> tuple[str, ...]:
        """Fix the turn order from the roster, clear every ledger and assign round-0 numbers."""
        order = tuple(self._players)
        entities = self._resolve(order)
        for entity in entities:
            await entity.reset()
        self._turn_order = order
        self._round = 0
        self._turn = 0
        await self._assign_numbers(entities)
        self._state = GameState.IN_PLAY
        return order

    async def _assign_numbers(self, entities: list[PlayerEntity]) -> None:
        for entity in entities:
            await entity.start_round(self._round, self._number_source.draw(self._settings.max_guess))

    async def _end_round(self, entities: list[PlayerEntity]) -> TurnResult:
        for entity in entities:
            current = await entity.current_round()
            if current is not None and current.guess is not None and not current.is_closed:
                await entity.close_round()

        standings = await self._standings(self._turn_order)
        if max(standing.total_points for standing in standings) >= self._settings.max_points:
            self._state = GameState.ENDED
            logger.info(
                "game ended",
                game=self.game_id,
                totals={s.name: s.total_points for s in standings},
            )
            return GameEnded(standings=tuple(standings))

        self._round += 1
        self._turn = 0
        await self._assign_numbers(entities)
        logger.info("round started", game=self.game_id, round=self._round)
        return NextRound(
            round=self._round,
            turn=self._turn,
            player=self._turn_order[0],
            standings=tuple(standings),
        )

    async def _standings(self, names: tuple[str, ...] | list[str]) -> list[PlayerStanding]:
        standings = []
        for entity in self._resolve(names):
            snapshot = await entity.info()
            latest = snapshot.rounds[0] if snapshot.rounds else None
            standings.append(
                PlayerStanding(
                    name=entity.name,
                    round_points=latest.points if latest is not None else None,
                    total_points=snapshot.points,
                ),
            )
        return standings
