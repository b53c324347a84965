"""
Player entity: identity, cumulative score and round ledger for one player.

Each PlayerEntity owns its state exclusively. Every public coroutine runs
under the entity's own asyncio.Lock, so concurrent callers (several games,
the facade, info requests) are serialized per player. The entity never calls
back into a game, which keeps game -> player calls free of lock cycles.
"""

import asyncio
import contextlib
from collections.abc import AsyncIterator

import structlog

from guess.logic.exceptions import EntityUnavailableError
from guess.logic.results import PlayerInfo
from guess.logic.scoring import total_round_points
from guess.logic.types import Bonus, Round

logger = structlog.get_logger()


class PlayerEntity:
    """A registered player and their newest-first round history."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._rounds: list[Round] = []  # newest first
        self._lock = asyncio.Lock()
        self._closed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Mark the entity as torn down; later calls raise EntityUnavailableError."""
        if not self._closed:
            self._closed = True
            logger.debug("player entity closed", player=self._name)

    @contextlib.asynccontextmanager
    async def _serialized(self) -> AsyncIterator[None]:
        async with self._lock:
            if self._closed:
                raise EntityUnavailableError(entity="player", name=self._name)
            yield

    # --- Queries ---

    async def info(self, game_id: str | None = None) -> PlayerInfo:
        async with self._serialized():
            return PlayerInfo(
                name=self._name,
                points=self._total_points(),
                rounds=tuple(self._rounds),
                game_id=game_id,
            )

    async def current_round(self) -> Round | None:
        async with self._serialized():
            return self._rounds[0] if self._rounds else None

    async def total_points(self) -> int:
        async with self._serialized():
            return self._total_points()

    # --- Round ledger ---

    async def start_round(self, round_number: int, assigned: int) -> None:
        async with self._serialized():
            self._rounds.insert(0, Round(round=round_number, assigned=assigned))

    async def record_guess(self, guess: int) -> Round:
        async with self._serialized():
            return self._replace_current(self._require_current().with_guess(guess))

    async def add_bonus(self, bonus: Bonus) -> Round:
        async with self._serialized():
            return self._replace_current(self._require_current().with_bonus(bonus))

    async def close_round(self) -> Round:
        """Compute points for the current round. Idempotent once the round is closed."""
        async with self._serialized():
            current = self._require_current()
            if current.is_closed:
                return current
            return self._replace_current(current.closed(total_round_points(current)))

    async def reset(self) -> None:
        """Clear the score and the whole round history."""
        async with self._serialized():
            self._rounds.clear()
            logger.debug("player reset", player=self._name)

    # --- Private helpers ---

    def _total_points(self) -> int:
        return sum(r.points for r in self._rounds if r.points is not None)

    def _require_current(self) -> Round:
        if not self._rounds:
            raise ValueError(f"player {self._name!r} has no round in progress")
        return self._rounds[0]

    def _replace_current(self, updated: Round) -> Round:
        self._rounds[0] = updated
        return updated
