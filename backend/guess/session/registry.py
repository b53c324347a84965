"""Name-keyed registries for live player and game entities.

Both registries are plain dicts mutated only from synchronous methods. Under
the asyncio scheduler a method without an await cannot interleave with
another caller, so `register` is a compare-and-insert: two concurrent hosts
or connects racing for the same name see exactly one winner.
"""

from __future__ import annotations

from typing import ClassVar, Generic, Protocol, TypeVar

import structlog

from guess.logic.exceptions import (
    GameInProgressError,
    GameNotFoundError,
    GameRuleError,
    PlayerNameTakenError,
    PlayerNotFoundError,
)
from guess.logic.game import GameEntity
from guess.logic.player import PlayerEntity

logger = structlog.get_logger()


class _Entity(Protocol):
    @property
    def closed(self) -> bool: ...

    def close(self) -> None: ...


T = TypeVar("T", bound=_Entity)


class EntityRegistry(Generic[T]):
    """Unique-key mapping from a name to a live entity."""

    kind: ClassVar[str] = "entity"
    name_taken_error: ClassVar[type[GameRuleError]]
    not_found_error: ClassVar[type[GameRuleError]]

    def __init__(self) -> None:
        self._entries: dict[str, T] = {}

    def register(self, name: str, entity: T) -> T:
        """Bind `name` to `entity`. Fails if a live entity already holds the name.

        A name bound to a closed entity is considered free and is rebound.
        """
        existing = self._entries.get(name)
        if existing is not None and not existing.closed:
            raise self.name_taken_error(f"{self.kind} {name!r} is already registered")
        self._entries[name] = entity
        logger.debug("registered", registry=self.kind, name=name)
        return entity

    def lookup(self, name: str) -> T:
        entity = self._entries.get(name)
        if entity is None or entity.closed:
            raise self.not_found_error(f"{self.kind} {name!r} not found")
        return entity

    def get(self, name: str) -> T | None:
        entity = self._entries.get(name)
        return entity if entity is not None and not entity.closed else None

    def unregister(self, name: str) -> None:
        """Remove `name`. No-op when absent."""
        if self._entries.pop(name, None) is not None:
            logger.debug("unregistered", registry=self.kind, name=name)

    def list(self) -> list[str]:
        """Snapshot of all live names."""
        return [name for name, entity in self._entries.items() if not entity.closed]

    def clear(self) -> None:
        """Close every entity and drop all registrations."""
        entities = list(self._entries.values())
        self._entries.clear()
        for entity in entities:
            entity.close()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __len__(self) -> int:
        return len(self.list())


class PlayerRegistry(EntityRegistry[PlayerEntity]):
    """Players by name, plus the game (by id) each player currently occupies."""

    kind = "player"
    name_taken_error = PlayerNameTakenError
    not_found_error = PlayerNotFoundError

    def __init__(self) -> None:
        super().__init__()
        self._games: dict[str, str] = {}  # player name -> game id

    def get_or_create(self, name: str) -> PlayerEntity:
        """Return the live entity for `name`, registering a new one if needed."""
        existing = self.get(name)
        if existing is not None:
            return existing
        return self.register(name, PlayerEntity(name))

    def game_of(self, name: str) -> str | None:
        """The id of the game `name` currently occupies, or None."""
        self.lookup(name)
        return self._games.get(name)

    def set_game(self, name: str, game_id: str) -> None:
        self.lookup(name)
        self._games[name] = game_id

    def clear_game(self, name: str) -> None:
        self._games.pop(name, None)

    def release_game(self, game_id: str) -> list[str]:
        """Clear the association of every player occupying `game_id`; return their names."""
        released = [name for name, occupied in self._games.items() if occupied == game_id]
        for name in released:
            del self._games[name]
        return released

    def unregister(self, name: str) -> None:
        self._games.pop(name, None)
        super().unregister(name)

    def clear(self) -> None:
        self._games.clear()
        super().clear()


class GameRegistry(EntityRegistry[GameEntity]):
    """Games by id, remembering creation order for "most recent game" lookups."""

    kind = "game"
    name_taken_error = GameInProgressError
    not_found_error = GameNotFoundError

    def __init__(self) -> None:
        super().__init__()
        self._created: list[str] = []

    def register(self, name: str, entity: GameEntity) -> GameEntity:
        super().register(name, entity)
        if name in self._created:
            self._created.remove(name)
        self._created.append(name)
        return entity

    def latest(self) -> GameEntity:
        """The most recently created live game."""
        for name in reversed(self._created):
            entity = self.get(name)
            if entity is not None:
                return entity
        raise GameNotFoundError("no game has been hosted")

    def unregister(self, name: str) -> None:
        if name in self._created:
            self._created.remove(name)
        super().unregister(name)

    def clear(self) -> None:
        self._created.clear()
        super().clear()
