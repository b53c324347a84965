"""Player-facing verbs of the guessing game server.

Every verb takes the ServerContext explicitly, resolves players and games
through its registries, and delegates to the entities. Expected failures
(GameRuleError and subclasses) are converted into ActionError results at
this boundary; EntityUnavailableError and genuine bugs propagate.

Example flow::

    ctx = ServerContext()
    await host(ctx, "Ada")
    await join(ctx, "Bob")
    await start(ctx, "Ada")           # NextTurn(round=0, turn=0, player="Ada")
    await play(ctx, "Ada", 42)        # NextTurn(round=0, turn=1, player="Bob")
    await play(ctx, "Bob", 17)        # NextRound(...) or GameEnded(...)
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

import structlog

from guess.logic.enums import PlayerRole
from guess.logic.exceptions import (
    GameInProgressError,
    GameNotFoundError,
    GameRuleError,
    PlayerInGameError,
    PlayerNotHostError,
)
from guess.logic.game import GameEntity
from guess.logic.player import PlayerEntity
from guess.logic.results import (
    ActionError,
    GameInfo,
    Hosted,
    NextTurn,
    Ok,
    PlayerInfo,
    PlayerList,
    ServerInfo,
    TurnResult,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from guess.session.context import ServerContext

logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")


def _action(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R | ActionError]]:
    """Bind log context for the verb and convert rule violations into ActionError."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R | ActionError:
        log_context: dict[str, Any] = {"action": func.__name__}
        if len(args) > 1:
            log_context["player"] = args[1]
        with structlog.contextvars.bound_contextvars(**log_context):
            try:
                return await func(*args, **kwargs)
            except GameRuleError as exc:
                logger.info("action rejected", error_code=exc.code, reason=str(exc))
                return ActionError(code=exc.code, message=str(exc))

    return wrapper


# --- Server membership ---


@_action
async def connect(ctx: ServerContext, player_name: str) -> Ok:
    """Register a player on the server. Fails with player_name_taken if the name is live."""
    ctx.players.register(player_name, PlayerEntity(player_name))
    logger.info("player connected")
    return Ok()


@_action
async def disconnect(ctx: ServerContext, player_name: str) -> Ok:
    """Remove a player from the server.

    A host disconnecting ends their game; any other player leaves their game
    first, which is only possible while it is not in play.
    """
    entity = ctx.players.lookup(player_name)
    game = _occupied_game(ctx, player_name)
    if game is not None:
        if game.host == player_name:
            _end(ctx, game)
        else:
            await game.remove_player(player_name)
    ctx.players.unregister(player_name)
    entity.close()
    logger.info("player disconnected")
    return Ok()


@_action
async def players(ctx: ServerContext) -> PlayerList:
    return PlayerList(players=tuple(ctx.players.list()))


@_action
async def server_info(ctx: ServerContext) -> ServerInfo:
    games = [game.summary for name in ctx.games.list() if (game := ctx.games.get(name)) is not None]
    return ServerInfo(players=tuple(ctx.players.list()), games=tuple(games))


@_action
async def reset(ctx: ServerContext) -> Ok:
    """Clear every player and game from the server."""
    ctx.reset()
    logger.info("server reset")
    return Ok()


# --- Game lifecycle ---


@_action
async def host(ctx: ServerContext, player_name: str, game_name: str | None = None) -> Hosted:
    """Create a new game with `player_name` as host and sole roster member.

    The game name defaults to the host's name.
    """
    ctx.players.get_or_create(player_name)
    current = _occupied_game(ctx, player_name)
    if current is not None:
        if current.host == player_name:
            raise GameInProgressError(f"{player_name} is already hosting a game")
        raise PlayerInGameError(f"{player_name} is already in {current.host}'s game")

    game = GameEntity(
        host=player_name,
        name=game_name,
        lookup_player=ctx.players.lookup,
        number_source=ctx.number_source,
        settings=ctx.default_settings,
    )
    ctx.games.register(game.game_id, game)
    ctx.players.set_game(player_name, game.game_id)
    logger.info("game hosted", game=game.game_id, game_name=game.name)
    return Hosted(game_id=game.game_id, host=game.host, name=game.name)


@_action
async def join(ctx: ServerContext, player_name: str, existing_player_name: str | None = None) -> Ok:
    """Join the game `existing_player_name` is in, or the most recently hosted game."""
    ctx.players.get_or_create(player_name)
    if existing_player_name is None:
        game = ctx.games.latest()
    else:
        game = _current_game(ctx, existing_player_name)

    current = _occupied_game(ctx, player_name)
    if current is not None and current is not game:
        raise PlayerInGameError(f"{player_name} is already in {current.host}'s game")

    # Claimed before the await so a concurrent join of the same player sees it.
    ctx.players.set_game(player_name, game.game_id)
    try:
        await game.add_player(player_name)
    except Exception:
        if current is None:
            ctx.players.clear_game(player_name)
        raise
    return Ok()


@_action
async def leave(ctx: ServerContext, player_name: str) -> Ok:
    """Leave the current game (not available to the host, who ends it instead)."""
    game = _current_game(ctx, player_name)
    await game.remove_player(player_name)
    ctx.players.clear_game(player_name)
    return Ok()


@_action
async def end_game(ctx: ServerContext, host_name: str) -> Ok:
    """Remove every player from the host's game and tear the game down."""
    game = _current_game(ctx, host_name)
    await _require_host(game, host_name)
    _end(ctx, game)
    return Ok()


@_action
async def configure(
    ctx: ServerContext,
    host_name: str,
    options: Mapping[str, Any] | None = None,
    /,
    **extra: Any,
) -> Ok:
    """Change game options (max_points, max_guess) before starting or after the game ended.

    Options may be given as a mapping, as keyword arguments, or both.
    """
    game = _current_game(ctx, host_name)
    await _require_host(game, host_name)
    await game.configure({**(options or {}), **extra})
    return Ok()


@_action
async def start(ctx: ServerContext, player_name: str) -> NextTurn:
    """Start the caller's game; only its host may do this."""
    game = _current_game(ctx, player_name)
    return await game.start(player_name)


@_action
async def play(ctx: ServerContext, player_name: str, guess: int) -> TurnResult:
    """Play the caller's turn with `guess`."""
    game = _current_game(ctx, player_name)
    return await game.play(player_name, guess)


@_action
async def restart(ctx: ServerContext, host_name: str) -> NextTurn:
    """Restart the host's game with the same roster, clearing all scores."""
    game = _current_game(ctx, host_name)
    await _require_host(game, host_name)
    return await game.restart(host_name)


# --- Queries ---


@_action
async def game_info(ctx: ServerContext, player_name: str) -> GameInfo:
    game = _current_game(ctx, player_name)
    return await game.info()


@_action
async def player_info(ctx: ServerContext, player_name: str) -> PlayerInfo:
    entity = ctx.players.lookup(player_name)
    return await entity.info(game_id=ctx.players.game_of(player_name))


# --- Helpers ---


def _current_game(ctx: ServerContext, player_name: str) -> GameEntity:
    """The live game the player occupies; player_not_found / game_not_found otherwise."""
    game_id = ctx.players.game_of(player_name)
    if game_id is None:
        raise GameNotFoundError(f"{player_name} is not in a game")
    return ctx.games.lookup(game_id)


def _occupied_game(ctx: ServerContext, player_name: str) -> GameEntity | None:
    game_id = ctx.players.game_of(player_name)
    return ctx.games.get(game_id) if game_id is not None else None


async def _require_host(game: GameEntity, player_name: str) -> None:
    if await game.role(player_name) != PlayerRole.HOST:
        raise PlayerNotHostError(f"{player_name} is not the host of {game.host}'s game")


def _end(ctx: ServerContext, game: GameEntity) -> None:
    released = ctx.players.release_game(game.game_id)
    ctx.games.unregister(game.game_id)
    game.close()
    logger.info("game ended by host", game=game.game_id, released=released)
