from guess.logic.game import GameEntity
from guess.logic.player import PlayerEntity
from guess.logic.settings import GameSettings
from guess.session.registry import PlayerRegistry
from guess.tests.mocks.number_source import ScriptedNumberSource


def create_game(
    players: PlayerRegistry,
    number_source: ScriptedNumberSource,
    host: str = "Ada",
    *,
    others: tuple[str, ...] = (),
    settings: GameSettings | None = None,
) -> GameEntity:
    """Register the host and `others` as players and return a game in setting_up."""
    for name in (host, *others):
        players.register(name, PlayerEntity(name))
    return GameEntity(
        host=host,
        lookup_player=players.lookup,
        number_source=number_source,
        settings=settings,
    )


async def create_started_game(
    players: PlayerRegistry,
    number_source: ScriptedNumberSource,
    host: str = "Ada",
    *,
    others: tuple[str, ...] = (),
    numbers: tuple[int, ...],
    settings: GameSettings | None = None,
) -> GameEntity:
    """Same as create_game, with every player added to the roster and round 0 started."""
    game = create_game(players, number_source, host, others=others, settings=settings)
    for name in others:
        await game.add_player(name)
    number_source.extend(numbers)
    await game.start(host)
    return game
