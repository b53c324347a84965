"""Server context: the only state shared across all callers."""

from dataclasses import dataclass, field

from guess.logic.rng import NumberSource, RandomNumberSource
from guess.logic.settings import GameSettings
from guess.session.registry import GameRegistry, PlayerRegistry


@dataclass
class ServerContext:
    """Registries, number source and defaults for one server instance.

    Constructed once and passed explicitly into every facade verb, so tests
    get isolation by building a fresh context (or calling reset()).
    """

    players: PlayerRegistry = field(default_factory=PlayerRegistry)
    games: GameRegistry = field(default_factory=GameRegistry)
    number_source: NumberSource = field(default_factory=RandomNumberSource)
    default_settings: GameSettings = field(default_factory=GameSettings)

    def reset(self) -> None:
        """Tear down every game and player."""
        self.games.clear()
        self.players.clear()
