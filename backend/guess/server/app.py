import structlog

from guess.logic.rng import NumberSource, RandomNumberSource
from guess.server.settings import GuessServerSettings
from guess.session.context import ServerContext
from shared.logging import setup_logging

logger = structlog.get_logger()


def create_context(
    settings: GuessServerSettings | None = None,
    number_source: NumberSource | None = None,
) -> ServerContext:
    """Build a ServerContext from settings, with an injectable number source."""
    if settings is None:
        settings = GuessServerSettings()

    if number_source is None:
        number_source = RandomNumberSource(seed=settings.rng_seed)

    context = ServerContext(
        number_source=number_source,
        default_settings=settings.game_settings,
    )
    logger.info(
        "guess server ready",
        max_points=settings.default_max_points,
        max_guess=settings.default_max_guess,
        seeded=settings.rng_seed is not None,
    )
    return context


def get_context() -> ServerContext:
    """Context factory for production use: configures logging from the environment first."""
    settings = GuessServerSettings()
    setup_logging(log_dir=settings.log_dir)
    return create_context(settings=settings)
