"""Logging configuration"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from twitchtools.core.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging with Rich handler"""

    level = getattr(logging, settings.log_level, logging.INFO)

    console = Console(
        force_terminal=True,
        width=120,
    )

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        tracebacks_width=120,
    )

    rich_handler.setFormatter(
        logging.Formatter(fmt="%(message)s", datefmt="[%Y-%m-%d %H:%M:%S]")
    )

    # force=True: uvicorn may have configured the root logger already
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%Y-%m-%d %H:%M:%S]",
        handlers=[rich_handler],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(level)

    # httpx logs every upstream request at INFO; token renewals are logged by the cache
    logging.getLogger("httpx").setLevel(logging.WARNING)

    # Upstream request tracing (truncation, misses) is DEBUG; surface it in development
    if settings.is_development:
        logging.getLogger("twitchtools.services").setLevel(logging.DEBUG)

    logger = logging.getLogger(__name__)
    logger.debug(f"Logging: {settings.log_level} | Env: {settings.environment}")
