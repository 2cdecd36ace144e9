"""Process wide logging setup."""

from __future__ import annotations

import logging

from devices_api.core.config import Settings


def configure_logging(settings: Settings) -> None:
    level = "DEBUG" if settings.debug else settings.logging.level.upper()
    logging.basicConfig(level=level, format=settings.logging.format)
    logging.getLogger("devices_api").setLevel(level)
    # SQL statement logging is driven by database.echo, keep the root quiet.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
