"""Application wide wiring of settings and infrastructure."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from devices_api.core.config import Settings, get_settings
from devices_api.core.logging import configure_logging
from devices_api.infrastructure.database.session import dispose_engine, get_engine, init_db


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings

    async def startup(self) -> None:
        """Configure logging and open the database engine, creating tables if enabled."""
        configure_logging(self.settings)
        get_engine()
        if self.settings.database.create_all:
            await init_db()

    async def shutdown(self) -> None:
        await dispose_engine()


@lru_cache()
def get_container() -> ApplicationContainer:
    return ApplicationContainer(settings=get_settings())


__all__ = ["ApplicationContainer", "get_container"]
