import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from devices_api import __version__
from devices_api.api import create_api_router
from devices_api.api.errors import DEFAULT_EXCEPTION_HANDLERS
from devices_api.core.config import get_settings
from devices_api.core.container import get_container
from devices_api.schemas import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = get_container()
    await container.startup()
    logger.info("%s %s started (%s)", container.settings.project_name, __version__, container.settings.environment)
    yield
    await container.shutdown()
    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.project_name,
        description="REST API managing devices and their lifecycle state",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for exc, handler in DEFAULT_EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc, handler)

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/", include_in_schema=False)
    async def redirect_root():
        return RedirectResponse("/docs")

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(version=__version__)

    return app


app = create_app()
