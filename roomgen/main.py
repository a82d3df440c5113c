from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roomgen import __version__
from roomgen.core.config import Settings, get_settings
from roomgen.core.container import ApplicationContainer, build_container
from roomgen.core.logging import configure_logging
from roomgen.interfaces.http.routers import create_api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer = app.state.container
    await container.init_infrastructure()
    yield
    await container.aclose()


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ApplicationContainer] = None,
) -> FastAPI:
    settings = settings or (container.settings if container else get_settings())
    configure_logging(settings.logging)
    container = container or build_container(settings)

    app = FastAPI(
        title=settings.project_name,
        description="AI room restyling with prepaid credits",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {
            "status": "ok",
            "version": __version__,
            "demo_mode": container.orchestrator.demo_mode,
        }

    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "roomgen.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )


if __name__ == "__main__":
    run()
