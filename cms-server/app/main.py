import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app import __version__
from app.api import create_api_router
from app.core.config import get_settings
from app.core.container import ApplicationContainer, get_container
from app.core.csp import ContentSecurityPolicyMiddleware, build_content_security_policy, render_policy
from app.core.logging import configure_logging
from app.domain.seed import seed_example_app
from app.infrastructure.database.session import dispose_engine, init_db, session_scope

logger = logging.getLogger(__name__)


async def run_seed(container: ApplicationContainer) -> None:
    async with session_scope() as session:

        async def build():
            return container.seed_orchestrator(session)

        await seed_example_app(build)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer = app.state.container
    await init_db()
    container.log_configuration()
    if container.settings.seed.enabled:
        await run_seed(container)
    try:
        yield
    finally:
        await container.aclose()
        await dispose_engine()


def create_app(container: Optional[ApplicationContainer] = None) -> FastAPI:
    settings = container.settings if container is not None else get_settings()
    configure_logging(settings.log_level)
    container = container or get_container()

    app = FastAPI(
        title=settings.project_name,
        description="Content server with S3 media storage and Mailchimp forms",
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
    app.add_middleware(
        ContentSecurityPolicyMiddleware,
        policy=render_policy(build_content_security_policy(settings)),
    )

    storage = settings.upload_storage
    if storage.provider == "local":
        local_root = getattr(container.upload_provider, "root", storage.local_root)
        local_root.mkdir(parents=True, exist_ok=True)
        app.mount(storage.public_path, StaticFiles(directory=str(local_root)), name="uploads")

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("app.main:app", host=_settings.host, port=_settings.port, reload=_settings.server.reload)
