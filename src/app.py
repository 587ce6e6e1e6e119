# FILE: src/app.py
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import RedirectResponse
import logging

from config.settings import (
    ALLOWED_ORIGINS,
    DEBUG,
    APP_PREFIX,
    SECRET_KEY,
    SESSION_MAX_AGE,
    uses_default_secret_key
)
from di.container import Container, ROUTE_MODULES
from middleware.error_handler import add_error_handlers
from routes import (
    ROUTE_PREFIXES,
    ROUTE_TAGS,
    auth_router,
    batch_router,
    execution_router,
    healthcheck_router,
    knowlarity_router,
    live_router,
    webhook_router
)
from utils.logger import setup_logging

logger = logging.getLogger(__name__)

ROUTERS = {
    "health": healthcheck_router,
    "auth": auth_router,
    "webhook": webhook_router,
    "live": live_router,
    "executions": execution_router,
    "batch": batch_router,
    "knowlarity": knowlarity_router,
}


def create_app(container: Container = None) -> FastAPI:
    """Build the application around ``container`` (a fresh one by default)."""
    if container is None:
        container = Container()
    container.wire(modules=ROUTE_MODULES)

    app = FastAPI(
        title="Call Dashboard Backend",
        version="1.0.0",
        debug=DEBUG,
        description="Bolna and Knowlarity dashboard backend with live conversation updates"
    )
    app.container = container

    logger.info("allow_origins: %s", ALLOWED_ORIGINS)
    if uses_default_secret_key(SECRET_KEY, DEBUG):
        logger.warning(
            "SECRET_KEY is unset or the built-in default; session cookies can be forged. "
            "Set SECRET_KEY in the environment."
        )
    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"]
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=SECRET_KEY,
        max_age=SESSION_MAX_AGE,
        same_site="lax"
    )

    add_error_handlers(app)

    # Root route redirects to docs
    @app.get("/")
    async def root():
        return RedirectResponse(url="/docs")

    # Include routers
    for name, router in ROUTERS.items():
        app.include_router(
            router,
            prefix=f"{APP_PREFIX}{ROUTE_PREFIXES[name]}",
            tags=ROUTE_TAGS[name]
        )

    @app.on_event("startup")
    async def startup_event():
        setup_logging()
        logger.info(f"Conversation store backend: {container.store_backend()}")

    @app.on_event("shutdown")
    async def shutdown_event():
        # open streams are closed by their own generators; just report them
        remaining = container.event_bus().get_subscriber_count()
        logger.info(f"Application shutdown complete, {remaining} live subscriber(s) remaining")

    return app


app = create_app()
