# src/routes/__init__.py

"""
Routes module for the call dashboard backend.

This module contains all the route handlers organized by functionality:
- Session authentication
- Conversation webhook ingestion
- Latest conversation and live Server-Sent Events stream
- Multi-agent executions and metrics
- Batch (bulk calling) management
- Knowlarity call bridges and carrier operations
- Health check endpoints

All routes are designed to work with the dependency injection container.
"""

from .healthcheck_handlers import healthcheck_router
from .auth_routes import router as auth_router
from .webhook_routes import router as webhook_router
from .live_routes import router as live_router
from .execution_routes import router as execution_router
from .batch_routes import router as batch_router
from .knowlarity_routes import router as knowlarity_router

# Export all routers for easy importing
__all__ = [
    "healthcheck_router",
    "auth_router",
    "webhook_router",
    "live_router",
    "execution_router",
    "batch_router",
    "knowlarity_router"
]

# Route prefixes for consistent API structure, relative to APP_PREFIX
ROUTE_PREFIXES = {
    "health": "/health",
    "auth": "/auth",
    "webhook": "/webhook",
    "live": "",
    "executions": "/executions",
    "batch": "/batch",
    "knowlarity": "/knowlarity"
}

# Route tags for OpenAPI documentation
ROUTE_TAGS = {
    "health": ["Health"],
    "auth": ["Auth"],
    "webhook": ["Webhook"],
    "live": ["Live"],
    "executions": ["Executions"],
    "batch": ["Batch"],
    "knowlarity": ["Knowlarity"]
}
