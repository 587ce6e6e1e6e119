"""
Dependency Injection Container

This module provides dependency injection for the call dashboard backend,
keeping routes decoupled from the store, the event bus and upstream clients.
"""

from .container import Container, ROUTE_MODULES

__all__ = [
    "Container",
    "ROUTE_MODULES"
]
