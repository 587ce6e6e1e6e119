# src/infrastructure/__init__.py
"""
Infrastructure layer for external integrations and state.

This layer contains the in-process event bus, the latest-conversation store
variants, the user directory and the upstream HTTP clients.
"""

__version__ = "1.0.0"
