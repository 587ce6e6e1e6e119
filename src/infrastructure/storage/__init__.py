# src/infrastructure/storage/__init__.py
"""
Storage for the single latest conversation and the dashboard user directory.
"""

from .conversation_store import (
    BaseConversationStore,
    InMemoryConversationStore,
    FileConversationStore
)
from .user_directory import JsonUserDirectory

__all__ = [
    "BaseConversationStore",
    "InMemoryConversationStore",
    "FileConversationStore",
    "JsonUserDirectory"
]
