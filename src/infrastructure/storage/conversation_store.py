# src/infrastructure/storage/conversation_store.py
"""
Latest-conversation store implementations.

Both variants hold at most one conversation payload and publish every ``set``
on the event bus. The file variant persists the payload as a single JSON file
and re-reads it on every ``get`` so a write from another process is visible.
"""

import copy
import json
import logging
import os
import uuid
from abc import abstractmethod
from typing import Optional, Dict, Any

import aiofiles
import aiofiles.os

from core.interfaces.events import IEventPublisher
from core.interfaces.repositories import IConversationStore

logger = logging.getLogger(__name__)


class BaseConversationStore(IConversationStore):
    """Replace-then-publish logic shared by the store variants."""

    def __init__(self, event_bus: IEventPublisher):
        self.event_bus = event_bus

    async def set(self, record: Dict[str, Any]) -> None:
        """Replace the current conversation and notify subscribers."""
        await self._write(record)
        logger.info(f"Stored latest conversation {record.get('id')}")
        self.event_bus.publish(record)

    @abstractmethod
    async def _write(self, record: Dict[str, Any]) -> None:
        pass


class InMemoryConversationStore(BaseConversationStore):
    """Ephemeral store; lost on restart."""

    def __init__(self, event_bus: IEventPublisher):
        super().__init__(event_bus)
        self._conversation: Optional[Dict[str, Any]] = None

    async def _write(self, record: Dict[str, Any]) -> None:
        # keep our own copy so later caller mutations cannot leak in
        self._conversation = copy.deepcopy(record)

    async def get(self) -> Optional[Dict[str, Any]]:
        if self._conversation is None:
            return None
        return copy.deepcopy(self._conversation)

    async def clear(self) -> None:
        self._conversation = None
        logger.debug("Cleared in-memory conversation store")


class FileConversationStore(BaseConversationStore):
    """Store backed by a single JSON file under a scratch directory."""

    def __init__(self, event_bus: IEventPublisher, file_path: str):
        super().__init__(event_bus)
        self.file_path = file_path

    async def _write(self, record: Dict[str, Any]) -> None:
        directory = os.path.dirname(os.path.abspath(self.file_path))
        await aiofiles.os.makedirs(directory, exist_ok=True)

        # write to a sibling temp file and swap it in so readers never see a partial file
        tmp_path = f"{self.file_path}.{uuid.uuid4().hex}.tmp"
        try:
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(record, ensure_ascii=False))
            await aiofiles.os.replace(tmp_path, self.file_path)
        except OSError as e:
            logger.error(f"Failed to persist conversation to {self.file_path}: {e}")
            if await aiofiles.os.path.exists(tmp_path):
                await aiofiles.os.remove(tmp_path)
            raise

    async def get(self) -> Optional[Dict[str, Any]]:
        try:
            async with aiofiles.open(self.file_path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            return None

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Stored conversation at {self.file_path} is not valid JSON: {e}")
            return None

    async def clear(self) -> None:
        try:
            await aiofiles.os.remove(self.file_path)
            logger.debug(f"Removed conversation file {self.file_path}")
        except FileNotFoundError:
            pass
