# src/application/services/live_stream_service.py
"""
Live stream service: one Server-Sent Events session per connected dashboard.

A session subscribes to the conversation event bus, forwards every published
record as a ``conversation`` frame and emits a ``heartbeat`` frame on a fixed
interval. Whatever ends the stream (client disconnect, a failed send, server
shutdown) closes the session, which cancels the heartbeat and drops the
subscription exactly once.
"""

import asyncio
import json
import uuid
from enum import Enum
from typing import Any, AsyncIterator, Dict, Optional

from core.interfaces.events import IEventSubscriber, ISubscription
from core.interfaces.services import ILiveStreamService
from utils.logger import StreamLogger
from utils.utils import epoch_millis

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

CONNECTED_EVENT = {"type": "connected", "message": "Connected to live updates"}


def encode_frame(event: Dict[str, Any]) -> str:
    """Encode one event as an SSE ``data:`` frame."""
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


class StreamState(Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class LiveStreamSession:
    """State machine for one SSE client: CONNECTING -> OPEN -> CLOSED."""

    def __init__(
        self,
        event_bus: IEventSubscriber,
        heartbeat_interval: float = 30.0,
        stream_id: Optional[str] = None,
        client: Optional[str] = None
    ):
        self.event_bus = event_bus
        self.heartbeat_interval = heartbeat_interval
        self.stream_id = stream_id or uuid.uuid4().hex[:12]
        self.state = StreamState.CONNECTING
        self.logger = StreamLogger(stream_id=self.stream_id, client=client)

        self._queue: "asyncio.Queue[str]" = asyncio.Queue()
        self._subscription: Optional[ISubscription] = None
        self._heartbeat_task: Optional[asyncio.Task] = None

    @property
    def heartbeat_active(self) -> bool:
        return self._heartbeat_task is not None and not self._heartbeat_task.done()

    def open(self) -> None:
        """Subscribe to the bus and start the heartbeat."""
        if self.state is not StreamState.CONNECTING:
            return
        self._subscription = self.event_bus.subscribe(self._on_conversation)
        self._heartbeat_task = asyncio.create_task(self._heartbeat_monitor())
        self.state = StreamState.OPEN
        self.logger.info("Live stream opened")

    def close(self) -> None:
        """Release the heartbeat and subscription. Safe to call repeatedly."""
        if self.state is StreamState.CLOSED:
            return
        self.state = StreamState.CLOSED

        if self._heartbeat_task is not None:
            self._heartbeat_task.cancel()
        if self._subscription is not None:
            self._subscription()
            self._subscription = None

        self.logger.info("Live stream closed")

    def _on_conversation(self, record: Any) -> None:
        # runs synchronously inside publish()
        if self.state is not StreamState.OPEN:
            return
        self._queue.put_nowait(encode_frame({"type": "conversation", "data": record}))

    async def _heartbeat_monitor(self) -> None:
        """Enqueue a heartbeat frame every interval until cancelled."""
        self.logger.debug("Starting heartbeat monitor")

        while True:
            try:
                await asyncio.sleep(self.heartbeat_interval)
                self._queue.put_nowait(
                    encode_frame({"type": "heartbeat", "timestamp": epoch_millis()})
                )
            except asyncio.CancelledError:
                self.logger.debug("Heartbeat monitor cancelled")
                break

    async def frames(self) -> AsyncIterator[str]:
        """Yield encoded frames until the consumer stops iterating."""
        try:
            self.open()
            yield encode_frame(CONNECTED_EVENT)

            while self.state is StreamState.OPEN:
                frame = await self._queue.get()
                yield frame
        finally:
            self.close()


class LiveStreamService(ILiveStreamService):
    """Creates live stream sessions bound to the shared event bus."""

    def __init__(self, event_bus: IEventSubscriber, heartbeat_interval: float = 30.0):
        self.event_bus = event_bus
        self.heartbeat_interval = heartbeat_interval

    def create_session(self, client: Optional[str] = None) -> LiveStreamSession:
        return LiveStreamSession(
            self.event_bus,
            heartbeat_interval=self.heartbeat_interval,
            client=client
        )

    def open_stream(self, client: Optional[str] = None) -> AsyncIterator[str]:
        return self.create_session(client).frames()
