"""
Chat relay: turns a sendMessage event into a room broadcast plus a
background copy to the message persistence service.
"""
import asyncio
import logging
import time
from typing import Any, Callable, Optional, Set

from pydantic import BaseModel, ConfigDict

from app.errors import UpstreamCallError
from app.services.chat.forwarder import MessageForwarder
from app.services.chat.registry import ConnectionRegistry, Sender
from app.services.chat.rooms import resolve_room
from app.utils.logger import get_logger

default_logger = get_logger("chat.relay")

MESSAGE_EVENT = "message"


def now_ms() -> int:
    return int(time.time() * 1000)


class ChatMessage(BaseModel):
    """Message as delivered to room members. Never mutated after creation."""
    model_config = ConfigDict(frozen=True)

    sender: Any = None
    text: Any = None
    timestamp: int

    def to_payload(self) -> dict:
        return {"sender": self.sender, "text": self.text, "timestamp": self.timestamp}


class ChatRelay:
    def __init__(
        self,
        registry: ConnectionRegistry,
        forwarder: MessageForwarder,
        send: Sender,
        clock: Callable[[], int] = now_ms,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry
        self.forwarder = forwarder
        self._send = send
        self._clock = clock
        self.logger = logger or default_logger
        self._forwards: Set[asyncio.Task] = set()

    def connect(self, sid: str) -> None:
        self.registry.connect(sid)
        self.logger.info(f"User connected: {sid}")

    def join_room(self, sid: str, user_id: Any, mentor_id: Any) -> str:
        room = resolve_room(user_id, mentor_id)
        self.registry.join(sid, room)
        self.logger.info(f"{user_id} joined room {room}")
        return room

    def disconnect(self, sid: str) -> None:
        self.registry.disconnect(sid)
        self.logger.info(f"User disconnected: {sid}")

    async def dispatch(self, user_id: Any, mentor_id: Any, text: Any) -> ChatMessage:
        """Broadcast to the resolved room, then forward a copy in the background.

        Missing fields are tolerated: the room key degenerates and the payload
        carries nulls.
        """
        room = resolve_room(user_id, mentor_id)
        message = ChatMessage(sender=user_id, text=text, timestamp=self._clock())

        delivered = await self.registry.broadcast(room, MESSAGE_EVENT, message.to_payload(), self._send)
        self.logger.debug(f"Message from {user_id} delivered to {delivered} connection(s) in {room}")

        self._spawn_forward(user_id, mentor_id, text)
        return message

    def _spawn_forward(self, user_id: Any, mentor_id: Any, text: Any) -> None:
        task = asyncio.create_task(self._forward(user_id, mentor_id, text))
        self._forwards.add(task)
        task.add_done_callback(self._forward_done)

    async def _forward(self, user_id: Any, mentor_id: Any, text: Any) -> None:
        try:
            await self.forwarder.forward(user_id, mentor_id, text)
        except UpstreamCallError as e:
            self.logger.error(f"{e.log_message} (room {resolve_room(user_id, mentor_id)})")

    def _forward_done(self, task: asyncio.Task) -> None:
        self._forwards.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error(f"Message forwarding crashed: {exc}", exc_info=exc)

    @property
    def pending_forwards(self) -> int:
        return len(self._forwards)

    async def drain(self, timeout: Optional[float] = None) -> None:
        """Wait until no forward is in flight, including ones spawned meanwhile."""
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        while True:
            pending = [task for task in self._forwards if not task.done()]
            if not pending:
                return
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                self.logger.warning(f"{len(pending)} message forward(s) still pending at close")
                return
            await asyncio.wait(pending, timeout=remaining)

    async def aclose(self, timeout: Optional[float] = None) -> None:
        await self.drain(timeout)
        await self.forwarder.aclose()
        self.registry.clear()
