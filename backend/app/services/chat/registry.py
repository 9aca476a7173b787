import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from app.utils.logger import get_logger

default_logger = get_logger("chat.registry")

# (sid, event, payload) -> delivery to one connection
Sender = Callable[[str, str, dict], Awaitable[Any]]


class Room:
    """Broadcast group of connections sharing one room key."""

    def __init__(self, key: str, logger: Optional[logging.Logger] = None) -> None:
        self.key = key
        self.logger = logger or default_logger
        self.members: Set[str] = set()
        self.lock = asyncio.Lock()

    def subscribe(self, sid: str) -> None:
        self.members.add(sid)

    def unsubscribe(self, sid: str) -> None:
        self.members.discard(sid)

    def __len__(self) -> int:
        return len(self.members)

    async def broadcast(self, event: str, payload: dict, send: Sender) -> int:
        """Send ``payload`` to every member, one fan-out at a time.

        The lock serialises fan-outs so all members observe messages in the
        same order. Members are snapshotted, so joins and disconnects during a
        fan-out do not affect it.
        """
        async with self.lock:
            delivered = 0
            for sid in list(self.members):
                try:
                    await send(sid, event, payload)
                    delivered += 1
                except Exception as e:
                    self.logger.warning(f"Delivery to {sid} in room {self.key} failed: {e}")
            return delivered


class ConnectionRegistry:
    """In-memory connection -> room index.

    - ``current room`` is the room set by the last join.
    - Room membership is kept per room; by default a second join does not
      leave the previous room. With ``single_room=True`` it does.
    - For production scaling, replace with Redis PubSub or similar.
    """

    def __init__(self, single_room: bool = False, logger: Optional[logging.Logger] = None) -> None:
        self.single_room = single_room
        self.logger = logger or default_logger
        self._current: Dict[str, Optional[str]] = {}
        self._joined: Dict[str, Set[str]] = {}
        self._rooms: Dict[str, Room] = {}

    def connect(self, sid: str) -> None:
        """Register a connection with no room assigned."""
        self._current.setdefault(sid, None)
        self._joined.setdefault(sid, set())

    def join(self, sid: str, room: str) -> None:
        if sid not in self._current:
            self.logger.debug(f"Join from unregistered connection {sid}; registering")
            self.connect(sid)

        previous = self._current[sid]
        if self.single_room and previous is not None and previous != room:
            self._leave(sid, previous)

        self._rooms.setdefault(room, Room(room, self.logger)).subscribe(sid)
        self._joined[sid].add(room)
        self._current[sid] = room

    def disconnect(self, sid: str) -> Optional[str]:
        """Drop the connection and its memberships. Returns its last room."""
        room = self._current.pop(sid, None)
        for key in list(self._joined.pop(sid, set())):
            self._leave(sid, key, forget=False)
        return room

    def _leave(self, sid: str, key: str, forget: bool = True) -> None:
        room = self._rooms.get(key)
        if room is not None:
            room.unsubscribe(sid)
            if not room:
                self._rooms.pop(key, None)
        if forget and sid in self._joined:
            self._joined[sid].discard(key)

    def room_of(self, sid: str) -> Optional[str]:
        return self._current.get(sid)

    def members(self, room: str) -> Set[str]:
        found = self._rooms.get(room)
        return set(found.members) if found else set()

    def rooms(self) -> List[str]:
        return list(self._rooms)

    async def broadcast(self, room: str, event: str, payload: dict, send: Sender) -> int:
        """Deliver to every member of ``room``. Unknown rooms deliver nothing."""
        found = self._rooms.get(room)
        if found is None:
            return 0
        return await found.broadcast(event, payload, send)

    def clear(self) -> None:
        self._current.clear()
        self._joined.clear()
        self._rooms.clear()

    def __contains__(self, sid: object) -> bool:
        return sid in self._current

    def __len__(self) -> int:
        return len(self._current)
