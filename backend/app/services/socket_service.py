"""
Socket.IO service for real-time chat communication.
"""
import socketio

from app.config import get_settings
from app.services.chat import ChatRelay, ConnectionRegistry, MessageForwarder
from app.utils.logger import get_logger

settings = get_settings()
logger = get_logger("socket")


def create_socket_server() -> socketio.AsyncServer:
    """Create the Socket.IO server (ASGI mode)."""
    socket_logger = get_logger("socketio") if settings.APP_DEBUG else False
    return socketio.AsyncServer(
        cors_allowed_origins=settings.cors_origins or "*",
        async_mode="asgi",
        logger=socket_logger,
        engineio_logger=socket_logger,
    )


def build_chat_relay(sio: socketio.AsyncServer) -> ChatRelay:
    """Wire a relay whose deliveries go to single sockets of ``sio``."""

    async def send(sid: str, event: str, data: dict) -> None:
        await sio.emit(event, data, to=sid)

    registry = ConnectionRegistry(
        single_room=settings.CHAT_SINGLE_ROOM_MEMBERSHIP,
        logger=get_logger("chat.registry"),
    )
    forwarder = MessageForwarder(
        settings.API_URL,
        timeout=settings.API_TIMEOUT_SECONDS,
        retries=settings.MESSAGE_FORWARD_RETRIES,
    )
    return ChatRelay(registry, forwarder, send, logger=get_logger("chat.relay"))


def _payload(data) -> dict:
    # Clients occasionally send nothing or a bare string
    return data if isinstance(data, dict) else {}


class ChatNamespace(socketio.AsyncNamespace):
    """Chat events: joinRoom, sendMessage; outbound: message."""

    def __init__(self, relay: ChatRelay, namespace: str = "/") -> None:
        super().__init__(namespace)
        self.relay = relay

    async def on_connect(self, sid: str, environ: dict, auth: dict | None = None):
        self.relay.connect(sid)

    async def on_joinRoom(self, sid: str, data=None):
        """Join the room of a (userId, mentorId) pair. Acks with the room key."""
        payload = _payload(data)
        room = self.relay.join_room(sid, payload.get("userId"), payload.get("mentorId"))
        return {"room": room}

    async def on_sendMessage(self, sid: str, data=None):
        payload = _payload(data)
        await self.relay.dispatch(payload.get("userId"), payload.get("mentorId"), payload.get("text"))

    async def on_disconnect(self, sid: str, reason=None):
        self.relay.disconnect(sid)


def get_socket_app(sio: socketio.AsyncServer, other_asgi_app=None) -> socketio.ASGIApp:
    """Get Socket.IO ASGI app, serving ``other_asgi_app`` for non Socket.IO paths."""
    return socketio.ASGIApp(sio, other_asgi_app=other_asgi_app, socketio_path="socket.io")
