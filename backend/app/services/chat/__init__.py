from .rooms import resolve_room
from .registry import ConnectionRegistry, Room
from .forwarder import MessageForwarder
from .relay import ChatMessage, ChatRelay
