"""MPD-STICKERS Command Dispatcher Interface Package"""

from .command_list import CommandList
from .dispatcher import (
    CommandDispatcher,
    RawRecord,
    RawResponse,
)
from .errors import (
    AckCode,
    CommandListError,
    ConnectionClosedError,
    DispatcherError,
    NotConnectedError,
    ProtocolError,
    TransportError,
)

__all__ = [
    "AckCode",
    "CommandDispatcher",
    "CommandList",
    "CommandListError",
    "ConnectionClosedError",
    "DispatcherError",
    "NotConnectedError",
    "ProtocolError",
    "RawRecord",
    "RawResponse",
    "TransportError",
]
