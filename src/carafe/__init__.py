"""carafe: immutable HTTP message objects and uploaded file descriptors."""

__version__ = "0.1.0"

from carafe.config import Config, config
from carafe.exceptions import (
    InvalidArgumentError,
    UploadMoveError,
    UploadStateError,
)
from carafe.headers import Headers
from carafe.logging import create_logger
from carafe.message import Message, PROTOCOL_VERSIONS
from carafe.stream import Stream, StreamFactory
from carafe.upload import UploadedFile, UploadError

__all__ = [
    "__version__",
    "Config",
    "config",
    "InvalidArgumentError",
    "UploadMoveError",
    "UploadStateError",
    "Headers",
    "create_logger",
    "Message",
    "PROTOCOL_VERSIONS",
    "Stream",
    "StreamFactory",
    "UploadedFile",
    "UploadError",
]
