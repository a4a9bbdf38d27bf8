"""Protocol version, headers and body shared by requests and responses."""
import threading

from carafe.config import config
from carafe.exceptions import InvalidArgumentError
from carafe.headers import Headers
from carafe.logging import logger
from carafe.stream import Stream, StreamFactory

PROTOCOL_VERSIONS = ("1.0", "1.1")


def _validate_protocol_version(version):
    if not isinstance(version, str) or version not in PROTOCOL_VERSIONS:
        raise InvalidArgumentError("Protocol Version must be 1.0 or 1.1")
    return version


class Message:
    """Immutable HTTP message state.

    All ``with_*`` methods return a new ``Message`` and leave the receiver
    untouched. The body is the one exception to strict immutability: when
    no body was given, ``get_body`` creates an empty stream the first time
    it is called and keeps returning that same stream.
    """

    def __init__(self, headers=None, body=None, protocol_version=None):
        if protocol_version is None:
            protocol_version = config["DEFAULT_PROTOCOL_VERSION"]
        self._protocol = _validate_protocol_version(protocol_version)
        if body is not None and not isinstance(body, Stream):
            raise InvalidArgumentError("Message body must be a Stream")
        self._stream = body
        self._body_lock = threading.Lock()
        self._set_headers({} if headers is None else headers)

    def _set_headers(self, headers):
        if isinstance(headers, Headers):
            self._headers = headers
            return
        collected = Headers()
        pairs = headers.items() if hasattr(headers, "items") else headers
        for name, value in pairs:
            collected = collected.with_added_header(name, value)
        self._headers = collected

    def _replace(self, **changes):
        new = self.__class__.__new__(self.__class__)
        new.__dict__.update(self.__dict__)
        new._body_lock = threading.Lock()
        for key, value in changes.items():
            setattr(new, key, value)
        return new

    def get_protocol_version(self):
        return self._protocol

    def with_protocol_version(self, version):
        _validate_protocol_version(version)
        if version == self._protocol:
            return self
        return self._replace(_protocol=version)

    @property
    def headers(self):
        return self._headers

    def get_headers(self):
        return self._headers.all()

    def has_header(self, name):
        return self._headers.has_header(name)

    def get_header(self, name):
        return self._headers.get_header(name)

    def get_header_line(self, name):
        return self._headers.get_header_line(name)

    def with_header(self, name, value):
        return self._replace(_headers=self._headers.with_header(name, value))

    def with_added_header(self, name, value):
        return self._replace(
            _headers=self._headers.with_added_header(name, value)
        )

    def without_header(self, name):
        headers = self._headers.without_header(name)
        if headers is self._headers:
            return self
        return self._replace(_headers=headers)

    def get_body(self):
        if self._stream is None:
            with self._body_lock:
                if self._stream is None:
                    logger.debug("Creating empty body for %r", self)
                    self._stream = StreamFactory().create_stream("")
        return self._stream

    def with_body(self, body):
        if not isinstance(body, Stream):
            raise InvalidArgumentError("Message body must be a Stream")
        if body is self._stream:
            return self
        return self._replace(_stream=body)

    def __repr__(self):
        return (
            f"<{type(self).__name__} HTTP/{self._protocol}"
            f" headers={len(self._headers)}>"
        )
