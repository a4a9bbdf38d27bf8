"""Byte streams backing message bodies and uploaded files."""
import io
import os

from carafe.config import config
from carafe.exceptions import InvalidArgumentError


class Stream:
    """Thin wrapper around a binary file object.

    The wrapped object only needs ``read``; seeking, writing and size
    queries are reported as unsupported when the object lacks them.
    """

    def __init__(self, resource):
        if not hasattr(resource, "read"):
            raise InvalidArgumentError("Stream resource must provide read()")
        self._resource = resource

    def _get_resource(self):
        if self._resource is None:
            raise RuntimeError("Stream is detached")
        return self._resource

    def _check(self, name):
        method = getattr(self._resource, name, None)
        if method is None:
            return False
        try:
            return bool(method())
        except (ValueError, OSError):
            return False

    def is_seekable(self):
        if self._resource is None:
            return False
        return self._check("seekable")

    def is_readable(self):
        if self._resource is None:
            return False
        if not hasattr(self._resource, "readable"):
            return True
        return self._check("readable")

    def is_writable(self):
        if self._resource is None:
            return False
        return self._check("writable")

    def read(self, size=-1):
        data = self._get_resource().read(size)
        if isinstance(data, str):
            data = data.encode("utf-8")
        return data

    def write(self, data):
        resource = self._get_resource()
        if not self.is_writable():
            raise RuntimeError("Stream is not writable")
        if isinstance(data, str):
            data = data.encode("utf-8")
        return resource.write(data)

    def seek(self, offset, whence=os.SEEK_SET):
        resource = self._get_resource()
        if not self.is_seekable():
            raise RuntimeError("Stream is not seekable")
        return resource.seek(offset, whence)

    def tell(self):
        return self._get_resource().tell()

    def rewind(self):
        self.seek(0)

    def eof(self):
        if not self.is_seekable():
            return False
        position = self.tell()
        try:
            return position >= self.get_size()
        finally:
            self.seek(position)

    def get_size(self):
        """Return the stream length in bytes, or None if unknown."""
        resource = self._resource
        if resource is None:
            return None
        if hasattr(resource, "getbuffer"):
            return resource.getbuffer().nbytes
        if self.is_seekable():
            position = resource.tell()
            try:
                return resource.seek(0, os.SEEK_END)
            finally:
                resource.seek(position)
        if hasattr(resource, "fileno"):
            try:
                return os.fstat(resource.fileno()).st_size
            except (OSError, ValueError, io.UnsupportedOperation):
                pass
        return None

    def get_contents(self):
        """Read everything from the current position to the end."""
        return self.read()

    def close(self):
        resource = self.detach()
        if resource is not None and hasattr(resource, "close"):
            resource.close()

    def detach(self):
        resource, self._resource = self._resource, None
        return resource

    @property
    def closed(self):
        return self._resource is None or getattr(self._resource, "closed", False)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        return f"<Stream {self._resource!r}>"


class StreamFactory:
    """Creates ``Stream`` objects from content, paths and file objects."""

    def create_stream(self, content=""):
        if isinstance(content, str):
            content = content.encode("utf-8")
        elif not isinstance(content, (bytes, bytearray)):
            raise InvalidArgumentError("Stream content must be str or bytes")
        return Stream(io.BytesIO(content))

    def create_stream_from_file(self, filename, mode="rb"):
        if "b" not in mode:
            mode += "b"
        try:
            resource = open(filename, mode)
        except OSError as e:
            raise RuntimeError(
                f"The file {os.fspath(filename)!r} cannot be opened: {e}"
            ) from e
        return Stream(resource)

    def create_stream_from_resource(self, resource):
        if isinstance(resource, Stream):
            return resource
        if not hasattr(resource, "read"):
            raise InvalidArgumentError(
                "Resource must be a readable file object"
            )
        return Stream(resource)

    def copy_to_stream(self, source, destination, buffer_size=None):
        """Copy ``source`` into ``destination`` until the source is exhausted.

        Returns the number of bytes copied. I/O errors propagate.
        """
        if buffer_size is None:
            buffer_size = config["COPY_BUFFER_SIZE"]
        copied = 0
        while True:
            chunk = source.read(buffer_size)
            if not chunk:
                break
            destination.write(chunk)
            copied += len(chunk)
        return copied
