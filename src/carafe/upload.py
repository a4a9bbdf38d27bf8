"""Uploaded file descriptors with move-once semantics."""
import enum
import errno
import os
import shutil
import threading

from carafe.exceptions import (
    InvalidArgumentError,
    UploadMoveError,
    UploadStateError,
)
from carafe.logging import logger
from carafe.stream import Stream, StreamFactory


class UploadError(enum.IntEnum):
    """Outcome of a file upload, using the conventional status codes."""

    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


def _is_non_empty_path(value):
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    return isinstance(value, str) and len(value) > 0


def _check_string_or_none(value, what):
    if value is not None and not isinstance(value, str):
        raise InvalidArgumentError(f"Upload file {what} must be a string or None")
    return value


class UploadedFile:
    """Metadata and payload of one uploaded file.

    The payload comes from a filesystem path, a ``Stream`` or a readable
    file object. It is only kept when ``error`` is ``UploadError.OK``.
    After a successful ``move_to`` the payload can no longer be read or
    moved again.

    Concurrent ``move_to`` calls on one instance are serialized; exactly
    one of them can succeed.
    """

    def __init__(self, stream_or_file, size, error, client_filename=None,
                 client_media_type=None):
        self._error = self._validate_error(error)
        self._size = self._validate_size(size)
        self._client_filename = _check_string_or_none(
            client_filename, "client filename")
        self._client_media_type = _check_string_or_none(
            client_media_type, "client media type")
        self._file = None
        self._stream = None
        self._moved = False
        self._lock = threading.Lock()
        if self._error is UploadError.OK:
            self._set_stream_or_file(stream_or_file)

    @staticmethod
    def _validate_error(error):
        if not isinstance(error, int) or isinstance(error, bool):
            raise InvalidArgumentError("Upload file error status must be an integer")
        try:
            return UploadError(error)
        except ValueError:
            raise InvalidArgumentError(
                "Invalid error status for UploadedFile"
            ) from None

    @staticmethod
    def _validate_size(size):
        if size is not None and (not isinstance(size, int) or isinstance(size, bool)):
            raise InvalidArgumentError("Upload file size must be an integer")
        return size

    def _set_stream_or_file(self, stream_or_file):
        if _is_non_empty_path(stream_or_file):
            self._file = os.fspath(stream_or_file)
        elif isinstance(stream_or_file, Stream):
            self._stream = stream_or_file
        elif hasattr(stream_or_file, "read"):
            self._stream = StreamFactory().create_stream_from_resource(
                stream_or_file)
        else:
            raise InvalidArgumentError(
                "Invalid stream or file provided for UploadedFile"
            )

    def _validate_active(self):
        if self._error is not UploadError.OK:
            raise UploadStateError("Cannot retrieve stream due to upload error")
        if self._moved:
            raise UploadStateError(
                "Cannot retrieve stream after it has already been moved"
            )

    def get_stream(self):
        self._validate_active()
        if self._stream is not None:
            return self._stream
        return StreamFactory().create_stream_from_file(self._file, "rb")

    def move_to(self, target_path):
        with self._lock:
            self._validate_active()
            if not _is_non_empty_path(target_path):
                raise InvalidArgumentError(
                    "Invalid path provided for move operation; "
                    "must be a non-empty string"
                )
            target_path = os.fspath(target_path)
            if self._file is not None:
                self._move_file(target_path)
            else:
                self._copy_stream(target_path)
            self._moved = True
        logger.debug("Moved uploaded file %r to %r",
                     self._client_filename, target_path)

    def _move_file(self, target_path):
        try:
            try:
                os.replace(self._file, target_path)
            except OSError as e:
                if e.errno != errno.EXDEV:
                    raise
                # different filesystem: copy, then drop the source
                shutil.copyfile(self._file, target_path)
                os.unlink(self._file)
        except OSError as e:
            raise UploadMoveError(target_path) from e

    def _copy_stream(self, target_path):
        # Not atomic: a failure part way leaves a partial file at target_path.
        factory = StreamFactory()
        stream = self._stream
        try:
            if stream.is_seekable():
                stream.rewind()
            with factory.create_stream_from_file(target_path, "wb") as dest:
                factory.copy_to_stream(stream, dest)
        except (OSError, ValueError, RuntimeError) as e:
            raise UploadMoveError(target_path) from e

    def is_moved(self):
        return self._moved

    def get_size(self):
        return self._size

    def get_error(self):
        return self._error

    def get_client_filename(self):
        return self._client_filename

    def get_client_media_type(self):
        return self._client_media_type

    def __repr__(self):
        return (
            f"<{type(self).__name__} {self._client_filename!r}"
            f" error={self._error.name} moved={self._moved}>"
        )
