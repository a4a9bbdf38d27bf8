"""Conversions between carafe objects and werkzeug data structures."""
from werkzeug.datastructures import FileStorage
from werkzeug.datastructures import Headers as WerkzeugHeaders

from carafe.exceptions import InvalidArgumentError
from carafe.headers import Headers
from carafe.stream import StreamFactory
from carafe.upload import UploadedFile, UploadError


def headers_from_werkzeug(wz_headers):
    """Build ``Headers`` from a werkzeug ``Headers`` (or ``EnvironHeaders``).

    Repeated names are merged in order; the first casing seen is kept.
    Values that are empty after trimming, such as a bare ``X-Empty:``,
    are dropped because ``Headers`` only stores non-empty values.
    """
    return Headers([
        (name, value)
        for name, value in wz_headers.items()
        if value.strip(" \t")
    ])


def headers_to_werkzeug(headers):
    wz_headers = WerkzeugHeaders()
    for name, value in headers.to_list():
        wz_headers.add(name, value)
    return wz_headers


def upload_from_file_storage(storage):
    """Wrap a werkzeug ``FileStorage`` in an ``UploadedFile``.

    A part submitted without a filename and without content is reported
    as ``UploadError.NO_FILE``, the way browsers send an empty file input.
    """
    if not isinstance(storage, FileStorage):
        raise InvalidArgumentError("Expected a werkzeug FileStorage")
    stream = StreamFactory().create_stream_from_resource(storage.stream)
    size = stream.get_size()
    filename = storage.filename
    media_type = storage.mimetype or None
    if not filename and size == 0:
        return UploadedFile(None, size, UploadError.NO_FILE, filename,
                            media_type)
    return UploadedFile(stream, size, UploadError.OK, filename, media_type)


def uploads_from_files(files):
    """Convert a ``MultiDict`` of ``FileStorage`` (``request.files``).

    Returns ``{field name: [UploadedFile, ...]}`` keeping submission order.
    """
    return {
        key: [upload_from_file_storage(storage) for storage in storages]
        for key, storages in files.lists()
    }
