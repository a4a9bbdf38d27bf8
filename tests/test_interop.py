"""Tests for werkzeug interop helpers."""
import io

import pytest
from werkzeug.datastructures import FileStorage, MultiDict
from werkzeug.datastructures import Headers as WerkzeugHeaders

from carafe.exceptions import InvalidArgumentError
from carafe.headers import Headers
from carafe.interop import (
    headers_from_werkzeug,
    headers_to_werkzeug,
    upload_from_file_storage,
    uploads_from_files,
)
from carafe.upload import UploadError


class TestHeaderConversion:
    def test_from_werkzeug_merges_repeated_names(self):
        wz = WerkzeugHeaders([("Set-Cookie", "a=1"), ("Host", "x"),
                              ("set-cookie", "b=2")])
        h = headers_from_werkzeug(wz)
        assert h.all() == {"Set-Cookie": ["a=1", "b=2"], "Host": ["x"]}

    def test_to_werkzeug_keeps_order_and_casing(self):
        h = Headers([("X-Foo", "a"), ("Accept", "text/html"), ("x-foo", "b")])
        wz = headers_to_werkzeug(h)
        assert list(wz.items()) == [
            ("X-Foo", "a"), ("X-Foo", "b"), ("Accept", "text/html"),
        ]
        assert wz.getlist("x-foo") == ["a", "b"]

    def test_from_werkzeug_drops_empty_values(self):
        wz = WerkzeugHeaders([("X-Empty", ""), ("Host", "x"), ("X-Blank", " \t"),
                              ("X-Foo", "a"), ("x-foo", "")])
        h = headers_from_werkzeug(wz)
        assert h.all() == {"Host": ["x"], "X-Foo": ["a"]}
        assert not h.has_header("X-Empty")

    def test_empty(self):
        assert len(headers_to_werkzeug(Headers())) == 0
        assert headers_from_werkzeug(WerkzeugHeaders()) == Headers()


class TestFileStorageConversion:
    def test_upload_from_file_storage(self, tmp_path):
        storage = FileStorage(
            stream=io.BytesIO(b"hello upload"),
            filename="hello.txt",
            content_type="text/plain; charset=utf-8",
        )
        upload = upload_from_file_storage(storage)
        assert upload.get_error() is UploadError.OK
        assert upload.get_size() == 12
        assert upload.get_client_filename() == "hello.txt"
        assert upload.get_client_media_type() == "text/plain"
        target = tmp_path / "hello.txt"
        upload.move_to(str(target))
        assert target.read_bytes() == b"hello upload"

    def test_empty_file_input_is_no_file(self):
        storage = FileStorage(stream=io.BytesIO(b""), filename="")
        upload = upload_from_file_storage(storage)
        assert upload.get_error() is UploadError.NO_FILE
        assert upload.get_client_media_type() is None

    def test_empty_named_file_is_ok(self):
        storage = FileStorage(stream=io.BytesIO(b""), filename="empty.txt")
        upload = upload_from_file_storage(storage)
        assert upload.get_error() is UploadError.OK
        assert upload.get_size() == 0

    def test_unmeasurable_stream_without_filename_is_ok(self):
        class Pipe:
            def __init__(self):
                self._buf = io.BytesIO(b"piped content")

            def read(self, size=-1):
                return self._buf.read(size)

        upload = upload_from_file_storage(FileStorage(stream=Pipe()))
        assert upload.get_error() is UploadError.OK
        assert upload.get_size() is None
        assert upload.get_stream().read() == b"piped content"

    def test_rejects_other_objects(self):
        with pytest.raises(InvalidArgumentError):
            upload_from_file_storage(io.BytesIO(b"x"))

    def test_uploads_from_files(self):
        files = MultiDict([
            ("docs", FileStorage(io.BytesIO(b"a"), filename="a.txt")),
            ("avatar", FileStorage(io.BytesIO(b"img"), filename="me.png",
                                   content_type="image/png")),
            ("docs", FileStorage(io.BytesIO(b"b"), filename="b.txt")),
        ])
        uploads = uploads_from_files(files)
        assert list(uploads) == ["docs", "avatar"]
        assert [u.get_client_filename() for u in uploads["docs"]] == [
            "a.txt", "b.txt",
        ]
        assert uploads["avatar"][0].get_client_media_type() == "image/png"
