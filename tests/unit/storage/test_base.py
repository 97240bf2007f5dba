"""Unit tests for the Content value type."""

from swift_datastore.base import Content, StoredContent
from swift_datastore.metadata import DEFAULT_CONTENT_TYPE


class TestContent:
    def test_bytes_data(self):
        with Content(b"eggheads").open() as f:
            assert f.read() == b"eggheads"

    def test_text_data_is_utf8_encoded(self):
        with Content("eggheads café").open() as f:
            assert f.read() == "eggheads café".encode("utf-8")

    def test_text_data_is_never_read_as_path(self, tmp_path):
        source = tmp_path / "egg.png"
        source.write_bytes(b"from disk")

        with Content(str(source)).open() as f:
            assert f.read() == str(source).encode("utf-8")

    def test_path_data_is_read_from_disk(self, tmp_path):
        source = tmp_path / "egg.png"
        source.write_bytes(b"from disk")

        with Content(source).open() as f:
            assert f.read() == b"from disk"

    def test_open_gives_fresh_stream_each_time(self):
        content = Content("eggheads")
        for _ in range(2):
            with content.open() as f:
                assert f.read() == b"eggheads"

    def test_mime_type_guessed_from_name(self):
        assert Content(b"x", name="egg.png").mime_type == "image/png"

    def test_mime_type_defaults_without_name(self):
        assert Content("eggheads").mime_type == DEFAULT_CONTENT_TYPE

    def test_explicit_mime_type_wins(self):
        assert Content(b"x", name="egg.png", mime_type="text/plain").mime_type == "text/plain"


class TestStoredContent:
    def test_unpacks_as_content_and_metadata(self):
        content, meta = StoredContent(content=b"x", metadata={"a": 1})
        assert content == b"x"
        assert meta == {"a": 1}
