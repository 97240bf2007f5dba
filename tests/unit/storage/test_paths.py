"""Unit tests for uid generation and path joining."""

import re
import uuid

from swift_datastore.paths import full_path, generate_uid

UID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}/(.+)$")


class TestGenerateUid:
    def test_uuid_prefix_and_name_suffix(self):
        uid = generate_uid("doobie.doo")
        match = UID_PATTERN.match(uid)
        assert match
        assert match.group(1) == "doobie.doo"
        uuid.UUID(uid.split("/", 1)[0])

    def test_name_is_kept_verbatim(self):
        name = "A Picture with many spaces in its name (at 20:00 pm).png"
        assert generate_uid(name).endswith("/" + name)

    def test_non_ascii_name(self):
        assert generate_uid("こんにちは.txt").endswith("/こんにちは.txt")

    def test_missing_name_falls_back_to_file(self):
        assert generate_uid(None).endswith("/file")
        assert generate_uid("").endswith("/file")

    def test_uids_are_unique(self):
        assert len({generate_uid("same.txt") for _ in range(50)}) == 50


class TestFullPath:
    def test_without_root_returns_uid(self):
        assert full_path(None, "abc/file.png") == "abc/file.png"
        assert full_path("", "abc/file.png") == "abc/file.png"

    def test_joins_with_single_separator(self):
        assert full_path("uploads", "abc/file.png") == "uploads/abc/file.png"

    def test_does_not_double_separators(self):
        assert full_path("uploads/", "/abc/file.png") == "uploads/abc/file.png"

    def test_nested_root(self):
        assert full_path("site/media", "x") == "site/media/x"
