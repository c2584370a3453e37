"""
Tests for the generated-file helpers.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from schema_scaffold.errors import AlreadyExistsError
from schema_scaffold.files import base_file, byte_size, delete_file, exists_any_extension, read_file, write_file


class TestBaseFile:
    """Tests for base_file."""

    def test_strips_extension(self):
        assert base_file("a/b/Thing.tsx") == "a/b/Thing"

    def test_strips_only_last_extension(self):
        assert base_file("a/b/Thing.test.js") == "a/b/Thing.test"

    def test_accepts_paths(self):
        assert base_file(Path("a") / "Thing.ts") == str(Path("a") / "Thing")


class TestExistsAnyExtension:
    """Tests for exists_any_extension."""

    def test_other_source_extension_counts(self, tmp_path):
        (tmp_path / "x.js").write_text("")

        assert exists_any_extension(tmp_path / "x.ts")
        assert exists_any_extension(tmp_path / "x.tsx")

    def test_no_variant_exists(self, tmp_path):
        assert not exists_any_extension(tmp_path / "x.ts")

    def test_non_source_extension_checks_exact_path(self, tmp_path):
        (tmp_path / "styles.js").write_text("")

        assert not exists_any_extension(tmp_path / "styles.css")
        (tmp_path / "styles.css").write_text("")
        assert exists_any_extension(tmp_path / "styles.css")


class TestDeleteFile:
    """Tests for delete_file."""

    def test_deletes_every_source_variant(self, tmp_path):
        for ext in (".js", ".ts", ".tsx"):
            (tmp_path / f"Foo{ext}").write_text("")
        (tmp_path / "Foo.css").write_text("")

        delete_file(tmp_path / "Foo.ts")

        assert sorted(p.name for p in tmp_path.iterdir()) == ["Foo.css"]

    def test_deletes_variant_with_other_extension(self, tmp_path):
        (tmp_path / "Foo.js").write_text("")

        delete_file(tmp_path / "Foo.tsx")

        assert not (tmp_path / "Foo.js").exists()

    def test_non_source_file_deletes_exact_path(self, tmp_path):
        (tmp_path / "Foo.css").write_text("")
        (tmp_path / "Foo.scss").write_text("")

        delete_file(tmp_path / "Foo.css")

        assert not (tmp_path / "Foo.css").exists()
        assert (tmp_path / "Foo.scss").exists()

    def test_missing_non_source_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            delete_file(tmp_path / "missing.css")


class TestWriteFile:
    """Tests for write_file."""

    def test_write_creates_file_and_parents(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "out" / "sub" / "Foo.ts"

            write_file(path, "content")

            assert path.read_text() == "content"
            assert read_file(path) == "content"

    def test_write_raises_on_existing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "Foo.ts"
            path.write_text("original")

            with pytest.raises(AlreadyExistsError) as excinfo:
                write_file(path, "new content")

            assert str(excinfo.value) == f"{path} already exists."
            assert isinstance(excinfo.value, FileExistsError)
            assert path.read_text() == "original"

    def test_write_overwrites_existing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "Foo.ts"
            path.write_text("original")

            write_file(path, "new content", overwrite_existing=True)

            assert path.read_text() == "new content"

    def test_write_leaves_no_temporary_files(self, tmp_path):
        write_file(tmp_path / "Foo.ts", "content")

        assert [p.name for p in tmp_path.iterdir()] == ["Foo.ts"]


def test_byte_size():
    assert byte_size("abc") == 3
    assert byte_size("é") == 2


if __name__ == "__main__":
    pytest.main([__file__])
