"""Tests for schema file discovery."""

from pathlib import Path

import pytest

from crudforge.core.errors import SchemaUnreadableError
from crudforge.core.fileset import discover_schema_files, load_schema_text


def test_single_file(tmp_path: Path):
    schema = tmp_path / "schema.prisma"
    schema.write_text("model A {\n  id Int\n}\n")
    assert discover_schema_files(schema) == [schema]
    assert load_schema_text(schema).startswith("model A")


def test_directory_fragments_joined_in_name_order(tmp_path: Path):
    (tmp_path / "b.prisma").write_text("model B {\n  id Int\n}")
    (tmp_path / "a.prisma").write_text("model A {\n  id Int\n}")
    (tmp_path / "notes.txt").write_text("ignored")

    files = discover_schema_files(tmp_path)
    assert [f.name for f in files] == ["a.prisma", "b.prisma"]
    assert load_schema_text(tmp_path) == "model A {\n  id Int\n}\nmodel B {\n  id Int\n}"


def test_missing_path(tmp_path: Path):
    with pytest.raises(SchemaUnreadableError, match="does not exist"):
        load_schema_text(tmp_path / "nope.prisma")


def test_directory_without_fragments(tmp_path: Path):
    with pytest.raises(SchemaUnreadableError, match="No .prisma files"):
        discover_schema_files(tmp_path)


def test_empty_schema(tmp_path: Path):
    schema = tmp_path / "schema.prisma"
    schema.write_text("  \n")
    with pytest.raises(SchemaUnreadableError, match="empty"):
        load_schema_text(schema)


def test_invalid_utf8(tmp_path: Path):
    schema = tmp_path / "schema.prisma"
    schema.write_bytes(b'model A {\n  name String @default("\xff")\n}\n')
    with pytest.raises(SchemaUnreadableError, match="not valid UTF-8"):
        load_schema_text(schema)
