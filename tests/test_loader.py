"""
Tests for helmtrace.documents.loader module.

Tests values file loading including:
- YAML parsing and key normalization
- Missing and unreadable files
- Parse errors and non-mapping documents
- Empty documents
"""

from __future__ import annotations

import pytest

from helmtrace.documents import load_document
from helmtrace.exceptions import HelmTraceError, LoadError, ParseError
from helmtrace.logging import DefaultLogger, set_global_logger


class TestLoadDocument:
    """Tests for successful loads."""

    def test_load_simple_document(self, create_yaml_file, sample_base_values):
        """Test loading a values file written by the fixture."""
        path = create_yaml_file("values.yaml", sample_base_values)

        values = load_document(path)

        assert values == sample_base_values

    def test_accepts_string_path(self, create_yaml_file):
        """Test that a plain string path works."""
        path = create_yaml_file("values.yaml", {"a": 1})

        assert load_document(str(path)) == {"a": 1}

    def test_keys_normalized(self, tmp_test_dir):
        """Test that non-string YAML keys become strings."""
        path = tmp_test_dir / "values.yaml"
        path.write_text(
            """
ports:
  80: http
  443: https
flags:
  true: on-value
  null: nothing
""",
            encoding="utf-8",
        )

        values = load_document(path)

        assert values["ports"] == {"80": "http", "443": "https"}
        assert values["flags"] == {"true": "on-value", "null": "nothing"}

    def test_scalar_types_preserved(self, tmp_test_dir):
        """Test that YAML scalar types survive loading."""
        path = tmp_test_dir / "values.yaml"
        path.write_text(
            "count: 3\nratio: 0.5\nenabled: false\nname: web\nempty:\n",
            encoding="utf-8",
        )

        values = load_document(path)

        assert values == {
            "count": 3,
            "ratio": 0.5,
            "enabled": False,
            "name": "web",
            "empty": None,
        }

    def test_empty_file_is_empty_mapping(self, tmp_test_dir):
        """Test that an empty file loads as an empty mapping."""
        path = tmp_test_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_document(path) == {}

    def test_comment_only_file_is_empty_mapping(self, tmp_test_dir):
        """Test that a file with only comments loads as an empty mapping."""
        path = tmp_test_dir / "comments.yaml"
        path.write_text("# nothing to override yet\n", encoding="utf-8")

        assert load_document(path) == {}

    def test_empty_file_warns(self, tmp_test_dir, capsys):
        """Test that loading an empty file logs a warning."""
        set_global_logger(DefaultLogger())
        path = tmp_test_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")

        load_document(path)

        assert "YAML file is empty" in capsys.readouterr().err


class TestLoadErrors:
    """Tests for load and parse failures."""

    def test_missing_file_raises_load_error(self, tmp_test_dir):
        """Test that a missing file raises LoadError naming the file."""
        missing = tmp_test_dir / "nonexistent.yaml"

        with pytest.raises(LoadError, match="nonexistent.yaml") as exc_info:
            load_document(missing)

        assert exc_info.value.path == str(missing)
        assert not isinstance(exc_info.value, ParseError)

    def test_directory_raises_load_error(self, tmp_test_dir):
        """Test that a directory path raises LoadError."""
        with pytest.raises(LoadError, match="directory"):
            load_document(tmp_test_dir)

    def test_invalid_utf8_raises_load_error(self, tmp_test_dir):
        """Test that undecodable bytes raise LoadError."""
        path = tmp_test_dir / "binary.yaml"
        path.write_bytes(b"\xff\xfe\x00bad")

        with pytest.raises(LoadError):
            load_document(path)

    def test_invalid_yaml_raises_parse_error(self, tmp_test_dir):
        """Test that invalid YAML raises ParseError chained to the YAML error."""
        path = tmp_test_dir / "bad.yaml"
        path.write_text("invalid: yaml: syntax: error:", encoding="utf-8")

        with pytest.raises(ParseError, match="bad.yaml") as exc_info:
            load_document(path)

        assert exc_info.value.__cause__ is not None

    def test_non_mapping_raises_parse_error(self, tmp_test_dir):
        """Test that a top-level list raises ParseError."""
        path = tmp_test_dir / "list.yaml"
        path.write_text("- item1\n- item2\n", encoding="utf-8")

        with pytest.raises(ParseError, match="mapping"):
            load_document(path)

    def test_bare_scalar_raises_parse_error(self, tmp_test_dir):
        """Test that a top-level scalar raises ParseError."""
        path = tmp_test_dir / "scalar.yaml"
        path.write_text("just a string\n", encoding="utf-8")

        with pytest.raises(ParseError):
            load_document(path)

    def test_multi_document_raises_parse_error(self, tmp_test_dir):
        """Test that multi-document files are rejected."""
        path = tmp_test_dir / "multi.yaml"
        path.write_text("a: 1\n---\nb: 2\n", encoding="utf-8")

        with pytest.raises(ParseError):
            load_document(path)

    def test_recursive_alias_raises_parse_error(self, tmp_test_dir):
        """Test that an alias nested inside its own anchor is rejected."""
        path = tmp_test_dir / "loop.yaml"
        path.write_text("a: &x [*x]\n", encoding="utf-8")

        with pytest.raises(ParseError, match="recursive alias") as exc_info:
            load_document(path)

        assert "loop.yaml" in str(exc_info.value)
        assert exc_info.value.path == str(path)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_alias_expansion_limit_raises_parse_error(self, tmp_test_dir):
        """Test that nested aliases expanding to billions of nodes are rejected."""
        lines = ['l0: &l0 "lol"']
        for i in range(1, 8):
            refs = ", ".join([f"*l{i - 1}"] * 10)
            lines.append(f"l{i}: &l{i} [{refs}]")
        path = tmp_test_dir / "expand.yaml"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

        with pytest.raises(ParseError, match="nodes") as exc_info:
            load_document(path)

        assert "expand.yaml" in str(exc_info.value)

    def test_shared_alias_loads(self, tmp_test_dir):
        """Test that an anchor reused elsewhere loads as independent copies."""
        path = tmp_test_dir / "shared.yaml"
        path.write_text(
            "defaults: &d {replicas: 1}\nweb: *d\nworker: *d\n", encoding="utf-8"
        )

        values = load_document(path)

        assert values["web"] == {"replicas": 1}
        assert values["worker"] is not values["web"]

    def test_errors_share_base_class(self, tmp_test_dir):
        """Test that every load failure is a HelmTraceError."""
        path = tmp_test_dir / "list.yaml"
        path.write_text("- item\n", encoding="utf-8")

        with pytest.raises(HelmTraceError):
            load_document(path)
