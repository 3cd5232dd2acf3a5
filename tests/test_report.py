"""
Tests for helmtrace.report module.
"""

from __future__ import annotations

import json

import pytest
import yaml

from helmtrace.merge import merge_documents
from helmtrace.report import render_effective, render_json, render_text
from helmtrace.results import TraceResult


def _result(base, overrides, seed_base=False) -> TraceResult:
    final, log = merge_documents(base, overrides, seed_base=seed_base)
    return TraceResult(
        base_path="base.yaml",
        override_paths=tuple(source for source, _ in overrides),
        final_values=final,
        history=log,
        seeded=seed_base,
    )


@pytest.fixture
def scenario_result() -> TraceResult:
    """Provide the result of the base + o1 + o2 scenario."""
    return _result(
        {"a": {"x": 1, "y": 2}},
        [("o1.yaml", {"a": {"x": 5}}), ("o2.yaml", {"a": {"z": 9}})],
    )


class TestRenderText:
    """Tests for the plain-text audit log."""

    def test_scenario(self, scenario_result):
        """Test the full text report for the two-override scenario."""
        assert render_text(scenario_result) == (
            "--- Override and Final Values Log ---\n"
            "Key a.x:\n"
            "  Base value: 1, Override value: 5 (o1.yaml)\n"
            "  Final value: 5\n"
            "---\n"
            "Key a.z:\n"
            "  New value: 9 (o2.yaml)\n"
            "  Final value: 9\n"
            "---\n"
        )

    def test_no_changes(self):
        """Test that an override with no changes prints only the header."""
        result = _result({"a": 1}, [("o1.yaml", {"a": 1})])

        assert render_text(result) == "--- Override and Final Values Log ---\n"

    def test_multiple_entries_per_key(self):
        """Test that every entry for a key is listed in order."""
        result = _result({"x": 1}, [("o1.yaml", {"x": 2}), ("o2.yaml", {"x": 3})])

        lines = render_text(result).splitlines()

        assert lines[1:5] == [
            "Key x:",
            "  Base value: 1, Override value: 2 (o1.yaml)",
            "  Base value: 1, Override value: 3 (o2.yaml)",
            "  Final value: 3",
        ]

    def test_unresolved_final_value(self):
        """Test the <nil> marker when a later override removes the path."""
        result = _result(
            {"a": {"x": 1}},
            [("o1.yaml", {"a": {"x": 5}}), ("o2.yaml", {"a": 7})],
        )

        text = render_text(result)

        assert "Key a.x:\n  Base value: 1, Override value: 5 (o1.yaml)\n  Final value: <nil>\n" in text
        assert "Key a:\n  Base value: {x: 1}, Override value: 7 (o2.yaml)\n  Final value: 7\n" in text

    def test_structures_and_lists(self):
        """Test rendering of new structures and lists."""
        result = _result(
            {"hosts": ["a"]},
            [("o1.yaml", {"hosts": ["b", "c"], "tls": {"enabled": True}})],
        )

        text = render_text(result)

        assert "  Base list: [a], Override list: [b, c] (o1.yaml)\n  Final value: [b, c]\n" in text
        assert "  New map structure from o1.yaml\n  Final value: {enabled: true}\n" in text


class TestRenderJson:
    """Tests for the JSON report."""

    def test_scenario(self, scenario_result):
        """Test the JSON document for the two-override scenario."""
        document = json.loads(render_json(scenario_result))

        assert document["base"] == "base.yaml"
        assert document["overrides"] == ["o1.yaml", "o2.yaml"]
        assert [key["path"] for key in document["keys"]] == ["a.x", "a.z"]
        first = document["keys"][0]
        assert first["segments"] == ["a", "x"]
        assert first["final"] == {"found": True, "value": 5}
        assert first["entries"][0]["kind"] == "value_changed"
        assert first["entries"][0]["old"] == 1
        assert first["entries"][0]["source"] == "o1.yaml"

    def test_dates_serialized(self):
        """Test that YAML timestamps do not break JSON output."""
        from datetime import date

        result = _result({}, [("o1.yaml", {"released": date(2024, 5, 1)})])

        document = json.loads(render_json(result))

        assert document["keys"][0]["final"]["value"] == "2024-05-01"


class TestRenderEffective:
    """Tests for the effective configuration output."""

    def test_seeded_tree_dumped(self):
        """Test that the seeded final tree dumps as YAML in key order."""
        result = _result(
            {"b": 1, "a": {"x": 1}},
            [("o1.yaml", {"a": {"x": 2}})],
            seed_base=True,
        )

        text = render_effective(result)

        assert yaml.safe_load(text) == {"b": 1, "a": {"x": 2}}
        assert text.index("b:") < text.index("a:")

    def test_empty_tree(self):
        """Test that an empty final tree dumps as an empty mapping."""
        result = _result({}, [("o1.yaml", {})])

        assert yaml.safe_load(render_effective(result)) == {}
