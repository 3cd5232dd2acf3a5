# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Provenance log: which override changed what.

Every time an override adds or changes a value, the merge engine appends a
ProvenanceEntry to the ProvenanceLog under the key path it touched. Entries
for one path accumulate in the order the overrides were applied, and paths
are remembered in the order they were first touched.

Entry kinds and their report lines:

- NEW_VALUE: New value: 9 (values-prod.yaml)
- VALUE_CHANGED: Base value: 1, Override value: 5 (values-prod.yaml)
- NEW_LIST: New list: [a, b] (values-prod.yaml)
- LIST_CHANGED: Base list: [1, 2, 3], Override list: [1, 2] (values-prod.yaml)
- NEW_STRUCTURE: New map structure from values-prod.yaml

Example:
    Record and query entries:
        ```python
        from helmtrace.merge.provenance import EntryKind, ProvenanceLog

        log = ProvenanceLog()
        log.append(("image", "tag"), EntryKind.VALUE_CHANGED, "prod.yaml",
                   old="1.0", new="1.1")
        for entry in log.entries_for("image.tag"):
            print(entry.description)
        # Base value: 1.0, Override value: 1.1 (prod.yaml)
        ```
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from helmtrace.tree import KeyPath, format_path, parse_path, render_value

__all__ = ["EntryKind", "ProvenanceEntry", "ProvenanceLog"]


class EntryKind(Enum):
    """What an override did at a path."""

    NEW_VALUE = "new_value"
    VALUE_CHANGED = "value_changed"
    NEW_LIST = "new_list"
    LIST_CHANGED = "list_changed"
    NEW_STRUCTURE = "new_structure"


@dataclass(frozen=True)
class ProvenanceEntry:
    """One recorded fact about how a value got into the final tree.

    Attributes:
        path: Key path the override touched.
        kind: What happened at that path.
        source: Name of the override file that caused it.
        old: Base value (VALUE_CHANGED and LIST_CHANGED only).
        new: Override value (None for NEW_STRUCTURE).
    """

    path: KeyPath
    kind: EntryKind
    source: str
    old: Any = None
    new: Any = None

    @property
    def dotted_path(self) -> str:
        return format_path(self.path)

    @property
    def description(self) -> str:
        """Human-readable report line for this entry."""
        if self.kind is EntryKind.NEW_VALUE:
            return f"New value: {render_value(self.new)} ({self.source})"
        if self.kind is EntryKind.VALUE_CHANGED:
            return (
                f"Base value: {render_value(self.old)}, "
                f"Override value: {render_value(self.new)} ({self.source})"
            )
        if self.kind is EntryKind.NEW_LIST:
            return f"New list: {render_value(self.new)} ({self.source})"
        if self.kind is EntryKind.LIST_CHANGED:
            return (
                f"Base list: {render_value(self.old)}, "
                f"Override list: {render_value(self.new)} ({self.source})"
            )
        return f"New map structure from {self.source}"

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly dict for machine-readable reports."""
        return {
            "path": self.dotted_path,
            "kind": self.kind.value,
            "description": self.description,
            "source": self.source,
            "old": self.old,
            "new": self.new,
        }


class ProvenanceLog:
    """Append-only record of override events, keyed by key path.

    Paths are stored as tuples, so keys containing dots stay unambiguous.
    Lookups also accept dotted strings for convenience.

    Example:
        ```python
        log = ProvenanceLog()
        log.append(("a", "x"), EntryKind.NEW_VALUE, "o1.yaml", new=5)
        log.append(("a", "x"), EntryKind.VALUE_CHANGED, "o2.yaml", old=1, new=6)
        [e.source for e in log.entries_for("a.x")]  # ['o1.yaml', 'o2.yaml']
        list(log)  # [('a', 'x')]
        ```
    """

    def __init__(self) -> None:
        self._entries: dict[KeyPath, list[ProvenanceEntry]] = {}
        self._history: list[ProvenanceEntry] = []

    def append(
        self,
        path: KeyPath,
        kind: EntryKind,
        source: str,
        *,
        old: Any = None,
        new: Any = None,
    ) -> ProvenanceEntry:
        """Record one override event.

        Args:
            path: Key path the event applies to.
            kind: Kind of event.
            source: Override file that caused it.
            old: Base value, for *_CHANGED kinds.
            new: Override value.

        Returns:
            The entry that was appended.
        """
        path = tuple(path)
        entry = ProvenanceEntry(path=path, kind=kind, source=source, old=old, new=new)
        self._entries.setdefault(path, []).append(entry)
        self._history.append(entry)
        return entry

    def entries_for(self, path: KeyPath | str) -> list[ProvenanceEntry]:
        """Return the entries recorded for a path, oldest first.

        Args:
            path: Tuple of segments or a dotted string.

        Returns:
            A new list; empty if the path was never touched.
        """
        return list(self._entries.get(_as_key_path(path), []))

    def paths(self) -> list[KeyPath]:
        """Return every touched path, in first-touched order."""
        return list(self._entries)

    def history(self) -> list[ProvenanceEntry]:
        """Return every entry across all paths, in the order it was appended."""
        return list(self._history)

    def sources(self) -> list[str]:
        """Return the distinct override sources, in the order first recorded."""
        return list(dict.fromkeys(entry.source for entry in self._history))

    @property
    def entry_count(self) -> int:
        return len(self._history)

    def __iter__(self) -> Iterator[KeyPath]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, tuple)):
            return False
        return _as_key_path(path) in self._entries

    def __repr__(self) -> str:
        return f"ProvenanceLog(paths={len(self)}, entries={self.entry_count})"


def _as_key_path(path: KeyPath | str) -> KeyPath:
    if isinstance(path, str):
        return parse_path(path)
    return tuple(path)
