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

"""Merge engine: fold override documents into a final tree with provenance.

Merge Behavior:
    The override drives the merge; the base is read-only reference state
    used to decide what counts as a change. For every key in the override:

    - **Mappings**: Recursively merged when the base also has a mapping at
      that key. Otherwise the whole override subtree is copied in and
      logged once as a new structure (no per-leaf entries).
    - **Lists**: Always replaced by the override list (never merged
      element-wise). Logged as changed when the base list differs, as new
      when the base has no list there.
    - **Scalars**: Always overwritten. Logged as changed when the base
      value differs, as new when the base lacks the key.

    The override's node kind always wins; shape mismatches are never errors.

Fixed Base:
    Every override is compared against the ORIGINAL base document, not
    against the result of the previous override. The final tree
    accumulates across overrides, but provenance always answers "how does
    this file differ from the base", so two overrides setting the same
    value both show up as changes.

Final Tree Seeding:
    By default the final tree only contains keys some override touched;
    base-only keys are not copied in. Pass seed_base=True to
    merge_documents() to start from a copy of the base and get the full
    effective configuration.

Example:
    Fold two overrides:
        ```python
        from helmtrace.merge import merge_documents

        base = {"a": {"x": 1, "y": 2}}
        final, log = merge_documents(
            base,
            [("o1.yaml", {"a": {"x": 5}}), ("o2.yaml", {"a": {"z": 9}})],
        )
        print(final)  # {'a': {'x': 5, 'z': 9}}
        for entry in log.entries_for("a.x"):
            print(entry.description)  # Base value: 1, Override value: 5 (o1.yaml)
        ```
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from copy import deepcopy
from typing import Any

from helmtrace.logging import get_global_logger
from helmtrace.merge.provenance import EntryKind, ProvenanceLog
from helmtrace.tree import KeyPath, NodeKind, format_path, node_kind, trees_equal

__all__ = ["merge_documents", "merge_values"]


def merge_values(
    base: Mapping[str, Any],
    override: Mapping[str, Any],
    path: KeyPath,
    log: ProvenanceLog,
    final: dict[str, Any],
    source: str,
) -> None:
    """Merge one override mapping into final, recording provenance.

    Args:
        base: Base mapping at this level (read-only).
        override: Override mapping at this level (read-only).
        path: Key path of this level; () at the document root.
        log: Provenance log to append to.
        final: Final-tree mapping at this level. Modified in place.
        source: Name of the override file, recorded on every entry.
    """
    logger = get_global_logger()

    for key, value in override.items():
        full_path = (*path, key)
        kind = node_kind(value)

        if kind is NodeKind.MAPPING:
            base_value = base.get(key)
            if node_kind(base_value) is NodeKind.MAPPING:
                if node_kind(final.get(key)) is not NodeKind.MAPPING:
                    final[key] = {}
                merge_values(base_value, value, full_path, log, final[key], source)
            else:
                final[key] = deepcopy(dict(value))
                log.append(full_path, EntryKind.NEW_STRUCTURE, source)
                logger.debug("MERGE", f"{format_path(full_path)}: new map structure")

        elif kind is NodeKind.SEQUENCE:
            # Lists are replaced wholesale, even when unchanged
            final[key] = deepcopy(list(value))
            base_value = base.get(key)
            if node_kind(base_value) is NodeKind.SEQUENCE:
                if not trees_equal(base_value, value):
                    log.append(
                        full_path,
                        EntryKind.LIST_CHANGED,
                        source,
                        old=deepcopy(base_value),
                        new=deepcopy(value),
                    )
                    logger.debug("MERGE", f"{format_path(full_path)}: list changed")
            else:
                log.append(full_path, EntryKind.NEW_LIST, source, new=deepcopy(value))
                logger.debug("MERGE", f"{format_path(full_path)}: new list")

        else:
            final[key] = value
            if key in base:
                if not trees_equal(base[key], value):
                    log.append(
                        full_path,
                        EntryKind.VALUE_CHANGED,
                        source,
                        old=deepcopy(base[key]),
                        new=value,
                    )
                    logger.debug("MERGE", f"{format_path(full_path)}: value changed")
            else:
                log.append(full_path, EntryKind.NEW_VALUE, source, new=value)
                logger.debug("MERGE", f"{format_path(full_path)}: new value")


def merge_documents(
    base: Mapping[str, Any],
    overrides: Iterable[tuple[str, Mapping[str, Any]]],
    *,
    log: ProvenanceLog | None = None,
    seed_base: bool = False,
) -> tuple[dict[str, Any], ProvenanceLog]:
    """Fold overrides into a final tree, in order, against a fixed base.

    Args:
        base: The base document. Never modified.
        overrides: (source name, document) pairs, applied in order.
        log: Existing log to append to. A new one is created if None.
        seed_base: If True, the final tree starts as a deep copy of base
            so it holds the full effective configuration. Default is False,
            where only override-touched keys appear in the final tree.

    Returns:
        A tuple (final, log) with the final tree and the provenance log.
    """
    logger = get_global_logger()
    if log is None:
        log = ProvenanceLog()
    final: dict[str, Any] = deepcopy(dict(base)) if seed_base else {}

    for source, document in overrides:
        before = log.entry_count
        merge_values(base, document, (), log, final, source)
        logger.verbose(
            "MERGE", f"Merged {source}: {log.entry_count - before} change(s)"
        )

    return final, log
