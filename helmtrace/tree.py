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

"""Tree values: the in-memory shape of a values document.

A values document is a tree built from three kinds of node:

- **Mapping**: dict with string keys
- **Sequence**: list of tree values
- **Scalar**: anything else PyYAML's safe loader yields (str, int, float,
  bool, None, datetime.date, ...)

Trees stay plain dicts and lists so they can be dumped back to YAML or JSON
without conversion. The node kind is computed in exactly one place,
node_kind(), and consumers dispatch on the returned NodeKind.

Key paths address a location in a mapping-rooted tree. They are tuples of
key segments; the empty tuple is the document root. For reporting they are
joined with dots (a.b.c).

Example:
    Normalize a freshly parsed document:
        ```python
        import yaml
        from helmtrace.tree import normalize_tree

        raw = yaml.safe_load("ports:\\n  80: http\\n  443: https\\n")
        tree = normalize_tree(raw)
        print(tree)  # {'ports': {'80': 'http', '443': 'https'}}
        ```
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

import yaml

__all__ = [
    "KeyPath",
    "MAX_TREE_NODES",
    "NodeKind",
    "format_path",
    "node_kind",
    "normalize_tree",
    "parse_path",
    "render_scalar",
    "render_value",
    "trees_equal",
]

KeyPath = tuple[str, ...]

# Alias-expanded size limit for a single document
MAX_TREE_NODES = 1_000_000


class NodeKind(Enum):
    """The three kinds of node a tree value can be."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def node_kind(value: Any) -> NodeKind:
    """Classify a tree value.

    Tuples count as sequences so trees built in Python code behave like
    trees loaded from YAML.
    """
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


# -------------------------------
# Normalization
# -------------------------------


def render_scalar(value: Any) -> str:
    """Render a scalar the way it would be spelled in YAML.

    Args:
        value: A scalar tree value.

    Returns:
        "true"/"false" for booleans, "null" for None, strings unchanged,
        and str() for everything else (numbers, dates).
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return str(value)


def normalize_tree(raw: Any, *, max_nodes: int = MAX_TREE_NODES) -> Any:
    """Return a copy of a parsed document where every mapping key is a string.

    YAML allows keys such as 80, true or 2024-01-01, which the safe loader
    turns into int, bool and date objects. Downstream code addresses values
    by string path segments, so non-string keys are converted with
    render_scalar(). Mappings nested inside sequences are normalized too.

    The input is never mutated. If two keys collapse onto the same string
    (e.g. 1 and "1"), the one that comes later in the document wins.

    The safe loader returns YAML aliases as shared objects. Shared subtrees
    are copied out independently, but a container that contains itself
    (a: &x [*x]) or a document that expands past max_nodes (nested alias
    bombs) is rejected.

    Args:
        raw: A value as returned by yaml.safe_load().
        max_nodes: Upper bound on the number of nodes in the copied tree.

    Returns:
        The normalized tree.

    Raises:
        ValueError: If the input is recursive or expands past max_nodes.
    """
    active: set[int] = set()
    remaining = max_nodes

    def _copy(value: Any) -> Any:
        nonlocal remaining
        remaining -= 1
        if remaining < 0:
            raise ValueError(f"document expands to more than {max_nodes} nodes")

        kind = node_kind(value)
        if kind is NodeKind.SCALAR:
            return value
        if id(value) in active:
            raise ValueError("document contains a recursive alias")

        active.add(id(value))
        try:
            if kind is NodeKind.MAPPING:
                return {
                    key if isinstance(key, str) else render_scalar(key): _copy(item)
                    for key, item in value.items()
                }
            return [_copy(item) for item in value]
        finally:
            active.discard(id(value))

    return _copy(raw)


# -------------------------------
# Comparison
# -------------------------------


def trees_equal(left: Any, right: Any) -> bool:
    """Deep structural equality with type-strict scalars.

    Python considers 1 == True and 1 == 1.0, but in a values file those are
    different settings, so scalars are only equal when their types match.
    Mapping key order is ignored; sequence order is not.

    Args:
        left: First tree value.
        right: Second tree value.

    Returns:
        True if both trees have the same shape and values.
    """
    kind = node_kind(left)
    if kind is not node_kind(right):
        return False
    if kind is NodeKind.MAPPING:
        if left.keys() != right.keys():
            return False
        return all(trees_equal(left[key], right[key]) for key in left)
    if kind is NodeKind.SEQUENCE:
        if len(left) != len(right):
            return False
        return all(trees_equal(a, b) for a, b in zip(left, right))
    return type(left) is type(right) and left == right


# -------------------------------
# Paths
# -------------------------------


def format_path(path: KeyPath) -> str:
    """Join key path segments with dots ("" for the root)."""
    return ".".join(path)


def parse_path(text: str) -> KeyPath:
    """Split a dotted path into segments ("" is the root).

    Keys that themselves contain dots cannot be addressed this way; pass
    a tuple of segments where that matters.
    """
    if not text:
        return ()
    return tuple(text.split("."))


# -------------------------------
# Rendering
# -------------------------------


def render_value(value: Any) -> str:
    """Render a tree value for a single line of human-readable output.

    Scalars use render_scalar(). Sequences and mappings are dumped as YAML
    flow style on one line, e.g. [1, 2, 3] or {name: web, port: 80}.

    Args:
        value: Any tree value.

    Returns:
        A single-line string.
    """
    if node_kind(value) is NodeKind.SCALAR:
        return render_scalar(value)
    if isinstance(value, tuple):
        value = list(value)
    return yaml.safe_dump(
        value,
        default_flow_style=True,
        sort_keys=False,
        width=float("inf"),
    ).strip()
