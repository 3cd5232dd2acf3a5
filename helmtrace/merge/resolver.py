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

"""Look up values in a merged final tree by key path."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from helmtrace.tree import KeyPath, NodeKind, node_kind, parse_path

__all__ = ["resolve_final_value"]


def resolve_final_value(
    final: Mapping[str, Any], path: KeyPath | str
) -> tuple[Any, bool]:
    """Resolve a key path against the final tree.

    Args:
        final: The merged final tree.
        path: Tuple of segments, or a dotted string such as "a.b.c".
            The empty path resolves to the tree itself.

    Returns:
        A tuple (value, found). found is False when a segment is missing
        or an intermediate segment is not a mapping; value is then None.
        A stored None is returned as (None, True).

    Example:
        ```python
        resolve_final_value({"a": {"b": 1}}, "a.b")    # (1, True)
        resolve_final_value({"a": {"b": 1}}, "a.b.c")  # (None, False)
        resolve_final_value({"a": [1, 2]}, "a.0")      # (None, False)
        ```
    """
    segments = parse_path(path) if isinstance(path, str) else tuple(path)

    current: Any = final
    for segment in segments:
        if node_kind(current) is not NodeKind.MAPPING or segment not in current:
            return None, False
        current = current[segment]
    return current, True
