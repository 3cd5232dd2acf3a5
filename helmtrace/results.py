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

"""Public API return types for helmtrace.

Example:
    Using the trace result:
        ```python
        from helmtrace.core import trace_overrides

        result = trace_overrides(["values.yaml", "values-prod.yaml"])
        for path in result.history:
            value, found = result.final_value(path)
        ```

Note:
    Only public API return types belong in this module. Domain types
    (like ProvenanceEntry) stay co-located with their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from helmtrace.merge.provenance import ProvenanceLog
from helmtrace.merge.resolver import resolve_final_value
from helmtrace.tree import KeyPath


@dataclass(frozen=True)
class TraceResult:
    """Result from tracing overrides against a base values file.

    Attributes:
        base_path: The base file, as given by the caller.
        override_paths: Override files, in the order they were applied.
        final_values: The merged final tree. Holds only override-touched
            keys unless seeded is True.
        history: Provenance log of every add or change.
        seeded: True if the final tree was seeded with the base document.
    """

    base_path: str
    override_paths: tuple[str, ...]
    final_values: dict[str, Any]
    history: ProvenanceLog
    seeded: bool = False

    def final_value(self, path: KeyPath | str) -> tuple[Any, bool]:
        """Resolve a path in the final tree; see resolve_final_value()."""
        return resolve_final_value(self.final_values, path)
