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

"""Rendering trace results for output.

Formats:

- text: Audit log grouped by key, one line per change plus the final value
- json: The same information as a JSON document, for scripting
- effective: The final values tree as YAML

Example:
    Text report for the classic two-override case:
        ```text
        --- Override and Final Values Log ---
        Key a.x:
          Base value: 1, Override value: 5 (o1.yaml)
          Final value: 5
        ---
        Key a.z:
          New value: 9 (o2.yaml)
          Final value: 9
        ---
        ```
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from helmtrace.results import TraceResult
from helmtrace.tree import format_path, render_value

__all__ = ["render_effective", "render_json", "render_text"]

REPORT_HEADER = "--- Override and Final Values Log ---"
GROUP_SEPARATOR = "---"
NO_VALUE = "<nil>"


def render_text(result: TraceResult) -> str:
    """Render the audit log as plain text.

    Keys appear in the order an override first touched them. Each group
    lists every entry for the key, oldest first, then the key's final value
    (or <nil> when the path no longer resolves in the final tree).
    """
    lines = [REPORT_HEADER]
    for path in result.history:
        lines.append(f"Key {format_path(path)}:")
        for entry in result.history.entries_for(path):
            lines.append(f"  {entry.description}")
        value, found = result.final_value(path)
        lines.append(f"  Final value: {render_value(value) if found else NO_VALUE}")
        lines.append(GROUP_SEPARATOR)
    return "\n".join(lines) + "\n"


def render_json(result: TraceResult) -> str:
    """Render the audit log as a JSON document."""
    keys: list[dict[str, Any]] = []
    for path in result.history:
        value, found = result.final_value(path)
        keys.append(
            {
                "path": format_path(path),
                "segments": list(path),
                "entries": [
                    entry.to_dict() for entry in result.history.entries_for(path)
                ],
                "final": {"found": found, "value": value},
            }
        )
    document = {
        "base": result.base_path,
        "overrides": list(result.override_paths),
        "keys": keys,
    }
    # default=str covers YAML timestamps (datetime.date)
    return json.dumps(document, indent=2, default=str) + "\n"


def render_effective(result: TraceResult) -> str:
    """Render the final values tree as block-style YAML."""
    return yaml.safe_dump(
        result.final_values, default_flow_style=False, sort_keys=False
    )
