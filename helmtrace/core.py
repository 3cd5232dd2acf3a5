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

"""Core orchestration for helmtrace.

This module ties loading, merging and resolution together into the single
workflow behind the `helmtrace` command.

Workflow:

1. Load the base values file
2. Load each override file and merge it, strictly in the order given
   (each override is fully merged before the next one is read)
3. Resolve the final value of every path an override touched

Example:
    Trace two overrides:
        ```python
        from helmtrace.core import trace_overrides

        result = trace_overrides(["values.yaml", "values-staging.yaml", "values-prod.yaml"])
        for path in result.history:
            for entry in result.history.entries_for(path):
                print(entry.description)
        ```
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from helmtrace.documents import load_document
from helmtrace.exceptions import UsageError
from helmtrace.logging import get_global_logger
from helmtrace.merge import merge_documents
from helmtrace.results import TraceResult
from helmtrace.tree import format_path, render_value

__all__ = ["trace_overrides"]


def trace_overrides(
    files: Sequence[Path | str],
    *,
    seed_base: bool = False,
) -> TraceResult:
    """Merge override files onto a base file and record where values came from.

    Args:
        files: The base file followed by one or more override files.
            Overrides are applied in the order given. The name recorded
            as an entry's source is the path exactly as given here.
        seed_base: If True, the final tree starts as a copy of the base so
            it holds the full effective configuration. Default is False.

    Returns:
        TraceResult with the final tree and the provenance log.

    Raises:
        UsageError: If fewer than two files are given.
        LoadError: If a file is missing or unreadable.
        ParseError: If a file is not a YAML mapping document.

    Note:
        Every override is compared against the original base, never against
        earlier overrides, so provenance always reads "how does this file
        differ from the base".
    """
    if len(files) < 2:
        raise UsageError("Please provide at least a base file and one override file.")

    logger = get_global_logger()
    base_name = str(files[0])
    override_names = tuple(str(f) for f in files[1:])
    total = 3

    logger.step(1, total, f"Loading base values: {base_name}")
    base = load_document(files[0])

    logger.step(2, total, f"Merging {len(override_names)} override file(s)...")
    if seed_base:
        logger.verbose("MERGE", "Seeding final values with the base document")

    # Lazy: each override is read only after the previous one is merged
    overrides = (
        (source, load_document(override_path))
        for source, override_path in zip(override_names, files[1:])
    )
    final, log = merge_documents(base, overrides, seed_base=seed_base)

    logger.step(3, total, "Resolving final values...")
    result = TraceResult(
        base_path=base_name,
        override_paths=override_names,
        final_values=final,
        history=log,
        seeded=seed_base,
    )
    for path in log:
        value, found = result.final_value(path)
        logger.debug(
            "RESOLVE",
            f"{format_path(path)} = {render_value(value) if found else '<nil>'}",
        )

    logger.verbose(
        "TRACE",
        f"{log.entry_count} change(s) across {len(log)} key(s) "
        f"from {len(override_names)} override file(s)",
    )
    return result
