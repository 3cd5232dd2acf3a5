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

"""Loading values documents from disk.

A values document is a single YAML document whose top level is a mapping,
such as a Helm chart's values.yaml. Loading reads the file, parses it with
PyYAML's safe loader and normalizes it so every mapping key is a string.

Error Handling:
    - LoadError: File doesn't exist, is a directory, or can't be read
    - ParseError: YAML syntax errors, multiple documents, a top level
        that is not a mapping, or aliases that recurse or expand past
        MAX_TREE_NODES
    - All errors name the offending file and are chained with "from err"

Empty Files:
    A file with no content (or only comments) loads as an empty mapping,
    with a warning. An empty override simply changes nothing.

Example:
    Basic usage:
        ```python
        from pathlib import Path
        from helmtrace.documents import load_document

        values = load_document(Path("charts/web/values.yaml"))
        print(values["image"]["tag"])
        ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from helmtrace.exceptions import LoadError, ParseError
from helmtrace.logging import get_global_logger
from helmtrace.tree import normalize_tree

__all__ = ["load_document"]


def _read_text(p: Path) -> str:
    """Reads a file as UTF-8 text.

    Raises:
        LoadError: When the file does not exist, is a directory, or cannot
            be read or decoded.
    """
    if not p.exists():
        raise LoadError(f"file not found: {p}", path=str(p))
    if p.is_dir():
        raise LoadError(f"expected a file but found a directory: {p}", path=str(p))
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise LoadError(f"failed to read file {p}: {err}", path=str(p)) from err


def _print_yaml_content(data: dict[str, Any], indent: int = 0) -> None:
    """Print YAML content in a readable format for debug mode."""
    logger = get_global_logger()

    # The logger.debug() call will only print if debug mode is enabled
    yaml_str = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    for line in yaml_str.split("\n"):
        if line.strip():
            logger.debug("LOAD", " " * indent + line)


def load_document(path: Path | str) -> dict[str, Any]:
    """Loads a values document and returns it as a normalized tree.

    Args:
        path: Path to the YAML file.

    Returns:
        The top-level mapping, with string keys at every level. Empty
            documents yield an empty dict.

    Raises:
        LoadError: If the file is missing or unreadable.
        ParseError: If the content is not a single YAML mapping document.
    """
    logger = get_global_logger()
    p = Path(path)

    logger.verbose("LOAD", f"Loading: {p}")
    text = _read_text(p)

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise ParseError(f"failed to parse file {p}: {err}", path=str(p)) from err

    if data is None:
        logger.warning("LOAD", f"YAML file is empty: {p}")
        return {}
    if not isinstance(data, dict):
        raise ParseError(
            f"top-level YAML must be a mapping (dict), got {type(data).__name__}: {p}",
            path=str(p),
        )

    try:
        tree = normalize_tree(data)
    except (ValueError, RecursionError) as err:
        raise ParseError(f"failed to parse file {p}: {err}", path=str(p)) from err
    logger.verbose("LOAD", f"Parsed {p.name}: {len(tree)} top-level key(s)")
    logger.debug("LOAD", f"--- Content from {p.name} ---")
    _print_yaml_content(tree, indent=2)
    return tree
