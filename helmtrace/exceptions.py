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

"""Exception hierarchy for helmtrace.

This module defines the errors a trace run can end with:

- UsageError: The tool was invoked incorrectly (e.g., fewer than two files)
- LoadError: A values file could not be read (missing, unreadable)
- ParseError: A values file was read but is not a valid YAML mapping

All exceptions inherit from HelmTraceError, allowing library users to catch
every helmtrace error with a single except clause if needed. The merge
algorithm itself never raises: shape mismatches between base and override
are resolved by policy (the override wins).

Example:
    Catching specific error types:
        ```python
        from helmtrace.core import trace_overrides
        from helmtrace.exceptions import LoadError, UsageError

        try:
            result = trace_overrides(["values.yaml", "values-prod.yaml"])
        except UsageError as e:
            print(f"Usage error: {e}")
        except LoadError as e:
            print(f"Could not load values: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "HelmTraceError",
    "UsageError",
    "LoadError",
    "ParseError",
]


class HelmTraceError(Exception):
    """Base exception for all helmtrace errors."""

    pass


class UsageError(HelmTraceError):
    """Raised when a trace is requested with invalid arguments.

    Currently this means fewer than two files were given: a trace needs
    a base document and at least one override document.
    """

    pass


class LoadError(HelmTraceError):
    """Raised when a values file cannot be read.

    This exception is raised when:

    - The file does not exist
    - The path is a directory
    - The file cannot be opened or decoded as UTF-8

    Attributes:
        path: The offending file, as given by the caller.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ParseError(LoadError):
    """Raised when a values file is not a valid YAML mapping document.

    This exception is raised when:

    - The YAML has syntax errors
    - The file contains more than one YAML document
    - The top-level value is not a mapping (e.g., a list or a bare string)

    ParseError is a LoadError so callers that only care whether a file
    could be used can catch LoadError alone.
    """

    pass
