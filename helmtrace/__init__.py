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

"""helmtrace - trace where your Helm values come from

A small CLI and library that merges override values files onto a base
values file and reports every value an override added or changed, naming
the file responsible and showing the final value.

helmtrace provides:

- Deep merge of YAML values (mappings merge, lists and scalars replace)
- A provenance log keyed by dotted path (a.b.c)
- Change detection always relative to the original base file
- Text or JSON audit reports, or the full effective configuration

Quick Start:
Trace two overrides:

    $ helmtrace values.yaml values-staging.yaml values-prod.yaml

For full CLI documentation:

    $ helmtrace --help

Package Structure:

- cli: Command-line interface with argparse
- core: trace_overrides() orchestration
- documents: YAML loading
- merge: Merge engine, provenance log, final-value resolver
- report: Text, JSON and YAML rendering
- tree: Tree value model and normalization
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Trace which override file set each Helm value"

# Re-export commonly used functions for convenience
from helmtrace.core import trace_overrides
from helmtrace.documents import load_document
from helmtrace.exceptions import (
    HelmTraceError,
    LoadError,
    ParseError,
    UsageError,
)
from helmtrace.merge import (
    EntryKind,
    ProvenanceEntry,
    ProvenanceLog,
    merge_documents,
    merge_values,
    resolve_final_value,
)
from helmtrace.results import TraceResult
from helmtrace.tree import normalize_tree

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "trace_overrides",
    "load_document",
    "normalize_tree",
    "merge_values",
    "merge_documents",
    "resolve_final_value",
    "EntryKind",
    "ProvenanceEntry",
    "ProvenanceLog",
    "TraceResult",
    "HelmTraceError",
    "UsageError",
    "LoadError",
    "ParseError",
]
