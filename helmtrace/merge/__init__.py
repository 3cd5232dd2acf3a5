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

"""Merge-with-provenance for values documents.

Public API:

- merge_values: Merge one override mapping into a final tree (recursive)
- merge_documents: Fold several overrides in order against a fixed base
- ProvenanceLog / ProvenanceEntry / EntryKind: The audit trail
- resolve_final_value: Look up a key path in the final tree
"""

from .engine import merge_documents, merge_values
from .provenance import EntryKind, ProvenanceEntry, ProvenanceLog
from .resolver import resolve_final_value

__all__ = [
    "EntryKind",
    "ProvenanceEntry",
    "ProvenanceLog",
    "merge_documents",
    "merge_values",
    "resolve_final_value",
]
