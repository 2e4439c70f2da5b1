# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
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

"""Port interfaces (Protocols) for the Documents domain.

These define the contracts that infrastructure implementations must satisfy.
Using Protocol instead of ABC allows for structural subtyping (duck typing).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from .value_objects import AuditTrace, EntityId

Document = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]


@dataclass(frozen=True)
class WriteOutcome:
    """Storage acknowledgement of a single-document write.

    Attributes:
        acknowledged: False if the backend did not confirm the write.
        matched_count: Number of documents matched by the write filter.
    """

    acknowledged: bool
    matched_count: int = 0


class DocumentCollection(Protocol):
    """Storage port bound to one entity type's records.

    Filters are match documents keyed by field name; the identity field is
    ``_id``. Every write is atomic for a single document.
    """

    def find_one(self, filter_doc: Mapping[str, Any]) -> Optional[Document]:
        """Return the first document matching ``filter_doc``, or None."""
        ...

    def find_many(
        self,
        filter_doc: Mapping[str, Any],
        sort: Optional[SortSpec] = None,
    ) -> List[Document]:
        """Return every document matching ``filter_doc`` in ``sort`` order."""
        ...

    def insert_one(self, document: Document) -> WriteOutcome:
        """Insert a new document."""
        ...

    def replace_one(
        self,
        filter_doc: Mapping[str, Any],
        document: Document,
    ) -> WriteOutcome:
        """Replace the document matching ``filter_doc``."""
        ...

    def update_fields(
        self,
        filter_doc: Mapping[str, Any],
        values: Mapping[str, Any],
        current_date: Sequence[str] = (),
    ) -> WriteOutcome:
        """Set ``values`` on the matching document.

        Fields named in ``current_date`` are set to the storage server time.
        """
        ...


class AuditSink(Protocol):
    """Append-only trail of mutating operations."""

    def record(
        self,
        user_id: str,
        entity_type: str,
        entity_id: str,
        trace: AuditTrace,
        old_entity: Optional[Document] = None,
        new_entity: Optional[Document] = None,
    ) -> None:
        """Append one immutable audit record.

        Raises:
            StorageFailureError: If the record could not be written.
        """
        ...


class EntityIdGenerator(Protocol):
    """Generator port for creating entity identifiers."""

    def generate(self) -> EntityId:
        """Generate a new, globally unique EntityId."""
        ...
