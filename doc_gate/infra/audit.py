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

"""Audit trail stored in a document collection."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from doc_gate.core.documents.entities import AuditRecord
from doc_gate.core.documents.exceptions import StorageFailureError
from doc_gate.core.documents.repositories import Document, DocumentCollection
from doc_gate.core.documents.value_objects import AuditTrace

logger = logging.getLogger(__name__)


class CollectionAuditSink:
    """AuditSink appending one document per mutating operation.

    Records are only ever inserted; nothing in this package updates or
    removes them.
    """

    def __init__(self, collection: DocumentCollection) -> None:
        """Initialize the sink.

        Args:
            collection: Collection receiving audit documents.
        """
        self._collection = collection

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
            StorageFailureError: If the write failed or was not acknowledged.
        """
        record = AuditRecord(
            timestamp=self._now_utc(),
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
            trace=trace,
            old_entity=old_entity,
            new_entity=new_entity,
        )
        outcome = self._collection.insert_one(record.to_document())
        if not outcome.acknowledged:
            raise StorageFailureError(
                f"Unable to record {trace.value} audit for {entity_type} '{entity_id}'.",
                user_id=user_id,
                entity_type=entity_type,
                entity_id=entity_id,
            )
        logger.debug("Audited %s of %s '%s'", trace.value, entity_type, entity_id)

    def find_by_entity(self, entity_type: str, entity_id: str) -> List[AuditRecord]:
        """Return the audit trail of one entity, oldest first."""
        documents = self._collection.find_many(
            {"entity_type": entity_type, "entity_id": entity_id},
            [("timestamp", 1)],
        )
        return [AuditRecord.from_document(document) for document in documents]

    def _now_utc(self) -> datetime:
        """Return current UTC timestamp."""
        return datetime.now(timezone.utc)
