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

"""Audit record entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..repositories import Document
from ..value_objects import AuditTrace


@dataclass(frozen=True)
class AuditRecord:
    """Immutable audit record.

    Captures who did what to which entity, with before and after snapshots.
    Records outlive the entities they describe.

    Attributes:
        timestamp: UTC time the record was written.
        user_id: Acting user.
        entity_type: Display name of the entity type.
        entity_id: Identifier of the entity.
        trace: Operation tag.
        old_entity: Prior state, absent for CREATE and DELETE.
        new_entity: New state, absent for DELETE.
    """

    timestamp: datetime
    user_id: str
    entity_type: str
    entity_id: str
    trace: AuditTrace
    old_entity: Optional[Document] = None
    new_entity: Optional[Document] = None

    def to_document(self) -> Document:
        return {
            "timestamp": self.timestamp,
            "user_id": self.user_id,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "trace": self.trace.value,
            "old_entity": self.old_entity,
            "new_entity": self.new_entity,
        }

    @classmethod
    def from_document(cls, document: Document) -> "AuditRecord":
        return cls(
            timestamp=document["timestamp"],
            user_id=document["user_id"],
            entity_type=document["entity_type"],
            entity_id=document["entity_id"],
            trace=AuditTrace(document["trace"]),
            old_entity=document.get("old_entity"),
            new_entity=document.get("new_entity"),
        )
