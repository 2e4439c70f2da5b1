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

"""Wiring of generic repositories over the document store."""

import logging
from typing import Optional, Type, TypeVar

from pymongo.database import Database

from doc_gate.core.documents.acl import AccessControlPolicy
from doc_gate.core.documents.entities import BaseEntity
from doc_gate.core.documents.repositories import EntityIdGenerator
from doc_gate.orchestrator.documents import GenericRepository

from .audit import CollectionAuditSink
from .config import StoreSettings
from .id_generator import ObjectIdGenerator
from .mongo import MongoDocumentCollection

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseEntity)


def build_repository(
    database: Database,
    collection_name: str,
    entity_cls: Type[E],
    acl: AccessControlPolicy[E],
    entity_type: str,
    settings: StoreSettings,
    id_generator: Optional[EntityIdGenerator] = None,
) -> GenericRepository[E]:
    """Construct a GenericRepository bound to one collection.

    Args:
        database: Database holding the entity and audit collections.
        collection_name: Collection of the entity type's records.
        entity_cls: Entity dataclass stored in the collection.
        acl: Access control policy for the entity type.
        entity_type: Display name used in errors and audit records.
        settings: Store settings; ``enable_audit`` attaches the audit trail.
        id_generator: Identifier generator, defaults to object ids.

    Returns:
        A repository ready for use.
    """
    audit_sink = None
    if settings.enable_audit:
        audit_sink = CollectionAuditSink(
            MongoDocumentCollection.from_database(database, settings.audit_collection)
        )

    logger.debug(
        "Building %s repository on '%s' (audit %s)",
        entity_type,
        collection_name,
        "enabled" if audit_sink is not None else "disabled",
    )
    return GenericRepository(
        collection=MongoDocumentCollection.from_database(database, collection_name),
        entity_cls=entity_cls,
        acl=acl,
        entity_type=entity_type,
        id_generator=id_generator or ObjectIdGenerator(),
        audit_sink=audit_sink,
    )
