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

"""Generic repository enforcing access control, validation, optimistic
concurrency and audit for any entity type."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Generic, List, Mapping, Optional, Type, TypeVar

from doc_gate.core.documents.acl import AccessControlPolicy
from doc_gate.core.documents.entities import BaseEntity
from doc_gate.core.documents.exceptions import (
    ConcurrencyConflictError,
    EntityNotFoundError,
    ForbiddenError,
    InternalRepositoryError,
    RepositoryError,
    StorageFailureError,
    ValidationFailedError,
)
from doc_gate.core.documents.repositories import (
    AuditSink,
    Document,
    DocumentCollection,
    EntityIdGenerator,
    SortSpec,
    WriteOutcome,
)
from doc_gate.core.documents.results import OperationResult
from doc_gate.core.documents.value_objects import AuditTrace, CrudOperation

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseEntity)
R = TypeVar("R")

ID_FIELD = BaseEntity.ID_FIELD
TOKEN_FIELD = "concurrency_token"
DELETED_FIELD = "soft_deleted"
NOT_DELETED = {DELETED_FIELD: {"$ne": True}}

# Document stores keep datetimes at millisecond precision.
TOKEN_RESOLUTION = timedelta(milliseconds=1)


class GenericRepository(Generic[E]):
    """Repository sequencing ACL, validation, concurrency, storage and audit.

    Every public operation returns an ``OperationResult``; failures are one of
    Forbidden, NotFound, ValidationFailed, Conflict, StorageFailure or
    Internal. The repository keeps no mutable state, so one instance may be
    shared by concurrent callers; atomicity comes from the single-document
    writes of the storage port.

    Attributes:
        entity_type: Display name used in errors and audit records.
        acl: Access control policy of the entity type.
    """

    def __init__(
        self,
        collection: DocumentCollection,
        entity_cls: Type[E],
        acl: AccessControlPolicy[E],
        entity_type: str,
        id_generator: EntityIdGenerator,
        audit_sink: Optional[AuditSink] = None,
    ) -> None:
        """Initialize repository with its collaborators.

        Args:
            collection: Storage handle bound to the entity type's records.
            entity_cls: Entity dataclass used to rebuild stored documents.
            acl: Access control policy for the entity type.
            entity_type: Display name of the entity type.
            id_generator: Generator for identifiers of new entities.
            audit_sink: Audit trail; None disables auditing.
        """
        self._collection = collection
        self._entity_cls = entity_cls
        self._acl = acl
        self._entity_type = entity_type
        self._id_generator = id_generator
        self._audit_sink = audit_sink

    @property
    def entity_type(self) -> str:
        return self._entity_type

    @property
    def acl(self) -> AccessControlPolicy[E]:
        return self._acl

    def get_by_id(self, entity_id: str, user_id: str) -> OperationResult[E]:
        """Return the entity with the given id.

        Soft-deleted records are returned as well; only ``list`` hides them.

        Failures:
            Forbidden: The record exists but the user may not read it.
            NotFound: No record has this id.
        """
        return self._run("get_by_id", self._get_by_id, entity_id, user_id)

    def list(
        self,
        user_id: str,
        filter_doc: Optional[Mapping[str, Any]] = None,
        sort: Optional[SortSpec] = None,
    ) -> OperationResult[List[E]]:
        """Return every non-deleted entity the user may read.

        Args:
            user_id: Requesting user.
            filter_doc: Optional match document narrowing the query.
            sort: Optional ordering as (field, direction) pairs.

        Returns:
            A materialized list; the ACL is applied after the query.
        """
        return self._run("list", self._list, user_id, filter_doc, sort)

    def create(self, entity: E, user_id: str) -> OperationResult[E]:
        """Persist a new entity and return its stored form.

        The entity is assigned an id (unless it carries one) and a
        concurrency token.
        """
        return self._run("create", self._create, entity, user_id)

    def update(self, entity: E, user_id: str) -> OperationResult[E]:
        """Replace a stored entity if its concurrency token is current.

        Failures:
            Conflict: The stored record changed since the caller read it.
        """
        return self._run("update", self._update, entity, user_id)

    def delete(self, entity_id: str, user_id: str) -> OperationResult[None]:
        """Soft delete the entity with the given id.

        No concurrency precondition applies to a delete.
        """
        return self._run("delete", self._delete, entity_id, user_id)

    def _run(
        self,
        operation: str,
        step: Callable[..., R],
        *args: Any,
    ) -> OperationResult[R]:
        """Run one operation pipeline and convert its failure into a result."""
        try:
            return OperationResult.success(step(*args))
        except (StorageFailureError, InternalRepositoryError) as exc:
            logger.error(
                "%s %s failed: %s", self._entity_type, operation, exc.message
            )
            return OperationResult.failure(exc)
        except (ForbiddenError, ConcurrencyConflictError) as exc:
            logger.warning(
                "%s %s rejected: %s", self._entity_type, operation, exc.message
            )
            return OperationResult.failure(exc)
        except RepositoryError as exc:
            logger.info(
                "%s %s failed: %s", self._entity_type, operation, exc.message
            )
            return OperationResult.failure(exc)

    def _get_by_id(self, entity_id: str, user_id: str) -> E:
        document = self._collection.find_one({ID_FIELD: entity_id})
        entity = self._to_entity(document) if document is not None else None

        if entity is not None and not self._acl.can_read(entity, user_id):
            raise ForbiddenError(
                user_id=user_id,
                entity_type=self._entity_type,
                action="read",
                entity_id=entity_id,
            )

        if entity is None:
            raise EntityNotFoundError(
                entity_type=self._entity_type,
                entity_id=entity_id,
                user_id=user_id,
            )

        return entity

    def _list(
        self,
        user_id: str,
        filter_doc: Optional[Mapping[str, Any]],
        sort: Optional[SortSpec],
    ) -> List[E]:
        query: Mapping[str, Any] = dict(NOT_DELETED)
        if filter_doc:
            query = {"$and": [dict(NOT_DELETED), dict(filter_doc)]}

        documents = self._collection.find_many(query, sort)
        unsecured = [self._to_entity(document) for document in documents]
        return [entity for entity in unsecured if self._acl.can_read(entity, user_id)]

    def _create(self, entity: E, user_id: str) -> E:
        if not self._acl.can_create(entity, user_id):
            raise ForbiddenError(
                user_id=user_id,
                entity_type=self._entity_type,
                action="create",
            )

        self._ensure_valid(entity, CrudOperation.CREATE, True, user_id)

        entity.assign_id_if_absent(self._id_generator)
        entity.concurrency_token = self._next_token()

        outcome = self._collection.insert_one(entity.to_document())
        self._ensure_acknowledged(outcome, "create", entity.id, user_id)

        created = self._get_by_id(entity.id, user_id)
        logger.info(
            "User '%s' created %s '%s'", user_id, self._entity_type, created.id
        )

        self._audit(user_id, created.id, AuditTrace.CREATE, None, created)
        return created

    def _update(self, entity: E, user_id: str) -> E:
        self._ensure_valid(entity, CrudOperation.UPDATE, False, user_id)

        if not entity.id:
            raise InternalRepositoryError(
                f"A model of type {self._entity_type} has no id but passed "
                f"validation for update.",
                user_id=user_id,
                entity_type=self._entity_type,
            )

        if not self._acl.can_write(entity.id, user_id):
            raise ForbiddenError(
                user_id=user_id,
                entity_type=self._entity_type,
                action="update",
                entity_id=entity.id,
            )

        entity.assign_id_if_absent(self._id_generator)

        current = self._collection.find_one({ID_FIELD: entity.id})
        observed_token = entity.concurrency_token
        self._check_current(current, entity, user_id)

        entity.concurrency_token = self._next_token(observed_token)

        # Token in the filter makes the replace an atomic compare-and-swap.
        expected = {
            ID_FIELD: entity.id,
            TOKEN_FIELD: _as_utc(observed_token),
            **NOT_DELETED,
        }

        # The caller keeps its observed token unless the replace lands.
        try:
            outcome = self._collection.replace_one(expected, entity.to_document())
            self._ensure_acknowledged(outcome, "update", entity.id, user_id)

            if outcome.matched_count == 0:
                raise ConcurrencyConflictError(
                    entity_type=self._entity_type,
                    entity_id=entity.id,
                    user_id=user_id,
                    expected_token=observed_token,
                )
        except RepositoryError:
            entity.concurrency_token = observed_token
            raise

        updated = self._get_by_id(entity.id, user_id)
        logger.info(
            "User '%s' updated %s '%s'", user_id, self._entity_type, updated.id
        )

        self._audit(
            user_id,
            updated.id,
            AuditTrace.UPDATE,
            self._to_entity(current),
            updated,
        )
        return updated

    def _delete(self, entity_id: str, user_id: str) -> None:
        if not self._acl.can_write(entity_id, user_id):
            raise ForbiddenError(
                user_id=user_id,
                entity_type=self._entity_type,
                action="delete",
                entity_id=entity_id,
            )

        outcome = self._collection.update_fields(
            {ID_FIELD: entity_id},
            {DELETED_FIELD: True},
            current_date=(TOKEN_FIELD,),
        )
        self._ensure_acknowledged(outcome, "delete", entity_id, user_id)

        if outcome.matched_count == 0:
            logger.debug(
                "Delete of %s '%s' matched no record", self._entity_type, entity_id
            )
        logger.info(
            "User '%s' deleted %s '%s'", user_id, self._entity_type, entity_id
        )

        self._audit(user_id, entity_id, AuditTrace.DELETE, None, None)

    def _ensure_valid(
        self,
        entity: E,
        operation: CrudOperation,
        allow_caller_supplied_id: bool,
        user_id: str,
    ) -> None:
        errors = entity.validate(operation, allow_caller_supplied_id)
        if errors.has_errors():
            raise ValidationFailedError(
                errors,
                user_id=user_id,
                entity_type=self._entity_type,
                entity_id=entity.id or None,
            )

    def _check_current(
        self,
        current: Optional[Document],
        entity: E,
        user_id: str,
    ) -> None:
        """Verify the stored record still carries the caller's token.

        Raises:
            EntityNotFoundError: If the stored record is soft deleted.
            ConcurrencyConflictError: If no record exists or its token differs.
        """
        if current is not None and current.get(DELETED_FIELD):
            raise EntityNotFoundError(
                entity_type=self._entity_type,
                entity_id=entity.id,
                user_id=user_id,
            )

        actual_token = current.get(TOKEN_FIELD) if current is not None else None
        if (
            current is None
            or actual_token is None
            or entity.concurrency_token is None
            or _as_utc(actual_token) != _as_utc(entity.concurrency_token)
        ):
            raise ConcurrencyConflictError(
                entity_type=self._entity_type,
                entity_id=entity.id,
                user_id=user_id,
                expected_token=entity.concurrency_token,
                actual_token=actual_token,
            )

    def _ensure_acknowledged(
        self,
        outcome: WriteOutcome,
        action: str,
        entity_id: str,
        user_id: str,
    ) -> None:
        if not outcome.acknowledged:
            raise StorageFailureError(
                f"Unable to {action} document for user {user_id} in collection "
                f"'{self._entity_type}' with documentId '{entity_id}'.",
                user_id=user_id,
                entity_type=self._entity_type,
                entity_id=entity_id,
            )

    def _audit(
        self,
        user_id: str,
        entity_id: str,
        trace: AuditTrace,
        old_entity: Optional[E],
        new_entity: Optional[E],
    ) -> None:
        """Append an audit record; a failed append never fails the operation."""
        if self._audit_sink is None:
            return

        try:
            self._audit_sink.record(
                user_id=user_id,
                entity_type=self._entity_type,
                entity_id=entity_id,
                trace=trace,
                old_entity=old_entity.to_document() if old_entity else None,
                new_entity=new_entity.to_document() if new_entity else None,
            )
        except RepositoryError as exc:
            logger.warning(
                "Audit %s of %s '%s' by '%s' was not recorded: %s",
                trace.value,
                self._entity_type,
                entity_id,
                user_id,
                exc.message,
            )

    def _to_entity(self, document: Document) -> E:
        return self._entity_cls.from_document(document)

    def _next_token(self, previous: Optional[datetime] = None) -> datetime:
        """Return a fresh concurrency token strictly after ``previous``."""
        now = self._now_utc()
        token = now.replace(microsecond=now.microsecond // 1000 * 1000)
        if previous is not None:
            floor = _as_utc(previous) + TOKEN_RESOLUTION
            if token < floor:
                token = floor.replace(microsecond=floor.microsecond // 1000 * 1000)
        return token

    def _now_utc(self) -> datetime:
        """Return current UTC timestamp."""
        return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
