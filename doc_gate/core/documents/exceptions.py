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

"""Typed failures raised by the generic repository pipeline.

Every failure carries the requesting user, the entity type and the entity id
(when known) so it can be logged and displayed without further lookups.
"""

from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from .validation import ValidationResult


class ErrorKind(str, Enum):
    """Category of a repository failure."""

    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    CONFLICT = "CONFLICT"
    STORAGE_FAILURE = "STORAGE_FAILURE"
    INTERNAL = "INTERNAL"


class RepositoryError(Exception):
    """Base exception for all repository errors."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
    ) -> None:
        """Initialize repository error.

        Args:
            message: Human-readable error description.
            user_id: Requesting user, if known.
            entity_type: Display name of the entity type, if known.
            entity_id: Identifier of the entity, if known.
        """
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.entity_type = entity_type
        self.entity_id = entity_id


class ForbiddenError(RepositoryError):
    """The access control policy denied the operation."""

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        user_id: str,
        entity_type: str,
        action: str,
        entity_id: Optional[str] = None,
    ) -> None:
        """Initialize forbidden error.

        Args:
            user_id: The user who was denied.
            entity_type: Display name of the entity type.
            action: Denied action (create, read, update, delete).
            entity_id: Identifier of the entity, if any.
        """
        target = f"a '{entity_type}'"
        if entity_id:
            target = f"{target} with id '{entity_id}'"
        super().__init__(
            f"User '{user_id}' does not have the right to {action} {target}.",
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
        )
        self.action = action


class EntityNotFoundError(RepositoryError):
    """No visible record exists for the given id."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        user_id: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"{entity_type} with id {entity_id} does not exist.",
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
        )


class ValidationFailedError(RepositoryError):
    """The entity failed validation.

    The full error set is carried so a caller can display every problem at
    once.
    """

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(
        self,
        errors: ValidationResult,
        user_id: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
    ) -> None:
        """Initialize validation error.

        Args:
            errors: Every field error found for the entity.
            user_id: Requesting user.
            entity_type: Display name of the entity type.
            entity_id: Identifier of the entity, if any.
        """
        fields = ", ".join(field for field, _ in errors.items())
        super().__init__(
            f"Validation failed for {entity_type or 'entity'}: {fields}",
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
        )
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str, **context) -> "ValidationFailedError":
        """Build a validation error holding a single field error."""
        return cls(ValidationResult.single(field, message), **context)


class ConcurrencyConflictError(RepositoryError):
    """The record has been updated by another actor.

    Retryable by the caller after re-fetching the current record.
    """

    kind = ErrorKind.CONFLICT

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        user_id: Optional[str] = None,
        expected_token: Optional[datetime] = None,
        actual_token: Optional[datetime] = None,
    ) -> None:
        """Initialize concurrency conflict error.

        Args:
            entity_type: Display name of the entity type.
            entity_id: Identifier of the entity.
            user_id: Requesting user.
            expected_token: Concurrency token supplied by the caller.
            actual_token: Concurrency token currently stored, if observed.
        """
        super().__init__(
            f"Current record {entity_type} {entity_id} has been updated by "
            f"another user: expected token {expected_token}, found {actual_token}",
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
        )
        self.expected_token = expected_token
        self.actual_token = actual_token


class StorageFailureError(RepositoryError):
    """The storage backend failed or did not acknowledge a write."""

    kind = ErrorKind.STORAGE_FAILURE


class InternalRepositoryError(RepositoryError):
    """An invariant of the entity contract was violated."""

    kind = ErrorKind.INTERNAL
