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

"""Documents domain module: entity, access control and storage contracts."""

from .acl import AccessControlPolicy
from .entities import AuditRecord, BaseEntity
from .exceptions import (
    ConcurrencyConflictError,
    EntityNotFoundError,
    ErrorKind,
    ForbiddenError,
    InternalRepositoryError,
    RepositoryError,
    StorageFailureError,
    ValidationFailedError,
)
from .repositories import (
    AuditSink,
    Document,
    DocumentCollection,
    EntityIdGenerator,
    SortSpec,
    WriteOutcome,
)
from .results import OperationResult
from .validation import ValidationResult
from .value_objects import AuditTrace, CrudOperation, EntityId

__all__ = [
    "AccessControlPolicy",
    "AuditRecord",
    "BaseEntity",
    "ConcurrencyConflictError",
    "EntityNotFoundError",
    "ErrorKind",
    "ForbiddenError",
    "InternalRepositoryError",
    "RepositoryError",
    "StorageFailureError",
    "ValidationFailedError",
    "AuditSink",
    "Document",
    "DocumentCollection",
    "EntityIdGenerator",
    "SortSpec",
    "WriteOutcome",
    "OperationResult",
    "ValidationResult",
    "AuditTrace",
    "CrudOperation",
    "EntityId",
]
