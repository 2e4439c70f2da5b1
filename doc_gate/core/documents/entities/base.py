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

"""Base entity shared by every stored document type."""

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Any, ClassVar, Mapping, Optional, Type, TypeVar

from ..repositories import Document, EntityIdGenerator
from ..validation import ValidationResult
from ..value_objects import CrudOperation

E = TypeVar("E", bound="BaseEntity")


@dataclass(kw_only=True)
class BaseEntity:
    """Shape every stored entity satisfies.

    Concrete entity types are dataclasses deriving from this one; they add
    their own fields and extend ``validate`` with their own checks.

    Attributes:
        id: Object-id string, empty until the first successful create.
        concurrency_token: Timestamp of the last successful write. Doubles
            as the optimistic locking version and last-modified marker.
        soft_deleted: Soft delete flag; the physical record is never removed.
    """

    ID_FIELD: ClassVar[str] = "_id"

    id: str = ""
    concurrency_token: Optional[datetime] = None
    soft_deleted: bool = False

    def validate(
        self,
        operation: CrudOperation,
        allow_caller_supplied_id: bool,
    ) -> ValidationResult:
        """Validate the base invariants for ``operation``.

        Subclasses call ``super().validate`` and append their own checks to
        the returned result.

        Args:
            operation: Operation the entity is about to go through.
            allow_caller_supplied_id: Whether a create may carry its own id.

        Returns:
            ValidationResult, empty if the entity is valid.
        """
        result = ValidationResult()

        if operation != CrudOperation.CREATE and self.concurrency_token is None:
            result.add("concurrency_token", "Concurrency token must be specified.")

        if (
            operation == CrudOperation.CREATE
            and not allow_caller_supplied_id
            and self.id
        ):
            result.add("id", "Id must be empty.")

        if operation != CrudOperation.CREATE and not self.id:
            result.add("id", "Id must be specified.")

        return result

    def assign_id_if_absent(self, generator: EntityIdGenerator) -> str:
        """Set a new id only when none is set; never overwrites.

        Returns:
            The entity id after the call.
        """
        if not self.id:
            self.id = str(generator.generate())
        return self.id

    def to_document(self) -> Document:
        """Serialize the entity as a document keyed by field name."""
        document = asdict(self)
        document[self.ID_FIELD] = document.pop("id")
        return document

    @classmethod
    def from_document(cls: Type[E], document: Mapping[str, Any]) -> E:
        """Build an entity from a stored document.

        Unknown document fields are ignored. Subclasses holding nested
        entities override this to rebuild them.
        """
        data = dict(document)
        raw_id = data.pop(cls.ID_FIELD, "")
        data["id"] = str(raw_id) if raw_id else ""
        names = {field.name for field in fields(cls) if field.init}
        return cls(**{key: value for key, value in data.items() if key in names})
