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

"""Value objects for the Documents domain.

All value objects are immutable and defined by their values, not identity.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class CrudOperation(str, Enum):
    """Kind of operation an entity is validated for."""

    READ = "READ"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class AuditTrace(str, Enum):
    """Operation tag recorded in the audit trail.

    Only mutating operations are traced.
    """

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class EntityId:
    """Object-id compatible identifier for a stored entity.

    Attributes:
        value: 24 hexadecimal characters.

    Raises:
        ValueError: If value is not a 24 character hexadecimal string.
    """

    value: str

    OBJECT_ID_PATTERN: ClassVar[str] = r'^[0-9a-f]{24}$'
    LENGTH: ClassVar[int] = 24

    def __post_init__(self) -> None:
        """Validate object-id format."""
        if len(self.value) != self.LENGTH:
            raise ValueError(
                f"EntityId must be exactly {self.LENGTH} characters, "
                f"got {len(self.value)}"
            )
        if not re.match(self.OBJECT_ID_PATTERN, self.value.lower()):
            raise ValueError(f"Invalid object id format: {self.value}")

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check whether a raw string is a well-formed entity id."""
        return (
            isinstance(value, str)
            and len(value) == cls.LENGTH
            and re.match(cls.OBJECT_ID_PATTERN, value.lower()) is not None
        )

    def __str__(self) -> str:
        """Return string representation."""
        return self.value
