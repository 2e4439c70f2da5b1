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

"""Access control contract consulted by the generic repository."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .entities import BaseEntity

E = TypeVar("E", bound=BaseEntity)


class AccessControlPolicy(ABC, Generic[E]):
    """Per entity type capability checks.

    There is no default policy: every entity type supplies its own and the
    repository receives it at construction. Write access is keyed by id
    because a delete caller never holds the full entity.
    """

    @abstractmethod
    def can_create(self, entity: E, user_id: str) -> bool:
        """Return True if ``user_id`` may create ``entity``."""

    @abstractmethod
    def can_write(self, entity_id: str, user_id: str) -> bool:
        """Return True if ``user_id`` may update or delete ``entity_id``."""

    @abstractmethod
    def can_read(self, entity: E, user_id: str) -> bool:
        """Return True if ``user_id`` may read the fetched ``entity``."""

    @abstractmethod
    def can_read_id(self, entity_id: str, user_id: str) -> bool:
        """Return True if ``user_id`` may read ``entity_id`` before it is fetched."""
