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

"""Infrastructure layer for EntityId generation.

This module provides object-id generation for new entities.
"""

from bson import ObjectId

from doc_gate.core.documents.exceptions import InternalRepositoryError
from doc_gate.core.documents.repositories import EntityIdGenerator
from doc_gate.core.documents.value_objects import EntityId


class ObjectIdGenerator(EntityIdGenerator):
    """Object-id generator backed by ``bson.ObjectId``.

    Generates time-ordered 12-byte identifiers rendered as 24 hexadecimal
    characters, the native identity encoding of the document store.
    """

    def generate(self) -> EntityId:
        """Generate a new EntityId.

        Returns:
            EntityId: A new object-id identifier.

        Raises:
            InternalRepositoryError: If EntityId generation fails.
        """
        try:
            return EntityId(str(ObjectId()))
        except ValueError as exc:
            raise InternalRepositoryError(
                f"Failed to generate EntityId: {exc}"
            ) from exc
