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

"""Explicit outcome of a repository operation."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .exceptions import ErrorKind, RepositoryError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Either a value or a typed repository error, never both.

    Attributes:
        value: Operation output on success (None for operations without one).
        error: Failure describing why the operation did not complete.
    """

    value: Optional[T] = None
    error: Optional[RepositoryError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "OperationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: RepositoryError) -> "OperationResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """True if the operation completed."""
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Kind of the failure, or None on success."""
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value or raise the carried error.

        Raises:
            RepositoryError: The failure of this operation.
        """
        if self.error is not None:
            raise self.error
        return self.value
