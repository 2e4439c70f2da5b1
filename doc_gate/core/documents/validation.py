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

"""Field-level validation errors collected for one operation attempt."""

from typing import Dict, Iterator, Optional, Tuple


class ValidationResult:
    """Mapping of field name to error message.

    An empty result means the entity is valid. Nested entities are folded in
    with ``merge`` so the caller sees a single coherent error set.
    """

    def __init__(self, errors: Optional[Dict[str, str]] = None) -> None:
        self._errors: Dict[str, str] = dict(errors or {})

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationResult":
        """Build a result holding exactly one error."""
        result = cls()
        result.add(field, message)
        return result

    def add(self, field: str, message: str) -> None:
        """Record an error for ``field``.

        A second error on the same field is appended to the first one.
        """
        existing = self._errors.get(field)
        self._errors[field] = f"{existing} {message}" if existing else message

    def merge(self, master_key: str, other: "ValidationResult") -> None:
        """Copy every error of ``other`` under ``<master_key>.<field>``.

        Args:
            master_key: Prefix identifying the nested entity.
            other: Errors reported by the nested entity.
        """
        for field, message in other.items():
            self.add(f"{master_key}.{field}", message)

    def has_errors(self) -> bool:
        """Return True if at least one error was recorded."""
        return bool(self._errors)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._errors.items()))

    def as_dict(self) -> Dict[str, str]:
        """Return a copy of the field to message mapping."""
        return dict(self._errors)

    def __bool__(self) -> bool:
        return self.has_errors()

    def __len__(self) -> int:
        return len(self._errors)

    def __contains__(self, field: object) -> bool:
        return field in self._errors

    def __getitem__(self, field: str) -> str:
        return self._errors[field]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self._errors == other._errors

    def __repr__(self) -> str:
        return f"ValidationResult({self._errors!r})"
