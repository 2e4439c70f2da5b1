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

"""Store settings loaded from the environment or a YAML file."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "DOC_GATE_"
DEFAULT_AUDIT_COLLECTION = "AuditTraces"
DEFAULT_SERVER_SELECTION_TIMEOUT_MS = 5000

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class StoreSettings:
    """Connection and audit settings for the document store.

    Attributes:
        mongo_uri: Connection string of the document store.
        database_name: Database holding entity and audit collections.
        audit_collection: Collection receiving audit records.
        enable_audit: Whether repositories record an audit trail.
        server_selection_timeout_ms: Driver server selection timeout.
    """

    mongo_uri: str
    database_name: str
    audit_collection: str = DEFAULT_AUDIT_COLLECTION
    enable_audit: bool = False
    server_selection_timeout_ms: int = DEFAULT_SERVER_SELECTION_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.mongo_uri:
            raise ValueError("mongo_uri must be configured")
        if not self.database_name:
            raise ValueError("database_name must be configured")
        if self.server_selection_timeout_ms <= 0:
            raise ValueError(
                "server_selection_timeout_ms must be positive, "
                f"got {self.server_selection_timeout_ms}"
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "StoreSettings":
        """Build settings from a plain mapping of setting names."""
        return cls(
            mongo_uri=values.get("mongo_uri") or "",
            database_name=values.get("database_name") or "",
            audit_collection=values.get("audit_collection") or DEFAULT_AUDIT_COLLECTION,
            enable_audit=_as_bool(values.get("enable_audit", False)),
            server_selection_timeout_ms=int(
                values.get(
                    "server_selection_timeout_ms",
                    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
                )
            ),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StoreSettings":
        """Read ``DOC_GATE_*`` environment variables.

        Raises:
            ValueError: If the URI or database name is missing.
        """
        environ = os.environ if environ is None else environ
        values = {
            "mongo_uri": environ.get(f"{ENV_PREFIX}MONGO_URI"),
            "database_name": environ.get(f"{ENV_PREFIX}DATABASE"),
            "audit_collection": environ.get(f"{ENV_PREFIX}AUDIT_COLLECTION"),
            "enable_audit": environ.get(f"{ENV_PREFIX}ENABLE_AUDIT", "false"),
            "server_selection_timeout_ms": environ.get(
                f"{ENV_PREFIX}SERVER_SELECTION_TIMEOUT_MS",
                DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
            ),
        }
        return cls.from_mapping(values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "StoreSettings":
        """Read settings from a YAML mapping.

        Raises:
            ValueError: If the file does not hold a mapping or misses
                required settings.
        """
        with open(path, "r", encoding="utf-8") as config_file:
            values = yaml.safe_load(config_file) or {}
        if not isinstance(values, Mapping):
            raise ValueError(f"Settings file {path} must contain a mapping")
        logger.debug("Loaded store settings from %s", path)
        return cls.from_mapping(values)


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES
