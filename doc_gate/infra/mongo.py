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

"""PyMongo implementation of the DocumentCollection port."""

import logging
from datetime import timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from bson import ObjectId
from bson.codec_options import CodecOptions
from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from doc_gate.core.documents.exceptions import StorageFailureError
from doc_gate.core.documents.repositories import Document, SortSpec, WriteOutcome

from .config import StoreSettings

logger = logging.getLogger(__name__)

ID_FIELD = "_id"
_LOGICAL_OPERATORS = ("$and", "$or", "$nor")

UTC_CODEC_OPTIONS = CodecOptions(tz_aware=True, tzinfo=timezone.utc)


def connect(settings: StoreSettings) -> Database:
    """Open a client for ``settings`` and return its configured database.

    Args:
        settings: Store connection settings.

    Returns:
        Database handle reading datetimes as UTC-aware values.
    """
    client: MongoClient = MongoClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
        tz_aware=True,
    )
    logger.info("Connected document store database '%s'", settings.database_name)
    return client.get_database(settings.database_name, codec_options=UTC_CODEC_OPTIONS)


class MongoDocumentCollection:
    """DocumentCollection backed by a PyMongo collection.

    Entity ids travel as strings through the domain and are stored as
    ``ObjectId`` values. Driver and encoding errors surface as
    ``StorageFailureError``.
    """

    def __init__(self, collection: Collection) -> None:
        self._collection = collection.with_options(codec_options=UTC_CODEC_OPTIONS)

    @classmethod
    def from_database(cls, database: Database, name: str) -> "MongoDocumentCollection":
        return cls(database.get_collection(name))

    @property
    def name(self) -> str:
        return self._collection.name

    def find_one(self, filter_doc: Mapping[str, Any]) -> Optional[Document]:
        try:
            document = self._collection.find_one(_encode_filter(filter_doc))
        except (PyMongoError, BSONError) as exc:
            raise self._failure("find_one", exc) from exc
        return _decode(document) if document is not None else None

    def find_many(
        self,
        filter_doc: Mapping[str, Any],
        sort: Optional[SortSpec] = None,
    ) -> List[Document]:
        try:
            cursor = self._collection.find(_encode_filter(filter_doc))
            if sort:
                cursor = cursor.sort(list(sort))
            return [_decode(document) for document in cursor]
        except (PyMongoError, BSONError) as exc:
            raise self._failure("find_many", exc) from exc

    def insert_one(self, document: Document) -> WriteOutcome:
        try:
            result = self._collection.insert_one(_encode_document(document))
        except (PyMongoError, BSONError) as exc:
            raise self._failure("insert_one", exc) from exc
        return WriteOutcome(
            acknowledged=result.acknowledged,
            matched_count=1 if result.acknowledged else 0,
        )

    def replace_one(
        self,
        filter_doc: Mapping[str, Any],
        document: Document,
    ) -> WriteOutcome:
        try:
            result = self._collection.replace_one(
                _encode_filter(filter_doc), _encode_document(document)
            )
        except (PyMongoError, BSONError) as exc:
            raise self._failure("replace_one", exc) from exc
        if not result.acknowledged:
            return WriteOutcome(acknowledged=False)
        return WriteOutcome(acknowledged=True, matched_count=result.matched_count)

    def update_fields(
        self,
        filter_doc: Mapping[str, Any],
        values: Mapping[str, Any],
        current_date: Sequence[str] = (),
    ) -> WriteOutcome:
        update: Dict[str, Any] = {"$set": dict(values)}
        if current_date:
            update["$currentDate"] = {field: True for field in current_date}
        try:
            result = self._collection.update_one(_encode_filter(filter_doc), update)
        except (PyMongoError, BSONError) as exc:
            raise self._failure("update_one", exc) from exc
        if not result.acknowledged:
            return WriteOutcome(acknowledged=False)
        return WriteOutcome(acknowledged=True, matched_count=result.matched_count)

    def _failure(self, operation: str, exc: Exception) -> StorageFailureError:
        logger.error(
            "Document store %s on '%s' failed: %s", operation, self.name, exc
        )
        return StorageFailureError(
            f"Document store {operation} on collection '{self.name}' failed: {exc}"
        )


def _encode_id(value: Any) -> Any:
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    if isinstance(value, Mapping):
        return {
            operator: (
                [_encode_id(item) for item in operand]
                if isinstance(operand, (list, tuple))
                else _encode_id(operand)
            )
            for operator, operand in value.items()
        }
    return value


def _encode_filter(filter_doc: Mapping[str, Any]) -> Dict[str, Any]:
    encoded: Dict[str, Any] = {}
    for key, value in filter_doc.items():
        if key in _LOGICAL_OPERATORS:
            encoded[key] = [_encode_filter(clause) for clause in value]
        elif key == ID_FIELD:
            encoded[key] = _encode_id(value)
        else:
            encoded[key] = value
    return encoded


def _encode_document(document: Document) -> Document:
    encoded = dict(document)
    if ID_FIELD in encoded:
        encoded[ID_FIELD] = _encode_id(encoded[ID_FIELD])
    return encoded


def _decode(document: Document) -> Document:
    decoded = dict(document)
    if isinstance(decoded.get(ID_FIELD), ObjectId):
        decoded[ID_FIELD] = str(decoded[ID_FIELD])
    return decoded
