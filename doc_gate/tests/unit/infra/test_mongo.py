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

"""Unit tests for the PyMongo DocumentCollection adapter."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, call, patch

import pytest
from bson import ObjectId
from bson.errors import InvalidDocument
from pymongo.errors import PyMongoError

from doc_gate.core.documents.exceptions import StorageFailureError
from doc_gate.core.documents.repositories import WriteOutcome
from doc_gate.infra.config import StoreSettings
from doc_gate.infra.mongo import UTC_CODEC_OPTIONS, MongoDocumentCollection, connect

OID = "507f1f77bcf86cd799439011"


@pytest.fixture
def driver_collection():
    """Mock PyMongo collection as returned by with_options."""
    collection = MagicMock()
    collection.name = "notes"
    return collection


@pytest.fixture
def adapter(driver_collection):
    """Adapter around the mocked driver collection."""
    raw = MagicMock()
    raw.with_options.return_value = driver_collection
    return MongoDocumentCollection(raw)


class TestReads:
    """Tests for find_one and find_many."""

    def test_find_one_encodes_and_decodes_id(self, adapter, driver_collection):
        """String ids become ObjectIds on the way in and back on the way out."""
        driver_collection.find_one.return_value = {"_id": ObjectId(OID), "name": "A"}

        document = adapter.find_one({"_id": OID})

        driver_collection.find_one.assert_called_once_with({"_id": ObjectId(OID)})
        assert document == {"_id": OID, "name": "A"}

    def test_find_one_missing(self, adapter, driver_collection):
        """No match yields None."""
        driver_collection.find_one.return_value = None
        assert adapter.find_one({"_id": OID}) is None

    def test_non_object_id_strings_are_kept(self, adapter, driver_collection):
        """Ids that are not object ids are passed through."""
        driver_collection.find_one.return_value = None
        adapter.find_one({"_id": "custom-id"})
        driver_collection.find_one.assert_called_once_with({"_id": "custom-id"})

    def test_find_many_encodes_nested_clauses(self, adapter, driver_collection):
        """Ids inside logical operators and $in are encoded."""
        driver_collection.find.return_value = [{"_id": ObjectId(OID)}]

        documents = adapter.find_many(
            {"$and": [{"soft_deleted": {"$ne": True}}, {"_id": {"$in": [OID]}}]}
        )

        driver_collection.find.assert_called_once_with(
            {
                "$and": [
                    {"soft_deleted": {"$ne": True}},
                    {"_id": {"$in": [ObjectId(OID)]}},
                ]
            }
        )
        assert documents == [{"_id": OID}]

    def test_find_many_sorts(self, adapter, driver_collection):
        """Ordering is forwarded to the cursor."""
        cursor = MagicMock()
        cursor.sort.return_value = [{"_id": ObjectId(OID), "name": "B"}]
        driver_collection.find.return_value = cursor

        documents = adapter.find_many({}, [("name", -1)])

        cursor.sort.assert_called_once_with([("name", -1)])
        assert documents == [{"_id": OID, "name": "B"}]


class TestWrites:
    """Tests for insert, replace and field updates."""

    def test_insert_does_not_mutate_input(self, adapter, driver_collection):
        """The caller's document keeps its string id."""
        driver_collection.insert_one.return_value = MagicMock(acknowledged=True)
        document = {"_id": OID, "name": "A"}

        outcome = adapter.insert_one(document)

        assert outcome == WriteOutcome(acknowledged=True, matched_count=1)
        assert driver_collection.insert_one.call_args == call(
            {"_id": ObjectId(OID), "name": "A"}
        )
        assert document["_id"] == OID

    def test_replace_reports_matches(self, adapter, driver_collection):
        """An acknowledged replace reports its matched count."""
        token = datetime(2026, 1, 1, tzinfo=timezone.utc)
        driver_collection.replace_one.return_value = MagicMock(
            acknowledged=True, matched_count=0
        )

        outcome = adapter.replace_one(
            {"_id": OID, "concurrency_token": token}, {"_id": OID, "name": "B"}
        )

        assert outcome == WriteOutcome(acknowledged=True, matched_count=0)
        driver_collection.replace_one.assert_called_once_with(
            {"_id": ObjectId(OID), "concurrency_token": token},
            {"_id": ObjectId(OID), "name": "B"},
        )

    def test_unacknowledged_replace(self, adapter, driver_collection):
        """Unacknowledged writes are reported as such."""
        driver_collection.replace_one.return_value = MagicMock(acknowledged=False)
        outcome = adapter.replace_one({"_id": OID}, {"_id": OID})
        assert outcome == WriteOutcome(acknowledged=False)

    def test_update_fields_uses_current_date(self, adapter, driver_collection):
        """Server-side timestamps map to $currentDate."""
        driver_collection.update_one.return_value = MagicMock(
            acknowledged=True, matched_count=1
        )

        outcome = adapter.update_fields(
            {"_id": OID}, {"soft_deleted": True}, current_date=("concurrency_token",)
        )

        assert outcome == WriteOutcome(acknowledged=True, matched_count=1)
        driver_collection.update_one.assert_called_once_with(
            {"_id": ObjectId(OID)},
            {
                "$set": {"soft_deleted": True},
                "$currentDate": {"concurrency_token": True},
            },
        )

    def test_update_fields_without_current_date(self, adapter, driver_collection):
        """Only $set is sent when no server timestamp is requested."""
        driver_collection.update_one.return_value = MagicMock(
            acknowledged=True, matched_count=1
        )
        adapter.update_fields({"_id": OID}, {"name": "B"})
        driver_collection.update_one.assert_called_once_with(
            {"_id": ObjectId(OID)}, {"$set": {"name": "B"}}
        )


class TestDriverErrors:
    """Tests for driver error translation."""

    @pytest.mark.parametrize(
        "method, args",
        [
            ("find_one", ({"_id": OID},)),
            ("insert_one", ({"_id": OID},)),
            ("replace_one", ({"_id": OID}, {"_id": OID})),
            ("update_one", None),
        ],
    )
    def test_driver_error_becomes_storage_failure(
        self, adapter, driver_collection, method, args
    ):
        """PyMongoError is wrapped into StorageFailureError."""
        getattr(driver_collection, method).side_effect = PyMongoError("down")

        with pytest.raises(StorageFailureError, match="notes") as exc_info:
            if method == "update_one":
                adapter.update_fields({"_id": OID}, {"soft_deleted": True})
            else:
                getattr(adapter, method)(*args)

        assert isinstance(exc_info.value.__cause__, PyMongoError)

    def test_find_many_error(self, adapter, driver_collection):
        """Errors raised while iterating the cursor are wrapped too."""
        driver_collection.find.side_effect = PyMongoError("down")
        with pytest.raises(StorageFailureError):
            adapter.find_many({})

    def test_unencodable_document_becomes_storage_failure(
        self, adapter, driver_collection
    ):
        """Encoding errors from bson are wrapped like driver errors."""
        driver_collection.replace_one.side_effect = InvalidDocument(
            "cannot encode object: <object>"
        )

        with pytest.raises(StorageFailureError, match="replace_one") as exc_info:
            adapter.replace_one({"_id": OID}, {"_id": OID, "blob": object()})

        assert isinstance(exc_info.value.__cause__, InvalidDocument)


class TestConnect:
    """Tests for connect."""

    def test_connect_uses_settings(self):
        """The client is built from settings and returns the database."""
        settings = StoreSettings(
            mongo_uri="mongodb://localhost:27017",
            database_name="app",
            server_selection_timeout_ms=1500,
        )
        with patch("doc_gate.infra.mongo.MongoClient") as client_cls:
            database = connect(settings)

        client_cls.assert_called_once_with(
            "mongodb://localhost:27017",
            serverSelectionTimeoutMS=1500,
            tz_aware=True,
        )
        client_cls.return_value.get_database.assert_called_once_with(
            "app", codec_options=UTC_CODEC_OPTIONS
        )
        assert database is client_cls.return_value.get_database.return_value

    def test_adapter_reads_utc_datetimes(self):
        """The adapter reconfigures the collection for UTC-aware datetimes."""
        raw = MagicMock()
        MongoDocumentCollection(raw)
        raw.with_options.assert_called_once_with(codec_options=UTC_CODEC_OPTIONS)
