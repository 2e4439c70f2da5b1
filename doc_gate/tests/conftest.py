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

"""Shared pytest fixtures for doc_gate tests."""

import pytest

from doc_gate.infra.audit import CollectionAuditSink
from doc_gate.orchestrator.documents import GenericRepository
from doc_gate.tests.mocks.entities import Note, OwnerAcl, SequentialIdGenerator
from doc_gate.tests.mocks.memory_collection import InMemoryDocumentCollection


@pytest.fixture
def notes_collection():
    """Provide an empty in-memory notes collection."""
    return InMemoryDocumentCollection()


@pytest.fixture
def audit_collection():
    """Provide an empty in-memory audit collection."""
    return InMemoryDocumentCollection()


@pytest.fixture
def audit_sink(audit_collection):
    """Provide an audit sink writing to the audit collection."""
    return CollectionAuditSink(audit_collection)


@pytest.fixture
def id_generator():
    """Provide a predictable id generator."""
    return SequentialIdGenerator()


@pytest.fixture
def owner_acl(notes_collection):
    """Provide the owner based notes policy."""
    return OwnerAcl(notes_collection, blocked_creators=["blocked"])


@pytest.fixture
def repository(notes_collection, owner_acl, id_generator, audit_sink):
    """Provide a notes repository with auditing enabled."""
    return GenericRepository(
        collection=notes_collection,
        entity_cls=Note,
        acl=owner_acl,
        entity_type="Note",
        id_generator=id_generator,
        audit_sink=audit_sink,
    )


@pytest.fixture
def stored_note(repository):
    """Provide a note created by u1 through the repository."""
    return repository.create(Note(name="A", owner_id="u1"), "u1").unwrap()
