"""Shared fixtures: an in-memory stand-in for the reviews collection."""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId


class FakeCursor:
    def __init__(self, documents):
        self.documents = documents

    def sort(self, key, direction):
        self.documents = sorted(self.documents, key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def __iter__(self):
        return iter(self.documents)


class FakeCollection:
    def __init__(self):
        self.documents = []

    def insert_one(self, document):
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return MagicMock(inserted_id=document["_id"])

    def find(self, query=None, projection=None):
        query = query or {}
        excluded = {key for key, value in (projection or {}).items() if not value}
        matches = [
            {key: value for key, value in doc.items() if key not in excluded}
            for doc in self.documents
            if all(doc.get(key) == value for key, value in query.items())
        ]
        return FakeCursor(matches)


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def fake_store(fake_collection):
    store = MagicMock()
    store.get_collection.return_value = fake_collection
    return store
