"""Shared test fixtures for FitTrack tests."""

import copy
from datetime import date
from types import SimpleNamespace

import pytest
from bson import ObjectId

from common.storage import InMemoryKeyValueStore
from fittrack.tracking.dates import DateIndex
from fittrack.tracking.offline_repository import OfflineCheckinRepository
from fittrack.tracking.remote_repository import RemoteCheckinRepository


TODAY = date(2024, 1, 15)


# ─────────────────────────────────────────────────────────────────
# In-memory stand-in for Motor collections
# ─────────────────────────────────────────────────────────────────


def _matches(doc, query):
    for key, condition in (query or {}).items():
        value = doc.get(key)
        if isinstance(condition, dict):
            for op, arg in condition.items():
                if op == "$in" and value not in arg:
                    return False
                if op == "$gte" and (value is None or value < arg):
                    return False
                if op == "$lte" and (value is None or value > arg):
                    return False
        elif value != condition:
            return False
    return True


def _sort_docs(docs, key, direction):
    docs.sort(key=lambda d: d.get(key), reverse=direction == -1)


class FakeCursor:
    """Motor-like cursor: sort() is sync, to_list() is async."""

    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction=1):
        _sort_docs(self._docs, key, direction)
        return self

    async def to_list(self, length=None):
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    """Enough of AsyncIOMotorCollection for the repository."""

    def __init__(self):
        self.docs = []
        self.indexes = []

    def find(self, query=None, projection=None):
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query)])

    async def find_one(self, query=None, sort=None):
        docs = [d for d in self.docs if _matches(d, query)]
        for key, direction in reversed(sort or []):
            _sort_docs(docs, key, direction)
        return copy.deepcopy(docs[0]) if docs else None

    async def insert_one(self, doc):
        doc = copy.deepcopy(doc)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def insert_many(self, docs):
        ids = [(await self.insert_one(d)).inserted_id for d in docs]
        return SimpleNamespace(inserted_ids=ids)

    async def delete_many(self, query):
        before = len(self.docs)
        self.docs = [d for d in self.docs if not _matches(d, query)]
        return SimpleNamespace(deleted_count=before - len(self.docs))

    async def update_one(self, query, update, upsert=False):
        await self.find_one_and_update(query, update, upsert=upsert)

    async def update_many(self, query, update):
        for doc in self.docs:
            if _matches(doc, query):
                self._apply(doc, update, inserting=False)

    async def find_one_and_update(self, query, update, upsert=False, return_document=False):
        for doc in self.docs:
            if _matches(doc, query):
                before = copy.deepcopy(doc)
                self._apply(doc, update, inserting=False)
                return copy.deepcopy(doc) if return_document else before
        if not upsert:
            return None
        doc = {k: v for k, v in query.items() if not isinstance(v, dict)}
        doc["_id"] = ObjectId()
        self._apply(doc, update, inserting=True)
        self.docs.append(doc)
        return copy.deepcopy(doc) if return_document else None

    async def create_index(self, keys, **kwargs):
        self.indexes.append((keys, kwargs))
        return "index"

    @staticmethod
    def _apply(doc, update, inserting):
        if inserting:
            doc.update(update.get("$setOnInsert", {}))
        doc.update(update.get("$set", {}))
        for key, amount in update.get("$inc", {}).items():
            doc[key] = doc.get(key, 0) + amount


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def date_index():
    return DateIndex(clock=lambda: TODAY)


@pytest.fixture
def sample_user_id():
    return "user-123"


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def remote_repo(fake_db, date_index):
    return RemoteCheckinRepository(fake_db, date_index=date_index)


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def offline_repo(kv_store, date_index):
    return OfflineCheckinRepository(kv_store, date_index=date_index)
