"""Shared fixtures: an in-memory stand-in for the Motor database."""

from datetime import date
import copy
import re
from types import SimpleNamespace
from typing import Any, Dict, List
import uuid

import pytest
from pymongo import DeleteMany, UpdateOne

from models.schemas import DailyEntry, Todo
from services.entry_service import recount
from services.storage_service import StorageService

# 2024-06-03 is a Monday, so no report is due
MONDAY = date(2024, 6, 3)
SUNDAY = date(2024, 6, 2)
MONTH_END_SUNDAY = date(2024, 6, 30)
MONTH_END_FRIDAY = date(2024, 5, 31)


def _matches_condition(value: Any, condition: Any) -> bool:
    if not isinstance(condition, dict) or not any(key.startswith("$") for key in condition):
        return value == condition
    for op, operand in condition.items():
        if op == "$ne" and value == operand:
            return False
        if op == "$nin" and value in operand:
            return False
        if op == "$in" and value not in operand:
            return False
        if op == "$regex":
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            if not isinstance(value, str) or not re.search(operand, value, flags):
                return False
    return True


def matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, condition in query.items():
        if key == "$or":
            if not any(matches(document, sub) for sub in condition):
                return False
        elif not _matches_condition(document.get(key), condition):
            return False
    return True


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length=None):
        documents = [copy.deepcopy(document) for document in self._documents]
        return documents if length is None else documents[:length]


class FakeCollection:
    """The subset of the Motor collection API the services use."""

    def __init__(self, name: str):
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self.write_count = 0

    def find(self, query=None):
        return FakeCursor([doc for doc in self.documents if matches(doc, query or {})])

    async def find_one(self, query=None):
        for document in self.documents:
            if matches(document, query or {}):
                return copy.deepcopy(document)
        return None

    async def insert_one(self, document):
        self.write_count += 1
        stored = {"_id": str(uuid.uuid4()), **copy.deepcopy(document)}
        self.documents.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def update_one(self, query, update, upsert=False):
        self.write_count += 1
        for document in self.documents:
            if matches(document, query):
                document.update(copy.deepcopy(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, upserted_id=None)
        if not upsert:
            return SimpleNamespace(matched_count=0, upserted_id=None)
        seed = {key: value for key, value in query.items() if not key.startswith("$") and not isinstance(value, dict)}
        result = await self.insert_one({**seed, **update.get("$set", {})})
        self.write_count -= 1
        return SimpleNamespace(matched_count=0, upserted_id=result.inserted_id)

    async def delete_one(self, query):
        self.write_count += 1
        for index, document in enumerate(self.documents):
            if matches(document, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def delete_many(self, query):
        self.write_count += 1
        before = len(self.documents)
        self.documents = [doc for doc in self.documents if not matches(doc, query)]
        return SimpleNamespace(deleted_count=before - len(self.documents))

    async def bulk_write(self, operations, ordered=True):
        self.write_count += 1
        for operation in operations:
            if isinstance(operation, UpdateOne):
                await self.update_one(operation._filter, operation._doc, upsert=operation._upsert)
                self.write_count -= 1
            elif isinstance(operation, DeleteMany):
                await self.delete_many(operation._filter)
                self.write_count -= 1
            else:
                raise TypeError(f"Unsupported bulk operation {operation!r}")

    async def create_index(self, keys, **kwargs):
        return "_".join(str(part) for key in keys for part in key)


class FakeDatabase:
    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    def __getattr__(self, name: str) -> FakeCollection:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]


class BrokenDatabase:
    """Every collection access fails, like an unreachable server."""

    def __getattr__(self, name):
        raise ConnectionError("database unreachable")

    def __getitem__(self, name):
        raise ConnectionError("database unreachable")


def make_entry(date_str: str, done: int, total: int, journal: str = "", mood: int = 0) -> DailyEntry:
    todos = [Todo(text=f"task {i}", completed=i < done) for i in range(total)]
    entry = DailyEntry(date=date_str, journal=journal, mood_score=mood)
    return recount(entry, todos)


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def storage(fake_db):
    return StorageService(fake_db)
