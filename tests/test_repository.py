import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from app.database.models import Person
from app.database.repository import PeopleRepository
from app.exceptions import StoreError


@pytest.fixture
def collection():
    """Stand-in for a motor collection"""
    return MagicMock()


def person():
    return Person(name="Jane", email="Jane@Example.com", mobile="+8801712345678", password="x")


def test_insert_sets_timestamps_and_id(collection):
    oid = ObjectId()
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=oid))
    created = asyncio.run(PeopleRepository(collection).insert(person()))

    assert created.id == str(oid)
    assert created.created_at is not None
    assert created.created_at == created.updated_at
    document = collection.insert_one.call_args.args[0]
    assert document["email"] == "jane@example.com"
    assert document["createdAt"] == created.created_at
    assert "_id" not in document


def test_insert_duplicate_is_conflict(collection):
    collection.insert_one = AsyncMock(side_effect=DuplicateKeyError("dup"))
    with pytest.raises(StoreError) as excinfo:
        asyncio.run(PeopleRepository(collection).insert(person()))
    assert excinfo.value.status_code == 409


def test_list_all_maps_documents(collection):
    oid = ObjectId()
    document = {**person().to_document(), "_id": oid}
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[document])
    collection.find.return_value.sort.return_value = cursor

    people = asyncio.run(PeopleRepository(collection).list_all())
    assert [p.id for p in people] == [str(oid)]


def test_list_all_wraps_driver_errors(collection):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
    collection.find.return_value.sort.return_value = cursor
    with pytest.raises(StoreError):
        asyncio.run(PeopleRepository(collection).list_all())


def test_delete_by_id_returns_removed_person(collection):
    oid = ObjectId()
    collection.find_one_and_delete = AsyncMock(return_value={**person().to_document(), "_id": oid})
    removed = asyncio.run(PeopleRepository(collection).delete_by_id(str(oid)))
    assert removed.id == str(oid)
    collection.find_one_and_delete.assert_awaited_once_with({"_id": oid})


def test_delete_by_id_missing(collection):
    collection.find_one_and_delete = AsyncMock(return_value=None)
    assert asyncio.run(PeopleRepository(collection).delete_by_id(str(ObjectId()))) is None


def test_exists(collection):
    collection.find_one = AsyncMock(return_value={"_id": ObjectId()})
    assert asyncio.run(PeopleRepository(collection).exists(email="jane@example.com"))
    collection.find_one.assert_awaited_once_with({"email": "jane@example.com"}, projection={"_id": 1})
