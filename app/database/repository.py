# app/database/repository.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.database.models import Person
from app.exceptions import StoreError


class PeopleRepository:
    """Operations on the people collection. Driver errors become StoreError."""

    def __init__(self, collection):
        self.collection = collection

    async def list_all(self) -> List[Person]:
        try:
            cursor = self.collection.find().sort("createdAt", DESCENDING)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logging.error(f"Failed to list people: {e}")
            raise StoreError("Failed to load users") from e
        return [Person.from_document(doc) for doc in documents]

    async def insert(self, person: Person) -> Person:
        now = datetime.now(timezone.utc)
        person = person.model_copy(update={"created_at": now, "updated_at": now})
        try:
            result = await self.collection.insert_one(person.to_document())
        except DuplicateKeyError as e:
            logging.error(f"Duplicate person {person.email}: {e}")
            raise StoreError(
                "A user with this email already exists",
                status_code=409,
                code="DUPLICATE_KEY",
                details={"email": person.email},
            ) from e
        except PyMongoError as e:
            logging.error(f"Failed to insert person: {e}")
            raise StoreError("Failed to save user") from e
        return person.model_copy(update={"id": str(result.inserted_id)})

    async def delete_by_id(self, person_id: str) -> Optional[Person]:
        """Delete and return the removed person, or None when absent."""
        try:
            document = await self.collection.find_one_and_delete({"_id": ObjectId(person_id)})
        except PyMongoError as e:
            logging.error(f"Failed to delete person {person_id}: {e}")
            raise StoreError("Could not delete the user!") from e
        return Person.from_document(document) if document else None

    async def exists(self, **fields) -> bool:
        try:
            document = await self.collection.find_one(fields, projection={"_id": 1})
        except PyMongoError as e:
            logging.error(f"Failed to query people: {e}")
            raise StoreError("Failed to query users") from e
        return document is not None
