"""Test doubles and builders shared by the test modules."""
import io
from datetime import datetime, timezone
from typing import Dict, List, Optional

from bson import ObjectId
from PIL import Image

from app.database.models import Person
from app.database.repository import PeopleRepository
from app.exceptions import StoreError


class FakePeopleRepository(PeopleRepository):
    """In-memory stand-in for the people collection."""

    def __init__(self):
        super().__init__(collection=None)
        self.people: Dict[str, Person] = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise StoreError("Failed to load users")

    async def list_all(self) -> List[Person]:
        self._check()
        return list(reversed(list(self.people.values())))

    async def insert(self, person: Person) -> Person:
        self._check()
        if any(p.email == person.email for p in self.people.values()):
            raise StoreError("A user with this email already exists", status_code=409, code="DUPLICATE_KEY")
        now = datetime.now(timezone.utc)
        person = person.model_copy(update={"id": str(ObjectId()), "created_at": now, "updated_at": now})
        self.people[person.id] = person
        return person

    async def delete_by_id(self, person_id: str) -> Optional[Person]:
        self._check()
        return self.people.pop(person_id, None)

    async def exists(self, **fields) -> bool:
        self._check()
        return any(
            all(getattr(p, key) == value for key, value in fields.items())
            for p in self.people.values()
        )


def image_bytes(fmt: str = "PNG", size=(4, 4)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 40, 40)).save(buffer, format=fmt)
    return buffer.getvalue()


def valid_user(**overrides) -> Dict[str, str]:
    data = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "mobile": "+8801712345678",
        "password": "Secret#123",
    }
    data.update(overrides)
    return data
