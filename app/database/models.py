# /app/database/models.py

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class Person(BaseModel):
    """Stored shape of a person document (collection `people`)."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[str] = Field(default=None, alias="_id")
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    mobile: str = Field(min_length=1)
    password: str = Field(min_length=1)
    avatar: Optional[str] = None
    role: UserRole = Field(default=UserRole.USER, validate_default=True)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("id", mode="before")
    @classmethod
    def _object_id_to_str(cls, value):
        if isinstance(value, ObjectId):
            return str(value)
        return value

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Person":
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        """Mongo document for insertion, without `_id` when unset."""
        document = self.model_dump(by_alias=True, exclude={"id"})
        if self.id is not None:
            document["_id"] = ObjectId(self.id)
        return document

    def public_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude={"password"})
        data["id"] = data.pop("_id")
        return data


# Collection-level validator installed at startup
PERSON_JSON_SCHEMA = {
    "bsonType": "object",
    "required": ["name", "email", "mobile", "password", "role"],
    "properties": {
        "name": {"bsonType": "string", "minLength": 1},
        "email": {"bsonType": "string", "minLength": 1},
        "mobile": {"bsonType": "string", "minLength": 1},
        "password": {"bsonType": "string", "minLength": 1},
        "avatar": {"bsonType": ["string", "null"]},
        "role": {"enum": [role.value for role in UserRole]},
        "createdAt": {"bsonType": "date"},
        "updatedAt": {"bsonType": "date"},
    },
}
