# app/middleware/user_validators.py
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fastapi import Depends, Request
from pydantic import ValidationError as SchemaValidationError

from app.context import AppContext
from app.database.dependencies import get_context, get_people_repository
from app.database.repository import PeopleRepository
from app.exceptions import StoreError, ValidationError
from app.middleware.avatar_upload import avatar_upload
from app.schemas.user import PersonCreate


@dataclass
class NewUser:
    fields: PersonCreate
    avatar: Optional[str] = None


async def read_fields(request: Request) -> Dict[str, Any]:
    """Text fields of a form submission or a JSON object body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError("Malformed JSON body", {"common": "Malformed JSON body"})
        return body if isinstance(body, dict) else {}
    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await request.form()
        return {key: value for key, value in form.multi_items() if isinstance(value, str)}
    return {}


async def add_user_validators(fields: Dict[str, Any], repo: PeopleRepository) -> PersonCreate:
    """Run every add-user rule and raise one ValidationError listing all failures."""
    errors: Dict[str, str] = {}
    person = None
    try:
        person = PersonCreate.model_validate(fields)
    except SchemaValidationError as e:
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "common"
            errors.setdefault(field, error["msg"])

    email = str(fields.get("email") or "").strip().lower()
    if "email" not in errors and email and await repo.exists(email=email):
        errors["email"] = "Email already in use!"

    mobile = str(fields.get("mobile") or "").strip()
    if "mobile" not in errors and mobile and await repo.exists(mobile=mobile):
        errors["mobile"] = "Mobile already in use!"

    if errors:
        raise ValidationError("Invalid user data", errors)
    return person


async def add_user_validation_handler(
    request: Request,
    repo: PeopleRepository = Depends(get_people_repository),
    uploaded: List[str] = Depends(avatar_upload),
    ctx: AppContext = Depends(get_context),
) -> NewUser:
    """Stops the chain on invalid input and drops files stored for it."""
    try:
        fields = await add_user_validators(await read_fields(request), repo)
    except (ValidationError, StoreError):
        ctx.avatar_uploader.remove_all(uploaded)
        raise
    return NewUser(fields=fields, avatar=uploaded[0] if uploaded else None)
