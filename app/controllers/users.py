# app/controllers/users.py
import logging

from bson import ObjectId
from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from app.context import AppContext
from app.database.models import Person
from app.database.repository import PeopleRepository
from app.exceptions import NotFoundError, ValidationError
from app.middleware.html_response import ResponseMode
from app.middleware.user_validators import NewUser
from app.utils.flash import get_flash, set_flash
from app.utils.security import hash_password


async def get_users(
    request: Request,
    mode: ResponseMode,
    repo: PeopleRepository,
    ctx: AppContext,
):
    """List all users as the users page or as JSON."""
    users = await repo.list_all()
    if mode.html:
        return ctx.templates.TemplateResponse(
            request,
            "users.html",
            {
                "title": mode.title,
                "users": [user.public_dict() for user in users],
                "flash": get_flash(request, ctx.config.COOKIE_SECRET),
            },
        )
    return {"users": [user.public_dict() for user in users]}


async def add_user(
    new_user: NewUser,
    html: bool,
    repo: PeopleRepository,
    ctx: AppContext,
):
    fields = new_user.fields
    person = Person(
        name=fields.name,
        email=fields.email,
        mobile=fields.mobile,
        password=hash_password(fields.password),
        avatar=new_user.avatar,
        role=fields.role,
    )
    try:
        person = await repo.insert(person)
    except Exception:
        ctx.avatar_uploader.remove(new_user.avatar)
        raise

    logging.info(f"Created user {person.email} ({person.id})")
    message = "User was added successfully!"
    if html:
        response = RedirectResponse(url="/users/", status_code=status.HTTP_303_SEE_OTHER)
        set_flash(response, message, ctx.config.COOKIE_SECRET, "success", secure=ctx.config.is_production)
        return response
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": message, "user": person.public_dict()},
    )


async def remove_user(user_id: str, repo: PeopleRepository, ctx: AppContext):
    if not ObjectId.is_valid(user_id):
        raise ValidationError("Invalid user id", {"id": "Invalid user id"})

    person = await repo.delete_by_id(user_id)
    if person is None:
        raise NotFoundError(f"User not found: {user_id}", details={"id": user_id})

    if person.avatar:
        ctx.avatar_uploader.remove(person.avatar)

    logging.info(f"Removed user {person.email} ({person.id})")
    return {"message": "User was removed successfully!", "user": person.public_dict()}
