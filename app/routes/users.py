# app/routes/users.py
from fastapi import APIRouter, Depends, Request

from app.context import AppContext
from app.controllers import users as controller
from app.database.dependencies import get_context, get_people_repository
from app.database.repository import PeopleRepository
from app.middleware.html_response import ResponseMode, decorate_html_response, wants_html
from app.middleware.user_validators import NewUser, add_user_validation_handler

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/")
async def get_users(
    request: Request,
    mode: ResponseMode = Depends(decorate_html_response("Users")),
    repo: PeopleRepository = Depends(get_people_repository),
    ctx: AppContext = Depends(get_context),
):
    """List users (HTML page or JSON)."""
    return await controller.get_users(request, mode, repo, ctx)


@router.post("/")
async def add_user(
    request: Request,
    new_user: NewUser = Depends(add_user_validation_handler),
    repo: PeopleRepository = Depends(get_people_repository),
    ctx: AppContext = Depends(get_context),
):
    """Avatar upload -> validators -> add."""
    return await controller.add_user(new_user, wants_html(request), repo, ctx)


@router.delete("/{user_id}")
async def remove_user(
    user_id: str,
    repo: PeopleRepository = Depends(get_people_repository),
    ctx: AppContext = Depends(get_context),
):
    return await controller.remove_user(user_id, repo, ctx)
