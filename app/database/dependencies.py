from fastapi import Depends, Request

from app.context import AppContext
from app.database.repository import PeopleRepository
from app.exceptions import StoreError


def get_context(request: Request) -> AppContext:
    """Application context attached to the app at startup."""
    return request.app.state.context


def get_people_repository(ctx: AppContext = Depends(get_context)) -> PeopleRepository:
    collection = ctx.database.people
    if collection is None:
        raise StoreError("Database is not connected", status_code=503, code="STORE_UNAVAILABLE")
    return PeopleRepository(collection)
