# app/middleware/html_response.py
from dataclasses import dataclass

from fastapi import Depends, Request

from app.context import AppContext
from app.database.dependencies import get_context


def wants_html(request: Request) -> bool:
    """HTML when the client accepts text/html and does not ask for JSON first."""
    accept = request.headers.get("accept", "").lower()
    if "text/html" not in accept:
        return False
    json_at = accept.find("application/json")
    return json_at == -1 or accept.find("text/html") < json_at


@dataclass(frozen=True)
class ResponseMode:
    html: bool
    title: str


def decorate_html_response(page_title: str):
    """Dependency factory giving a route its negotiated mode and page title."""

    def dependency(request: Request, ctx: AppContext = Depends(get_context)) -> ResponseMode:
        return ResponseMode(
            html=wants_html(request),
            title=f"{page_title} - {ctx.config.APP_NAME}",
        )

    return dependency
