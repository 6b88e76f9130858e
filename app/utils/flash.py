# app/utils/flash.py
from fastapi import Request
from starlette.datastructures import MutableHeaders
from starlette.responses import Response
from jose import jwt, JWTError
from typing import Optional, Dict, Any
import logging

FLASH_COOKIE = "flash"
FLASH_ALGORITHM = "HS256"


def set_flash(response: Response, message: str, secret: str, category: str = "info", secure: bool = False) -> None:
    """Set a signed flash message cookie."""
    flash_data = {
        "message": message,
        "category": category
    }
    response.set_cookie(
        key=FLASH_COOKIE,
        value=jwt.encode(flash_data, secret, algorithm=FLASH_ALGORITHM),
        httponly=True,
        max_age=30,  # 30 seconds
        samesite="lax",
        secure=secure
    )


def get_flash(request: Request, secret: str) -> Optional[Dict[str, Any]]:
    """Get flash message from cookie and mark it for clearing."""
    flash_cookie = request.cookies.get(FLASH_COOKIE)
    if not flash_cookie:
        return None

    # Clear flash cookie in response, tampered or not
    request.scope["flash_to_clear"] = True
    try:
        return jwt.decode(flash_cookie, secret, algorithms=[FLASH_ALGORITHM])
    except JWTError as e:
        logging.warning(f"Rejected flash cookie: {e}")
        return None


class FlashMiddleware:
    """ASGI middleware expiring the flash cookie once a handler has read it."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        scope["flash_to_clear"] = False

        async def send_wrapper(message):
            if message["type"] == "http.response.start" and scope.get("flash_to_clear"):
                headers = MutableHeaders(scope=message)
                headers.append("set-cookie", f"{FLASH_COOKIE}=; Path=/; Max-Age=0; HttpOnly; SameSite=lax")
            await send(message)

        await self.app(scope, receive, send_wrapper)
