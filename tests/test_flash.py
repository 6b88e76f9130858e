from http.cookies import SimpleCookie

from jose import jwt
from starlette.requests import Request
from starlette.responses import Response

from app.utils.flash import get_flash, set_flash

SECRET = "test-cookie-secret"


def request_with_cookie(value):
    scope = {"type": "http", "headers": [(b"cookie", f"flash={value}".encode())]}
    return Request(scope)


def cookie_value(response):
    cookie = SimpleCookie()
    cookie.load(response.headers["set-cookie"])
    return cookie["flash"].value


def test_flash_round_trip():
    response = Response()
    set_flash(response, "Saved", SECRET, "success")
    request = request_with_cookie(cookie_value(response))
    assert get_flash(request, SECRET) == {"message": "Saved", "category": "success"}
    assert request.scope["flash_to_clear"] is True


def test_flash_signed_with_other_secret_is_ignored():
    forged = jwt.encode({"message": "Hacked", "category": "success"}, "other", algorithm="HS256")
    assert get_flash(request_with_cookie(forged), SECRET) is None


def test_no_flash_cookie():
    assert get_flash(Request({"type": "http", "headers": []}), SECRET) is None
