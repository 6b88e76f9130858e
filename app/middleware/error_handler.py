# app/middleware/error_handler.py
import logging
import traceback
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.exceptions import AppError, FieldErrors, NotFoundError
from app.middleware.html_response import wants_html

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Your requested content was not found!"


def _error_detail(exc: Exception) -> Dict[str, Any]:
    if isinstance(exc, AppError):
        return exc.to_dict()
    return {
        "message": str(exc) or exc.__class__.__name__,
        "status": 500,
        "code": "INTERNAL_ERROR",
        "type": exc.__class__.__name__,
        "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__),
    }


def render_error(request: Request, exc: Exception):
    """
    Terminal sink for every error. Renders the error page for HTML clients
    and a JSON body otherwise; production only exposes the message.
    """
    status_code = getattr(exc, "status_code", None) or 500
    detail = _error_detail(exc)
    ctx = getattr(request.app.state, "context", None)
    production = ctx is None or ctx.config.is_production
    error = {"message": detail["message"]} if production else detail

    if ctx is not None and wants_html(request):
        try:
            return ctx.templates.TemplateResponse(
                request,
                "error.html",
                {"title": "Error Page", "error": error},
                status_code=status_code,
            )
        except Exception:
            logger.exception("Failed to render error page")
    return JSONResponse(status_code=status_code, content=error)


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unmatched routes and other framework HTTP errors."""
    if exc.status_code == 404:
        response = render_error(request, NotFoundError(NOT_FOUND_MESSAGE))
    else:
        response = render_error(
            request, AppError(str(exc.detail), status_code=exc.status_code, code="HTTP_ERROR")
        )
    # Keep framework headers such as Allow on a 405
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def field_errors_handler(request: Request, exc: FieldErrors):
    """Validation and upload errors are answered where they happen."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return render_error(
        request,
        AppError("Invalid request", status_code=422, code="REQUEST_INVALID",
                 details={"errors": [error.get("msg") for error in exc.errors()]}),
    )


async def error_handler(request: Request, exc: Exception):
    if isinstance(exc, AppError):
        if exc.status_code >= 500:
            logging.error(f"{exc.code}: {exc.message}")
    else:
        logger.exception(f"Unexpected error: {exc}")
    return render_error(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Register after the routers; the general handler goes last."""
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(FieldErrors, field_errors_handler)
    app.add_exception_handler(AppError, error_handler)
    app.add_exception_handler(Exception, error_handler)
