"""Server-side page rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from ballotbox.utils.errors import AppError, status_title, status_type_message

PACKAGE_DIR = Path(__file__).resolve().parents[1]
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"
THANK_YOU_PAGE = STATIC_DIR / "thankyou.html"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render_page(
    request: Request,
    template: str,
    context: dict[str, Any],
    status_code: int = 200,
) -> Response:
    """Render ``template`` as an HTML response."""
    return templates.TemplateResponse(request, template, context, status_code=status_code)


def render_error(request: Request, error: AppError) -> Response:
    """Render the error page for an application error."""
    return render_page(request, "error.html", error.to_page(), status_code=error.status_code)


def render_status(
    request: Request,
    status_code: int,
    message: str,
    detail: str = "",
) -> Response:
    """Render the error page for a bare HTTP status."""
    context = {
        "title": status_title(status_code),
        "type_message": status_type_message(status_code),
        "message": message,
        "detail": detail,
    }
    return render_page(request, "error.html", context, status_code=status_code)
