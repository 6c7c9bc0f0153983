"""
Template Rendering

Jinja2 templates (catalog/templates) rendered through FastAPI's
Jinja2Templates. Every view-model handed to a template contains a "title".
"""

from pathlib import Path
from typing import Any

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from catalog.config import get_settings

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["app_name"] = get_settings().app_name


def render(
    request: Request,
    name: str,
    view: dict[str, Any],
    status_code: int = status.HTTP_200_OK,
):
    """Render a view-model with the named template."""
    return templates.TemplateResponse(request, name, view, status_code=status_code)


def redirect(url: str) -> RedirectResponse:
    """Redirect after a form POST (303 See Other, so the browser issues a GET)."""
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
