"""Template rendering for wiki pages."""

import logging
from functools import partial
from pathlib import Path
from typing import Any, Callable

from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from plainwiki.core.exceptions import RenderError
from plainwiki.core.links import process_links

logger = logging.getLogger(__name__)


class Presenter:
    """Renders named templates with page or listing data.

    Built once at startup and shared read-only between requests.
    """

    def __init__(
        self,
        directory: Path,
        app_title: str = "PlainWiki",
        page_exists: Callable[[str], bool] | None = None,
    ):
        self.app_title = app_title
        self.templates = Jinja2Templates(directory=str(directory))
        self.templates.env.filters["process_links"] = partial(
            process_links, page_exists=page_exists
        )

    def render(self, template: str, **context: Any) -> str:
        """Render ``<template>.html`` to a string.

        The whole document is rendered before anything is returned, so a
        failure never produces partial output.
        """
        try:
            tmpl = self.templates.get_template(f"{template}.html")
            return tmpl.render(app_title=self.app_title, **context)
        except TemplateError as exc:
            logger.error("Failed to render template %s: %s", template, exc)
            raise RenderError(str(exc)) from exc

    def response(
        self, template: str, status_code: int = 200, **context: Any
    ) -> HTMLResponse:
        """Render a template into an HTML response."""
        return HTMLResponse(self.render(template, **context), status_code=status_code)
