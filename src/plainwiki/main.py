"""PlainWiki FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles

from plainwiki.config import Settings, settings as default_settings
from plainwiki.core.exceptions import PageNotFound, RenderError, StorageError
from plainwiki.core.render import Presenter
from plainwiki.core.router import Operation, match_route, page_url
from plainwiki.core.storage import FileStorage
from plainwiki.core.wiki import Wiki

logger = logging.getLogger(__name__)

Handler = Callable[[Request, str], Awaitable[Response]]

LISTING_PATHS = frozenset({"/", "/index"})
LISTING_METHODS = frozenset({"GET", "HEAD"})


def get_wiki(request: Request) -> Wiki:
    return request.app.state.wiki


def get_presenter(request: Request) -> Presenter:
    return request.app.state.presenter


async def index(request: Request) -> Response:
    """Home page - list all pages."""
    page_index = await get_wiki(request).index()
    return get_presenter(request).response("index", request=request, index=page_index)


async def view_page(request: Request, name: str) -> Response:
    """View a wiki page."""
    try:
        page = await get_wiki(request).view(name)
    except PageNotFound:
        # Page doesn't exist - redirect to edit to create it
        return RedirectResponse(url=page_url(Operation.EDIT, name), status_code=302)
    return get_presenter(request).response("view", request=request, page=page)


async def edit_page(request: Request, name: str) -> Response:
    """Edit page form, empty for a new page."""
    page = await get_wiki(request).edit(name)
    return get_presenter(request).response("edit", request=request, page=page)


async def save_page(request: Request, name: str) -> Response:
    """Save page content from the form and redirect to the view."""
    form = await request.form()
    body = form.get("body") or ""
    if not isinstance(body, str):
        body = await body.read()
    await get_wiki(request).save(name, body)
    return RedirectResponse(url=page_url(Operation.VIEW, name), status_code=302)


def method_not_allowed(allowed: frozenset[str]) -> Response:
    return PlainTextResponse(
        "405 method not allowed",
        status_code=405,
        headers={"Allow": ", ".join(sorted(allowed))},
    )


HANDLERS: dict[Operation, Handler] = {
    Operation.VIEW: view_page,
    Operation.EDIT: edit_page,
    Operation.SAVE: save_page,
}


async def dispatch(request: Request, path: str) -> Response:
    """Route /<operation>/<name> requests to their handler.

    Every page operation goes through match_route, so no malformed name
    ever reaches the store.
    """
    request_path = request.url.path
    if request_path in LISTING_PATHS:
        # Reached only with a method the listing routes do not accept.
        return method_not_allowed(LISTING_METHODS)

    route = match_route(request_path)
    if route is None:
        return PlainTextResponse("404 page not found", status_code=404)

    if request.method not in route.operation.methods:
        return method_not_allowed(route.operation.methods)

    return await HANDLERS[route.operation](request, route.name)


async def storage_error_handler(request: Request, exc: StorageError) -> Response:
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=500)


async def render_error_handler(request: Request, exc: RenderError) -> Response:
    logger.error("Render error on %s %s: %s", request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=500)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for the given settings."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan: log where pages are served from."""
        logger.info("Serving pages from %s", settings.data_dir.resolve())
        yield

    app = FastAPI(
        title=settings.app_title,
        debug=settings.debug,
        lifespan=lifespan,
    )

    wiki = Wiki(FileStorage(settings.data_dir))
    app.state.wiki = wiki
    app.state.presenter = Presenter(
        settings.templates_dir,
        app_title=settings.app_title,
        page_exists=wiki.page_exists,
    )

    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RenderError, render_error_handler)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        path = request.url.path
        if not path.startswith("/static/") and path != "/favicon.ico":
            logger.info("Request: %s %s", request.method, path)
        return await call_next(request)

    for listing_path in sorted(LISTING_PATHS):
        app.add_api_route(
            listing_path, index, methods=sorted(LISTING_METHODS), include_in_schema=False
        )
    if settings.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")
    app.add_api_route(
        "/{path:path}",
        dispatch,
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"],
        include_in_schema=False,
    )

    return app

