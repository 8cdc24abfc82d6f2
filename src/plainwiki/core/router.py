"""Request path parsing for page operations.

Paths have the form ``/<operation>/<name>``. Anything else is rejected
before it can reach the store.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from plainwiki.core.exceptions import InvalidPageName
from plainwiki.core.names import validate_name

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """Page operations addressable by path."""

    VIEW = "view"
    EDIT = "edit"
    SAVE = "save"

    @property
    def methods(self) -> frozenset[str]:
        """HTTP methods accepted for this operation."""
        if self is Operation.SAVE:
            return frozenset({"POST"})
        return frozenset({"GET", "HEAD"})


@dataclass(frozen=True)
class Route:
    """A parsed page path."""

    operation: Operation
    name: str

    @property
    def path(self) -> str:
        return f"/{self.operation.value}/{self.name}"


def page_url(operation: Operation, name: str) -> str:
    """Build the path for an operation on a page."""
    return Route(operation, name).path


def match_route(path: str) -> Route | None:
    """Parse a request path into a Route.

    Returns None unless the path is exactly one operation keyword and one
    valid page name, e.g. ``/view/HomePage``. Trailing slashes, extra
    segments and names outside the page name grammar are all rejected.
    """
    if not path.startswith("/"):
        return None

    segments = path[1:].split("/")
    if len(segments) != 2:
        logger.debug("Rejected path %r: expected 2 segments", path)
        return None

    keyword, name = segments
    try:
        operation = Operation(keyword)
    except ValueError:
        logger.debug("Rejected path %r: unknown operation", path)
        return None

    try:
        return Route(operation, validate_name(name))
    except InvalidPageName:
        logger.debug("Rejected path %r: invalid page name", path)
        return None
