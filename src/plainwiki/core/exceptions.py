"""Exceptions raised by the wiki core."""


class WikiError(Exception):
    """Base class for wiki errors."""


class InvalidPageName(WikiError):
    """A page name does not match the page name grammar."""

    def __init__(self, name: object):
        self.name = name
        super().__init__(f"Invalid page name: {name!r}")


class PageNotFound(WikiError):
    """No record exists for a valid page name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Page not found: {name}")


class StorageError(WikiError):
    """Reading, writing or listing pages failed."""


class RenderError(WikiError):
    """A template could not be rendered."""
