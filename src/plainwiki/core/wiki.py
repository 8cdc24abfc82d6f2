"""Page operations independent of the HTTP layer.

Missing pages surface as PageNotFound from view() so the caller decides
how to navigate; edit() turns them into an empty placeholder.
"""

from plainwiki.core.exceptions import PageNotFound
from plainwiki.core.models import Page, PageIndex
from plainwiki.core.storage import Storage


class Wiki:
    """View, edit, save and list operations over a Storage."""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def view(self, name: str) -> Page:
        """Load a page for display. Raises PageNotFound if it does not exist."""
        return await self.storage.get(name)

    async def edit(self, name: str) -> Page:
        """Load a page for editing, or an empty placeholder for a new page."""
        try:
            return await self.storage.get(name)
        except PageNotFound:
            return Page.placeholder(name)

    async def save(self, name: str, body: str | bytes) -> Page:
        """Store new content for a page."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        return await self.storage.put(name, body)

    async def index(self) -> PageIndex:
        """List every stored page."""
        return PageIndex(names=await self.storage.list_pages())

    def page_exists(self, name: str) -> bool:
        """Synchronous existence check, used while rendering links."""
        return self.storage.exists(name)
