"""Storage abstraction for wiki pages."""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from plainwiki.core.exceptions import PageNotFound, StorageError
from plainwiki.core.models import Page
from plainwiki.core.names import is_valid_name

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract base class for page storage.

    Callers are responsible for validating page names before they reach
    the store.
    """

    @abstractmethod
    async def get(self, name: str) -> Page:
        """Get a page by name. Raises PageNotFound if there is no record."""
        ...

    @abstractmethod
    async def put(self, name: str, body: bytes) -> Page:
        """Store a page, replacing any existing record."""
        ...

    @abstractmethod
    async def list_pages(self) -> list[str]:
        """List all page names."""
        ...

    @abstractmethod
    def exists(self, name: str) -> bool:
        """Check if a page exists.

        Synchronous so it can be called while a template is rendering.
        """
        ...


class FileStorage(Storage):
    """File-based storage implementation.

    Each page is a single file holding exactly the page bytes, with no
    header or metadata. File naming: PageName.txt, directly under base_path.
    """

    SUFFIX = ".txt"
    FILE_MODE = 0o600

    def __init__(self, base_path: Path):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _name_to_filename(self, name: str) -> str:
        """Convert page name to filename."""
        return name + self.SUFFIX

    def _filename_to_name(self, filename: str) -> str | None:
        """Convert filename to page name, or None if it is not a page record."""
        if not filename.endswith(self.SUFFIX):
            return None
        name = filename.removesuffix(self.SUFFIX)
        return name if is_valid_name(name) else None

    def _get_path(self, name: str) -> Path:
        """Get full path for a page."""
        return self.base_path / self._name_to_filename(name)

    def _read(self, name: str) -> bytes:
        path = self._get_path(name)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise PageNotFound(name) from exc
        except OSError as exc:
            logger.error("Failed to read page %s: %s", name, exc)
            raise StorageError(str(exc)) from exc

    def _write(self, name: str, body: bytes) -> None:
        """Write body to a temporary file, then replace the record with it.

        Readers see either the old or the new content, never a partial
        write.
        """
        path = self._get_path(name)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.base_path, prefix=f".{name}.", suffix=".tmp"
            )
        except OSError as exc:
            logger.error("Failed to save page %s: %s", name, exc)
            raise StorageError(str(exc)) from exc

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(body)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, self.FILE_MODE)
            os.replace(tmp_name, path)
        except OSError as exc:
            logger.error("Failed to save page %s: %s", name, exc)
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise StorageError(str(exc)) from exc

    def _scan(self) -> list[str]:
        pages = []
        try:
            with os.scandir(self.base_path) as entries:
                for entry in entries:
                    if not entry.is_file():
                        continue
                    name = self._filename_to_name(entry.name)
                    if name is not None:
                        pages.append(name)
        except OSError as exc:
            logger.error("Failed to list pages in %s: %s", self.base_path, exc)
            raise StorageError(str(exc)) from exc
        return pages

    async def get(self, name: str) -> Page:
        """Get a page by name."""
        body = await run_in_threadpool(self._read, name)
        return Page(name=name, body=body)

    async def put(self, name: str, body: bytes) -> Page:
        """Save a page."""
        await run_in_threadpool(self._write, name, body)
        logger.debug("Saved page %s (%d bytes)", name, len(body))
        return Page(name=name, body=body)

    async def list_pages(self) -> list[str]:
        """List all page names in directory order."""
        return await run_in_threadpool(self._scan)

    def exists(self, name: str) -> bool:
        """Check if a page exists."""
        return self._get_path(name).is_file()
