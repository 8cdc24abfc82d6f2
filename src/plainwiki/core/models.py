"""Data models for PlainWiki."""

from pydantic import BaseModel, ConfigDict, Field


class Page(BaseModel):
    """A wiki page: a name and its raw stored bytes."""

    model_config = ConfigDict(frozen=True)

    name: str
    body: bytes = b""
    exists: bool = True

    @classmethod
    def placeholder(cls, name: str) -> "Page":
        """Empty page shown by the edit form before the first save."""
        return cls(name=name, body=b"", exists=False)

    @property
    def content(self) -> str:
        """Body decoded as UTF-8 for display."""
        return self.body.decode("utf-8", errors="replace")


class PageIndex(BaseModel):
    """Names of all stored pages, in storage enumeration order."""

    names: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.names
