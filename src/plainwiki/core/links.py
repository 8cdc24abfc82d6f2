"""Wiki link rendering: [PageName] markers to view links."""

import re
from typing import Callable

from markupsafe import Markup, escape

from plainwiki.core.names import PAGE_NAME_PATTERN

# Pattern for wiki links: [PageName]
LINK_PATTERN = rf"\[({PAGE_NAME_PATTERN})\]"

_LINK_RE = re.compile(LINK_PATTERN)


def _as_text(body: bytes | str) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def _render_link(name: str, page_exists: Callable[[str], bool] | None) -> str:
    """Build the anchor for a single marker.

    The name has already matched the page name grammar, so it needs no
    escaping.
    """
    css_class = "wiki-link"
    if page_exists is not None and not page_exists(name):
        css_class = "wiki-link wiki-link-missing"
    return f'<a href="/view/{name}" class="{css_class}">{name}</a>'


def process_links(
    body: bytes | str,
    page_exists: Callable[[str], bool] | None = None,
) -> Markup:
    """Replace every [PageName] marker in body with a link to its view page.

    Text outside the markers is HTML-escaped. Markers whose contents do not
    match the page name grammar are left as literal text.

    Args:
        body: Raw page content.
        page_exists: Optional callback; links to pages it reports as missing
            get the extra ``wiki-link-missing`` class.

    Returns:
        Markup safe to insert into a template unescaped.
    """
    text = _as_text(body)
    parts = []
    pos = 0
    for m in _LINK_RE.finditer(text):
        parts.append(str(escape(text[pos : m.start()])))
        parts.append(_render_link(m.group(1), page_exists))
        pos = m.end()
    parts.append(str(escape(text[pos:])))
    return Markup("".join(parts))
