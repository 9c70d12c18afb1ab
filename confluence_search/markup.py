"""Convert Confluence HTML representations into Markdown."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup
from markdownify import ATX, MarkdownConverter

_DROPPED_TAGS = ["script", "style"]
_BLANK_RUNS = re.compile(r"\n{3,}")

_converter = MarkdownConverter(heading_style=ATX, bullets="-")


def html_to_markdown(html: str) -> str:
    """Render page HTML as Markdown, keeping headings, links, lists and tables."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_DROPPED_TAGS):
        tag.decompose()
    markdown = _converter.convert_soup(soup)
    return _BLANK_RUNS.sub("\n\n", markdown).strip()
