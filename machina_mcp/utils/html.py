"""HTML to plain text / Markdown conversion for documentation pages.

None of these functions raise on malformed markup.
"""

import re
from typing import List

from bs4 import BeautifulSoup
from bs4.element import Comment, Doctype, NavigableString, Tag

DROPPED_TAGS = ["script", "style", "noscript", "svg", "head"]
BLOCK_TAGS = {
    "p",
    "div",
    "section",
    "article",
    "header",
    "footer",
    "nav",
    "main",
    "table",
    "tr",
    "blockquote",
}
HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}

_WS_RE = re.compile(r"\s+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_PLACEHOLDER = "\x00{}\x00"
_PLACEHOLDER_RE = re.compile(r"\x00(\d+)\x00")


def _soup(markup: str) -> BeautifulSoup:
    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup(DROPPED_TAGS):
        tag.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    return soup


def _squash(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def extract_main_content(page: str) -> str:
    """Return the inner HTML of the first <main> element, or the whole page."""
    main = BeautifulSoup(page, "html.parser").find("main")
    return main.decode_contents() if main is not None else page


def html_to_text(fragment: str) -> str:
    """Strip tags and collapse whitespace into a single line of text."""
    return _squash(_soup(fragment).get_text(" "))


def _convert(node, blocks: List[str]) -> str:
    if isinstance(node, (Comment, Doctype)):
        return ""
    if isinstance(node, NavigableString):
        return str(node)
    if not isinstance(node, Tag):
        return ""

    name = node.name
    if name == "pre":
        # Kept out of whitespace normalisation until the end
        blocks.append("```\n" + node.get_text().strip("\n") + "\n```")
        return "\n\n" + _PLACEHOLDER.format(len(blocks) - 1) + "\n\n"
    if name == "br":
        return "\n"
    if name in ("ul", "ol"):
        items = [
            "- " + _squash(_convert(child, blocks))
            for child in node.children
            if isinstance(child, Tag) and child.name == "li"
        ]
        return "\n\n" + "\n".join(items) + "\n\n"

    inner = "".join(_convert(child, blocks) for child in node.children)
    if name in HEADING_TAGS:
        return "\n\n" + "#" * int(name[1]) + " " + _squash(inner) + "\n\n"
    if name == "a" and node.get("href"):
        return f"[{_squash(inner)}]({node['href']})"
    if name in ("strong", "b"):
        return f"**{inner.strip()}**"
    if name in ("em", "i"):
        return f"*{inner.strip()}*"
    if name == "code":
        return f"`{inner.strip()}`"
    if name == "li":
        return "\n- " + _squash(inner) + "\n"
    if name in BLOCK_TAGS:
        return "\n\n" + inner + "\n\n"
    return inner


def html_to_markdown(fragment: str) -> str:
    """Convert an HTML fragment to Markdown.

    Handles headings, links, emphasis, inline and fenced code, lists,
    paragraphs and line breaks. Unknown tags are dropped, their text kept.
    """
    blocks: List[str] = []
    text = "".join(_convert(child, blocks) for child in _soup(fragment).children)

    lines = [_squash(line) for line in text.split("\n")]
    text = _BLANK_RUN_RE.sub("\n\n", "\n".join(lines)).strip()
    return _PLACEHOLDER_RE.sub(lambda m: blocks[int(m.group(1))], text)
