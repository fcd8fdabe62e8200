"""Lenient HTML parsing and tree lookups on top of BeautifulSoup.

``html.parser`` never gives up on malformed markup; it builds whatever
partial tree it can. Attributes are kept as plain strings (no multi-valued
``class``/``rel`` lists) so attribute matches are exact string compares.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PreformattedString

logger = logging.getLogger(__name__)

DocumentTree = BeautifulSoup

# Elements an HTML5 parser would keep out of an implied <body>.
_HEAD_ELEMENTS = ["head", "title"]


def _build(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser", multi_valued_attributes=None)


def parse_html(html: str) -> DocumentTree:
    """Parse *html* into a tree; never raises on bad markup."""
    try:
        return _build(html)
    except ParserRejectedMarkup as exc:
        logger.info("Parser rejected markup, using empty document: %s", exc)
        return _build("")


def find_by_tag_name(tree: Tag, name: str) -> List[Tag]:
    """Return all descendants named *name* (case-insensitive), in document order."""
    return tree.find_all(name.lower())


def find_by_attribute(
    tree: Tag,
    attr_name: str,
    attr_value: Optional[str] = None,
    tag_name: Optional[str] = None,
) -> List[Tag]:
    """Return descendants carrying *attr_name*, in document order.

    With *attr_value* the attribute must equal it exactly; without it any
    value matches. *tag_name* optionally restricts the element type.
    """
    attr_name = attr_name.lower()
    wanted_tag = tag_name.lower() if tag_name else None

    def _matches(tag: Tag) -> bool:
        if wanted_tag is not None and tag.name != wanted_tag:
            return False
        if not tag.has_attr(attr_name):
            return False
        return attr_value is None or tag[attr_name] == attr_value

    return tree.find_all(_matches)


def _text_nodes(element: Tag) -> Iterator[NavigableString]:
    # Comments, doctypes, declarations and CDATA are PreformattedString;
    # script/style/template text is a plain NavigableString subclass.
    for node in element.descendants:
        if isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            yield node


def text_content(element: Tag) -> str:
    """Concatenate every descendant text node with no separators.

    Like DOM ``textContent`` this includes the text of any ``<script>`` or
    ``<style>`` element still present in the tree.
    """
    return "".join(_text_nodes(element))


def body_text(tree: DocumentTree) -> str:
    """Return the text content of the document body.

    Uses the first ``<body>`` element. When the markup omits it, the body is
    implied: everything outside ``<head>`` and ``<title>``.
    """
    bodies = find_by_tag_name(tree, "body")
    if bodies:
        return text_content(bodies[0])

    excluded = {
        id(node) for tag in tree.find_all(_HEAD_ELEMENTS) for node in _text_nodes(tag)
    }
    return "".join(node for node in _text_nodes(tree) if id(node) not in excluded)
