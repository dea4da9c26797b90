"""Anchor scanner for HTML pages.

Parses the page once with selectolax's lexbor engine (which recovers from
malformed markup the way browsers do) and walks the tree in document order,
yielding the ``id`` of every element that has one. The walk is lazy, so a
caller looking for a single anchor can stop at the first match while a caller
filling a cache can keep going to the end of the page.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import structlog
from selectolax.lexbor import LexborHTMLParser

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from selectolax.lexbor import LexborNode

log = structlog.get_logger()

_NON_ELEMENT_PREFIXES = ("#", "-", "_")


class Visit(Enum):
    CONTINUE = "continue"
    STOP = "stop"


def _is_element(node: LexborNode) -> bool:
    # Comments are yielded by traverse() too; lexbor names them "#comment" or "_comment"
    return bool(node.tag) and not node.tag.startswith(_NON_ELEMENT_PREFIXES)


def iter_element_ids(html: bytes) -> Iterator[str]:
    """Yield element ids in document (pre-)order.

    Bytes that the parser cannot handle at all produce no ids, so the anchor
    is reported missing instead of the check blowing up.
    """
    try:
        tree = LexborHTMLParser(html)
    except (RuntimeError, ValueError):
        log.warning("html_parse_failed", size=len(html), exc_info=True)
        return

    if tree.root is None:
        return

    for node in tree.root.traverse(include_text=False):
        if not _is_element(node):
            continue
        element_id = node.attributes.get("id")
        if element_id:
            yield element_id


def visit_element_ids(html: bytes, visitor: Callable[[str], Visit]) -> bool:
    """Call ``visitor`` for each id until it returns ``Visit.STOP``.

    Returns True if the visitor stopped the walk early.
    """
    for element_id in iter_element_ids(html):
        if visitor(element_id) is Visit.STOP:
            return True
    return False
