"""
Font families used by the text shapes of a host document.

A live host document root exposes `find(predicate)`; a plain document tree
(dicts with `type` and `children`) is walked instead. Single-font text
shapes carry `fontFamily` directly, mixed-font text carries it on
paragraphs and their spans.
"""

import logging
from typing import Any, Iterator

from token_codec.host.serialization import read_field

logger = logging.getLogger(__name__)

TEXT_NODE_TYPE = 'text'


def scan_fonts(root: Any) -> list[str]:
    """Sorted, de-duplicated font families of every text shape under `root`.

    Scanning is best-effort: if the host raises partway, the families
    collected so far are returned.
    """
    seen: set[str] = set()
    if root is None:
        return []
    try:
        for node in _text_nodes(root):
            _add(seen, read_field(node, 'fontFamily'))
            for para in _paragraphs(node):
                _add(seen, read_field(para, 'fontFamily'))
                for span in read_field(para, 'children') or read_field(para, 'characters') or []:
                    _add(seen, read_field(span, 'fontFamily'))
    except Exception:
        logger.warning("Font scan stopped early with %d families", len(seen), exc_info=True)
    return sorted(seen)


def _text_nodes(root: Any) -> Iterator[Any]:
    find = read_field(root, 'find')
    if callable(find):
        yield from find(lambda node: read_field(node, 'type') == TEXT_NODE_TYPE) or []
        return

    stack = [root]
    while stack:
        node = stack.pop()
        if read_field(node, 'type') == TEXT_NODE_TYPE:
            yield node
        stack.extend(reversed(list(read_field(node, 'children') or [])))


def _paragraphs(node: Any) -> list:
    paragraphs = read_field(node, 'paragraphs')
    if paragraphs is None:
        paragraphs = read_field(read_field(node, 'content'), 'paragraphs')
    return list(paragraphs or [])


def _add(seen: set[str], family: Any) -> None:
    if isinstance(family, str) and family:
        seen.add(family)
