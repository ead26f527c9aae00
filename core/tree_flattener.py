"""
Depth-first flattening of the model element tree.
"""

from typing import Iterable, Iterator, List
import logging

from models.element import Element

logger = logging.getLogger(__name__)


def flatten_items(roots: Iterable[Element]) -> Iterator[Element]:
    """
    Yield every element reachable from the given roots, depth-first pre-order.

    Each root is followed immediately by its whole subtree, children in their
    existing order. Roots are walked independently, so a root that also lies
    inside another selected root's subtree is yielded once per slot.

    Args:
        roots: Selected root elements

    Yields:
        Elements in traversal order
    """
    for root in roots:
        yield from _walk(root)


def _walk(root: Element) -> Iterator[Element]:
    # Explicit stack: reversed children keep pre-order left-to-right
    stack = [root]
    while stack:
        element = stack.pop()
        yield element
        children = _safe_children(element)
        if children:
            stack.extend(reversed(children))


def _safe_children(element: Element) -> List[Element]:
    """Children of an element, or [] when the child accessor fails."""
    try:
        return element.get_children() or []
    except Exception as e:
        logger.debug(f"Treating '{element.display_name}' as leaf, children unavailable: {e}")
        return []
