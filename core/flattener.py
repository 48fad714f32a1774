"""Flatten a document tree into one searchable string"""

from dataclasses import dataclass
from typing import List, Tuple

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

# Text inside these tags is never rendered, so it is not searchable
NON_RENDERED_TAGS = frozenset({'script', 'style', 'template', 'noscript'})


@dataclass
class TextLeaf:
    """One text node of the document and where it sits in the flattened text"""
    node: NavigableString
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def is_text_leaf(element: PageElement) -> bool:
    """True for text nodes that render as visible text"""
    # Comment, CData, Doctype, Declaration and ProcessingInstruction all
    # derive from PreformattedString.
    if not isinstance(element, NavigableString) or isinstance(element, PreformattedString):
        return False
    parent = element.parent
    return parent is None or parent.name not in NON_RENDERED_TAGS


def flatten(root: Tag) -> Tuple[List[TextLeaf], str]:
    """
    Walk the tree in document order and concatenate every text leaf

    Args:
        root: Tag (or BeautifulSoup object) to walk. Leaves must have a
            parent so they can be replaced when highlights are spliced in.

    Returns:
        Tuple of (leaves, flattened_text). Leaf ranges partition the
        flattened text exactly; empty leaves are kept with zero length.
    """
    if not isinstance(root, Tag):
        raise TypeError(f"Expected a Tag to flatten, got {type(root).__name__}")

    leaves = []
    parts = []
    offset = 0

    for element in root.descendants:
        if not is_text_leaf(element):
            continue
        text = str(element)
        leaves.append(TextLeaf(node=element, text=text, start=offset))
        parts.append(text)
        offset += len(text)

    return leaves, ''.join(parts)
