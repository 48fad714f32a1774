"""Rebuild text leaves with highlight segments around matches"""

from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString

from config import Config
from core.flattener import TextLeaf
from core.match_locator import Match


@dataclass
class Segment:
    """One piece of a leaf's replacement: plain text or a highlighted match"""
    text: str
    highlighted: bool = False
    match_index: Optional[int] = None


def plan_segments(leaves: List[TextLeaf], matches: List[Match]) -> List[Optional[List[Segment]]]:
    """
    Work out the replacement segments for every leaf

    A match can span several consecutive leaves, so the match cursor is
    carried across the leaf loop and only advances once the current match's
    end has been consumed.

    Returns:
        One entry per leaf: None when the leaf is left untouched, otherwise
        the ordered segments whose texts concatenate to the leaf's text.
    """
    plan = []
    match_index = 0

    for leaf in leaves:
        text = leaf.text
        node_start, node_end = leaf.start, leaf.end
        segments = []
        local_offset = 0

        while match_index < len(matches) and matches[match_index].start < node_end:
            match = matches[match_index]
            local_start = max(0, match.start - node_start)
            local_end = min(len(text), match.end - node_start)

            if local_start > local_offset:
                segments.append(Segment(text[local_offset:local_start]))
                local_offset = local_start

            if local_end > local_start:
                segments.append(Segment(text[local_start:local_end], True, match_index))
                local_offset = local_end

            if match.end > node_end:
                # Match continues into the next leaf
                break
            match_index += 1

        if not any(segment.highlighted for segment in segments):
            plan.append(None)
            continue

        if local_offset < len(text):
            segments.append(Segment(text[local_offset:]))
        plan.append(segments)

    return plan


def splice(soup: BeautifulSoup, leaves: List[TextLeaf], matches: List[Match],
           highlight_class: Optional[str] = None) -> BeautifulSoup:
    """
    Replace each touched leaf with its plain and highlighted segments

    Highlights are <span> tags carrying the highlight class and a
    data-match index; the first span of every match also gets an id of
    match-<index> and is recorded as Match.node.
    """
    if highlight_class is None:
        highlight_class = Config.HIGHLIGHT_CLASS

    for match in matches:
        match.node = None
        match.segments = []

    plan = plan_segments(leaves, matches)

    for leaf, segments in zip(leaves, plan):
        if segments is None:
            continue

        replacements = []
        for segment in segments:
            if not segment.highlighted:
                replacements.append(NavigableString(segment.text))
                continue

            match = matches[segment.match_index]
            span = soup.new_tag('span', attrs={
                'class': [highlight_class],
                'data-match': str(segment.match_index)
            })
            span.string = segment.text
            if match.node is None:
                span['id'] = f"match-{segment.match_index}"
                match.node = span
            match.segments.append(span)
            replacements.append(span)

        leaf.node.replace_with(*replacements)

    return soup
