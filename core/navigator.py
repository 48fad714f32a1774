"""Cyclic navigation over the match list"""

import logging
from typing import Callable, List, Optional

from core.match_locator import Match

logger = logging.getLogger(__name__)

# Called with (index, match) when a match should be brought into view
ScrollPort = Callable[[int, Match], None]


class Navigator:
    """Keep track of the selected match and step through matches"""

    def __init__(self, matches: Optional[List[Match]] = None,
                 scroll_port: Optional[ScrollPort] = None):
        self.scroll_port = scroll_port
        self.matches: List[Match] = []
        self.current_index = -1
        self.reset(matches or [])

    def reset(self, matches: List[Match]):
        """Start over on a new match list"""
        self.matches = list(matches)
        self.current_index = 0 if self.matches else -1

    @property
    def has_matches(self) -> bool:
        return bool(self.matches)

    @property
    def current(self) -> Optional[Match]:
        if self.current_index < 0:
            return None
        return self.matches[self.current_index]

    def next(self) -> int:
        """Select the following match, wrapping to the first"""
        if not self.matches:
            return self.current_index
        self.current_index = (self.current_index + 1) % len(self.matches)
        self.scroll_to(self.current_index)
        return self.current_index

    def prev(self) -> int:
        """Select the preceding match, wrapping to the last"""
        if not self.matches:
            return self.current_index
        self.current_index = (self.current_index - 1 + len(self.matches)) % len(self.matches)
        self.scroll_to(self.current_index)
        return self.current_index

    def scroll_to(self, index: int) -> bool:
        """
        Ask the presentation layer to center the match at index

        Failing to scroll is not fatal: the request is logged and dropped.

        Returns:
            True if the scroll request was handed to the scroll port
        """
        if not self.matches or not 0 <= index < len(self.matches):
            return False

        match = self.matches[index]
        if match.node is None:
            logger.warning("Match %d has no highlighted segment to scroll to", index)
            return False

        if self.scroll_port is None:
            return False

        try:
            self.scroll_port(index, match)
        except Exception as e:
            logger.warning("Could not scroll to match %d: %s", index, e)
            return False
        return True

    def counter_label(self) -> str:
        """Counter text such as '3 / 12', or '0 / 0' without matches"""
        if not self.matches:
            return "0 / 0"
        return f"{self.current_index + 1} / {len(self.matches)}"
