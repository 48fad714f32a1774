"""Locate literal, case-insensitive occurrences of a query"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from config import Config


@dataclass
class Match:
    """One occurrence of the query in the flattened text"""
    start: int
    length: int
    text: str = ""
    node: Optional[object] = None  # first highlight segment, set by the splicer
    segments: List[object] = field(default_factory=list)

    @property
    def end(self) -> int:
        return self.start + self.length


def build_pattern(query: str) -> re.Pattern:
    """Build a literal, case-insensitive pattern for the query"""
    return re.compile(re.escape(query), re.IGNORECASE)


def is_searchable(query: Optional[str], min_length: Optional[int] = None) -> bool:
    """Queries shorter than the minimum length are not searched"""
    if min_length is None:
        min_length = Config.MIN_QUERY_LENGTH
    return bool(query) and len(query) >= min_length


def locate_matches(text: str, query: str, min_length: Optional[int] = None) -> List[Match]:
    """
    Find all non-overlapping occurrences of query in text

    Scans left to right; an occurrence consumes its whole span before the
    scan resumes, so when two candidates overlap only the leftmost is kept.

    Returns:
        Matches sorted by start. Empty when the query is too short.
    """
    if not text or not is_searchable(query, min_length):
        return []

    pattern = build_pattern(query)
    return [
        Match(start=m.start(), length=m.end() - m.start(), text=m.group())
        for m in pattern.finditer(text)
    ]
