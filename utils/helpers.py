"""Utility helper functions"""

import logging
from typing import Optional, Tuple

from config import Config


def configure_logging(level: Optional[str] = None):
    """Configure root logging for the entry points"""
    logging.basicConfig(
        level=(level or Config.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def validate_query(query: str, min_length: Optional[int] = None) -> Tuple[bool, str]:
    """Check whether a query is long enough to search"""
    if min_length is None:
        min_length = Config.MIN_QUERY_LENGTH

    if not query:
        return False, "Enter a search term"

    if len(query) < min_length:
        return False, f"Search term must be at least {min_length} characters"

    return True, "Valid query"


def create_context(text: str, match_start: int, match_end: int,
                   context_chars: int = 80) -> Tuple[str, int, int]:
    """
    Cut a snippet of text around a match

    Returns:
        Tuple of (context_text, relative_match_start, relative_match_end)
    """
    start = max(0, match_start - context_chars)
    end = min(len(text), match_end + context_chars)
    context = text[start:end]
    return context, match_start - start, match_end - start


def clean_filename(text: str, limit: int = 20) -> str:
    """Keep only alphanumerics so text can go into a file name"""
    return "".join(c for c in text if c.isalnum())[:limit]
