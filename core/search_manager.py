"""Search pipeline and the session state around it"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import BeautifulSoup

from config import Config
from core.fetcher import DocumentFetcher, FetchError
from core.flattener import TextLeaf, flatten
from core.match_locator import Match, is_searchable, locate_matches
from core.navigator import Navigator, ScrollPort
from core.sanitizer import sanitize_document
from core.splicer import splice

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    """Result of one search over one document"""
    soup: BeautifulSoup
    flattened_text: str
    query: str
    leaves: List[TextLeaf] = field(default_factory=list)  # as flattened, before splicing
    matches: List[Match] = field(default_factory=list)

    @property
    def html(self) -> str:
        return self.soup.decode()

    @property
    def match_count(self) -> int:
        return len(self.matches)


def recompute(html: str, query: str, min_length: Optional[int] = None,
              highlight_class: Optional[str] = None) -> SearchOutcome:
    """
    Run the whole search over a freshly parsed copy of the document

    The tree is parsed from the markup on every call, so repeated searches
    never stack highlights on top of earlier ones. When the query is too
    short or nothing matches the tree comes back unspliced.
    """
    soup = BeautifulSoup(html or "", 'html.parser')
    leaves, text = flatten(soup)
    matches = locate_matches(text, query, min_length)

    if matches:
        splice(soup, leaves, matches, highlight_class)

    return SearchOutcome(
        soup=soup,
        flattened_text=text,
        query=query,
        leaves=leaves,
        matches=matches
    )


class SearchManager:
    """Own the loaded document, the query, the latest outcome and navigation"""

    def __init__(self, fetcher: Optional[DocumentFetcher] = None,
                 scroll_port: Optional[ScrollPort] = None,
                 min_length: Optional[int] = None,
                 discard_stale: Optional[bool] = None):
        self.fetcher = fetcher or DocumentFetcher()
        if min_length is None:
            min_length = Config.MIN_QUERY_LENGTH
        self.min_length = max(min_length, Config.MIN_QUERY_LENGTH_FLOOR)
        self.discard_stale = Config.DISCARD_STALE_RESPONSES if discard_stale is None else discard_stale
        self.navigator = Navigator(scroll_port=scroll_port)
        self.document = ""
        self.query = ""
        self.outcome: Optional[SearchOutcome] = None
        self.is_open = False
        self.last_error: Optional[str] = None
        self.latest_token = 0

    def begin_fetch(self) -> int:
        """Issue the token for a new fetch; newer tokens supersede older ones"""
        self.latest_token += 1
        return self.latest_token

    def load_document(self, raw, token: Optional[int] = None) -> bool:
        """
        Sanitize and keep a fetched document

        Returns:
            False if the response belongs to a superseded fetch and was dropped
        """
        if self.discard_stale and token is not None and token < self.latest_token:
            logger.info("Discarding stale response %d (latest is %d)", token, self.latest_token)
            return False

        self.document = sanitize_document(raw)
        return True

    def open(self, query: str) -> bool:
        """
        Fetch the document and search it, showing the panel on success

        Too-short queries are ignored. Fetch failures are logged and leave
        the panel closed.
        """
        if not is_searchable(query, self.min_length):
            logger.debug("Ignoring query shorter than %d characters", self.min_length)
            return False

        self.query = query
        self.last_error = None
        token = self.begin_fetch()

        try:
            raw = self.fetcher.fetch()
        except FetchError as e:
            logger.error("Error fetching document: %s", e)
            self.last_error = str(e)
            return False

        if not self.load_document(raw, token):
            return False

        self.is_open = True
        self.search()
        return True

    def set_query(self, query: str) -> Optional[SearchOutcome]:
        """
        Change the query; an open panel is searched again straight away

        Too-short queries are stored but not searched, so the current
        highlights and selection stay in place.
        """
        self.query = query
        if not self.is_open:
            return None
        if not is_searchable(query, self.min_length):
            return self.outcome
        return self.search()

    def search(self) -> SearchOutcome:
        """Recompute highlights for the current document and query"""
        self.outcome = recompute(self.document, self.query, self.min_length)
        self.navigator.reset(self.outcome.matches)

        if self.outcome.matches:
            logger.info("Found %d matches for %r", self.outcome.match_count, self.query)
            self.navigator.scroll_to(0)
        else:
            logger.info("No matches for %r", self.query)

        return self.outcome

    def close(self):
        """Hide the panel; the document and matches are kept"""
        self.is_open = False
