import pytest

from core.fetcher import FetchError
from core.search_manager import SearchManager, recompute

DOCUMENT = (
    "<html><body>"
    "<p>The <b>Te</b>sla report mentions&nbsp;Tesla twice.</p>"
    "</body></html>"
)


class FakeFetcher:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = 0

    def fetch(self):
        self.calls += 1
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_recompute_highlights_matches():
    outcome = recompute("<p>The Tesla report mentions Tesla twice</p>", "tesla")

    assert [(m.start, m.length) for m in outcome.matches] == [(4, 5), (26, 5)]
    assert outcome.soup.get_text() == outcome.flattened_text
    assert len(outcome.soup.find_all("span", class_="highlighted-text")) == 2


def test_recompute_short_query_does_not_splice():
    markup = "<p>ab ab ab</p>"

    outcome = recompute(markup, "ab")

    assert outcome.matches == []
    assert outcome.html == markup


def test_recompute_is_idempotent():
    markup = "<div><p>Te<i>sla</i></p><p>tesla</p></div>"

    first = recompute(markup, "tesla")
    second = recompute(markup, "tesla")

    assert first.html == second.html
    assert [(m.start, m.length) for m in first.matches] == [(m.start, m.length) for m in second.matches]


def test_open_fetches_searches_and_scrolls_to_first_match():
    scrolled = []
    manager = SearchManager(fetcher=FakeFetcher([DOCUMENT]),
                            scroll_port=lambda index, match: scrolled.append(index))

    assert manager.open("tesla") is True

    assert manager.is_open
    assert manager.outcome.match_count == 2
    assert manager.navigator.current_index == 0
    assert manager.navigator.counter_label() == "1 / 2"
    assert scrolled == [0]
    assert "\u00a0" not in manager.document


def test_open_ignores_short_query():
    fetcher = FakeFetcher([DOCUMENT])
    manager = SearchManager(fetcher=fetcher)

    assert manager.open("te") is False
    assert fetcher.calls == 0
    assert not manager.is_open


def test_open_fetch_failure_keeps_panel_closed():
    manager = SearchManager(fetcher=FakeFetcher([FetchError("500: Error Occured")]))

    assert manager.open("tesla") is False
    assert not manager.is_open
    assert manager.outcome is None
    assert manager.last_error == "500: Error Occured"


def test_zero_matches_disable_navigation():
    manager = SearchManager(fetcher=FakeFetcher([DOCUMENT]))

    manager.open("nothing like this")

    assert manager.is_open
    assert manager.outcome.matches == []
    assert manager.navigator.current_index == -1
    assert manager.navigator.counter_label() == "0 / 0"


def test_set_query_searches_open_document_again():
    manager = SearchManager(fetcher=FakeFetcher([DOCUMENT]))
    manager.open("tesla")
    manager.navigator.next()

    outcome = manager.set_query("report")

    assert outcome.match_count == 1
    assert manager.navigator.current_index == 0


def test_set_query_on_closed_panel_only_stores_query():
    manager = SearchManager(fetcher=FakeFetcher([]))

    assert manager.set_query("tesla") is None
    assert manager.query == "tesla"


def test_close_hides_panel():
    manager = SearchManager(fetcher=FakeFetcher([DOCUMENT]))
    manager.open("tesla")

    manager.close()

    assert not manager.is_open


def test_stale_response_is_discarded():
    manager = SearchManager(fetcher=FakeFetcher([]))
    old_token = manager.begin_fetch()
    new_token = manager.begin_fetch()

    assert manager.load_document("<p>newer</p>", new_token) is True
    assert manager.load_document("<p>older</p>", old_token) is False
    assert manager.document == "<p>newer</p>"


def test_stale_response_applied_when_fencing_disabled():
    manager = SearchManager(fetcher=FakeFetcher([]), discard_stale=False)
    old_token = manager.begin_fetch()
    manager.begin_fetch()

    assert manager.load_document("<p>older</p>", old_token) is True
    assert manager.document == "<p>older</p>"


@pytest.mark.parametrize("min_length,query,expected", [(3, "Tes", True), (4, "Tes", False)])
def test_min_length_is_configurable(min_length, query, expected):
    manager = SearchManager(fetcher=FakeFetcher([DOCUMENT]), min_length=min_length)

    assert manager.open(query) is expected


def test_short_query_on_open_panel_keeps_highlights():
    manager = SearchManager(fetcher=FakeFetcher([DOCUMENT]))
    manager.open("tesla")
    before = manager.outcome

    outcome = manager.set_query("te")

    assert outcome is before
    assert manager.query == "te"
    assert outcome.match_count == 2
    assert manager.navigator.counter_label() == "1 / 2"


def test_min_length_cannot_go_below_three():
    manager = SearchManager(fetcher=FakeFetcher([DOCUMENT]), min_length=1)

    assert manager.min_length == 3
    assert manager.open("T") is False
