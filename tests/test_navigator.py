import logging

from core.match_locator import Match
from core.navigator import Navigator


def make_matches(count, with_nodes=True):
    return [
        Match(start=i * 10, length=5, node=object() if with_nodes else None)
        for i in range(count)
    ]


def test_new_navigator_selects_first_match():
    navigator = Navigator(make_matches(3))

    assert navigator.current_index == 0
    assert navigator.counter_label() == "1 / 3"
    assert navigator.has_matches


def test_empty_navigator():
    navigator = Navigator([])

    assert navigator.current_index == -1
    assert navigator.current is None
    assert navigator.counter_label() == "0 / 0"
    assert not navigator.has_matches
    assert navigator.next() == -1
    assert navigator.prev() == -1


def test_next_cycles_back_to_start():
    matches = make_matches(4)
    navigator = Navigator(matches)

    for _ in range(len(matches)):
        navigator.next()

    assert navigator.current_index == 0


def test_prev_from_first_wraps_to_last():
    navigator = Navigator(make_matches(5))

    assert navigator.prev() == 4
    assert navigator.counter_label() == "5 / 5"


def test_single_match_stays_selected():
    navigator = Navigator(make_matches(1))

    assert navigator.next() == 0
    assert navigator.prev() == 0


def test_reset_replaces_matches():
    navigator = Navigator(make_matches(3))
    navigator.next()

    navigator.reset([])
    assert navigator.current_index == -1

    navigator.reset(make_matches(2))
    assert navigator.current_index == 0


def test_next_and_prev_scroll_to_new_index():
    calls = []
    matches = make_matches(3)
    navigator = Navigator(matches, scroll_port=lambda index, match: calls.append((index, match)))

    navigator.next()
    navigator.prev()
    navigator.prev()

    assert calls == [(1, matches[1]), (0, matches[0]), (2, matches[2])]


def test_scroll_failure_is_not_fatal(caplog):
    def broken_port(index, match):
        raise RuntimeError("panel not attached")

    navigator = Navigator(make_matches(2), scroll_port=broken_port)

    with caplog.at_level(logging.WARNING):
        assert navigator.next() == 1

    assert "panel not attached" in caplog.text


def test_scroll_to_match_without_segment():
    calls = []
    navigator = Navigator(make_matches(2, with_nodes=False),
                          scroll_port=lambda index, match: calls.append(index))

    assert navigator.scroll_to(0) is False
    assert calls == []


def test_scroll_to_out_of_range_index():
    navigator = Navigator(make_matches(2), scroll_port=lambda index, match: None)

    assert navigator.scroll_to(5) is False
    assert navigator.scroll_to(-1) is False
    assert navigator.scroll_to(1) is True
