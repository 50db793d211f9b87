"""Tests for the client-side filter engine."""

import pytest
from PyQt6.QtTest import QTest


def ids(records):
    return [id(record) for record in records]


class RecordingPaginator:
    """Paginator double recording first-page requests."""

    def __init__(self):
        self.calls = []

    def go_to_first_page(self, silent=False):
        self.calls.append(silent)


@pytest.fixture
def setup(qapp, people):
    """Live collection over people, a search box and a filter with a short wait."""
    from pyqt_livefilter.core import ObservableCollection
    from pyqt_livefilter.services import ClientSideFilter
    from pyqt_livefilter.widgets import SearchBox

    live = ObservableCollection(people)
    box = SearchBox()
    engine = ClientSideFilter(live, box, wait_ms=20)
    yield live, box, engine
    engine.dispose()


def type_query(box, text):
    """Simulate user input: set the text and emit the edit notification."""
    box.line_edit.setText(text)
    box.input_changed.emit(text)


def test_search_filters_live_collection(setup, people):
    """'lima' narrows the live collection to Bob, case-insensitively, across fields."""
    live, box, engine = setup

    box.set_value("lima")
    engine.apply_search()
    assert ids(live) == ids([people[1]])
    assert engine.applied_query == "lima"


def test_multi_token_query_matches_any_token(setup, people):
    live, box, engine = setup

    box.set_value("alice bob")
    engine.apply_search()
    assert ids(live) == ids(people[:2])


def test_search_never_alters_shadow(setup, people):
    live, box, engine = setup

    box.set_value("carol")
    engine.apply_search()
    assert ids(live) == ids([people[2]])
    assert ids(engine.shadow_records()) == ids(people)


def test_search_then_clear_round_trips(setup, people):
    live, box, engine = setup
    before = ids(engine.shadow_records())

    box.set_value("reno oslo")
    engine.apply_search()
    assert len(live) == 2

    engine.apply_clear()
    assert ids(live) == before
    assert box.query() == ""


def test_clear_is_idempotent(setup, people):
    live, box, engine = setup

    box.set_value("bob")
    engine.apply_search()
    engine.apply_clear()
    once = ids(live)
    engine.apply_clear()
    assert ids(live) == once == ids(people)


def test_blank_query_behaves_as_clear(setup, people):
    """Remove B, then search with an empty box: live becomes the shadow, [A, C]."""
    live, box, engine = setup
    alice, bob, carol = people
    cleared = []
    engine.filter_cleared.connect(lambda: cleared.append(1))

    live.remove(bob)
    assert ids(engine.shadow_records()) == ids([alice, carol])

    box.set_value("   ")
    engine.apply_search()
    assert ids(live) == ids([alice, carol])
    assert cleared == [1]


def test_mutations_while_filtered_reach_shadow(setup, people):
    """Adds and removes during a search are kept once the filter is cleared."""
    live, box, engine = setup
    alice, bob, carol = people
    dave = {"name": "Dave", "city": "Lima", "age": 50}

    box.set_value("lima")
    engine.apply_search()
    live.add(dave)
    live.remove(bob)
    assert ids(live) == ids([dave])

    engine.apply_clear()
    assert ids(live) == ids([alice, carol, dave])


def test_sort_while_filtered_keeps_shadow_order(setup, people):
    live, box, engine = setup

    box.set_value("a")
    engine.apply_search()
    live.sort(key=lambda r: -r["age"])
    assert ids(engine.shadow_records()) == ids(people)

    engine.apply_clear()
    live.sort(key=lambda r: r["age"])
    assert ids(engine.shadow_records()) == ids([people[2], people[0], people[1]])


def test_sort_after_box_emptied_keeps_filtered_records_out_of_shadow(setup, people):
    """An emptied box over a still-filtered view must not let a sort shrink the shadow."""
    live, box, engine = setup

    box.set_value("bob")
    engine.apply_search()
    box.set_value("")
    live.sort(key=lambda r: r["age"])
    assert ids(engine.shadow_records()) == ids(people)

    engine.apply_clear()
    assert ids(live) == ids(people)


def test_sort_with_typed_but_unapplied_query_resyncs_shadow(setup, people):
    """A query still waiting on the debounce does not block resyncing an unfiltered sort."""
    live, box, engine = setup

    type_query(box, "bob")
    assert engine.search.is_pending
    assert not engine.is_query_active()

    live.sort(key=lambda r: r["age"])
    by_age = [people[2], people[0], people[1]]
    assert ids(engine.shadow_records()) == ids(by_age)

    QTest.qWait(80)
    assert ids(live) == ids([people[1]])
    engine.apply_clear()
    assert ids(live) == ids(by_age)


def test_external_data_refresh_resyncs_shadow(setup):
    live, box, engine = setup
    fresh = [{"name": "Erin"}, {"name": "Frank"}]

    live.reset(fresh)
    assert ids(engine.shadow_records()) == ids(fresh)

    box.set_value("frank")
    engine.apply_search()
    assert ids(live) == ids([fresh[1]])


def test_fields_limit_search(qapp, people):
    from pyqt_livefilter.core import ObservableCollection
    from pyqt_livefilter.services import ClientSideFilter
    from pyqt_livefilter.widgets import SearchBox

    live = ObservableCollection(people)
    box = SearchBox()
    engine = ClientSideFilter(live, box, fields=["name"])

    box.set_value("lima")
    engine.apply_search()
    assert len(live) == 0

    box.set_value("bob")
    engine.apply_search()
    assert ids(live) == ids([people[1]])
    engine.dispose()


def test_paginator_goes_to_first_page_silently(qapp, people):
    from pyqt_livefilter.core import ObservableCollection
    from pyqt_livefilter.services import ClientSideFilter
    from pyqt_livefilter.widgets import SearchBox

    paginator = RecordingPaginator()
    box = SearchBox()
    engine = ClientSideFilter(ObservableCollection(people), box, paginator=paginator)

    box.set_value("bob")
    engine.apply_search()
    engine.apply_clear()
    assert paginator.calls == [True, True]
    engine.dispose()


def test_debounced_search_runs_once_with_latest_query(setup, people):
    """A burst of keystrokes produces exactly one filtering pass."""
    live, box, engine = setup
    passes = []
    engine.filter_applied.connect(lambda query, count: passes.append((query, count)))

    for text in ["b", "bo", "bob"]:
        type_query(box, text)
    assert passes == []
    assert ids(live) == ids(people)

    QTest.qWait(150)
    assert passes == [("bob", 1)]
    assert ids(live) == ids([people[1]])


def test_submit_triggers_search(setup, people):
    live, box, engine = setup

    box.set_value("oslo")
    box.submitted.emit()
    QTest.qWait(150)
    assert ids(live) == ids([people[2]])


def test_clear_button_restores_collection(setup, people):
    live, box, engine = setup

    box.set_value("oslo")
    engine.apply_search()
    box.cleared.emit()
    QTest.qWait(150)
    assert ids(live) == ids(people)
    assert box.query() == ""


def test_search_and_clear_use_independent_timers(setup, people):
    """A pending search does not swallow a clear, and vice versa."""
    live, box, engine = setup
    cleared = []
    engine.filter_cleared.connect(lambda: cleared.append(1))

    type_query(box, "bob")
    box.cleared.emit()
    assert engine.search.is_pending
    assert engine.clear.is_pending

    QTest.qWait(150)
    assert cleared
    assert ids(live) == ids(people)
    assert box.query() == ""


def test_state_machine(setup):
    """IDLE -> PENDING -> APPLIED -> PENDING -> APPLIED -> PENDING -> IDLE."""
    from pyqt_livefilter.services import FilterState

    live, box, engine = setup
    states = []
    engine.state_changed.connect(states.append)
    assert engine.state is FilterState.IDLE

    type_query(box, "bob")
    assert engine.state is FilterState.PENDING
    QTest.qWait(150)
    assert engine.state is FilterState.APPLIED

    type_query(box, "alice")
    QTest.qWait(150)
    box.cleared.emit()
    QTest.qWait(150)
    assert engine.state is FilterState.IDLE
    assert states == [
        FilterState.PENDING, FilterState.APPLIED,
        FilterState.PENDING, FilterState.APPLIED,
        FilterState.PENDING, FilterState.IDLE,
    ]


def test_invalid_raw_query_keeps_view(qapp, people, caplog):
    """With regex queries opted in, a malformed expression leaves the live collection alone."""
    from pyqt_livefilter.core import ObservableCollection
    from pyqt_livefilter.services import ClientSideFilter, FilterState, build_raw_pattern
    from pyqt_livefilter.widgets import SearchBox

    live = ObservableCollection(people)
    box = SearchBox()
    engine = ClientSideFilter(live, box, pattern_builder=build_raw_pattern)

    box.set_value("^bo")
    engine.apply_search()
    assert ids(live) == ids([people[1]])

    box.set_value("(")
    with caplog.at_level("WARNING"):
        engine.apply_search()
    assert ids(live) == ids([people[1]])
    assert engine.state is FilterState.APPLIED
    assert "rejected" in caplog.text
    engine.dispose()


def test_custom_matcher_builder(qapp, people):
    """A matcher builder receives the query, fields and pattern builder."""
    from pyqt_livefilter.core import ObservableCollection
    from pyqt_livefilter.services import ClientSideFilter
    from pyqt_livefilter.widgets import SearchBox

    received = {}

    def older_than(query, fields=None, pattern_builder=None):
        received.update(query=query, fields=fields, pattern_builder=pattern_builder)
        limit = int(query)
        return lambda record: record["age"] > limit

    live = ObservableCollection(people)
    box = SearchBox()
    engine = ClientSideFilter(live, box, fields=["age"], matcher_builder=older_than)

    box.set_value("30")
    engine.apply_search()
    assert ids(live) == ids(people[:2])
    assert received["fields"] == ["age"]
    assert received["pattern_builder"] is engine.pattern_builder
    engine.dispose()


def test_application_config_defaults(qapp, people):
    """set_filter_config supplies defaults; constructor arguments override them."""
    from pyqt_livefilter.core import ObservableCollection
    from pyqt_livefilter.protocols import LiveFilterConfig, set_filter_config
    from pyqt_livefilter.services import ClientSideFilter, build_raw_pattern
    from pyqt_livefilter.widgets import SearchBox

    set_filter_config(LiveFilterConfig(fields=["city"], wait_ms=5, pattern_builder=build_raw_pattern))
    engine = ClientSideFilter(ObservableCollection(people), SearchBox())
    assert engine.fields == ["city"]
    assert engine.wait_ms == 5
    assert engine.search.delay_ms == 5
    assert engine.pattern_builder is build_raw_pattern
    engine.dispose()

    engine = ClientSideFilter(ObservableCollection(people), SearchBox(), fields=None, wait_ms=50)
    assert engine.fields is None
    assert engine.clear.delay_ms == 50
    engine.dispose()


def test_dispose_tears_down_subscriptions(qapp, people):
    from pyqt_livefilter.core import ObservableCollection
    from pyqt_livefilter.services import ClientSideFilter
    from pyqt_livefilter.widgets import SearchBox

    live = ObservableCollection(people)
    box = SearchBox()
    engine = ClientSideFilter(live, box, wait_ms=20)

    type_query(box, "bob")
    engine.dispose()
    engine.dispose()
    assert not engine.search.is_pending

    live.add({"name": "Dave"})
    type_query(box, "alice")
    QTest.qWait(100)
    assert len(engine.shadow_records()) == 3
    assert len(live) == 4
