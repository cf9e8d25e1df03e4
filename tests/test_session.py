import curses

from bandwidth_tui.models.data_models import PathStat, SortField, ViewMode
from bandwidth_tui.services.session import Session
from bandwidth_tui.ui.terminal import handle_key


def test_initial_state(mixed_stats):
    session = Session(mixed_stats)
    assert session.view_mode is ViewMode.PATH
    assert session.sort_field is SortField.BANDWIDTH
    assert session.descending is True
    assert session.selected == 0
    assert len(session.rows) == len(mixed_stats)


def test_empty_session_has_no_selection():
    session = Session([])
    assert session.selected is None
    session.move_down()
    session.move_up()
    assert session.selected is None
    assert session.activate() is None


def test_moves_are_clamped(mixed_stats):
    session = Session(mixed_stats)
    session.move_up()
    assert session.selected == 0
    for _ in range(20):
        session.move_down()
    assert session.selected == len(mixed_stats) - 1


def test_set_sort_toggles_and_resets_direction(mixed_stats):
    session = Session(mixed_stats)
    session.set_sort(SortField.BANDWIDTH)
    assert session.descending is False
    session.set_sort(SortField.PATH)
    assert (session.sort_field, session.descending) == (SortField.PATH, False)
    session.set_sort(SortField.PATH)
    assert session.descending is True
    session.set_sort(SortField.REQUESTS)
    assert (session.sort_field, session.descending) == (SortField.REQUESTS, True)
    assert [r.request_count for r in session.rows] == [10, 5, 4, 3, 2, 1]


def test_view_switching(mixed_stats):
    session = Session(mixed_stats)
    session.previous_view()
    assert session.view_mode is ViewMode.PATH
    session.next_view()
    assert session.view_mode is ViewMode.TYPE
    session.next_view()
    assert session.view_mode is ViewMode.TYPE
    session.toggle_view()
    assert session.view_mode is ViewMode.PATH


def test_selection_clamped_when_rows_shrink():
    stats = [
        PathStat("/images/p/d/a.jpg", "http://h/images/p/d/a.jpg", 1, 0, 0, 10),
        PathStat("/images/p/d/b.jpg", "http://h/images/p/d/b.jpg", 1, 0, 0, 20),
        PathStat("/images/p/d/c.jpg", "http://h/images/p/d/c.jpg", 1, 0, 0, 30),
        PathStat("/images/p/d/d.jpg", "http://h/images/p/d/d.jpg", 1, 0, 0, 40),
    ]
    session = Session(stats)
    for _ in range(3):
        session.move_down()
    assert session.selected == 3

    session.toggle_view()  # one header + one .jpg child
    assert len(session.rows) == 2
    assert session.selected == 1


def test_totals_do_not_depend_on_view(mixed_stats):
    session = Session(mixed_stats)
    before = (session.totals.request_count, session.totals.bandwidth_sum)
    session.toggle_view()
    session.set_sort(SortField.EXT)
    assert (session.totals.request_count, session.totals.bandwidth_sum) == before == (25, 15140)
    assert sum(r.bandwidth_sum for r in session.rows if r.is_group) == 15140


def test_activate_opens_selected_url(mixed_stats):
    opened = []
    session = Session(mixed_stats, opener=opened.append)
    assert session.activate() == "https://cdn/files/p/d/report.pdf"
    assert opened == ["https://cdn/files/p/d/report.pdf"]


def test_activate_on_group_header_is_noop(mixed_stats):
    opened = []
    session = Session(mixed_stats, opener=opened.append)
    session.toggle_view()
    assert session.selected_row().is_group
    assert session.activate() is None
    assert opened == []


def test_key_bindings(mixed_stats):
    opened = []
    session = Session(mixed_stats, opener=opened.append)

    assert handle_key(session, ord("j")) is False
    assert session.selected == 1
    handle_key(session, curses.KEY_UP)
    assert session.selected == 0
    handle_key(session, ord("l"))
    assert session.view_mode is ViewMode.TYPE
    handle_key(session, curses.KEY_LEFT)
    assert session.view_mode is ViewMode.PATH
    handle_key(session, 9)
    assert session.view_mode is ViewMode.TYPE
    handle_key(session, ord("h"))

    handle_key(session, ord("r"))
    assert session.sort_field is SortField.REQUESTS
    handle_key(session, ord("r"))
    assert session.descending is False
    handle_key(session, ord("e"))
    assert (session.sort_field, session.descending) == (SortField.EXT, False)

    handle_key(session, 10)
    assert len(opened) == 1

    assert handle_key(session, ord("x")) is False
    assert handle_key(session, ord("q")) is True
    assert handle_key(session, 27) is True
