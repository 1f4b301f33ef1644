from charsheet.domain.selection import NO_SELECTION, SelectionCursor


def test_cursor_starts_unselected() -> None:
    cursor = SelectionCursor()
    assert cursor.index == NO_SELECTION
    assert cursor.selected(3) is None


def test_advance_from_unselected_selects_first() -> None:
    cursor = SelectionCursor()
    cursor.advance(3)
    assert cursor.index == 0


def test_advance_wraps_to_start() -> None:
    cursor = SelectionCursor(index=2)
    cursor.advance(3)
    assert cursor.index == 0


def test_retreat_wraps_to_end() -> None:
    cursor = SelectionCursor(index=0)
    cursor.retreat(3)
    assert cursor.index == 2


def test_retreat_from_unselected_selects_last_entry_not_second_to_last() -> None:
    cursor = SelectionCursor()
    cursor.retreat(4)
    assert cursor.index == 3


def test_empty_list_keeps_cursor_unselected() -> None:
    cursor = SelectionCursor(index=1)
    cursor.advance(0)
    assert cursor.index == NO_SELECTION
    cursor.retreat(0)
    assert cursor.index == NO_SELECTION


def test_selected_ignores_stale_index() -> None:
    cursor = SelectionCursor(index=5)
    assert cursor.selected(2) is None
    assert cursor.selected(6) == 5


def test_reset() -> None:
    cursor = SelectionCursor(index=1)
    cursor.reset()
    assert cursor.index == NO_SELECTION
