"""Tests for the position and selection value types."""

from __future__ import annotations

import pytest

from textformat.core.ranges import Position, Selection


def test_positions_order_lexicographically() -> None:
    assert Position(0, 9) < Position(1, 0)
    assert Position(2, 1) > Position(2, 0)
    assert sorted([Position(1, 2), Position(0, 5), Position(1, 0)]) == [
        Position(0, 5),
        Position(1, 0),
        Position(1, 2),
    ]


def test_position_rejects_negative_values() -> None:
    with pytest.raises(ValueError):
        Position(-1, 0)
    with pytest.raises(ValueError):
        Position(0, "x")  # type: ignore[arg-type]


def test_line_start_drops_column() -> None:
    assert Position(3, 7).line_start() == Position(3, 0)


def test_selection_orders_endpoints() -> None:
    selection = Selection(anchor=Position(3, 1), head=Position(1, 4))

    assert selection.start == Position(1, 4)
    assert selection.end == Position(3, 1)
    assert selection.is_empty is False
    assert Selection(Position(2, 2), Position(2, 2)).is_empty is True
