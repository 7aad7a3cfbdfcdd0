"""
Tests for the chessboard demo.
"""

import pytest

from conftest import mouse, touch
from pointer_tracker.demo.chessboard import (
    ChessboardDemo,
    find_square_classes,
    get_class,
    square_name,
)


@pytest.fixture
def demo():
    return ChessboardDemo(square_size=50)


def piece_at(demo, square):
    return next(piece for piece in demo.pieces if square_name(piece) == square)


class TestSquareClasses:

    def test_get_class(self):
        assert get_class("column", 0) == "c-a"
        assert get_class("column", 9) == "c-b"
        assert get_class("row", 0) == "r-8"
        assert get_class("row", 7) == "r-1"

    @pytest.mark.parametrize("name, expected", [
        ("c-a", True), ("c-h", True), ("r-1", True), ("r-8", True),
        ("c-i", False), ("piece", False), ("white-rook", False), ("r-10", False),
    ])
    def test_find_square_classes(self, name, expected):
        assert find_square_classes(name) is expected


class TestChessboardDemo:

    def test_initial_layout(self, demo):
        assert len(demo.pieces) == 32
        assert "white-king" in piece_at(demo, "e1").class_list
        assert "black-queen" in piece_at(demo, "d8").class_list
        assert "white-pawn" in piece_at(demo, "a2").class_list
        assert "black-pawn" in piece_at(demo, "h7").class_list

    def test_pieces_are_positioned_by_their_classes(self, demo):
        king = piece_at(demo, "e1")
        assert king.get_bounding_client_rect()[:2] == (200, 350)

    def test_mouse_drag_moves_piece_to_new_square(self, demo):
        document = demo.document
        pawn = piece_at(demo, "e2")
        mouse(document, "mousedown", 210, 310)
        assert "dragging" in pawn.class_list

        mouse(document, "mousemove", 215, 250)
        assert pawn.get_bounding_client_rect()[:2] == (205, 240)
        mouse(document, "mousemove", 220, 210)
        mouse(document, "mouseup", 220, 210)

        assert square_name(pawn) == "e4"
        assert "dragging" not in pawn.class_list
        assert pawn.style == {}
        assert pawn.get_bounding_client_rect()[:2] == (200, 200)
        assert document.body.listener_count() == 0
        assert demo.context is None

    def test_touch_drop_uses_piece_position(self, demo):
        document = demo.document
        knight = piece_at(demo, "g1")
        touch(document, "touchstart", [(310, 360)])
        touch(document, "touchmove", [(260, 260)])
        touch(document, "touchend", [])

        assert square_name(knight) == "f3"
        assert list(knight.class_list)[:2] == ["piece", "white-knight"]

    def test_drop_off_the_board_is_clamped(self, demo):
        document = demo.document
        rook = piece_at(demo, "h1")
        mouse(document, "mousedown", 360, 360)
        mouse(document, "mousemove", 1000, 1000)
        mouse(document, "mouseup", 1000, 1000)
        assert square_name(rook) == "h1"

        mouse(document, "mousedown", 360, 360)
        mouse(document, "mousemove", -40, -40)
        mouse(document, "mouseup", -40, -40)
        assert square_name(rook) == "a8"

    def test_presses_on_empty_squares_are_ignored(self, demo):
        event = mouse(demo.document, "mousedown", 210, 210)
        assert event.target is demo.game
        assert not event.default_prevented
        assert demo.context is None
        assert demo.document.body.listener_count() == 0
