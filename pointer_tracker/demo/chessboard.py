"""
Dragging chess pieces around a board, with mouse or touch.

Every piece is an element with the classes ``piece <colour>-<type>`` plus
one column class ``c-X`` (X in a-h) and one row class ``r-Y`` (Y in 1-8).
The stylesheet positions pieces from those classes. While a piece is
dragged it carries inline ``left``/``top`` styles; on drop it is snapped to
the square under the point where it was grabbed and the inline styles are
cleared. No rules of chess are enforced.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..config.settings import TrackerConfig
from ..core.elements import Document, Element
from ..core.tracking import start_tracking
from ..utils.array_utils import remove_from
from ..utils.coordinates import get_page_xy
from ..utils.gesture_utils import GeometryUtils, Point, Rect

logger = logging.getLogger(__name__)

BACK_RANK = ["rook", "knight", "bishop", "queen", "king", "bishop", "knight", "rook"]

_SQUARE_CLASS = re.compile(r'^(r-\d|c-[abcdefgh])$')


def get_class(kind: str, index: int) -> str:
    """Column class ``c-X`` or, for ``kind == "row"``, row class ``r-Y``.

    Columns count from a at index 0; rows count down from 8 at index 0.
    """
    if kind == "row":
        return f"r-{TrackerConfig.BOARD_SQUARES - index}"
    return f"c-{TrackerConfig.COLUMNS[index % TrackerConfig.BOARD_SQUARES]}"


def find_square_classes(class_name: str) -> bool:
    """True for the column and row classes that place a piece."""
    return bool(_SQUARE_CLASS.match(class_name))


def square_name(piece: Element) -> Optional[str]:
    """Algebraic name of a piece's square, such as ``e4``."""
    column = row = None
    for name in piece.class_list:
        if name.startswith("c-") and find_square_classes(name):
            column = name[2:]
        elif name.startswith("r-") and find_square_classes(name):
            row = name[2:]
    if column is None or row is None:
        return None
    return column + row


@dataclass
class DragContext:
    """State of the piece being dragged, for the duration of one drag."""

    piece: Element
    board: Rect
    offset: Point
    cancel: Optional[Callable[[], None]] = None


class ChessboardDemo:
    """A board of 32 draggable pieces."""

    def __init__(self, document: Optional[Document] = None,
                 square_size: int = TrackerConfig.SQUARE_SIZE, drag_logger=None):
        size = square_size * TrackerConfig.BOARD_SQUARES
        self.square_size = square_size
        self.document = document if document is not None else Document(size, size)
        self.drag_logger = drag_logger
        self.context: Optional[DragContext] = None

        self.game = Element("div", element_id="game", width=size, height=size, position="relative")
        self.document.body.append(self.game)
        self._add_rules()

        self.pieces = self.create_pieces()
        self.place_pieces()

        # One delegated listener for every piece
        self.game.add_listener(TrackerConfig.MOUSE_START, self.start_drag)
        self.game.add_listener(TrackerConfig.TOUCH_START, self.start_drag)

    def _add_rules(self):
        size = self.square_size
        self.document.add_rule(".piece", position="absolute")
        self.document.add_rule(".dragging", z_index="1")
        for index in range(TrackerConfig.BOARD_SQUARES):
            self.document.add_rule("." + get_class("column", index), left=f"{index * size}px")
            self.document.add_rule("." + get_class("row", index), top=f"{index * size}px")

    def create_pieces(self) -> List[Element]:
        """Black pieces, black pawns, white pawns, white pieces, eight at a time."""
        ranks = [
            ("black", BACK_RANK),
            ("black", ["pawn"] * 8),
            ("white", ["pawn"] * 8),
            ("white", BACK_RANK),
        ]
        pieces = []
        for colour, kinds in ranks:
            for kind in kinds:
                piece = Element("div", classes=("piece", f"{colour}-{kind}"),
                                width=self.square_size, height=self.square_size)
                pieces.append(self.game.append(piece))
        return pieces

    def place_pieces(self):
        """Add the column and row classes for the start of the game.

        Pieces are created in board order, so their index modulo 8 is their
        column; the row follows from colour and type.
        """
        for index, piece in enumerate(self.pieces):
            class_name = piece.class_name
            is_white = "white-" in class_name
            is_pawn = class_name.endswith("-pawn")

            if is_pawn:
                row = "r-2" if is_white else "r-7"
            else:
                row = "r-1" if is_white else "r-8"

            piece.class_list.add(get_class("column", index), row)

    def start_drag(self, event):
        piece = event.target
        if not isinstance(piece, Element) or not piece.class_list.contains("piece"):
            # Ignore presses on the board itself
            return

        # Stop the host from dragging a ghost image
        event.prevent_default()
        piece.class_list.add("dragging")

        # Measured per drag, since the board may have moved since the last one
        board = self.game.get_bounding_client_rect()
        x, y = get_page_xy(event)
        rect = piece.get_bounding_client_rect()
        context = DragContext(piece, board, Point(x - rect.left - board.left, y - rect.top - board.top))

        def drop(end_event):
            context.cancel()
            square = self.place_piece(context)
            if self.context is context:
                self.context = None
            if self.drag_logger:
                rect = piece.get_bounding_client_rect()
                self.drag_logger.log_drop(piece, Point(rect.left, rect.top), square)

        context.cancel = start_tracking(event, drop=drop)
        self.context = context

        logger.debug(f"Dragging {piece!r} from {square_name(piece)}")
        if self.drag_logger:
            self.drag_logger.log_drag_start(piece, Point(x, y), event.type)

    def place_piece(self, context: DragContext) -> Optional[str]:
        """Snap a dropped piece to the square under its grab point.

        Returns the name of the square.
        """
        piece = context.piece
        piece.class_list.remove("dragging")

        class_list = list(piece.class_list)
        remove_from(class_list, find_square_classes, True)

        # A touchend carries no position, so work from where the piece now is
        rect = piece.get_bounding_client_rect()
        x = rect.x + context.offset.x
        y = rect.y + context.offset.y
        board = context.board
        square = board.width / TrackerConfig.BOARD_SQUARES

        # Constrain the piece to the board
        last = TrackerConfig.BOARD_SQUARES - 1
        column = int(GeometryUtils.clamp(x // square, 0, last))
        row = int(GeometryUtils.clamp(y // square, 0, last))
        class_list.extend([get_class("column", column), get_class("row", row)])

        piece.class_name = " ".join(class_list)

        # Drop the inline position used while dragging
        piece.style.clear()
        return square_name(piece)
