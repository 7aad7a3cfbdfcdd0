#!/usr/bin/env python3
"""
Pointer Tracker - Chessboard Demo
Drag chess pieces with the mouse or with a finger on a touch screen.
"""

import asyncio
import logging

import pygame

from pointer_tracker.config.settings import TrackerConfig
from pointer_tracker.demo.chessboard import ChessboardDemo
from pointer_tracker.device.pygame_source import PygameInputSource
from pointer_tracker.utils.logger import DragLogger

SYMBOLS = {
    "king": "K", "queen": "Q", "rook": "R",
    "bishop": "B", "knight": "N", "pawn": "P",
}


class ChessboardWindow:
    """Draws the element tree of a ChessboardDemo and feeds it pygame input."""

    def __init__(self) -> None:
        pygame.init()
        self.logger = DragLogger()
        self.demo = ChessboardDemo(drag_logger=self.logger)
        self.source = PygameInputSource(self.demo.document)

        size = (int(self.demo.document.width), int(self.demo.document.height))
        self.screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Pointer Tracker - Drag the pieces")
        self.font = pygame.font.Font(None, self.demo.square_size * 3 // 4)

    async def run(self) -> None:
        """Run the demo loop."""
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                self.source.handle_event(event)
                # Let tasks waiting on gesture futures run between events
                await asyncio.sleep(0)

            self.draw()
            pygame.display.flip()
            clock.tick(60)
            await asyncio.sleep(0)

    def draw(self) -> None:
        size = self.demo.square_size
        board = self.demo.game.get_bounding_client_rect()
        for row in range(TrackerConfig.BOARD_SQUARES):
            for column in range(TrackerConfig.BOARD_SQUARES):
                colour = TrackerConfig.LIGHT_SQUARE if (row + column) % 2 == 0 else TrackerConfig.DARK_SQUARE
                rect = (board.left + column * size, board.top + row * size, size, size)
                pygame.draw.rect(self.screen, colour, rect)

        for piece in self.demo.game.paint_order():
            self.draw_piece(piece)

    def draw_piece(self, piece) -> None:
        rect = piece.get_bounding_client_rect()
        colour_name, kind = next(
            name.split("-") for name in piece.class_list
            if name.startswith(("white-", "black-"))
        )
        fill = TrackerConfig.WHITE_PIECE if colour_name == "white" else TrackerConfig.BLACK_PIECE
        text = TrackerConfig.BLACK_PIECE if colour_name == "white" else TrackerConfig.WHITE_PIECE

        center = (int(rect.left + rect.width / 2), int(rect.top + rect.height / 2))
        radius = int(rect.width * 0.4)
        pygame.draw.circle(self.screen, fill, center, radius)
        if piece.class_list.contains("dragging"):
            pygame.draw.circle(self.screen, TrackerConfig.HIGHLIGHT, center, radius, 3)

        label = self.font.render(SYMBOLS[kind], True, text)
        self.screen.blit(label, label.get_rect(center=center))

    def close(self) -> None:
        self.logger.close()
        pygame.quit()


def main():
    """Main entry point for the chessboard demo."""
    logging.basicConfig(level=logging.INFO)
    window = ChessboardWindow()
    try:
        asyncio.run(window.run())
    except KeyboardInterrupt:
        print("\n👋 Stopping...")
    finally:
        window.close()

if __name__ == "__main__":
    main()
