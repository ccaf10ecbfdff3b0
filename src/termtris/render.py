"""Draw a game round onto a :class:`~termtris.console.Screen`.

Each board cell is two characters wide.  The renderer only ever writes to the
screen; it never reads state back from it.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from .board import CellTag
from .config import GameConfig
from .console import Color, Screen
from .controls import CONTROLS_HELP
from .game_state import GameRound
from .leaderboard import HighScore
from .tetromino import PieceKind, shape_cells


PIECE_COLORS: Dict[PieceKind, Color] = {
    PieceKind.I: Color.LIGHTCYAN,
    PieceKind.T: Color.LIGHTMAGENTA,
    PieceKind.O: Color.YELLOW,
    PieceKind.Z: Color.LIGHTRED,
    PieceKind.S: Color.LIGHTGREEN,
    PieceKind.L: Color.BROWN,
    PieceKind.J: Color.LIGHTBLUE,
}

GHOST_COLOR = Color.DARKGREY

EMPTY_GLYPH = " ."
WALL_GLYPH = "##"
CLEARING_GLYPH = "=="
BLOCK_GLYPH = "[]"

# Screen position of board cell (0, 0).
FIELD_LEFT = 2
FIELD_TOP = 2

PANEL_LEFT = 30
NEXT_PREVIEW = (32, 18)
HOLD_PREVIEW = (32, 25)
PAUSE_BANNER = (10, 10)


def cell_style(tag: CellTag) -> tuple[Color, str]:
    """Return the colour and glyph used for a board cell."""

    if tag is CellTag.EMPTY:
        return Color.BLACK, EMPTY_GLYPH
    if tag is CellTag.WALL:
        return Color.GREY, WALL_GLYPH
    if tag is CellTag.CLEARING:
        return Color.WHITE, CLEARING_GLYPH
    return PIECE_COLORS[tag.piece], BLOCK_GLYPH


class Renderer:
    """Draws rounds, the line-clear flash and the end-of-round screens."""

    def __init__(self, screen: Screen, config: Optional[GameConfig] = None) -> None:
        self.screen = screen
        self.config = config or GameConfig()

    # Text helpers -------------------------------------------------------
    def text(self, x: int, y: int, text: str) -> None:
        """Write a line of light markup.

        ``# Title`` lines are highlighted, ``**bold**`` lines are shown in
        yellow without the asterisks, anything else is plain grey.
        """

        screen = self.screen
        screen.locate(x, y)
        if text.startswith("# "):
            screen.set_color(Color.LIGHTCYAN)
            screen.write(text)
        elif len(text) >= 4 and text.startswith("**") and text.endswith("**"):
            screen.set_color(Color.YELLOW)
            screen.write(text[2:-2])
        else:
            screen.set_color(Color.GREY)
            screen.write(text)
        screen.reset_color()

    # In-game drawing -----------------------------------------------------
    def draw_static_ui(self) -> None:
        self.text(PANEL_LEFT, 2, "# termtris")
        self.text(PANEL_LEFT, 4, "**Controls:**")
        for i, line in enumerate(CONTROLS_HELP):
            self.text(PANEL_LEFT, 5 + i, line)
        self.text(PANEL_LEFT, 16, "**Next:**")
        self.text(PANEL_LEFT, 23, "**Hold:**")

    def draw_field(self, game: GameRound) -> None:
        board = game.board
        screen = self.screen
        for y in range(board.height):
            for x in range(board.width):
                color, glyph = cell_style(board.get_cell(x, y))
                screen.locate(FIELD_LEFT + x * 2, FIELD_TOP + y)
                screen.set_color(color)
                screen.write(glyph)

    def draw_piece(self, kind: PieceKind, rotation: int, x: int, y: int, color: Color) -> None:
        self.screen.set_color(color)
        for px, py in shape_cells(kind, rotation):
            self.screen.locate(FIELD_LEFT + (x + px) * 2, FIELD_TOP + y + py)
            self.screen.write(BLOCK_GLYPH)

    def draw_preview(self, kind: PieceKind, x: int, y: int) -> None:
        cells = set(shape_cells(kind, 0))
        for py in range(4):
            for px in range(4):
                self.screen.locate(x + px * 2, y + py)
                if (px, py) in cells:
                    self.screen.set_color(PIECE_COLORS[kind])
                    self.screen.write(BLOCK_GLYPH)
                else:
                    self.screen.reset_color()
                    self.screen.write("  ")

    def draw(self, game: GameRound) -> None:
        """Draw the whole round: field, ghost, active piece and side panel."""

        self.draw_field(game)
        piece = game.active
        if piece is not None and not game.game_over:
            ghost = game.ghost_y
            if ghost is not None:
                self.draw_piece(piece.kind, piece.rotation, piece.x, ghost, GHOST_COLOR)
            self.draw_piece(piece.kind, piece.rotation, piece.x, piece.y, PIECE_COLORS[piece.kind])

        self.text(PANEL_LEFT, 13, f"**Score: {game.score}**")
        self.text(PANEL_LEFT, 14, f"**Level: {game.level}**")
        if game.paused:
            self.text(*PAUSE_BANNER, "**  PAUSED  **")

        if game.upcoming is not None:
            self.draw_preview(game.upcoming, *NEXT_PREVIEW)
        if game.held is not None:
            self.draw_preview(game.held, *HOLD_PREVIEW)
        self.screen.reset_color()
        self.screen.refresh()

    def animate_lines(self, rows: Iterable[int]) -> None:
        """Flash the rows being cleared.  Blocks for the whole animation."""

        rows = list(rows)
        width = self.config.width - 2
        for frame in range(self.config.clear_flash_frames):
            self.screen.set_color(Color.BLACK if frame % 2 == 0 else Color.WHITE)
            for y in rows:
                self.screen.locate(FIELD_LEFT + 2, FIELD_TOP + y)
                self.screen.write(CLEARING_GLYPH * width)
            self.screen.refresh()
            self.screen.msleep(self.config.clear_flash_ms)
        self.screen.reset_color()

    # End of round --------------------------------------------------------
    def draw_game_over(self, score: int) -> None:
        self.screen.cls()
        self.text(10, 10, "# Game Over")
        self.text(10, 12, f"**Final Score: {score}**")
        self.screen.refresh()

    def draw_name_prompt(self) -> None:
        self.text(10, 14, "**Congratulations! New Record!**")
        self.screen.locate(10, 16)
        self.screen.set_color(Color.WHITE)
        self.screen.write("Enter Name: ")
        self.screen.reset_color()
        self.screen.refresh()

    def draw_name(self, name: str) -> None:
        self.screen.locate(22, 16)
        self.screen.set_color(Color.WHITE)
        self.screen.write(name.ljust(self.config.max_name_length + 1))
        self.screen.reset_color()
        self.screen.locate(22 + len(name), 16)
        self.screen.refresh()

    def draw_leaderboard(self, entries: Iterable[HighScore]) -> None:
        self.screen.cls()
        self.text(10, 2, "# Leaderboard")
        for i, entry in enumerate(entries):
            self.text(10, 4 + i, f"{i + 1}. {entry.name} : {entry.score}")
        self.text(10, 12, "**Press [R] to Restart, or [ESC] to Quit**")
        self.screen.refresh()
