"""
Pygame renderer for the falling-block game.

Draws a GameSnapshot: the board grid, the ghost piece (drop preview), the
active piece, a sidebar with score / level / lines, and a status overlay
when the game is paused or over. The renderer never touches the game
itself; it only reads snapshots.
"""

from __future__ import annotations

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from blockfall.config import GameConfig
from blockfall.game.tetris import GameSnapshot, GameStatus


# ── Color constants ───────────────────────────────────────────────────────
BACKGROUND_COLOR = (30, 30, 30)
GRID_LINE_COLOR = (60, 60, 60)
BORDER_COLOR = (200, 200, 200)
TEXT_COLOR = (255, 255, 255)
GHOST_ALPHA = 80  # transparency for ghost piece (0-255)
SIDEBAR_BG_COLOR = (20, 20, 20)
EMPTY_CELL_COLOR = (40, 40, 40)
OVERLAY_TEXT = {
    GameStatus.PAUSED: ("PAUSED", (255, 220, 80), "Press P to resume"),
    GameStatus.OVER: ("GAME OVER", (255, 50, 50), "Press R to restart"),
}


def palette_rgb(palette: tuple[str, ...]) -> list[tuple[int, int, int]]:
    """Convert palette identifiers (e.g. ``"#FF0000"``) to RGB tuples."""
    return [tuple(pygame.Color(entry))[:3] for entry in palette]


class TetrisRenderer:
    """Pygame-based renderer for game snapshots.

    The window is divided into:
      - Left: board area (cell_size * cols) x (cell_size * rows)
      - Right: sidebar with score, level, lines and key help

    Attributes:
        config: The game configuration (geometry, palette, cell size).
        cell_size: Pixel size of each grid cell.
        board_pixel_width: Pixel width of the board area.
        board_pixel_height: Pixel height of the board area.
        sidebar_width: Pixel width of the sidebar.
        window_width: Total window width.
        window_height: Total window height.
        screen: Pygame display surface (created on first render).
    """

    SIDEBAR_WIDTH_CELLS: int = 7

    def __init__(self, config: GameConfig) -> None:
        """Initialize the renderer.

        Does NOT create the Pygame window yet; that happens on the first
        call to render(), so headless environments don't open a window.

        Args:
            config: Game configuration to draw with.
        """
        if pygame is None:
            raise ImportError("pygame is required for rendering. Install it: pip install pygame")

        self.config = config
        self.cell_size = config.cell_size

        self.board_pixel_width = self.cell_size * config.cols
        self.board_pixel_height = self.cell_size * config.rows
        self.sidebar_width = self.cell_size * self.SIDEBAR_WIDTH_CELLS
        self.window_width = self.board_pixel_width + self.sidebar_width
        self.window_height = self.board_pixel_height

        self.colors = palette_rgb(config.palette)
        self.screen: pygame.Surface | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._large_font: pygame.font.Font | None = None
        self._initialized: bool = False

    def render(self, snapshot: GameSnapshot) -> None:
        """Draw ``snapshot`` to the screen and flip the display.

        Initializes Pygame on the first call.
        """
        if not self._initialized:
            self._init_pygame()

        self.screen.fill(BACKGROUND_COLOR)
        self._draw_board(snapshot)
        self._draw_ghost_piece(snapshot)
        self._draw_current_piece(snapshot)
        self._draw_sidebar(snapshot)

        pygame.draw.rect(
            self.screen,
            BORDER_COLOR,
            (0, 0, self.board_pixel_width, self.board_pixel_height),
            2,
        )

        if snapshot.status in OVERLAY_TEXT:
            self._draw_overlay(*OVERLAY_TEXT[snapshot.status])

        pygame.display.flip()

    def _init_pygame(self) -> None:
        """Initialize Pygame display and fonts.

        Called once on the first render() invocation.
        """
        pygame.init()
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("blockfall")
        self._font = pygame.font.SysFont("monospace", 20)
        self._small_font = pygame.font.SysFont("monospace", 14)
        self._large_font = pygame.font.SysFont("monospace", 36, bold=True)
        self._initialized = True

    def _draw_cell(self, row: int, col: int, color: tuple[int, int, int]) -> None:
        x = col * self.cell_size
        y = row * self.cell_size
        pygame.draw.rect(self.screen, color, (x, y, self.cell_size, self.cell_size))
        # Slightly darker border for a 3D effect
        darker = tuple(max(0, c - 40) for c in color)
        pygame.draw.rect(self.screen, darker, (x, y, self.cell_size, self.cell_size), 1)

    def _draw_board(self, snapshot: GameSnapshot) -> None:
        """Draw the locked cells and the grid lines."""
        rows, cols = snapshot.grid.shape
        for row in range(rows):
            for col in range(cols):
                cell_value = int(snapshot.grid[row, col])
                if cell_value != 0:
                    self._draw_cell(row, col, self._color(cell_value))
                else:
                    x = col * self.cell_size
                    y = row * self.cell_size
                    pygame.draw.rect(
                        self.screen, EMPTY_CELL_COLOR, (x, y, self.cell_size, self.cell_size)
                    )
                pygame.draw.rect(
                    self.screen,
                    GRID_LINE_COLOR,
                    (col * self.cell_size, row * self.cell_size, self.cell_size, self.cell_size),
                    1,
                )

    def _draw_current_piece(self, snapshot: GameSnapshot) -> None:
        """Draw the active piece; cells above the board are skipped."""
        piece = snapshot.piece
        if piece is None:
            return
        color = self._color(piece.color)
        for row, col in piece.cells():
            if 0 <= row < self.config.rows and 0 <= col < self.config.cols:
                self._draw_cell(row, col, color)

    def _draw_ghost_piece(self, snapshot: GameSnapshot) -> None:
        """Draw the drop preview with transparency."""
        piece = snapshot.piece
        if piece is None or snapshot.ghost_y is None or snapshot.ghost_y == piece.y:
            return

        color = self._color(piece.color)
        ghost_surface = pygame.Surface((self.cell_size, self.cell_size), pygame.SRCALPHA)
        ghost_surface.fill((*color, GHOST_ALPHA))

        for row, col in piece.moved(0, snapshot.ghost_y - piece.y).cells():
            if 0 <= row < self.config.rows and 0 <= col < self.config.cols:
                x = col * self.cell_size
                y = row * self.cell_size
                self.screen.blit(ghost_surface, (x, y))
                pygame.draw.rect(self.screen, color, (x, y, self.cell_size, self.cell_size), 1)

    def _draw_sidebar(self, snapshot: GameSnapshot) -> None:
        """Draw the sidebar with score, level, lines and the key help."""
        sidebar_x = self.board_pixel_width
        pygame.draw.rect(
            self.screen,
            SIDEBAR_BG_COLOR,
            (sidebar_x, 0, self.sidebar_width, self.window_height),
        )
        pygame.draw.line(
            self.screen,
            BORDER_COLOR,
            (sidebar_x, 0),
            (sidebar_x, self.window_height),
            2,
        )

        text_x = sidebar_x + 15
        text_y = 20
        for label, value in (
            ("SCORE", snapshot.score),
            ("LEVEL", snapshot.level),
            ("LINES", snapshot.lines),
        ):
            self._draw_text(label, text_x, text_y)
            self._draw_text(str(value), text_x, text_y + 25)
            text_y += 65

        for line in ("Arrows: move", "Up: rotate", "Space: drop", "P: pause", "R: reset"):
            surface = self._small_font.render(line, True, GRID_LINE_COLOR)
            self.screen.blit(surface, (text_x, text_y))
            text_y += 18

    def _draw_overlay(self, title: str, color: tuple[int, int, int], hint: str) -> None:
        """Dim the board and print a status title with a hint underneath."""
        overlay = pygame.Surface(
            (self.board_pixel_width, self.board_pixel_height), pygame.SRCALPHA
        )
        overlay.fill((0, 0, 0, 150))
        self.screen.blit(overlay, (0, 0))

        text_title = self._large_font.render(title, True, color)
        text_hint = self._small_font.render(hint, True, TEXT_COLOR)
        text_quit = self._small_font.render("Press ESC to quit", True, (200, 200, 200))

        cx = self.board_pixel_width // 2
        cy = self.board_pixel_height // 2
        self.screen.blit(text_title, (cx - text_title.get_width() // 2, cy - 40))
        self.screen.blit(text_hint, (cx - text_hint.get_width() // 2, cy + 10))
        self.screen.blit(text_quit, (cx - text_quit.get_width() // 2, cy + 40))

    def _draw_text(self, text: str, x: int, y: int, color: tuple[int, int, int] = TEXT_COLOR) -> None:
        surface = self._font.render(text, True, color)
        self.screen.blit(surface, (x, y))

    def _color(self, index: int) -> tuple[int, int, int]:
        if 0 < index < len(self.colors):
            return self.colors[index]
        return (128, 128, 128)

    def close(self) -> None:
        """Shut down Pygame and close the window."""
        if self._initialized:
            pygame.quit()
            self._initialized = False
