"""Pygame-based board renderer and input helper."""

from ..engine.position import BLACK, Position
from ..Omokgame import GameStatus
from ..Player import UNDO
from ..utils import timer


class PygameView:
    # --- Constants ---
    COLOR_BACKGROUND = (40, 30, 20)
    COLOR_WOOD = (209, 179, 135)
    COLOR_GRID = (60, 40, 20)
    COLOR_TEXT = (230, 230, 230)
    COLOR_RED = (200, 0, 0)
    COLOR_BLACK_STONE = (20, 20, 20)
    COLOR_WHITE_STONE = (240, 240, 240)
    COLOR_FORBIDDEN = (170, 40, 40)
    COLOR_WIN = (40, 160, 60)

    PANEL_HEIGHT = 80
    MARGIN_RATIO = 23 / 540

    def __init__(self, board_size, window_size=800):
        import pygame

        self.board_size = board_size
        self.window_size = window_size
        self._pygame = pygame

        pygame.init()
        self.screen = pygame.display.set_mode((window_size, window_size))
        pygame.display.set_caption("Renju Omok")

        # Fonts
        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 36)
        self.font_small = pygame.font.Font(None, 24)

        # The board surface is smaller than the window to leave room for the info panel
        self.board_display_size = window_size - self.PANEL_HEIGHT
        self.margin_px = self.board_display_size * self.MARGIN_RATIO
        self.tile_size = (self.board_display_size - 2 * self.margin_px) / (board_size - 1)
        self.stone_radius = self.tile_size * 0.45
        self.board_surface = self._build_board_surface(self.board_display_size)

        self.board_origin = ((window_size - self.board_display_size) // 2, self.PANEL_HEIGHT)

    def _build_board_surface(self, size_px):
        pygame = self._pygame
        surf = pygame.Surface((size_px, size_px)).convert()
        surf.fill(self.COLOR_WOOD)
        grid_start = self.margin_px
        grid_end = size_px - self.margin_px
        for i in range(self.board_size):
            offset = grid_start + i * self.tile_size
            pygame.draw.line(surf, self.COLOR_GRID, (grid_start, offset), (grid_end, offset), 1)
            pygame.draw.line(surf, self.COLOR_GRID, (offset, grid_start), (offset, grid_end), 1)
        return surf

    def _cell_center(self, pos):
        """Screen coordinates of a 1-indexed board cell."""
        ox, oy = self.board_origin
        return (
            ox + self.margin_px + (pos.x - 1) * self.tile_size,
            oy + self.margin_px + (pos.y - 1) * self.tile_size,
        )

    def _draw_text(self, text, font, color, center_pos):
        text_surface = font.render(text, True, color)
        text_rect = text_surface.get_rect(center=center_pos)
        self.screen.blit(text_surface, text_rect)

    def _draw_stone(self, pos, color, alpha=255):
        fill = self.COLOR_BLACK_STONE if color == BLACK else self.COLOR_WHITE_STONE
        center = self._cell_center(pos)
        if alpha == 255:
            self._pygame.draw.circle(self.screen, fill, center, self.stone_radius)
            self._pygame.draw.circle(self.screen, self.COLOR_GRID, center, self.stone_radius, 1)
            return
        size = int(self.stone_radius * 2) + 2
        ghost = self._pygame.Surface((size, size), self._pygame.SRCALPHA)
        self._pygame.draw.circle(ghost, (*fill, alpha), (size / 2, size / 2), self.stone_radius)
        self.screen.blit(ghost, (center[0] - size / 2, center[1] - size / 2))

    def _draw_stones(self, board):
        for pos, color in board.history:
            self._draw_stone(pos, color)

    def _draw_forbidden(self, forbidden):
        half = self.tile_size * 0.2
        for pos in forbidden:
            cx, cy = self._cell_center(pos)
            self._pygame.draw.line(self.screen, self.COLOR_FORBIDDEN, (cx - half, cy - half), (cx + half, cy + half), 2)
            self._pygame.draw.line(self.screen, self.COLOR_FORBIDDEN, (cx - half, cy + half), (cx + half, cy - half), 2)

    def _draw_winning_chain(self, chain):
        for pos in chain:
            self._pygame.draw.circle(self.screen, self.COLOR_WIN, self._cell_center(pos), self.stone_radius, 3)

    def _draw_last_move_marker(self, last_move):
        if not last_move:
            return
        # A simple red dot in the center of the piece
        self._pygame.draw.circle(self.screen, self.COLOR_RED, self._cell_center(last_move), self.tile_size * 0.2)

    def _draw_info_panel(self, game):
        # Panel background
        panel_rect = self._pygame.Rect(0, 0, self.window_size, self.PANEL_HEIGHT)
        self._pygame.draw.rect(self.screen, self.COLOR_GRID, panel_rect)

        center = (self.window_size / 2, self.PANEL_HEIGHT / 2)
        if game.is_over:
            messages = {
                GameStatus.BLACK_WINS: "Black Wins!",
                GameStatus.WHITE_WINS: "White Wins!",
                GameStatus.DRAW: "Draw",
            }
            self._draw_text(messages.get(game.status, "Game Over"), self.font_large, self.COLOR_TEXT, center)
            return

        player = "Black" if game.turn == BLACK else "White"
        self._draw_text(f"{player} to move", self.font_medium, self.COLOR_TEXT, center)
        rules = "Renju rules" if game.advanced_rules else "Free rules"
        self._draw_text(f"{rules} | move {game.board.move_count} | u: undo", self.font_small, self.COLOR_TEXT,
                        (self.window_size / 2, self.PANEL_HEIGHT - 12))
        if game.last_foul is not None:
            self._draw_text(f"Forbidden: {game.last_foul.label}", self.font_small, self.COLOR_FORBIDDEN,
                            (self.window_size / 2, 14))

    def render(self, game):
        self.screen.fill(self.COLOR_BACKGROUND)
        self.screen.blit(self.board_surface, self.board_origin)

        self._draw_stones(game.board)
        self._draw_forbidden(game.forbidden)
        self._draw_winning_chain(game.winning_chain)
        self._draw_last_move_marker(game.last_move)
        self._draw_info_panel(game)

        self._pygame.display.flip()

    def _get_coords_from_mouse(self, pos):
        mx, my = pos
        ox, oy = self.board_origin
        grid_x = int(round((mx - ox - self.margin_px) / self.tile_size)) + 1
        grid_y = int(round((my - oy - self.margin_px) / self.tile_size)) + 1
        if 1 <= grid_x <= self.board_size and 1 <= grid_y <= self.board_size:
            return Position(grid_x, grid_y)
        return None

    def _draw_hover_marker(self, game, player_color):
        coords = self._get_coords_from_mouse(self._pygame.mouse.get_pos())
        if coords and game.board.is_empty(coords):
            self._draw_stone(coords, player_color, alpha=128)

    def wait_for_move(self, game, deadline, player_color):
        """Block until a cell is clicked or 'u' is pressed. Returns a Position or UNDO."""
        pygame = self._pygame
        while True:
            if timer.expired(deadline):
                raise TimeoutError("Move exceeded allotted time")

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    raise TimeoutError("Window closed")
                if event.type == pygame.KEYDOWN and event.key == pygame.K_u:
                    return UNDO
                if event.type == pygame.MOUSEBUTTONDOWN:
                    coords = self._get_coords_from_mouse(event.pos)
                    if coords:
                        return coords

            # Re-render the board with the hover marker
            self.render(game)
            self._draw_hover_marker(game, player_color)
            pygame.display.flip()

            pygame.time.delay(10)

    def close(self):
        self._pygame.quit()
