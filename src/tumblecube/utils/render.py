"""
Image rendering of boards and footprints with Pillow.
"""

from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw

from tumblecube.core.base import Cell

CELL_COLORS = {
    Cell.FREE: (240, 240, 240),
    Cell.OCCUPIED: (52, 120, 246),
    Cell.BLOCKED: (60, 60, 60),
}

GRID_COLOR = (180, 180, 180)
HIGHLIGHT_COLOR = (230, 160, 30)


def render_board_image(grid: np.ndarray, cell_px: int = 48,
                       highlight: Optional[Tuple[int, int]] = None) -> Image.Image:
    """
    Draw a board grid as an RGB image.

    Args:
        grid: 2D array of cell markers
        cell_px: edge length of one cell in pixels
        highlight: optional (row, col) cell outlined in orange, e.g. the
            winning position

    Returns:
        PIL Image of size (cols * cell_px, rows * cell_px)
    """
    if cell_px <= 0:
        raise ValueError("cell_px must be positive")

    rows, cols = grid.shape
    image = Image.new("RGB", (cols * cell_px, rows * cell_px), GRID_COLOR)
    draw = ImageDraw.Draw(image)

    for r in range(rows):
        for c in range(cols):
            x0, y0 = c * cell_px, r * cell_px
            box = [x0 + 1, y0 + 1, x0 + cell_px - 2, y0 + cell_px - 2]
            draw.rectangle(box, fill=CELL_COLORS[Cell(int(grid[r, c]))])

    if highlight is not None:
        r, c = highlight
        x0, y0 = c * cell_px, r * cell_px
        draw.rectangle([x0, y0, x0 + cell_px - 1, y0 + cell_px - 1], outline=HIGHLIGHT_COLOR, width=3)

    return image


def save_board_image(grid: np.ndarray, output_path: str, cell_px: int = 48,
                     highlight: Optional[Tuple[int, int]] = None) -> str:
    image = render_board_image(grid, cell_px=cell_px, highlight=highlight)
    image.save(output_path)
    return output_path
