"""
Piece loader - read a serialized piece cube of marker names.

The JSON document is a 3D array indexed ``[row][col][depth]`` whose entries
are marker names ("FREE", "OCCUPIED"; "PLAYER" is read as OCCUPIED).
"""

import json
from pathlib import Path
from typing import Any, Optional

import numpy as np

from tumblecube.core.base import Cell
from tumblecube.game.geometry import as_cube, validate_piece_shape

ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"
DEFAULT_PIECE_FILE = ASSETS_DIR / "default_piece.json"


def parse_piece(data: Any, size: Optional[int] = None) -> np.ndarray:
    """
    Convert decoded JSON into a validated piece cube.

    Args:
        data: nested lists of marker names
        size: expected cube edge length, if known

    Returns:
        Cube array

    Raises:
        ValueError: If a marker is unknown or the shape is not a valid piece
    """
    if not isinstance(data, list):
        raise ValueError("Piece shape must be a 3D array of marker names")

    def convert(node):
        if isinstance(node, list):
            return [convert(child) for child in node]
        if not isinstance(node, str):
            raise ValueError(f"Marker must be a name, got {node!r}")
        return int(Cell.from_name(node))

    try:
        cube = as_cube(convert(data))
    except ValueError as e:
        # ragged nesting makes numpy refuse the conversion
        raise ValueError(f"Invalid piece shape: {e}")

    validate_piece_shape(cube, size)
    return cube


def load_piece_from_string(text: str, size: Optional[int] = None) -> np.ndarray:
    return parse_piece(json.loads(text), size)


def load_piece_from_json(json_path: str, size: Optional[int] = None) -> np.ndarray:
    """
    Load a piece cube from a JSON file.

    Args:
        json_path: path of the JSON shape file
        size: expected cube edge length, if known

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a valid piece shape
    """
    path = Path(json_path)
    if not path.exists():
        raise FileNotFoundError(f"Piece shape file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error parsing piece shape {path}: {e}")

    return parse_piece(data, size)


def load_default_piece(size: Optional[int] = None) -> np.ndarray:
    """Load the piece shape shipped with the package."""
    return load_piece_from_json(str(DEFAULT_PIECE_FILE), size)


def dump_piece(cube: np.ndarray) -> str:
    """Serialize a cube to the JSON marker-name format."""
    names = [[[Cell(int(v)).name for v in column] for column in row] for row in cube]
    return json.dumps(names, indent=2)
