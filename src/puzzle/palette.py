"""
Palette Module - Display colours attached to cell states.

The colour map only travels with the puzzle for whoever draws it;
solving never reads it.
"""

import logging
from typing import Dict, Mapping, Tuple

from PIL import ImageColor

from .cell_state import CellState

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
ColourMap = Dict[CellState, RGB]

# Black and white puzzles
DEFAULT_COLOURS: Dict[CellState, str] = {
    CellState.UNKNOWN: "#ECECEC",
    CellState.COLOUR_1: "#000000",
    CellState.EMPTY: "#FFFFFF",
}


def parse_colour(text: str) -> RGB:
    """
    Parse a colour string ("#RRGGBB", "red", "rgb(...)") to an RGB tuple.

    Raises:
        ValueError: If Pillow does not recognise the colour
    """
    rgb = ImageColor.getrgb(text)
    return rgb[0], rgb[1], rgb[2]


def format_colour(rgb: RGB) -> str:
    """Format an RGB tuple as #RRGGBB."""
    return "#{:02X}{:02X}{:02X}".format(*rgb)


def default_colour_map() -> ColourMap:
    """Fresh copy of the black and white palette."""
    return {state: parse_colour(text) for state, text in DEFAULT_COLOURS.items()}


def parse_colour_map(states: Mapping[str, str]) -> ColourMap:
    """
    Build a colour map from the "states" object of a puzzle file.

    Entries with an unknown state name or unreadable colour are skipped
    with a warning, so the image may display incorrectly but the puzzle
    still loads.

    Args:
        states: Mapping of CellState name to colour string

    Returns:
        Colour map keyed by CellState
    """
    colour_map: ColourMap = {}
    for name, colour in states.items():
        try:
            colour_map[CellState[name]] = parse_colour(colour)
        except (KeyError, ValueError, AttributeError):
            logger.warning(f"Unrecognised custom colour {name}={colour!r}, skipping")
    return colour_map
