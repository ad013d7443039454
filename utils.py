# utils.py

import re
import zlib

FREE_COLOR = "#2f3e40"

CELL_COLORS = {
    "empty": "#f2f2f2",
    "hit": "#b7e4c7",
    "fault": "#f8b4a6",
    "neutral": "#ffffff",
}


def get_color(block):
    """Return a color for a block: dark slate when free, a pastel per owner otherwise."""
    if not block.allocated:
        return FREE_COLOR
    # hashed rather than random so a process keeps its color across reruns
    hue = zlib.crc32(str(block.owner_id).encode("utf-8")) % 360
    return f"hsl({hue}, 70%, 75%)"


def cell_color(kind):
    return CELL_COLORS.get(kind, CELL_COLORS["neutral"])


def parse_partition_sizes(text):
    """Parse "100, 500, 200" into [100, 500, 200]. Raises ValueError on bad input."""
    if not text or not text.strip():
        raise ValueError("Please enter partition sizes.")
    try:
        sizes = [int(s.strip()) for s in text.split(",")]
    except ValueError:
        raise ValueError(
            "Invalid partition sizes. Use positive numbers separated by commas."
        ) from None
    if any(s <= 0 for s in sizes):
        raise ValueError(
            "Invalid partition sizes. Use positive numbers separated by commas."
        )
    return sizes


def parse_reference_string(text):
    """Parse page numbers separated by spaces and/or commas."""
    if not text or not text.strip():
        raise ValueError("Please enter a reference string.")
    message = (
        "Reference string must contain non-negative integers "
        "separated by spaces or commas."
    )
    try:
        refs = [int(tok) for tok in re.split(r"[\s,]+", text.strip()) if tok]
    except ValueError:
        raise ValueError(message) from None
    if any(r < 0 for r in refs):
        raise ValueError(message)
    return refs
