"""
Tag Colors.

Fixed palette used to color tags. A tag name always maps to the same color.
"""

import random

TAG_COLORS: tuple[str, ...] = (
    "#5737D7", "#D63F9A", "#F95959", "#5E7DFA", "#27CA69",
    "#43B79F", "#A100C9", "#BE02BE", "#C1AA4B", "#5ED276",
    "#3DA5BF", "#2BFCFC", "#37C015", "#92EF07", "#0808F6",
    "#1FDD91", "#B75E47", "#5E1DBF", "#EF0C67", "#9EFB61",
    "#E6E60D", "#206FE6", "#9C0EFB", "#B44C06", "#C6F609",
    "#5CDA5C", "#B47A24", "#4794C7", "#E24766", "#E318BA",
)

DEFAULT_TAG_COLOR = "#007bff"


def name_hash(value: str) -> int:
    """Rolling `hash * 31 + code` over the characters, as a signed 32-bit int."""
    result = 0
    for char in value:
        result = (result * 31 + ord(char)) & 0xFFFFFFFF
    if result >= 0x80000000:
        result -= 0x100000000
    return result


def color_for(tag_name: str | None = None) -> str:
    """
    Pick a palette color for a tag.

    Args:
        tag_name: Tag name to hash. When omitted a random color is returned.

    Returns:
        Hex color string such as "#5737D7"
    """
    if tag_name is None:
        return random.choice(TAG_COLORS)
    return TAG_COLORS[abs(name_hash(tag_name)) % len(TAG_COLORS)]
