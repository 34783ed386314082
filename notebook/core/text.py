"""
Note Text Derivation.

Pure helpers that turn raw note content into a display title and the
list of hashtags used to tag the note.
"""

import re

# "#" followed by ASCII word characters, e.g. "#groceries", "#todo_2"
HASHTAG_PATTERN = re.compile(r"#(\w+)", re.ASCII)

TITLE_MAX_LENGTH = 50
TITLE_MIN_WORD_BREAK = 20
TITLE_ELLIPSIS = "..."
UNTITLED_NOTE = "Untitled Note"


def derive_title(content: str) -> str:
    """
    Build a title from the first line of the content.

    Hashtags are removed first. A first line longer than 50 characters is
    cut at the last space past position 20 and suffixed with an ellipsis,
    or hard-cut at 50 when no such space exists.

    Args:
        content: Raw note text

    Returns:
        The derived title, or "Untitled Note" when nothing is left
    """
    clean = HASHTAG_PATTERN.sub("", content or "").strip()
    first_line = clean.split("\n", 1)[0].rstrip()

    title = first_line[:TITLE_MAX_LENGTH]
    if len(first_line) > TITLE_MAX_LENGTH:
        last_space = title.rfind(" ")
        if last_space > TITLE_MIN_WORD_BREAK:
            title = title[:last_space] + TITLE_ELLIPSIS

    return title or UNTITLED_NOTE


def extract_hashtags(content: str | None) -> list[str]:
    """
    Return the lowercased hashtags of the content, first occurrence first.

    >>> extract_hashtags("#A #a #b")
    ['a', 'b']
    """
    if not content:
        return []
    return list(dict.fromkeys(tag.lower() for tag in HASHTAG_PATTERN.findall(content)))
