"""
Verse pagination.

A song's lyrics are stored as one text in which verses are separated
by a blank line.  ``paginate_verses`` returns one page of them.
"""

from typing import List, Tuple

VERSE_DELIMITER = "\n\n"


def split_verses(text: str) -> List[str]:
    """Split lyrics into verses in order of appearance.

    An empty text yields a single empty verse.
    """
    return text.split(VERSE_DELIMITER)


def paginate_verses(text: str, page: int, limit: int) -> Tuple[List[str], int]:
    """Return the verses on ``page`` and the total number of verses.

    ``page`` is 1-based and ``limit`` is the number of verses per page;
    both must be at least 1.  A page past the last verse is not an
    error: it yields an empty list together with the real total.
    """
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive")
    verses = split_verses(text)
    total = len(verses)
    start = (page - 1) * limit
    if start >= total:
        return [], total
    end = min(start + limit, total)
    return verses[start:end], total
