"""Word count formatting."""

from __future__ import annotations


def format_counts(total_words: int, per_page: int | None = None) -> str:
    """Render a word total as a human-readable count.

    With a page size the total is split into whole pages plus the remaining
    words; otherwise the total is printed with thousands separators. A page
    size of 0 is treated as unset.

    Args:
        total_words: Non-negative word total.
        per_page: Words per page, or None.

    Returns:
        str: Formatted count, without a trailing newline.

    Examples:
        format_counts(1234)  # "1,234 words"
        format_counts(1234, 500)  # "2 pages + 234 words"
    """
    if per_page:
        pages, remainder = divmod(total_words, per_page)
        return f"{pages} pages + {remainder} words"
    return f"{total_words:,} words"
