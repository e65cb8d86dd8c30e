"""Text helpers for search and display."""

import re


def collapse_whitespace(text: str) -> str:
    """Trim and collapse runs of whitespace to a single space.

    Example:
        >>> collapse_whitespace("  Acme \\n  Labs ")
        'Acme Labs'
    """
    if not text:
        return ""
    return re.sub(r"\s+", " ", text.strip())


def normalize_for_matching(text: str) -> str:
    """Normalize text for case-insensitive substring search.

    Lower-cases, collapses whitespace and replaces common punctuation with
    spaces. Hyphens, apostrophes and ``+``/``#`` are kept since they carry
    meaning in skills ("c++", "c#", "full-stack").

    Example:
        >>> normalize_for_matching("  Hello,  World!  ")
        'hello world'
    """
    if not text:
        return ""
    normalized = text.lower()
    normalized = re.sub(r"[,;.!?()[\]{}\"<>/|]", " ", normalized)
    return re.sub(r"\s+", " ", normalized).strip()


def initials_for(label: str) -> str:
    """Two-letter initials for an avatar placeholder.

    Uses the first letters of the first two words, or the first two letters
    of a single word.

    Example:
        >>> initials_for("Jane Doe")
        'JD'
        >>> initials_for("acme")
        'AC'
    """
    parts = label.split()
    if not parts:
        return ""
    if len(parts) >= 2:
        return (parts[0][0] + parts[1][0]).upper()
    return parts[0][:2].upper()
