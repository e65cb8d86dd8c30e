"""Tag extraction and the batch tag-frequency index."""

from collections import Counter
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from . import aliases
from .exceptions import InvalidTagCapError
from .models import TagExtraction
from .values import is_junk

DISPLAY_TAG_CAP = 6
INDEX_TAG_CAP = 20


def validate_cap(cap: Any) -> int:
    """Return ``cap`` if it is a non-negative int, else raise InvalidTagCapError."""
    if isinstance(cap, bool) or not isinstance(cap, int) or cap < 0:
        raise InvalidTagCapError(cap)
    return cap


def split_tags(raw: Any) -> List[str]:
    """Split a comma-delimited field into distinct, trimmed, non-junk tags.

    Order and spelling of the first occurrence are kept; tags differing only
    in case count as the same tag.
    Lists and tuples are treated as already split.
    """
    if isinstance(raw, (list, tuple)):
        pieces = [str(item) for item in raw if item is not None]
    elif is_junk(raw):
        return []
    else:
        pieces = str(raw).split(",")

    distinct: List[str] = []
    seen = set()
    for piece in pieces:
        tag = piece.strip()
        if not tag or is_junk(tag) or tag.casefold() in seen:
            continue
        seen.add(tag.casefold())
        distinct.append(tag)
    return distinct


def extract_tags(raw: Any, cap: int = DISPLAY_TAG_CAP) -> TagExtraction:
    """Split a delimited tag field and cap it.

    Args:
        raw: Raw comma-delimited text (any value; junk yields no tags)
        cap: Maximum number of tags to return

    Returns:
        TagExtraction with the first ``cap`` distinct tags and the size of the rest

    Raises:
        InvalidTagCapError: If ``cap`` is not a non-negative integer

    Example:
        >>> extract_tags("A, a, A, B", 1)
        TagExtraction(tags=('A',), remainder_count=1)
    """
    validate_cap(cap)
    distinct = split_tags(raw)
    return TagExtraction(
        tags=tuple(distinct[:cap]),
        remainder_count=max(0, len(distinct) - cap),
    )


class TagIndex:
    """Tag -> occurrence count across a collection of records.

    Counts are additive, so indexes built over disjoint partitions of a
    collection can be merged in any order.
    """

    def __init__(self, counts: Optional[Mapping[str, int]] = None):
        self._counts: Counter = Counter(counts or {})

    def add(self, tags: Iterable[str]) -> None:
        """Count each tag of one record."""
        self._counts.update(tags)

    def merge(self, other: "TagIndex") -> "TagIndex":
        """Return a new index whose counts are the per-tag sums of both."""
        merged = TagIndex(self._counts)
        merged._counts.update(other._counts)
        return merged

    def count(self, tag: str) -> int:
        return self._counts.get(tag, 0)

    def most_common(self, limit: Optional[int] = None) -> List[Tuple[str, int]]:
        """Facets ordered by count descending; ties keep first-seen order."""
        return self._counts.most_common(limit)

    def as_dict(self) -> dict:
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, tag: object) -> bool:
        return tag in self._counts

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagIndex):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return f"TagIndex({self.as_dict()!r})"


def build_tag_index(records: Iterable[Any], cap: int = INDEX_TAG_CAP) -> TagIndex:
    """Build a tag index over raw records in one pass.

    Args:
        records: Raw records (mappings; anything else contributes nothing)
        cap: Per-record tag cap passed to extract_tags()

    Returns:
        TagIndex with per-tag occurrence counts
    """
    validate_cap(cap)
    index = TagIndex()
    for record in records:
        index.add(extract_tags(aliases.lookup(record, aliases.TAGS), cap).tags)
    return index
