"""Record directory: search, sort, duplicate and completeness views."""

from .engine import (
    RecordDirectory,
    compute_stats,
    duplicate_key,
    filter_completeness,
    find_duplicates,
    matches_skills,
    matches_tags,
    matches_text,
    paginate,
    sort_records,
)
from .models import CompletenessFilter, DirectoryStats, RecordQuery, ResultPage, SortOrder

__all__ = [
    "RecordDirectory",
    "RecordQuery",
    "SortOrder",
    "CompletenessFilter",
    "DirectoryStats",
    "ResultPage",
    "compute_stats",
    "duplicate_key",
    "filter_completeness",
    "find_duplicates",
    "matches_skills",
    "matches_tags",
    "matches_text",
    "paginate",
    "sort_records",
]
