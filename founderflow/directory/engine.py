"""Search, sort and completeness views over normalized records.

Everything here reads NormalizedRecord fields only; raw input is never
consulted again after normalization.
"""

from typing import Callable, Dict, Iterable, List, Optional, Sequence

from founderflow.domain.models import NormalizedRecord
from founderflow.logging import get_logger
from founderflow.utils.text import normalize_for_matching

from .models import (
    CompletenessFilter,
    DirectoryStats,
    RecordQuery,
    ResultPage,
    SortOrder,
)

logger = get_logger(__name__, component="directory")

INVALID_LABELS = frozenset({"unknown"})
TAG_SEPARATOR = ", "


def _haystack(*values: Optional[str]) -> str:
    return " ".join(normalize_for_matching(value or "") for value in values)


def _is_invalid_label(value: Optional[str]) -> bool:
    return value is None or value.strip().lower() in INVALID_LABELS


def matches_text(record: NormalizedRecord, text: str) -> bool:
    """Substring match over company, contact name and description.

    Both sides go through normalize_for_matching(), so case, runs of
    whitespace and list punctuation are ignored.
    """
    needle = normalize_for_matching(text)
    if not needle:
        return True
    return needle in _haystack(record.company, record.contact_name, record.company_description)


def matches_skills(record: NormalizedRecord, skills: str) -> bool:
    """Case-insensitive substring match over the record's tags and role."""
    needle = normalize_for_matching(skills)
    if not needle:
        return True
    return needle in _haystack(TAG_SEPARATOR.join(record.indexed_tags), record.role)


def matches_tags(record: NormalizedRecord, tags: Iterable[str]) -> bool:
    """True if the record carries any of ``tags`` (OR semantics); no tags matches all."""
    wanted = set(tags)
    if not wanted:
        return True
    return any(tag in wanted for tag in record.indexed_tags)


def sort_records(
    records: Iterable[NormalizedRecord],
    order: SortOrder = SortOrder.DATE_DESC,
) -> List[NormalizedRecord]:
    """Return records sorted by ``order``.

    Sorting is stable. Records without a parseable date have epoch 0 and
    therefore sort as the oldest. ``company_az`` compares case-insensitively
    and puts records with no company first.
    """
    order = SortOrder(order)
    if order == SortOrder.DATE_DESC:
        return sorted(records, key=lambda r: r.published_epoch_ms, reverse=True)
    if order == SortOrder.DATE_ASC:
        return sorted(records, key=lambda r: r.published_epoch_ms)
    return sorted(records, key=lambda r: (r.company or "").casefold())


def duplicate_key(record: NormalizedRecord) -> Optional[str]:
    """Lower-cased ``contact_name|company`` key, or None if both are absent."""
    name = (record.contact_name or "").strip().lower()
    company = (record.company or "").strip().lower()
    if not name and not company:
        return None
    return f"{name}|{company}"


def find_duplicates(records: Iterable[NormalizedRecord]) -> List[List[NormalizedRecord]]:
    """Group records sharing a contact name and company.

    Returns:
        Groups of two or more records, in order of first appearance
    """
    groups: Dict[str, List[NormalizedRecord]] = {}
    for record in records:
        key = duplicate_key(record)
        if key is None:
            continue
        groups.setdefault(key, []).append(record)
    return [group for group in groups.values() if len(group) > 1]


def _is_incomplete(record: NormalizedRecord) -> bool:
    no_channel = not (record.has_email or record.has_network_profile or record.has_company_site)
    return (
        no_channel
        or _is_invalid_label(record.contact_name)
        or _is_invalid_label(record.company)
        or _is_invalid_label(record.role)
    )


_COMPLETENESS_PREDICATES: Dict[CompletenessFilter, Callable[[NormalizedRecord], bool]] = {
    CompletenessFilter.ALL: lambda r: True,
    CompletenessFilter.MISSING_EMAIL: lambda r: not r.has_email,
    CompletenessFilter.MISSING_NETWORK_PROFILE: lambda r: not r.has_network_profile,
    CompletenessFilter.MISSING_COMPANY_SITE: lambda r: not r.has_company_site,
    CompletenessFilter.INVALID_NAMES: lambda r: _is_invalid_label(r.contact_name),
    CompletenessFilter.INVALID_COMPANIES: lambda r: _is_invalid_label(r.company),
    CompletenessFilter.INVALID_ROLES: lambda r: _is_invalid_label(r.role),
    CompletenessFilter.INCOMPLETE: _is_incomplete,
}


def filter_completeness(
    records: Sequence[NormalizedRecord],
    view: CompletenessFilter,
) -> List[NormalizedRecord]:
    """Select records for an admin completeness view.

    ``duplicates`` keeps every record that belongs to a duplicate group, in
    input order.
    """
    view = CompletenessFilter(view)
    if view == CompletenessFilter.DUPLICATES:
        duplicate_ids = {id(r) for group in find_duplicates(records) for r in group}
        return [r for r in records if id(r) in duplicate_ids]
    predicate = _COMPLETENESS_PREDICATES[view]
    return [r for r in records if predicate(r)]


def compute_stats(records: Sequence[NormalizedRecord]) -> DirectoryStats:
    """Count missing and suspect fields across records."""
    stats = DirectoryStats(total=len(records))
    for record in records:
        stats.without_email += not record.has_email
        stats.without_network_profile += not record.has_network_profile
        stats.without_company_site += not record.has_company_site
        stats.invalid_names += _is_invalid_label(record.contact_name)
        stats.invalid_companies += _is_invalid_label(record.company)
        stats.invalid_roles += _is_invalid_label(record.role)
    stats.duplicate_groups = len(find_duplicates(records))
    return stats


def paginate(items: Sequence, page: int = 1, per_page: int = 20) -> ResultPage:
    """Slice one 1-based page out of ``items``.

    Raises:
        ValueError: If page or per_page is less than 1
    """
    if page < 1 or per_page < 1:
        raise ValueError("page and per_page must be at least 1")
    start = (page - 1) * per_page
    return ResultPage(
        items=list(items[start:start + per_page]),
        page=page,
        per_page=per_page,
        total=len(items),
    )


class RecordDirectory:
    """Filters and orders normalized records for list views.

    With no active filter and the default ordering, records without any
    link are hidden so the default view stays actionable.
    """

    def __init__(
        self,
        default_order: SortOrder = SortOrder.DATE_DESC,
        require_actionable_link: bool = True,
    ):
        self.default_order = SortOrder(default_order)
        self.require_actionable_link = require_actionable_link
        self.logger = logger

    @classmethod
    def from_config(cls, config) -> "RecordDirectory":
        """Build a directory from an AppConfig."""
        return cls(
            default_order=config.directory.default_sort,
            require_actionable_link=config.directory.require_actionable_link,
        )

    def _filters(self, query: RecordQuery, order: SortOrder) -> List[Callable[[NormalizedRecord], bool]]:
        filters: List[Callable[[NormalizedRecord], bool]] = []
        unfiltered = not query.is_active and order == SortOrder.DATE_DESC
        if self.require_actionable_link and unfiltered:
            filters.append(lambda r: r.channels.has_any_link)
        if query.only_apply:
            filters.append(lambda r: r.has_apply_url)
        if query.only_network_profile:
            filters.append(lambda r: r.has_network_profile)
        if query.only_email:
            filters.append(lambda r: r.has_email)
        if query.only_company_site:
            filters.append(lambda r: r.has_company_site)
        if query.text.strip():
            filters.append(lambda r: matches_text(r, query.text))
        if query.skills.strip():
            filters.append(lambda r: matches_skills(r, query.skills))
        if query.tags:
            filters.append(lambda r: matches_tags(r, query.tags))
        return filters

    def search(
        self,
        records: Iterable[NormalizedRecord],
        query: Optional[RecordQuery] = None,
        order: Optional[SortOrder] = None,
    ) -> List[NormalizedRecord]:
        """Filter records by ``query`` and sort them by ``order``.

        Args:
            records: Normalized records
            query: Filters to apply (defaults to none)
            order: Sort order (defaults to the directory's default order)

        Returns:
            Matching records in the requested order
        """
        query = query or RecordQuery()
        order = SortOrder(order or self.default_order)
        items = list(records)

        filters = self._filters(query, order)
        matched = [r for r in items if all(f(r) for f in filters)]
        result = sort_records(matched, order)

        self.logger.debug(
            "Directory search",
            extra={
                "event": "directory.search.completed",
                "total": len(items),
                "matched": len(result),
                "order": order.value,
                "filters_active": query.is_active,
            },
        )
        return result
