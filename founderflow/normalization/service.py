"""Record normalization service for converting raw records to NormalizedRecord.

This module implements the mapping that:
1. Cleans the free-text fields through the alias table
2. Resolves contact links into channel slots
3. Derives the display date and the sortable epoch
4. Extracts display tags and index tags
5. Normalizes whole batches, optionally across worker threads
"""

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from founderflow.domain.models import NormalizedRecord
from founderflow.logging import get_logger
from founderflow.logging.context import log_context
from founderflow.utils.hashing import compute_record_id
from founderflow.utils.timestamps import ensure_utc, utc_now

from . import aliases
from .channels import DEFAULT_CHANNEL_RULES, ChannelRules
from .links import LinkResolver
from .tags import DISPLAY_TAG_CAP, INDEX_TAG_CAP, TagIndex, extract_tags, validate_cap
from .timestamps import NOT_AVAILABLE, display_string, first_instant, sort_epoch_ms
from .values import clean_text

logger = get_logger(__name__, component="normalization")


@dataclass
class BatchFailure:
    """A record that could not be normalized."""

    position: int
    error: str


@dataclass
class BatchResult:
    """Output of RecordNormalizer.normalize_batch().

    Attributes:
        records: Normalized records in input order (failures omitted)
        tag_index: Tag counts over the records' indexed tags
        failures: Records skipped because normalization raised
    """

    records: List[NormalizedRecord]
    tag_index: TagIndex
    failures: List[BatchFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.records) + len(self.failures)


class RecordNormalizer:
    """Normalizes raw scraped records into NormalizedRecord instances.

    Responsibilities:
    - Clean text fields (placeholders become None)
    - Derive a stable id when the record carries none
    - Resolve contact channels through the LinkResolver
    - Render the published date relative to a fixed reference time
    - Extract capped display tags and index tags
    - Provide logging and error handling for batches
    """

    def __init__(
        self,
        rules: ChannelRules = DEFAULT_CHANNEL_RULES,
        display_tag_cap: int = DISPLAY_TAG_CAP,
        index_tag_cap: int = INDEX_TAG_CAP,
        now: Optional[datetime] = None,
        max_workers: int = 1,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize RecordNormalizer.

        Args:
            rules: Channel classification rules
            display_tag_cap: Tags kept for display
            index_tag_cap: Tags kept for the tag index and tag filters
            now: Reference time for relative dates (UTC). Defaults to utc_now()
            max_workers: Worker threads for normalize_batch (1 = serial)
            logger_instance: Logger instance (defaults to module logger)

        Raises:
            InvalidTagCapError: If either cap is not a non-negative integer
        """
        self.rules = rules
        self.display_tag_cap = validate_cap(display_tag_cap)
        self.index_tag_cap = validate_cap(index_tag_cap)
        self.now = ensure_utc(now or utc_now())
        self.max_workers = max(1, int(max_workers))
        self.logger = logger_instance or logger
        self.resolver = LinkResolver(rules)

    @classmethod
    def from_config(cls, config, now: Optional[datetime] = None) -> "RecordNormalizer":
        """Build a normalizer from an AppConfig."""
        return cls(
            rules=config.channels.to_rules(),
            display_tag_cap=config.normalization.display_tag_cap,
            index_tag_cap=config.normalization.index_tag_cap,
            now=now,
            max_workers=config.batch.max_workers,
        )

    def normalize(self, raw: Any) -> NormalizedRecord:
        """Normalize a single raw record.

        Never raises for malformed input: a record that is entirely junk (or
        not a mapping at all) yields a record with no company, no channels,
        no tags, an "N/A" date and epoch 0.

        Args:
            raw: Raw record, usually a dict parsed from JSON

        Returns:
            Immutable NormalizedRecord
        """
        company = clean_text(aliases.lookup(raw, aliases.COMPANY))
        contact_name = clean_text(aliases.lookup(raw, aliases.CONTACT_NAME))
        channels = self.resolver.resolve(raw)

        record_id = clean_text(aliases.lookup(raw, aliases.ID))
        if record_id is None:
            record_id = compute_record_id(
                company, contact_name, *channels.links, channels.email
            )

        published = first_instant(raw, aliases.PUBLISHED)
        published_display = (
            display_string(published, now=self.now) if published else NOT_AVAILABLE
        )

        raw_tags = aliases.lookup(raw, aliases.TAGS)
        display_tags = extract_tags(raw_tags, self.display_tag_cap)
        index_tags = extract_tags(raw_tags, self.index_tag_cap)

        record = NormalizedRecord(
            id=record_id,
            company=company,
            company_description=clean_text(aliases.lookup(raw, aliases.COMPANY_DESCRIPTION)),
            contact_name=contact_name,
            role=clean_text(aliases.lookup(raw, aliases.ROLE)),
            tags=display_tags.tags,
            remainder_tag_count=display_tags.remainder_count,
            indexed_tags=index_tags.tags,
            channels=channels,
            published_display=published_display,
            published_epoch_ms=sort_epoch_ms(raw),
        )

        self.logger.debug(
            "Normalized record",
            extra={
                "event": "normalization.record.normalized",
                "record_id": record.id,
                "company": record.company,
                "has_email": record.has_email,
                "has_links": channels.has_any_link,
            },
        )
        return record

    def normalize_batch(self, records: Iterable[Any]) -> BatchResult:
        """Normalize a batch of raw records.

        Records are split into contiguous chunks, one per worker. Each chunk
        builds its own tag index and the partial indexes are merged, so the
        output order and the counts match a serial run.

        Errors on individual records are logged and the record is skipped.

        Args:
            records: Iterable of raw records

        Returns:
            BatchResult with records in input order, tag index and failures
        """
        items = list(records)
        batch_id = uuid.uuid4().hex[:12]

        with log_context(batch_id=batch_id):
            chunks = _chunk(items, self.max_workers)
            if len(chunks) <= 1:
                partials = [self._normalize_chunk(chunk) for chunk in chunks]
            else:
                # Workers inherit no contextvars; the context is applied per chunk
                with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
                    partials = list(
                        executor.map(
                            lambda chunk: self._normalize_chunk(chunk, batch_id=batch_id),
                            chunks,
                        )
                    )

            normalized: List[NormalizedRecord] = []
            failures: List[BatchFailure] = []
            tag_index = TagIndex()
            for chunk_records, chunk_failures, chunk_index in partials:
                normalized.extend(chunk_records)
                failures.extend(chunk_failures)
                tag_index = tag_index.merge(chunk_index)

            self.logger.info(
                f"Normalized {len(normalized)} of {len(items)} records",
                extra={
                    "event": "normalization.batch.completed",
                    "total": len(items),
                    "normalized": len(normalized),
                    "failed": len(failures),
                    "workers": len(chunks),
                    "distinct_tags": len(tag_index),
                },
            )

        return BatchResult(records=normalized, tag_index=tag_index, failures=failures)

    def process_batch(self, records: Iterable[Any]) -> Iterable[NormalizedRecord]:
        """Lazily normalize records one by one, continuing on error.

        Yields:
            NormalizedRecord for each record that normalized successfully
        """
        for position, raw in enumerate(records):
            try:
                yield self.normalize(raw)
            except Exception as e:
                self._log_failure(position, e)
                continue

    def _normalize_chunk(
        self,
        chunk: Sequence[Tuple[int, Any]],
        batch_id: Optional[str] = None,
    ) -> Tuple[List[NormalizedRecord], List[BatchFailure], TagIndex]:
        context = {"batch_id": batch_id} if batch_id else {}
        with log_context(**context):
            records: List[NormalizedRecord] = []
            failures: List[BatchFailure] = []
            index = TagIndex()
            for position, raw in chunk:
                try:
                    record = self.normalize(raw)
                except Exception as e:
                    self._log_failure(position, e)
                    failures.append(BatchFailure(position=position, error=str(e)))
                    continue
                records.append(record)
                index.add(record.indexed_tags)
            return records, failures, index

    def _log_failure(self, position: int, error: Exception) -> None:
        self.logger.error(
            f"Error normalizing record at position {position}: {error}",
            exc_info=True,
            extra={
                "event": "normalization.record.failed",
                "position": position,
            },
        )


def _chunk(items: Sequence[Any], workers: int) -> List[List[Tuple[int, Any]]]:
    """Split items into at most ``workers`` contiguous, position-tagged chunks."""
    if not items:
        return []
    workers = max(1, min(workers, len(items)))
    size = -(-len(items) // workers)
    indexed = list(enumerate(items))
    return [indexed[start:start + size] for start in range(0, len(indexed), size)]


def normalize_record(raw: Any, now: Optional[datetime] = None) -> NormalizedRecord:
    """Normalize one record with the default rules and caps."""
    return RecordNormalizer(now=now).normalize(raw)
