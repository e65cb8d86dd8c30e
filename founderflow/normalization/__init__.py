"""Normalization layer turning loosely-typed scraped records into NormalizedRecord.

This module provides:
- is_junk / clean_text: placeholder detection
- to_absolute_url / canonical_key / clean_email: URL and email cleanup
- ChannelRules: link classification (network profile, careers, company site)
- LinkResolver: priority-ordered assignment of links to channel slots
- to_instant / display_string / short_relative / sort_epoch_ms: timestamp handling
- extract_tags / TagIndex: tag extraction and frequency index
- RecordNormalizer: the record mapper composing all of the above
"""

from .channels import DEFAULT_CHANNEL_RULES, ChannelRules
from .exceptions import InvalidTagCapError, NormalizationError
from .links import LinkResolver, resolve_links
from .models import LinkCandidates, SlotRule, TagExtraction
from .service import BatchFailure, BatchResult, RecordNormalizer, normalize_record
from .tags import TagIndex, build_tag_index, extract_tags
from .timestamps import display_string, short_relative, sort_epoch_ms, to_instant
from .urls import canonical_key, clean_email, display_domain, to_absolute_url
from .values import clean_text, first_meaningful, is_junk

__all__ = [
    "RecordNormalizer",
    "BatchResult",
    "BatchFailure",
    "normalize_record",
    "ChannelRules",
    "DEFAULT_CHANNEL_RULES",
    "LinkResolver",
    "LinkCandidates",
    "SlotRule",
    "resolve_links",
    "TagExtraction",
    "TagIndex",
    "build_tag_index",
    "extract_tags",
    "display_string",
    "short_relative",
    "sort_epoch_ms",
    "to_instant",
    "canonical_key",
    "clean_email",
    "display_domain",
    "to_absolute_url",
    "clean_text",
    "first_meaningful",
    "is_junk",
    "NormalizationError",
    "InvalidTagCapError",
]
