"""Data models for the normalization layer.

Intermediate values passed between the extractor, resolver and mapper. They
are immutable; the public output is the pydantic
NormalizedRecord in founderflow.domain.
"""

from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional, Tuple


class TagExtraction(NamedTuple):
    """Result of splitting a delimited tag field.

    Attributes:
        tags: Distinct tags in first-seen order, at most ``cap`` of them
        remainder_count: Distinct tags that did not fit under the cap
    """

    tags: Tuple[str, ...] = ()
    remainder_count: int = 0

    @property
    def total(self) -> int:
        return len(self.tags) + self.remainder_count


@dataclass(frozen=True)
class LinkCandidates:
    """Absolute-URL candidates pulled from a raw record before slot assignment.

    Attributes:
        company: Company-site alias group, normalized
        network_profile: Network-profile alias group, normalized
        flexible: Generic url/roles alias group, normalized (None if it held an email)
        apply: Dedicated apply-link field, normalized
        email: Cleaned email address (plain, no mailto:)
    """

    company: Optional[str] = None
    network_profile: Optional[str] = None
    flexible: Optional[str] = None
    apply: Optional[str] = None
    email: Optional[str] = None

    def get(self, source: str) -> Optional[str]:
        return getattr(self, source)


@dataclass(frozen=True)
class SlotRule:
    """One step of link resolution.

    Attributes:
        slot: ContactChannelSet field the winner is assigned to
        sources: LinkCandidates attributes consulted, in priority order
        predicate: Classifier that a candidate must satisfy
    """

    slot: str
    sources: Tuple[str, ...]
    predicate: Callable[[str], bool]
