"""Query and result models for the record directory."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Generic, List, TypeVar

from founderflow.config.models import SortOrder
from founderflow.domain.models import NormalizedRecord

T = TypeVar("T")

__all__ = [
    "CompletenessFilter",
    "DirectoryStats",
    "RecordQuery",
    "ResultPage",
    "SortOrder",
]


class CompletenessFilter(str, Enum):
    """Admin views over records with missing or suspect data."""

    ALL = "all"
    MISSING_EMAIL = "missing_email"
    MISSING_NETWORK_PROFILE = "missing_network_profile"
    MISSING_COMPANY_SITE = "missing_company_site"
    INVALID_NAMES = "invalid_names"
    INVALID_COMPANIES = "invalid_companies"
    INVALID_ROLES = "invalid_roles"
    INCOMPLETE = "incomplete"
    DUPLICATES = "duplicates"


@dataclass(frozen=True)
class RecordQuery:
    """Filters applied by RecordDirectory.search().

    Attributes:
        text: Substring matched against company, contact name and description
        skills: Substring matched against the record's tags and role
        only_email: Keep records with an email
        only_network_profile: Keep records with a network profile link
        only_company_site: Keep records with a company website
        only_apply: Keep records with a direct application link
        tags: Keep records carrying at least one of these tags
    """

    text: str = ""
    skills: str = ""
    only_email: bool = False
    only_network_profile: bool = False
    only_company_site: bool = False
    only_apply: bool = False
    tags: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_active(self) -> bool:
        """True if any filter is set."""
        return bool(
            self.text.strip()
            or self.skills.strip()
            or self.only_email
            or self.only_network_profile
            or self.only_company_site
            or self.only_apply
            or self.tags
        )


@dataclass
class ResultPage(Generic[T]):
    """One page of a result list."""

    items: List[T]
    page: int
    per_page: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.per_page <= 0:
            return 0
        return -(-self.total // self.per_page)


@dataclass
class DirectoryStats:
    """Completeness counters over a record collection."""

    total: int = 0
    without_email: int = 0
    without_network_profile: int = 0
    without_company_site: int = 0
    invalid_names: int = 0
    invalid_companies: int = 0
    invalid_roles: int = 0
    duplicate_groups: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "without_email": self.without_email,
            "without_network_profile": self.without_network_profile,
            "without_company_site": self.without_company_site,
            "invalid_names": self.invalid_names,
            "invalid_companies": self.invalid_companies,
            "invalid_roles": self.invalid_roles,
            "duplicate_groups": self.duplicate_groups,
        }
