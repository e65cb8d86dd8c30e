"""Field alias table for loosely-typed raw records.

Each logical field maps to an ordered tuple of source keys. Lookups walk the
tuple in order and return the first meaningful value, so the table is the
single place that decides which spelling of a field wins.
"""

from types import MappingProxyType
from typing import Any, List, Mapping, Tuple

from .values import first_meaningful, is_junk

ID = "id"
COMPANY = "company"
COMPANY_DESCRIPTION = "company_description"
CONTACT_NAME = "contact_name"
ROLE = "role"
TAGS = "tags"
COMPANY_URL = "company_url"
NETWORK_PROFILE_URL = "network_profile_url"
FLEXIBLE_URL = "flexible_url"
APPLY_URL = "apply_url"
EMAIL = "email"
PUBLISHED = "published"
SORT_TIMESTAMP = "sort_timestamp"

FIELD_ALIASES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    ID: ("id", "_id", "doc_id"),
    COMPANY: ("company", "company_name"),
    COMPANY_DESCRIPTION: ("company_info", "companyInfo", "company_description"),
    CONTACT_NAME: ("name", "contact_name", "founder_name"),
    ROLE: ("role", "position"),
    TAGS: ("looking_for", "lookingFor", "tags"),
    COMPANY_URL: ("company_url", "companyUrl", "website", "site", "homepage", "url_website"),
    NETWORK_PROFILE_URL: ("linkedinurl", "linkedin_url", "linkedinUrl", "linkedin", "li"),
    # Holds a careers page, a company site, a profile or even an email
    FLEXIBLE_URL: ("url", "roles_url", "rolesUrl", "careers", "jobs_url", "open_roles_url"),
    APPLY_URL: ("apply_url", "applyUrl"),
    EMAIL: ("email", "email_address"),
    PUBLISHED: ("published", "publishedAt", "published_at"),
    SORT_TIMESTAMP: (
        "published",
        "publishedAt",
        "published_at",
        "date",
        "createdAt",
        "created_at",
        "created",
        "timestamp",
        "__createdAtMillis",
        "__updatedAtMillis",
    ),
})


def aliases_for(field: str) -> Tuple[str, ...]:
    """Return the ordered source keys for a logical field.

    Raises:
        KeyError: If ``field`` is not in the alias table
    """
    return FIELD_ALIASES[field]


def _values(record: Any, field: str) -> List[Any]:
    if not isinstance(record, Mapping):
        return []
    return [record.get(key) for key in aliases_for(field)]


def lookup(record: Any, field: str) -> Any:
    """Return the first meaningful value for ``field`` in ``record``.

    Non-mapping records behave like empty ones.

    Example:
        >>> lookup({"company_url": "N/A", "website": "acme.com"}, COMPANY_URL)
        'acme.com'
    """
    return first_meaningful(*_values(record, field))


def lookup_all(record: Any, field: str) -> List[Any]:
    """Return every meaningful value for ``field`` in alias order."""
    return [
        value
        for value in _values(record, field)
        if value is not None and not (isinstance(value, str) and is_junk(value))
    ]
