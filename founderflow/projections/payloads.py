"""Output projections of a NormalizedRecord.

Each projection is a plain dict built from already-normalized fields; none of
them classify or parse anything again:
- display: camelCase view used by card/row renderers
- save payload: flat snake_case record matching the saved-entry schema
- prompt context: save payload fields for outreach drafting, blanks omitted
"""

from typing import Any, Dict, Optional

from founderflow.domain.models import NormalizedRecord
from founderflow.normalization.urls import display_domain
from founderflow.normalization.values import is_junk
from founderflow.utils.text import initials_for

UNKNOWN_COMPANY = "unknown company"
FALLBACK_INITIALS = "UN"
FAVICON_URL_TEMPLATE = "https://icons.duckduckgo.com/ip3/{domain}.ico"
TAG_SEPARATOR = ", "

SAVE_PAYLOAD_FIELDS = (
    "id",
    "company",
    "company_info",
    "name",
    "role",
    "looking_for",
    "company_url",
    "url",
    "apply_url",
    "linkedinurl",
    "email",
    "published",
)


def avatar_initials(record: NormalizedRecord) -> str:
    """Initials from the contact name, else the company, else "UN"."""
    label = record.contact_name or record.company
    if not label:
        return FALLBACK_INITIALS
    return initials_for(label) or FALLBACK_INITIALS


def favicon_url(record: NormalizedRecord) -> Optional[str]:
    """Favicon for the company site, falling back to the careers page host."""
    website = record.channels.company_url or record.channels.careers_url
    domain = display_domain(website) if website else None
    if not domain:
        return None
    return FAVICON_URL_TEMPLATE.format(domain=domain)


def to_display(
    record: NormalizedRecord,
    unknown_company_label: str = UNKNOWN_COMPANY,
) -> Dict[str, Any]:
    """Build the display projection used by renderers.

    Args:
        record: Normalized record
        unknown_company_label: Placeholder shown when the company is absent

    Returns:
        Dict with camelCase keys; link fields are None when empty
    """
    channels = record.channels
    return {
        "id": record.id,
        "company": record.company or unknown_company_label,
        "companyDescription": record.company_description,
        "contactName": record.contact_name,
        "role": record.role,
        "tags": list(record.tags),
        "remainderTagCount": record.remainder_tag_count,
        "companyUrl": channels.company_url,
        "careersUrl": channels.careers_url,
        "applyUrl": channels.apply_url,
        "networkProfileUrl": channels.network_profile_url,
        "emailHref": channels.email_href,
        "publishedDisplay": record.published_display,
        "companyDomain": channels.company_domain,
        "initials": avatar_initials(record),
        "faviconUrl": favicon_url(record),
    }


def to_save_payload(record: NormalizedRecord) -> Dict[str, Any]:
    """Build the flat save payload.

    Feeding this payload back through RecordNormalizer yields the same record,
    apart from tags beyond the display cap.

    Example:
        >>> to_save_payload(record)["looking_for"]
        'Eng, PM'
    """
    channels = record.channels
    return {
        "id": record.id,
        "company": record.company,
        "company_info": record.company_description,
        "name": record.contact_name,
        "role": record.role,
        "looking_for": TAG_SEPARATOR.join(record.tags),
        "company_url": channels.company_url,
        "url": channels.careers_url,
        "apply_url": channels.apply_url,
        "linkedinurl": channels.network_profile_url,
        "email": channels.email,
        "published": record.published_display,
    }


def to_prompt_context(record: NormalizedRecord) -> Dict[str, str]:
    """Build the outreach prompt context.

    Same keys as the save payload minus ``id``. Fields that are None, empty
    or placeholders ("N/A") are left out entirely so drafted text never
    mentions missing data.
    """
    payload = to_save_payload(record)
    payload.pop("id")
    return {key: value for key, value in payload.items() if not is_junk(value)}
