"""Core domain models for normalized founder records.

This module defines the immutable values produced by the normalizer:
- ContactChannelSet: the four resolved link slots plus email
- NormalizedRecord: the canonical view of one raw record

Both models are frozen. Collaborators (rendering, saving, exporting,
outreach) read them and project the fields they need; nothing mutates them.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator

MAILTO_PREFIX = "mailto:"


class ContactChannelSet(BaseModel):
    """Resolved contact channels for one record.

    Each distinct link occupies at most one slot: the canonical keys
    (host + path) of any two non-null URL slots differ.
    """

    company_url: Optional[str] = Field(None, description="Company website")
    careers_url: Optional[str] = Field(None, description="Page listing open roles")
    apply_url: Optional[str] = Field(None, description="Direct application link")
    network_profile_url: Optional[str] = Field(
        None, description="Professional-network profile (LinkedIn)"
    )
    email_href: Optional[str] = Field(None, description="mailto: link for the contact email")
    company_domain: Optional[str] = Field(
        None, description="Display domain of company_url (no www.)"
    )

    model_config = {"frozen": True}

    @field_validator("email_href")
    @classmethod
    def require_mailto(cls, v: Optional[str]) -> Optional[str]:
        """Ensure email_href carries the mailto: scheme."""
        if v is None:
            return None
        if not v.lower().startswith(MAILTO_PREFIX):
            return f"{MAILTO_PREFIX}{v}"
        return v

    @property
    def email(self) -> Optional[str]:
        """Plain email address without the mailto: prefix."""
        if not self.email_href:
            return None
        return self.email_href[len(MAILTO_PREFIX):]

    @property
    def links(self) -> Tuple[Optional[str], ...]:
        """URL slots in a fixed order: network profile, apply, careers, company."""
        return (self.network_profile_url, self.apply_url, self.careers_url, self.company_url)

    @property
    def has_any_link(self) -> bool:
        """True if at least one URL slot is filled."""
        return any(self.links)


class NormalizedRecord(BaseModel):
    """Canonical, typed view of one scraped founder/company record.

    Text fields are None when the raw value was absent or a placeholder.
    ``tags`` is capped for compact display; ``remainder_tag_count`` counts
    the distinct tags left out. ``indexed_tags`` uses the larger index cap so
    tag filters agree with the tag index. ``published_epoch_ms`` is 0 when no
    date could be parsed.
    """

    id: Optional[str] = Field(None, description="Record identifier")
    company: Optional[str] = Field(None, description="Company name")
    company_description: Optional[str] = Field(None, description="Company description")
    contact_name: Optional[str] = Field(None, description="Founder or contact name")
    role: Optional[str] = Field(None, description="Contact's role")
    tags: Tuple[str, ...] = Field(default=(), description="Display tags (capped)")
    remainder_tag_count: int = Field(0, ge=0, description="Distinct tags beyond the cap")
    indexed_tags: Tuple[str, ...] = Field(default=(), description="Tags under the index cap")
    channels: ContactChannelSet = Field(default_factory=ContactChannelSet)
    published_display: str = Field("N/A", description="'<date> • <relative>' or 'N/A'")
    published_epoch_ms: int = Field(0, ge=0, description="Sortable publication time")

    model_config = {
        "frozen": True,
        "json_schema_extra": {"example": {
            "id": "rec-1",
            "company": "Acme",
            "company_description": "Developer tools for robots",
            "contact_name": "Jane Doe",
            "role": "CEO",
            "tags": ["Eng", "PM"],
            "remainder_tag_count": 0,
            "indexed_tags": ["Eng", "PM"],
            "channels": {
                "company_url": None,
                "careers_url": "https://acme.com/careers",
                "apply_url": None,
                "network_profile_url": "https://linkedin.com/company/acme",
                "email_href": None,
                "company_domain": None,
            },
            "published_display": "11/14/2023 • 1 yr ago",
            "published_epoch_ms": 1699920000000,
        }},
    }

    @property
    def has_email(self) -> bool:
        return self.channels.email_href is not None

    @property
    def has_network_profile(self) -> bool:
        return self.channels.network_profile_url is not None

    @property
    def has_company_site(self) -> bool:
        return self.channels.company_url is not None

    @property
    def has_apply_url(self) -> bool:
        return self.channels.apply_url is not None
