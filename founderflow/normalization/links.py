"""Contact-link resolution.

Scraped records are inconsistent about which field holds which kind of link:
``company_url`` may hold a LinkedIn page, ``url`` may hold a careers page, a
company site or an email. The resolver pulls candidates from the alias
groups and assigns each to at most one of four slots, in a fixed priority
order, never reusing a link (by canonical key) for a second slot.
"""

from typing import Any, Dict, Optional, Set, Tuple

from founderflow.domain.models import ContactChannelSet

from . import aliases
from .channels import DEFAULT_CHANNEL_RULES, ChannelRules
from .models import LinkCandidates, SlotRule
from .urls import canonical_key, clean_email, display_domain, mailto_href, to_absolute_url

NETWORK_PROFILE_SLOT = "network_profile_url"
APPLY_SLOT = "apply_url"
CAREERS_SLOT = "careers_url"
COMPANY_SLOT = "company_url"


def _always(url: str) -> bool:
    return True


def build_slot_rules(rules: ChannelRules = DEFAULT_CHANNEL_RULES) -> Tuple[SlotRule, ...]:
    """Return the ordered slot rules for a set of channel rules.

    Order matters: earlier slots claim links first.
    """
    return (
        SlotRule(
            slot=NETWORK_PROFILE_SLOT,
            sources=("network_profile", "company", "flexible", "apply"),
            predicate=rules.is_network_profile,
        ),
        SlotRule(slot=APPLY_SLOT, sources=("apply",), predicate=_always),
        SlotRule(
            slot=CAREERS_SLOT,
            sources=("flexible", "company"),
            predicate=rules.is_careers_or_job_board,
        ),
        SlotRule(
            slot=COMPANY_SLOT,
            sources=("company", "flexible"),
            predicate=rules.is_company_site,
        ),
    )


def extract_candidates(record: Any) -> LinkCandidates:
    """Pull normalized link and email candidates out of a raw record.

    The flexible field sometimes holds an email instead of a URL; in that case
    it feeds the email fallback and is not offered as a link.
    """
    flexible_raw = aliases.lookup(record, aliases.FLEXIBLE_URL)
    flexible_email = clean_email(flexible_raw)

    return LinkCandidates(
        company=to_absolute_url(aliases.lookup(record, aliases.COMPANY_URL)),
        network_profile=to_absolute_url(aliases.lookup(record, aliases.NETWORK_PROFILE_URL)),
        flexible=None if flexible_email else to_absolute_url(flexible_raw),
        apply=to_absolute_url(aliases.lookup(record, aliases.APPLY_URL)),
        email=clean_email(aliases.lookup(record, aliases.EMAIL)) or flexible_email,
    )


class LinkResolver:
    """Assigns candidate links to channel slots.

    The slot order is data (``slot_rules``) evaluated by one loop, so each
    slot's behavior can be tested in isolation.
    """

    def __init__(self, rules: ChannelRules = DEFAULT_CHANNEL_RULES):
        self.rules = rules
        self.slot_rules = build_slot_rules(rules)

    def assign(self, candidates: LinkCandidates) -> Dict[str, Optional[str]]:
        """Run the slot rules over candidates.

        Returns:
            Mapping of slot name to the winning URL (or None)
        """
        used: Set[str] = set()
        assigned: Dict[str, Optional[str]] = {}

        for rule in self.slot_rules:
            assigned[rule.slot] = None
            for source in rule.sources:
                candidate = candidates.get(source)
                if not candidate or not rule.predicate(candidate):
                    continue
                key = canonical_key(candidate)
                if key is None or key in used:
                    continue
                assigned[rule.slot] = candidate
                used.add(key)
                break

        return assigned

    def resolve(self, record: Any) -> ContactChannelSet:
        """Resolve a raw record's contact channels.

        Example:
            >>> LinkResolver().resolve({"company_url": "linkedin.com/company/acme"}).network_profile_url
            'https://linkedin.com/company/acme'
        """
        candidates = extract_candidates(record)
        assigned = self.assign(candidates)
        company_url = assigned[COMPANY_SLOT]

        return ContactChannelSet(
            company_url=company_url,
            careers_url=assigned[CAREERS_SLOT],
            apply_url=assigned[APPLY_SLOT],
            network_profile_url=assigned[NETWORK_PROFILE_SLOT],
            email_href=mailto_href(candidates.email),
            company_domain=display_domain(company_url) if company_url else None,
        )


def resolve_links(record: Any, rules: ChannelRules = DEFAULT_CHANNEL_RULES) -> ContactChannelSet:
    """Functional shortcut for LinkResolver(rules).resolve(record)."""
    return LinkResolver(rules).resolve(record)
