"""Classification of normalized URLs into contact-channel families."""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .urls import parse_host, parse_path

DEFAULT_NETWORK_DOMAINS: Tuple[str, ...] = ("linkedin.com",)

DEFAULT_JOB_BOARD_DOMAINS: Tuple[str, ...] = (
    "greenhouse.io",
    "lever.co",
    "workable.com",
    "ashbyhq.com",
    "myworkdayjobs.com",
    "jobvite.com",
    "bamboohr.com",
)

DEFAULT_CAREERS_PATH_MARKERS: Tuple[str, ...] = (
    "careers",
    "jobs",
    "open-roles",
    "apply",
    "join-us",
)

DEFAULT_DISQUALIFIED_COMPANY_DOMAINS: Tuple[str, ...] = (
    "gmail.com",
    "mail.google.com",
)


def _normalize_domains(domains: Iterable[str]) -> Tuple[str, ...]:
    cleaned = []
    for domain in domains:
        value = domain.strip().lower().lstrip(".")
        if value.startswith("www."):
            value = value[4:]
        if value and value not in cleaned:
            cleaned.append(value)
    return tuple(cleaned)


def host_matches(host: Optional[str], domains: Iterable[str]) -> bool:
    """True if ``host`` equals one of ``domains`` or is a subdomain of one."""
    if not host:
        return False
    return any(host == domain or host.endswith("." + domain) for domain in domains)


@dataclass(frozen=True)
class ChannelRules:
    """Immutable domain and path lists that drive channel classification.

    Attributes:
        network_domains: Professional-network domains (subdomains included)
        job_board_domains: Applicant-tracking-system domains (subdomains included)
        careers_path_markers: Substrings that mark a careers/jobs path
        disqualified_company_domains: Consumer mail hosts that are never a company site
    """

    network_domains: Tuple[str, ...] = DEFAULT_NETWORK_DOMAINS
    job_board_domains: Tuple[str, ...] = DEFAULT_JOB_BOARD_DOMAINS
    careers_path_markers: Tuple[str, ...] = DEFAULT_CAREERS_PATH_MARKERS
    disqualified_company_domains: Tuple[str, ...] = DEFAULT_DISQUALIFIED_COMPANY_DOMAINS

    @classmethod
    def build(
        cls,
        network_domains: Iterable[str] = DEFAULT_NETWORK_DOMAINS,
        job_board_domains: Iterable[str] = DEFAULT_JOB_BOARD_DOMAINS,
        careers_path_markers: Iterable[str] = DEFAULT_CAREERS_PATH_MARKERS,
        disqualified_company_domains: Iterable[str] = DEFAULT_DISQUALIFIED_COMPANY_DOMAINS,
    ) -> "ChannelRules":
        """Build rules from arbitrary iterables, lower-casing and de-duplicating entries."""
        markers = tuple(
            dict.fromkeys(m.strip().lower() for m in careers_path_markers if m.strip())
        )
        return cls(
            network_domains=_normalize_domains(network_domains),
            job_board_domains=_normalize_domains(job_board_domains),
            careers_path_markers=markers,
            disqualified_company_domains=_normalize_domains(disqualified_company_domains),
        )

    def is_network_profile(self, url: Optional[str]) -> bool:
        """True if the URL's host is, or is under, a professional-network domain."""
        return host_matches(parse_host(url), self.network_domains)

    def is_careers_or_job_board(self, url: Optional[str]) -> bool:
        """True for ATS-hosted URLs or paths that look like a careers/jobs page."""
        host = parse_host(url)
        if host is None:
            return False
        if host_matches(host, self.job_board_domains):
            return True
        path = (parse_path(url) or "").lower()
        return any(marker in path for marker in self.careers_path_markers)

    def is_disqualified_company_domain(self, url: Optional[str]) -> bool:
        """True if the host is, or is under, a consumer mail domain."""
        return host_matches(parse_host(url), self.disqualified_company_domains)

    def is_company_site(self, url: Optional[str]) -> bool:
        """True if the URL can stand as a company website."""
        return (
            parse_host(url) is not None
            and not self.is_network_profile(url)
            and not self.is_careers_or_job_board(url)
            and not self.is_disqualified_company_domain(url)
        )


DEFAULT_CHANNEL_RULES = ChannelRules()


def is_network_profile(url: Optional[str], rules: ChannelRules = DEFAULT_CHANNEL_RULES) -> bool:
    return rules.is_network_profile(url)


def is_careers_or_job_board(url: Optional[str], rules: ChannelRules = DEFAULT_CHANNEL_RULES) -> bool:
    return rules.is_careers_or_job_board(url)


def is_disqualified_company_domain(
    url: Optional[str], rules: ChannelRules = DEFAULT_CHANNEL_RULES
) -> bool:
    return rules.is_disqualified_company_domain(url)
