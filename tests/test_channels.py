"""Unit tests for contact-channel classification."""

import pytest

from founderflow.normalization.channels import (
    DEFAULT_CHANNEL_RULES,
    ChannelRules,
    host_matches,
    is_careers_or_job_board,
    is_disqualified_company_domain,
    is_network_profile,
)


class TestHostMatches:
    """Tests for host_matches."""

    def test_exact_and_subdomain(self):
        """Test exact hosts and subdomains."""
        assert host_matches("linkedin.com", ["linkedin.com"])
        assert host_matches("www.linkedin.com", ["linkedin.com"])
        assert host_matches("uk.linkedin.com", ["linkedin.com"])

    def test_suffix_is_not_a_subdomain(self):
        """Test that a shared suffix without a dot boundary does not match."""
        assert not host_matches("notlinkedin.com", ["linkedin.com"])

    def test_missing_host(self):
        """Test that None never matches."""
        assert not host_matches(None, ["linkedin.com"])


class TestNetworkProfile:
    """Tests for is_network_profile."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://linkedin.com/company/acme",
            "https://www.linkedin.com/in/jane-doe",
            "http://uk.linkedin.com/in/x",
        ],
    )
    def test_network_urls(self, url):
        """Test professional-network URLs."""
        assert is_network_profile(url) is True

    @pytest.mark.parametrize("url", ["https://acme.com", "https://linkedin.co/x", None, "linkedin.com"])
    def test_other_urls(self, url):
        """Test that other hosts and non-absolute values are rejected."""
        assert is_network_profile(url) is False


class TestCareersOrJobBoard:
    """Tests for is_careers_or_job_board."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://boards.greenhouse.io/hooli",
            "https://jobs.lever.co/globex/123",
            "https://acme.com/careers",
            "https://acme.com/Company/Jobs",
            "https://acme.com/open-roles",
            "https://acme.com/join-us/now",
            "https://acme.com/apply",
        ],
    )
    def test_careers_urls(self, url):
        """Test ATS hosts and careers-like paths."""
        assert is_careers_or_job_board(url) is True

    @pytest.mark.parametrize("url", ["https://acme.com", "https://acme.com/about", None])
    def test_other_urls(self, url):
        """Test plain company pages."""
        assert is_careers_or_job_board(url) is False

    def test_marker_in_host_only(self):
        """Test that markers are matched against the path, not the host."""
        assert is_careers_or_job_board("https://careers.acme.com/") is False


class TestDisqualifiedDomains:
    """Tests for is_disqualified_company_domain."""

    def test_mail_provider(self):
        """Test consumer mail hosts."""
        assert is_disqualified_company_domain("https://mail.google.com/mail/u/0") is True
        assert is_disqualified_company_domain("https://gmail.com") is True

    def test_company_host(self):
        """Test an ordinary company host."""
        assert is_disqualified_company_domain("https://google.com") is False


class TestChannelRules:
    """Tests for ChannelRules."""

    def test_company_site(self):
        """Test that only unclassified, parseable URLs are company sites."""
        rules = DEFAULT_CHANNEL_RULES

        assert rules.is_company_site("https://acme.com") is True
        assert rules.is_company_site("https://linkedin.com/company/acme") is False
        assert rules.is_company_site("https://acme.com/careers") is False
        assert rules.is_company_site("https://mail.google.com") is False
        assert rules.is_company_site(None) is False

    def test_build_normalizes_entries(self):
        """Test that build lower-cases, strips www. and de-duplicates."""
        rules = ChannelRules.build(
            network_domains=[" WWW.Xing.com ", "xing.com", ""],
            careers_path_markers=["Vacancies", "vacancies", "  "],
        )

        assert rules.network_domains == ("xing.com",)
        assert rules.careers_path_markers == ("vacancies",)
        assert rules.job_board_domains == DEFAULT_CHANNEL_RULES.job_board_domains

    def test_custom_rules(self):
        """Test classification with a custom network domain."""
        rules = ChannelRules.build(network_domains=["xing.com"])

        assert rules.is_network_profile("https://www.xing.com/profile/jane") is True
        assert rules.is_network_profile("https://linkedin.com/in/jane") is False

    def test_rules_are_immutable(self):
        """Test that rules cannot be mutated."""
        with pytest.raises(AttributeError):
            DEFAULT_CHANNEL_RULES.network_domains = ("x.com",)
