"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator

from founderflow.normalization.channels import (
    DEFAULT_CAREERS_PATH_MARKERS,
    DEFAULT_DISQUALIFIED_COMPANY_DOMAINS,
    DEFAULT_JOB_BOARD_DOMAINS,
    DEFAULT_NETWORK_DOMAINS,
    ChannelRules,
)


class SortOrder(str, Enum):
    """Orderings offered by the directory views."""

    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    COMPANY_AZ = "company_az"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


def _clean_entries(values: List[str]) -> List[str]:
    """Strip, lower-case and de-duplicate list entries, dropping blanks."""
    cleaned: List[str] = []
    for value in values:
        stripped = value.strip().lower()
        if stripped and stripped not in cleaned:
            cleaned.append(stripped)
    return cleaned


class NormalizationConfig(BaseModel):
    """Record normalization settings."""

    display_tag_cap: int = Field(6, ge=0, le=100, description="Tags shown per record")
    index_tag_cap: int = Field(
        20, ge=0, le=500, description="Tags per record counted in the tag index"
    )
    unknown_company_label: str = Field(
        "unknown company",
        min_length=1,
        description="Placeholder shown when a record has no company",
    )

    @field_validator("unknown_company_label")
    @classmethod
    def strip_label(cls, v: str) -> str:
        """Strip whitespace from the placeholder label."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("unknown_company_label cannot be empty")
        return stripped


class ChannelConfig(BaseModel):
    """Domain and path lists used to classify contact links."""

    network_domains: List[str] = Field(
        default_factory=lambda: list(DEFAULT_NETWORK_DOMAINS),
        min_length=1,
        description="Professional-network domains (subdomains included)",
    )
    job_board_domains: List[str] = Field(
        default_factory=lambda: list(DEFAULT_JOB_BOARD_DOMAINS),
        description="Applicant-tracking-system domains",
    )
    careers_path_markers: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CAREERS_PATH_MARKERS),
        description="Path substrings that mark a careers page",
    )
    disqualified_company_domains: List[str] = Field(
        default_factory=lambda: list(DEFAULT_DISQUALIFIED_COMPANY_DOMAINS),
        description="Consumer mail domains that are never a company website",
    )

    @field_validator(
        "network_domains",
        "job_board_domains",
        "careers_path_markers",
        "disqualified_company_domains",
    )
    @classmethod
    def normalize_entries(cls, v: List[str]) -> List[str]:
        """Normalize entries: strip whitespace, lower-case, drop blanks and duplicates."""
        return _clean_entries(v)

    @field_validator("network_domains")
    @classmethod
    def require_network_domain(cls, v: List[str]) -> List[str]:
        """At least one non-blank network domain is required."""
        if not v:
            raise ValueError("network_domains must contain at least one domain")
        return v

    def to_rules(self) -> ChannelRules:
        """Build the immutable ChannelRules used by the classifier."""
        return ChannelRules.build(
            network_domains=self.network_domains,
            job_board_domains=self.job_board_domains,
            careers_path_markers=self.careers_path_markers,
            disqualified_company_domains=self.disqualified_company_domains,
        )


class BatchConfig(BaseModel):
    """Batch normalization settings."""

    max_workers: int = Field(
        1, ge=1, le=64, description="Worker threads for batch normalization (1 = serial)"
    )


class DirectoryConfig(BaseModel):
    """Defaults for directory sorting and filtering."""

    default_sort: SortOrder = Field(SortOrder.DATE_DESC, description="Default ordering")
    require_actionable_link: bool = Field(
        True,
        description="Hide records without any link when no filter is active",
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object for FounderFlow. Every section is optional."""

    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    channels: ChannelConfig = Field(default_factory=ChannelConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    directory: DirectoryConfig = Field(default_factory=DirectoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
