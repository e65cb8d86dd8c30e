"""FounderFlow: normalization of scraped founder and company records."""

__version__ = "0.1.0"
