"""Shared pytest fixtures."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest

from founderflow.logging.context import clear_log_context
from founderflow.normalization import RecordNormalizer

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Reference time for relative dates in every test
FIXED_NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding fixture files."""
    return FIXTURES_DIR


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed reference time (2024-01-15 12:00 UTC)."""
    return FIXED_NOW


@pytest.fixture
def normalizer(fixed_now) -> RecordNormalizer:
    """RecordNormalizer with default rules and a fixed reference time."""
    return RecordNormalizer(now=fixed_now)


@pytest.fixture
def acme_record() -> dict:
    """The canonical Acme record with a network URL in the company field."""
    return {
        "company": "Acme",
        "company_url": "linkedin.com/company/acme",
        "url": "acme.com/careers",
        "email": "N/A",
        "looking_for": "Eng, Eng, PM",
    }


@pytest.fixture
def sample_records() -> list:
    """Raw records from tests/fixtures/records.json."""
    with open(FIXTURES_DIR / "records.json", "r", encoding="utf-8") as f:
        return json.load(f)["records"]


@pytest.fixture
def normalized_records(normalizer, sample_records) -> list:
    """Fixture records normalized at the fixed reference time."""
    return normalizer.normalize_batch(sample_records).records


@pytest.fixture
def clean_env(monkeypatch):
    """Remove FounderFlow environment variables for the duration of a test."""
    for name in ("LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT", "FOUNDERFLOW_MAX_WORKERS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after configure_logging()."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture(autouse=True)
def reset_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()
