"""Unit tests for hashing and text utilities."""

import hashlib

from founderflow.utils.hashing import compute_record_id, hash_string
from founderflow.utils.text import collapse_whitespace, initials_for, normalize_for_matching


class TestComputeRecordId:
    """Tests for compute_record_id function."""

    def test_compute_record_id_basic(self):
        """Test that the id is a 16-character hex string."""
        record_id = compute_record_id("Acme", "Jane Doe")

        assert len(record_id) == 16
        assert all(c in "0123456789abcdef" for c in record_id)

    def test_compute_record_id_deterministic(self):
        """Test that id computation is deterministic."""
        assert compute_record_id("Acme", "Jane Doe", "https://acme.com") == compute_record_id(
            "Acme", "Jane Doe", "https://acme.com"
        )

    def test_compute_record_id_normalizes_case_and_whitespace(self):
        """Test that case and whitespace differences do not change the id."""
        assert compute_record_id("  ACME ", "jane   doe") == compute_record_id("Acme", "Jane Doe")

    def test_compute_record_id_different_for_different_inputs(self):
        """Test that different inputs produce different ids."""
        ids = {
            compute_record_id("Acme", "Jane Doe"),
            compute_record_id("Acme", "John Doe"),
            compute_record_id("Globex", "Jane Doe"),
            compute_record_id("Acme", "Jane Doe", "https://linkedin.com/in/jane"),
        }

        assert len(ids) == 4

    def test_compute_record_id_ignores_missing_links(self):
        """Test that None links do not change the id."""
        assert compute_record_id("Acme", None, None, "https://acme.com", None) == compute_record_id(
            "Acme", None, "https://acme.com"
        )

    def test_compute_record_id_handles_all_none(self):
        """Test that a record with no identifying fields still gets an id."""
        assert len(compute_record_id(None, None)) == 16


class TestHashString:
    """Tests for hash_string function."""

    def test_hash_string_matches_sha256(self):
        """Test that hash_string is a plain SHA256 hex digest."""
        assert hash_string("founder") == hashlib.sha256(b"founder").hexdigest()

    def test_hash_string_unicode(self):
        """Test hashing non-ASCII text."""
        assert len(hash_string("Zoë Café")) == 64


class TestTextHelpers:
    """Tests for text helpers used in search and avatars."""

    def test_collapse_whitespace(self):
        """Test trimming and collapsing whitespace."""
        assert collapse_whitespace("  Acme \n  Labs ") == "Acme Labs"
        assert collapse_whitespace("") == ""

    def test_normalize_for_matching_keeps_skill_punctuation(self):
        """Test that c++, c# and hyphenated words survive normalization."""
        assert normalize_for_matching("C++, C#; Full-Stack!") == "c++ c# full-stack"

    def test_normalize_for_matching_empty(self):
        """Test empty input."""
        assert normalize_for_matching("") == ""

    def test_initials_two_words(self):
        """Test initials from the first two words."""
        assert initials_for("Jane Doe") == "JD"
        assert initials_for("jane van doe") == "JV"

    def test_initials_single_word(self):
        """Test initials from the first two letters of one word."""
        assert initials_for("acme") == "AC"
        assert initials_for("X") == "X"

    def test_initials_blank(self):
        """Test blank labels."""
        assert initials_for("   ") == ""
