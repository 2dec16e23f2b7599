"""Tests for identifier helpers."""

from uuid import UUID

import pytest

from mentor.core.ids import InvalidIdentifier, canonical_id, new_id


class TestNewId:
    """Test identifier generation."""

    def test_is_canonical_uuid(self) -> None:
        """Generated ids are canonical UUID strings."""
        value = new_id()
        assert str(UUID(value)) == value

    def test_unique(self) -> None:
        """Generated ids do not repeat."""
        assert new_id() != new_id()


class TestCanonicalId:
    """Test identifier validation."""

    def test_canonical_passes_through(self) -> None:
        """Canonical ids are returned unchanged."""
        value = "0b9c7a52-4b8e-4a8a-9f5e-2a1d3c4b5e6f"
        assert canonical_id(value) == value

    def test_normalizes_spelling(self) -> None:
        """Upper-case and hyphenless spellings map to the same id."""
        expected = "0b9c7a52-4b8e-4a8a-9f5e-2a1d3c4b5e6f"
        assert canonical_id("0B9C7A52-4B8E-4A8A-9F5E-2A1D3C4B5E6F") == expected
        assert canonical_id("0b9c7a524b8e4a8a9f5e2a1d3c4b5e6f") == expected

    @pytest.mark.parametrize("value", ["", "nonexistent", "12345", "thread:abc"])
    def test_rejects_malformed(self, value: str) -> None:
        """Malformed ids raise InvalidIdentifier."""
        with pytest.raises(InvalidIdentifier):
            canonical_id(value)

    def test_invalid_identifier_is_value_error(self) -> None:
        """InvalidIdentifier can be handled as ValueError."""
        assert issubclass(InvalidIdentifier, ValueError)
