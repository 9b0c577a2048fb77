"""Tests for UPC and ISRC helpers."""

import pytest

from fanlink.domain.identifiers import (
    GTIN_UPC_BOUNDS,
    UpcBounds,
    is_isrc,
    normalize_isrc,
    normalize_upc,
)


class TestUpcBounds:
    def test_inclusive_range(self):
        assert GTIN_UPC_BOUNDS.matches("123456789012")
        assert GTIN_UPC_BOUNDS.matches("12345678901234")
        assert not GTIN_UPC_BOUNDS.matches("12345678901")
        assert not GTIN_UPC_BOUNDS.matches("123456789012345")

    def test_rejects_non_digits(self):
        assert not GTIN_UPC_BOUNDS.matches("12345678901a")

    def test_max_below_min_is_rejected(self):
        with pytest.raises(ValueError):
            UpcBounds(13, 12)


class TestNormalization:
    def test_isrc_round_trip(self):
        assert normalize_isrc(" us-rc1-76-07839 ") == "USRC17607839"
        assert is_isrc("usrc17607839")

    def test_malformed_isrc_is_dropped(self):
        assert normalize_isrc("USRC1760783") is None
        assert normalize_isrc(None) is None

    def test_upc_normalization(self):
        assert normalize_upc(" 602567890123 ") == "602567890123"
        assert normalize_upc("abc") is None
        assert normalize_upc("") is None
