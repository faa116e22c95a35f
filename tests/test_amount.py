"""
Unit tests untuk Amount Normalizer

Test cases mencakup:
- Parsing angka format Indonesia dan Inggris
- Singkatan dengan pengali (k, rb, jt, juta)
- Bentuk kata ("lima puluh ribu")
- Input yang tidak bisa dinormalisasi
"""

from decimal import Decimal

import pytest

from keuangan_nlu.amount import normalize_amount, parse_number, to_rupiah
from keuangan_nlu.errors import NormalizationFailure
from keuangan_nlu.models import RejectionReason


class TestParseNumber:
    """Test parsing angka dengan pemisah"""

    def test_indonesian_thousand_separator(self):
        """Format: 1.234.567 (titik sebagai pemisah ribuan)"""
        assert parse_number("1.234.567") == Decimal("1234567")
        assert parse_number("50.000") == Decimal("50000")

    def test_indonesian_decimal(self):
        """Format: 1.234,56 (koma sebagai desimal)"""
        assert parse_number("1.234,56") == Decimal("1234.56")
        assert parse_number("1,5") == Decimal("1.5")

    def test_english_format(self):
        """Format: 1,234.56"""
        assert parse_number("1,234.56") == Decimal("1234.56")
        assert parse_number("50,000") == Decimal("50000")

    def test_invalid(self):
        assert parse_number("") is None
        assert parse_number("abc") is None


class TestNormalizeAmount:
    """Test normalisasi nominal ke integer rupiah"""

    def test_three_forms_agree(self):
        assert normalize_amount("50000") == 50000
        assert normalize_amount("50k") == 50000
        assert normalize_amount("lima puluh ribu") == 50000

    def test_plain_with_currency_prefix(self):
        assert normalize_amount("Rp 50.000") == 50000
        assert normalize_amount("rp50.000") == 50000
        assert normalize_amount("IDR 75000") == 75000
        assert normalize_amount("50.000,-") == 50000
        assert normalize_amount("50.000,00") == 50000

    def test_shorthand_suffixes(self):
        assert normalize_amount("25rb") == 25000
        assert normalize_amount("1,5jt") == 1500000
        assert normalize_amount("1.5k") == 1500
        assert normalize_amount("2 juta") == 2000000
        assert normalize_amount("5m") == 5000000
        assert normalize_amount("50 ribu") == 50000

    def test_letter_suffix_must_touch_number(self):
        assert normalize_amount("2b") == 2000000000
        assert normalize_amount("2 rb") == 2000
        for raw in ("2 b", "50 k", "Rp 5 m"):
            with pytest.raises(NormalizationFailure):
                normalize_amount(raw)

    def test_shorthand_rounds_half_up(self):
        assert normalize_amount("1,2345k") == 1235

    def test_word_forms(self):
        assert normalize_amount("seratus dua puluh lima") == 125
        assert normalize_amount("dua belas ribu") == 12000
        assert normalize_amount("seribu lima ratus") == 1500
        assert normalize_amount("satu juta lima ratus ribu") == 1500000
        assert normalize_amount("sejuta") == 1000000
        assert normalize_amount("sebelas") == 11
        assert normalize_amount("limapuluh ribu") == 50000
        assert normalize_amount("satu miliar") == 1000000000

    def test_unparsable_raises(self):
        with pytest.raises(NormalizationFailure) as exc_info:
            normalize_amount("abc")
        assert exc_info.value.reason == RejectionReason.MISSING_AMOUNT
        assert exc_info.value.raw == "abc"

    def test_empty_raises(self):
        with pytest.raises(NormalizationFailure):
            normalize_amount("   ")


class TestToRupiah:
    def test_rounds_ocr_floats(self):
        assert to_rupiah(150000.0) == 150000
        assert to_rupiah(12500.5) == 12501
        assert to_rupiah(12500.4) == 12500
