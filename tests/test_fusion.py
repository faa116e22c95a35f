"""
Unit tests untuk OCR fusion

Test cases mencakup:
- Heuristik total struk (nominal terbesar)
- Directive sintetis untuk struk tanpa caption
- Aturan fill per field dan provenance
"""

from datetime import date

from keuangan_nlu.fusion import (
    build_description,
    estimate_receipt_total,
    fuse_draft,
    synthesize_directive,
)
from keuangan_nlu.models import (
    CandidateDraft,
    ClassifiedIntent,
    Intent,
    NormalizedAmount,
    NormalizedCategory,
    NormalizedDate,
    OCRExtract,
    Provenance,
)


def make_draft(amount=None, category=None, text="beli makan", synthetic=False):
    return CandidateDraft(
        intent=ClassifiedIntent(Intent.EXPENSE_SINGLE, 0.85),
        amount=NormalizedAmount(amount) if amount is not None else None,
        category=NormalizedCategory(category) if category else None,
        text=text,
        synthetic=synthetic,
    )


class TestReceiptHelpers:
    def test_receipt_total_is_max(self):
        assert estimate_receipt_total(OCRExtract(amounts=[15000, 150000, 13500])) == 150000
        assert estimate_receipt_total(OCRExtract()) is None

    def test_synthesize_directive(self):
        extract = OCRExtract(amounts=[15000, 150000], merchants=["WARUNG SEDAP"])
        assert synthesize_directive(extract) == "catat pengeluaran 15000 untuk WARUNG SEDAP"
        assert synthesize_directive(OCRExtract()) == "catat pengeluaran 0 untuk belanja"

    def test_build_description(self):
        extract = OCRExtract(merchants=["WARUNG SEDAP"], items=["Nasi Goreng", "Es Teh"])
        assert build_description("beli makan", extract) == (
            "beli makan\nMerchant: WARUNG SEDAP\nItems: Nasi Goreng, Es Teh"
        )
        assert build_description("", extract).startswith("Merchant: WARUNG SEDAP")
        assert build_description("beli makan", None) == "beli makan"


class TestFuseDraft:
    """Test aturan fill: teks menang, OCR mengisi yang kosong"""

    def test_text_fields_win(self, rules_config):
        extract = OCRExtract(amounts=[150000], merchants=["INDOMARET"], dates=["2024-12-20"])
        fused = fuse_draft(make_draft(50000, "makanan"), extract, rules_config)
        assert fused.amount == NormalizedAmount(50000, Provenance.TEXT)
        assert fused.category == NormalizedCategory("makanan", Provenance.TEXT)
        assert fused.date == NormalizedDate(date(2024, 12, 20), Provenance.OCR)

    def test_missing_amount_uses_receipt_total(self, rules_config):
        extract = OCRExtract(amounts=[15000, 150000])
        fused = fuse_draft(make_draft(None, "makanan"), extract, rules_config)
        assert fused.amount == NormalizedAmount(150000, Provenance.OCR)

    def test_zero_amount_is_replaced(self, rules_config):
        fused = fuse_draft(make_draft(0, "makanan"), OCRExtract(amounts=[9000]), rules_config)
        assert fused.amount.value == 9000

    def test_missing_category_from_merchant(self, rules_config):
        extract = OCRExtract(amounts=[50000], merchants=["WARUNG SEDAP"])
        fused = fuse_draft(make_draft(50000, None), extract, rules_config)
        assert fused.category == NormalizedCategory("makanan", Provenance.MERCHANT)

    def test_synthetic_fields_are_refilled(self, rules_config):
        extract = OCRExtract(amounts=[15000, 150000], merchants=["WARUNG SEDAP"])
        draft = make_draft(15000, "warung sedap", text="", synthetic=True)
        fused = fuse_draft(draft, extract, rules_config)
        assert fused.amount == NormalizedAmount(150000, Provenance.OCR)
        assert fused.category == NormalizedCategory("makanan", Provenance.MERCHANT)
        assert fused.description == "Merchant: WARUNG SEDAP"

    def test_no_extract(self, rules_config):
        draft = make_draft(50000, "makanan")
        fused = fuse_draft(draft, None, rules_config)
        assert fused.amount == draft.amount
        assert fused.description == "beli makan"
