"""
OCR fusion resolver.

Menggabungkan field hasil teks dengan kandidat hasil OCR struk, per field,
aturan pertama yang berlaku menang:

- amount: nominal dari teks jika valid, selain itu max(amounts) OCR
- date: tanggal dari teks, selain itu dates[0] OCR
- category: kategori dari teks, selain itu inferensi dari merchants[0]
- description: teks asli + "Merchant: ..." + "Items: ...", dipisah newline

Field dari directive sintetis (pesan tanpa teks) dianggap bukan dari teks,
sehingga selalu diisi ulang dari OCR.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from loguru import logger

from .amount import to_rupiah
from .category import infer_category_from_merchant
from .models import (
    CandidateDraft,
    NormalizedAmount,
    NormalizedCategory,
    NormalizedDate,
    OCRExtract,
    Provenance,
)

if TYPE_CHECKING:
    from .config import PipelineConfig

DIRECTIVE_TEMPLATE = "catat pengeluaran {amount} untuk {merchant}"
# Pengisi slot merchant; kategori directive sintetis selalu diganti inferensi merchant
DIRECTIVE_PLACEHOLDER_MERCHANT = "belanja"


def estimate_receipt_total(extract: OCRExtract) -> int | None:
    """
    Heuristik total struk: nominal terbesar.

    Struk biasanya memuat baris subtotal, pajak, dan total; nilai terbesar
    adalah proksi tunggal terbaik untuk total, bukan hasil parsing yang pasti
    (mis. baris "TUNAI" bisa lebih besar dari total).
    """
    if not extract.amounts:
        return None
    return to_rupiah(max(extract.amounts))


def synthesize_directive(extract: OCRExtract) -> str:
    """Kalimat perintah sintetis untuk struk tanpa caption."""
    amount = to_rupiah(extract.amounts[0]) if extract.amounts else 0
    merchant = extract.merchants[0] if extract.merchants else DIRECTIVE_PLACEHOLDER_MERCHANT
    return DIRECTIVE_TEMPLATE.format(amount=amount, merchant=merchant)


def build_description(text: str, extract: OCRExtract | None) -> str:
    lines = []
    if text and text.strip():
        lines.append(text.strip())
    if extract is not None:
        if extract.merchants:
            lines.append(f"Merchant: {extract.merchants[0]}")
        if extract.items:
            lines.append(f"Items: {', '.join(extract.items)}")
    return "\n".join(lines)


def fuse_draft(
    draft: CandidateDraft, extract: OCRExtract | None, config: PipelineConfig
) -> CandidateDraft:
    """Terapkan aturan fill per field pada satu draft."""
    if extract is None:
        return replace(draft, description=build_description(draft.text, None))

    amount = draft.amount if draft.has_valid_amount and not draft.synthetic else None
    if amount is None:
        total = estimate_receipt_total(extract)
        if total is not None:
            amount = NormalizedAmount(total, Provenance.OCR)

    date_value = draft.date
    if date_value is None and extract.dates:
        date_value = NormalizedDate(extract.dates[0], Provenance.OCR)

    category = draft.category if draft.has_category and not draft.synthetic else None
    if category is None and (extract.merchants or draft.synthetic):
        merchant = extract.merchants[0] if extract.merchants else None
        category = NormalizedCategory(
            infer_category_from_merchant(
                merchant, config.merchant_patterns, config.fallback_category
            ),
            Provenance.MERCHANT,
        )

    fused = replace(
        draft,
        amount=amount,
        date=date_value,
        category=category,
        description=build_description(draft.text, extract),
    )
    logger.debug(
        "Draft fused with OCR",
        amount_provenance=amount.provenance.value if amount else None,
        category_provenance=category.provenance.value if category else None,
        date_provenance=date_value.provenance.value if date_value else None,
    )
    return fused


def fuse(
    drafts: list[CandidateDraft], extract: OCRExtract | None, config: PipelineConfig
) -> list[CandidateDraft]:
    return [fuse_draft(draft, extract, config) for draft in drafts]
