"""
Multi-transaction splitter untuk intent `expense.multiple`.

Setiap klausa diproses ulang secara independen (klasifikasi, ekstraksi,
normalisasi). Klausa tanpa nominal valid dan kategori dibuang; urutan klausa
yang lolos dipertahankan.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING

from loguru import logger

from .amount import to_rupiah
from .errors import AmbiguousSplit
from .extractor import build_draft
from .models import CandidateDraft, NormalizedAmount, OCRExtract, Provenance
from .textutils import split_clauses

if TYPE_CHECKING:
    from .config import PipelineConfig


def fill_amount_by_position(
    draft: CandidateDraft, index: int, extract: OCRExtract | None
) -> CandidateDraft:
    """
    Heuristik posisional: klausa ke-i tanpa nominal memakai amounts[i] dari OCR.

    Pencocokan berdasarkan indeks, bukan isi; urutan nominal di struk tidak
    dijamin sama dengan urutan klausa di pesan.
    """
    if draft.has_valid_amount or extract is None or index >= len(extract.amounts):
        return draft
    value = to_rupiah(extract.amounts[index])
    logger.debug("Clause amount filled from OCR by position", index=index, amount=value)
    return replace(draft, amount=NormalizedAmount(value, Provenance.OCR))


def split_transactions(
    text: str,
    config: PipelineConfig,
    today: date,
    extract: OCRExtract | None = None,
) -> list[CandidateDraft]:
    """
    Pecah pesan multi-transaksi menjadi draft per klausa.

    Raises:
        AmbiguousSplit: jika kurang dari dua klausa atau tidak ada klausa
            yang menghasilkan nominal dan kategori
    """
    clauses = split_clauses(text)
    if len(clauses) < 2:
        raise AmbiguousSplit(f"expected at least 2 clauses, got {len(clauses)}")

    drafts: list[CandidateDraft] = []
    for index, clause in enumerate(clauses):
        classified = config.classifier.classify(clause)
        if not classified.is_single_transaction:
            logger.debug("Clause skipped, not a single transaction", index=index, clause=clause)
            continue

        draft = build_draft(clause, classified, config, today)
        draft = fill_amount_by_position(draft, index, extract)
        if not (draft.has_valid_amount and draft.has_category):
            logger.debug("Clause skipped, missing amount or category", index=index, clause=clause)
            continue
        drafts.append(draft)

    if not drafts:
        raise AmbiguousSplit("no clause yielded both amount and category")

    logger.debug("Split resolved", clauses=len(clauses), kept=len(drafts))
    return drafts
