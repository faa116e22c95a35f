"""
Entity extractor: mencari substring nominal, kategori, dan tanggal dalam satu
klausa. Ekstraksi murni substring; normalisasi dilakukan di build_draft.
"""

from __future__ import annotations

import re
from datetime import date
from typing import TYPE_CHECKING

from loguru import logger

from .amount import normalize_amount
from .category import resolve_category
from .dates import DATE_TOKEN_RE, normalize_date
from .errors import NormalizationFailure
from .lexicon import DIRECTION_WORDS, NON_CATEGORY_WORDS, NUMBER_WORDS
from .models import (
    CandidateDraft,
    ClassifiedIntent,
    NormalizedAmount,
    NormalizedDate,
    Provenance,
    RawEntitySet,
    Span,
)

if TYPE_CHECKING:
    from .config import PipelineConfig

# (a) angka dengan pemisah ribuan, opsional diawali Rp/IDR; tidak menempel
#     di ujung kata kecuali prefiks singkatan di awal teks ("p50k")
# (b) angka diikuti pengali singkat (k/m/b, rb/jt, ribu/juta/milyar)
NUMERIC_AMOUNT_RE = re.compile(
    r"(?:(?<=^[pkmi])|(?<![\w.,]))(?:(?:rp\.?|idr)\s*)?\d+(?:[.,]\d+)*"
    r"(?:\s*(?:milyar|miliar|ribu|juta|rb|jt)\b|(?:k|m|b)(?![a-z]))?",
    re.IGNORECASE,
)

# (c) rangkaian maksimal kata angka
_NUMBER_WORD_ALT = "|".join(sorted(NUMBER_WORDS, key=len, reverse=True))
WORD_AMOUNT_RE = re.compile(
    rf"\b(?:{_NUMBER_WORD_ALT})(?:\s+(?:{_NUMBER_WORD_ALT}))*\b",
    re.IGNORECASE,
)

SHORTHAND_RE = re.compile(r"^\s*([pkmi])(?=\d)", re.IGNORECASE)

_DIRECTION_RE = re.compile(
    rf"\b(?:{'|'.join(sorted(DIRECTION_WORDS))})\b", re.IGNORECASE
)
_WORD_AFTER_RE = re.compile(r"^\s*([^\W\d_][\w'-]*)")
_WORD_BEFORE_RE = re.compile(r"([^\W\d_][\w'-]*)\s*$")
_CATEGORY_STRIP = " \t,.;:!?-"


def find_date(text: str) -> tuple[Span, str] | None:
    match = DATE_TOKEN_RE.search(text)
    if not match:
        return None
    return Span(match.start(), match.end()), match.group(0)


def _mask(text: str, span: Span | None) -> str:
    if span is None:
        return text
    return text[: span.start] + " " * (span.end - span.start) + text[span.end:]


def find_amount(text: str, start: int = 0) -> tuple[Span, str] | None:
    """
    Token nominal pertama mulai dari posisi `start`.

    Bentuk numerik (a)/(b) diutamakan; rangkaian kata angka (c) hanya dipakai
    jika tidak ada nominal numerik sama sekali.
    """
    for pattern in (NUMERIC_AMOUNT_RE, WORD_AMOUNT_RE):
        match = pattern.search(text, start)
        if match:
            return Span(match.start(), match.end()), match.group(0).strip()
    return None


def find_amount_outside_dates(text: str) -> tuple[Span, str] | None:
    date_found = find_date(text)
    return find_amount(_mask(text, date_found[0] if date_found else None))


def _category_after_direction(text: str, masked: str, date_span: Span | None) -> str | None:
    match = _DIRECTION_RE.search(masked)
    if not match:
        return None

    stop = len(text)
    next_amount = find_amount(masked, match.end())
    if next_amount:
        stop = min(stop, next_amount[0].start)
    if date_span and date_span.start >= match.end():
        stop = min(stop, date_span.start)

    candidate = text[match.end():stop].strip(_CATEGORY_STRIP)
    return candidate or None


def _usable_word(word: str | None) -> str | None:
    if not word or len(word) < 2:
        return None
    lowered = word.lower()
    if lowered in NON_CATEGORY_WORDS or lowered in NUMBER_WORDS:
        return None
    return word


def _word_after(masked: str, amount_span: Span) -> str | None:
    match = _WORD_AFTER_RE.match(masked[amount_span.end:])
    return _usable_word(match.group(1)) if match else None


def _word_before(masked: str, amount_span: Span) -> str | None:
    match = _WORD_BEFORE_RE.search(masked[: amount_span.start])
    return _usable_word(match.group(1)) if match else None


def extract_entities(text: str) -> RawEntitySet:
    """Cari substring amount/category/date dalam satu klausa."""
    text = (text or "").strip()
    if not text:
        return RawEntitySet()

    date_found = find_date(text)
    date_span = date_found[0] if date_found else None
    masked = _mask(text, date_span)

    amount_found = find_amount(masked)
    amount_span = amount_found[0] if amount_found else None

    category: str | None = None
    if SHORTHAND_RE.match(text) and amount_span:
        category = _word_after(masked, amount_span)
    if category is None:
        category = _category_after_direction(text, masked, date_span)
    if category is None and amount_span:
        category = _word_after(masked, amount_span) or _word_before(masked, amount_span)

    return RawEntitySet(
        amount_text=amount_found[1] if amount_found else None,
        category_text=category,
        date_text=date_found[1] if date_found else None,
        amount_span=amount_span,
    )


def build_draft(
    text: str,
    classified: ClassifiedIntent,
    config: PipelineConfig,
    today: date,
    *,
    synthetic: bool = False,
) -> CandidateDraft:
    """Ekstrak entitas satu klausa lalu normalisasi nominal, kategori, tanggal."""
    entities = extract_entities(text)

    amount: NormalizedAmount | None = None
    if entities.amount_text:
        try:
            amount = NormalizedAmount(normalize_amount(entities.amount_text), Provenance.TEXT)
        except NormalizationFailure as exc:
            logger.debug("Amount not normalizable", raw=exc.raw)

    category = None
    if entities.category_text:
        category = resolve_category(
            entities.category_text, config.synonyms, config.fuzzy_max_distance
        )

    parsed_date = normalize_date(entities.date_text, today)
    draft_date = NormalizedDate(parsed_date, Provenance.TEXT) if parsed_date else None

    logger.debug(
        "Clause extracted",
        clause=text,
        intent=classified.intent.value,
        amount_text=entities.amount_text,
        category_text=entities.category_text,
        date_text=entities.date_text,
    )

    return CandidateDraft(
        intent=classified,
        entities=entities,
        amount=amount,
        category=category,
        date=draft_date,
        text=text.strip(),
        synthetic=synthetic,
    )
