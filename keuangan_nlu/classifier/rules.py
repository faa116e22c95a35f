"""
Deterministic rule-table classifier.

Bentuk permukaan yang dikenali, urut prioritas:
1. perintah pemeliharaan di awal pesan: "edit transaksi terakhir", "hapus transaksi terakhir"
2. singkatan: huruf p/k (pengeluaran) atau m/i (pemasukan) langsung diikuti
   nominal lalu kategori, mis. "p50k makan"
3. kalimat lengkap: "<kata kerja> [pengeluaran|pemasukan] <nominal> untuk/dari <kategori>"
4. klausa polos: "<nominal> untuk/buat <kategori>" atau "<nominal> dari <sumber>"
"""

import re

from ..extractor import extract_entities, find_amount_outside_dates
from ..lexicon import (
    EXPENSE_DIRECTIONS,
    EXPENSE_FLOW_WORDS,
    EXPENSE_VERBS,
    INCOME_DIRECTIONS,
    INCOME_FLOW_WORDS,
    INCOME_VERBS,
    MAINTENANCE_PHRASES,
    SHORTHAND_EXPENSE_PREFIXES,
    TRANSACTION_VERBS,
)
from ..models import ClassifiedIntent, Intent
from .base import IntentClassifier, unrecognized

# Confidence per bentuk
FLOW_SENTENCE_CONFIDENCE = 0.95
SHORTHAND_CONFIDENCE = 0.9
VERB_SENTENCE_CONFIDENCE = 0.85
BARE_CLAUSE_CONFIDENCE = 0.8
NEUTRAL_VERB_CONFIDENCE = 0.7
MISSING_AMOUNT_PENALTY = 0.4

_SHORTHAND_RE = re.compile(
    r"^([pkmi])(\d[\d.,]*(?:k|m|b|rb|jt)?)\s+([^\W\d_][\w'-]*)"
)
_LEADING_AMOUNT_DIRECTION_RE = re.compile(r"^\s*(untuk|buat|dari)\b")


class RuleTableClassifier(IntentClassifier):
    """Classifier berbasis tabel aturan; hasil identik untuk input identik."""

    @property
    def name(self) -> str:
        return "rules"

    def score_clause(self, text: str) -> ClassifiedIntent:
        for phrase, intent in MAINTENANCE_PHRASES.items():
            if text.startswith(phrase):
                return ClassifiedIntent(Intent(intent), 1.0)

        shorthand = _SHORTHAND_RE.match(text)
        if shorthand:
            prefix = shorthand.group(1)
            intent = (
                Intent.EXPENSE_SINGLE
                if prefix in SHORTHAND_EXPENSE_PREFIXES
                else Intent.INCOME_SINGLE
            )
            return ClassifiedIntent(intent, SHORTHAND_CONFIDENCE)

        tokens = text.split()
        if not tokens:
            return unrecognized()
        amount = find_amount_outside_dates(text)

        if tokens[0] in TRANSACTION_VERBS:
            intent, confidence = self._score_sentence(tokens)
        else:
            intent, confidence = self._score_bare_clause(text, amount)
            if intent == Intent.UNRECOGNIZED:
                return unrecognized()

        # tanpa nominal dan tanpa kategori, kalimat hanya mirip transaksi
        if amount is None and not extract_entities(text).category_text:
            confidence -= MISSING_AMOUNT_PENALTY
        return ClassifiedIntent(intent, round(confidence, 4))

    def _score_sentence(self, tokens: list[str]) -> tuple[Intent, float]:
        words = set(tokens[1:])
        if words & EXPENSE_FLOW_WORDS:
            return Intent.EXPENSE_SINGLE, FLOW_SENTENCE_CONFIDENCE
        if words & INCOME_FLOW_WORDS:
            return Intent.INCOME_SINGLE, FLOW_SENTENCE_CONFIDENCE

        verb = tokens[0]
        if verb in EXPENSE_VERBS:
            return Intent.EXPENSE_SINGLE, VERB_SENTENCE_CONFIDENCE
        if verb in INCOME_VERBS:
            return Intent.INCOME_SINGLE, VERB_SENTENCE_CONFIDENCE

        # "catat" tanpa kata alur: arah ditentukan kata arah
        if words & INCOME_DIRECTIONS and not words & EXPENSE_DIRECTIONS:
            return Intent.INCOME_SINGLE, NEUTRAL_VERB_CONFIDENCE
        return Intent.EXPENSE_SINGLE, NEUTRAL_VERB_CONFIDENCE

    def _score_bare_clause(self, text: str, amount) -> tuple[Intent, float]:
        if amount is not None and amount[0].start == 0:
            rest = text[amount[0].end:]
        elif amount is None:
            rest = text
        else:
            return Intent.UNRECOGNIZED, 0.0

        direction = _LEADING_AMOUNT_DIRECTION_RE.match(rest)
        if not direction:
            return Intent.UNRECOGNIZED, 0.0
        if direction.group(1) in EXPENSE_DIRECTIONS:
            return Intent.EXPENSE_SINGLE, BARE_CLAUSE_CONFIDENCE
        return Intent.INCOME_SINGLE, BARE_CLAUSE_CONFIDENCE - 0.05
