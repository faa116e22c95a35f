"""
Trainable statistical scorer.

Multinomial naive Bayes atas token yang nominal dan tanggalnya sudah diganti
placeholder (`%amount%`, `%date%`), sehingga "p50k makan" dan "p20rb kopi"
berbagi fitur yang sama. Model dilatih sekali saat konfigurasi dibangun dan
hanya dibaca setelahnya.
"""

import math
import re
from collections import Counter
from collections.abc import Iterable

from ..extractor import NUMERIC_AMOUNT_RE, WORD_AMOUNT_RE
from ..dates import DATE_TOKEN_RE
from ..models import ClassifiedIntent, Intent
from .base import IntentClassifier, unrecognized

_TOKEN_RE = re.compile(r"%\w+%|[^\W\d_]+")


def featurize(text: str) -> list[str]:
    """Token unigram + penanda kata pertama."""
    placeholder = DATE_TOKEN_RE.sub(" %date% ", text.lower())
    placeholder = NUMERIC_AMOUNT_RE.sub("%amount%", placeholder)
    placeholder = WORD_AMOUNT_RE.sub("%amount%", placeholder)
    tokens = _TOKEN_RE.findall(placeholder)
    if tokens:
        tokens.append(f"__first__{tokens[0]}")
    return tokens


class NaiveBayesScorer(IntentClassifier):
    """
    Scorer naive Bayes dengan Laplace smoothing.

    Confidence adalah probabilitas posterior kelas terbaik. Teks yang tidak
    punya satu pun token dikenal selalu `query.unrecognized`.
    """

    def __init__(self, threshold: float = 0.5, alpha: float = 1.0):
        super().__init__(threshold)
        self.alpha = alpha
        self._class_counts: Counter[Intent] = Counter()
        self._token_counts: dict[Intent, Counter[str]] = {}
        self._token_totals: dict[Intent, int] = {}
        self._vocabulary: frozenset[str] = frozenset()

    @property
    def name(self) -> str:
        return "scorer"

    @property
    def is_trained(self) -> bool:
        return bool(self._class_counts)

    def train(self, examples: Iterable[tuple[str, Intent | str]]) -> "NaiveBayesScorer":
        class_counts: Counter[Intent] = Counter()
        token_counts: dict[Intent, Counter[str]] = {}
        vocabulary: set[str] = set()

        for text, label in examples:
            intent = Intent(label)
            if intent == Intent.EXPENSE_MULTIPLE:
                continue
            tokens = featurize(text)
            class_counts[intent] += 1
            token_counts.setdefault(intent, Counter()).update(tokens)
            vocabulary.update(tokens)

        self._class_counts = class_counts
        self._token_counts = token_counts
        self._token_totals = {intent: sum(c.values()) for intent, c in token_counts.items()}
        self._vocabulary = frozenset(vocabulary)
        return self

    def score_clause(self, text: str) -> ClassifiedIntent:
        if not self.is_trained:
            raise RuntimeError("NaiveBayesScorer used before train()")

        tokens = [token for token in featurize(text) if token in self._vocabulary]
        if not tokens:
            return unrecognized()

        total_docs = sum(self._class_counts.values())
        vocab_size = len(self._vocabulary)
        log_scores: dict[Intent, float] = {}
        # sorted for a stable iteration order
        for intent in sorted(self._class_counts, key=lambda i: i.value):
            score = math.log(self._class_counts[intent] / total_docs)
            counts = self._token_counts[intent]
            denominator = self._token_totals[intent] + self.alpha * vocab_size
            for token in tokens:
                score += math.log((counts[token] + self.alpha) / denominator)
            log_scores[intent] = score

        best = max(log_scores, key=lambda i: log_scores[i])
        peak = log_scores[best]
        normalizer = sum(math.exp(score - peak) for score in log_scores.values())
        confidence = 1.0 / normalizer
        return ClassifiedIntent(best, round(confidence, 4))
