"""
Base classes for intent classification.

Semua implementasi classifier berbagi aturan yang sama untuk pesan
multi-transaksi dan ambang confidence; yang berbeda hanya cara menilai satu
klausa (`score_clause`).
"""

from abc import ABC, abstractmethod

from loguru import logger

from ..models import ClassifiedIntent, Intent
from ..textutils import normalize_text, split_clauses
from ..lexicon import MULTI_CONJUNCTION


def unrecognized(confidence: float = 0.0) -> ClassifiedIntent:
    return ClassifiedIntent(Intent.UNRECOGNIZED, confidence)


class IntentClassifier(ABC):
    """
    Abstract base class for intent classifiers.

    Attributes:
        threshold: Confidence minimum; di bawahnya intent dipaksa menjadi
            `query.unrecognized` tanpa error.
    """

    def __init__(self, threshold: float = 0.5):
        self.threshold = threshold

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier implementasi (mis. 'rules', 'scorer')."""
        pass

    @abstractmethod
    def score_clause(self, text: str) -> ClassifiedIntent:
        """
        Nilai satu klausa tunggal yang sudah dinormalisasi (lowercase).

        Tidak boleh mengembalikan `expense.multiple`; keputusan multi-klausa
        diambil oleh `classify`.
        """
        pass

    def classify(self, text: str) -> ClassifiedIntent:
        """
        Klasifikasikan teks pesan.

        Pesan multi-transaksi hanya dikenali jika konjungsi " dan " ada dan
        pemecahan menghasilkan >= 2 klausa yang masing-masing terklasifikasi
        sebagai transaksi tunggal.
        """
        normalized = normalize_text(text)
        if not normalized:
            return unrecognized()

        if MULTI_CONJUNCTION in normalized:
            clauses = split_clauses(normalized)
            if len(clauses) >= 2:
                scored = [self._thresholded(clause) for clause in clauses]
                if all(result.is_single_transaction for result in scored):
                    confidence = min(result.confidence for result in scored)
                    return ClassifiedIntent(Intent.EXPENSE_MULTIPLE, confidence)

        return self._thresholded(normalized)

    def _thresholded(self, clause: str) -> ClassifiedIntent:
        result = self.score_clause(clause)
        if result.intent == Intent.EXPENSE_MULTIPLE:
            result = unrecognized(result.confidence)
        if result.intent != Intent.UNRECOGNIZED and result.confidence < self.threshold:
            logger.debug(
                "Low confidence intent routed to unrecognized",
                classifier=self.name,
                intent=result.intent.value,
                confidence=round(result.confidence, 3),
            )
            return unrecognized(result.confidence)
        return result
