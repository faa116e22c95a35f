"""
Intent classification layer.

Dua implementasi yang saling dapat ditukar di balik satu kapabilitas
`classify(text) -> ClassifiedIntent`: tabel aturan deterministik dan scorer
naive Bayes yang dilatih dari contoh ucapan tetap.
"""

from ..lexicon import TRAINING_UTTERANCES
from .base import IntentClassifier
from .rules import RuleTableClassifier
from .scorer import NaiveBayesScorer, featurize


def build_classifier(backend: str = "rules", threshold: float = 0.5) -> IntentClassifier:
    """Buat classifier sesuai konfigurasi; scorer langsung dilatih."""
    if backend == "rules":
        return RuleTableClassifier(threshold)
    if backend == "scorer":
        return NaiveBayesScorer(threshold).train(TRAINING_UTTERANCES)
    raise ValueError(f"Unknown classifier backend: {backend}")


__all__ = [
    "IntentClassifier",
    "NaiveBayesScorer",
    "RuleTableClassifier",
    "build_classifier",
    "featurize",
]
