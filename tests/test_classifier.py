"""
Unit tests untuk intent classifier

Test cases mencakup:
- Tabel aturan deterministik (kalimat lengkap, singkatan, klausa polos)
- Pesan multi-transaksi
- Ambang confidence
- Scorer naive Bayes
"""

import pytest

from keuangan_nlu.classifier import NaiveBayesScorer, RuleTableClassifier, build_classifier, featurize
from keuangan_nlu.models import Intent


class TestRuleTableClassifier:
    """Test klasifikasi berbasis aturan"""

    def setup_method(self):
        self.classifier = RuleTableClassifier(threshold=0.5)

    def test_flow_sentences(self):
        result = self.classifier.classify("catat pengeluaran 50000 untuk makan")
        assert result.intent == Intent.EXPENSE_SINGLE
        assert result.confidence == 0.95

        result = self.classifier.classify("catat pemasukan 5000000 dari gaji")
        assert result.intent == Intent.INCOME_SINGLE
        assert result.confidence == 0.95

    def test_case_insensitive(self):
        result = self.classifier.classify("CATAT PENGELUARAN 50000 UNTUK MAKAN")
        assert result.intent == Intent.EXPENSE_SINGLE

    def test_shorthand(self):
        assert self.classifier.classify("p50k makan").intent == Intent.EXPENSE_SINGLE
        assert self.classifier.classify("k20rb parkir").intent == Intent.EXPENSE_SINGLE
        assert self.classifier.classify("m5m gaji").intent == Intent.INCOME_SINGLE
        assert self.classifier.classify("i200k bonus").confidence == 0.9

    def test_verb_sentences(self):
        result = self.classifier.classify("beli kopi 25000")
        assert result.intent == Intent.EXPENSE_SINGLE
        assert result.confidence == 0.85

        assert self.classifier.classify("terima uang 1jt dari bonus").intent == Intent.INCOME_SINGLE

    def test_neutral_verb_uses_direction(self):
        assert self.classifier.classify("catat 50000 dari freelance").intent == Intent.INCOME_SINGLE
        assert self.classifier.classify("catat 50000 untuk makan").intent == Intent.EXPENSE_SINGLE

    def test_bare_clauses(self):
        result = self.classifier.classify("30000 untuk transport")
        assert result.intent == Intent.EXPENSE_SINGLE
        assert result.confidence == 0.8
        assert self.classifier.classify("500000 dari gaji").intent == Intent.INCOME_SINGLE

    def test_maintenance(self):
        assert self.classifier.classify("edit transaksi terakhir").intent == Intent.EDIT_LAST
        assert self.classifier.classify("ubah transaksi terakhir").intent == Intent.EDIT_LAST
        assert self.classifier.classify("hapus transaksi terakhir").intent == Intent.DELETE_LAST

    def test_unrecognized(self):
        assert self.classifier.classify("halo").intent == Intent.UNRECOGNIZED
        assert self.classifier.classify("").intent == Intent.UNRECOGNIZED
        assert self.classifier.classify("lihat transaksi").intent == Intent.UNRECOGNIZED

    def test_missing_amount_with_category(self):
        """Kalimat tanpa nominal tetap dikenali selama kategorinya ada"""
        result = self.classifier.classify("catat pengeluaran untuk makan")
        assert result.intent == Intent.EXPENSE_SINGLE
        assert result.confidence == 0.95

        result = self.classifier.classify("bayar untuk makan")
        assert result.intent == Intent.EXPENSE_SINGLE
        assert result.confidence == 0.85

        result = self.classifier.classify("untuk parkir")
        assert result.intent == Intent.EXPENSE_SINGLE
        assert result.confidence == 0.8

    def test_missing_amount_and_category_lowers_confidence(self):
        result = self.classifier.classify("terima kasih")
        assert result.intent == Intent.UNRECOGNIZED
        assert result.confidence == 0.45

    def test_multiple_with_amountless_clause(self):
        result = self.classifier.classify("catat pengeluaran 50000 untuk makan dan untuk parkir")
        assert result.intent == Intent.EXPENSE_MULTIPLE
        assert result.confidence == 0.8

    def test_maintenance_phrase_must_lead(self):
        result = self.classifier.classify("catat pengeluaran 1000 untuk hapus transaksi terakhir")
        assert result.intent == Intent.EXPENSE_SINGLE
        assert self.classifier.classify("hapus transaksi terakhir ya").intent == Intent.DELETE_LAST

    def test_multiple(self):
        result = self.classifier.classify(
            "catat pengeluaran 50000 untuk makan dan 30000 untuk transport"
        )
        assert result.intent == Intent.EXPENSE_MULTIPLE
        assert result.confidence == 0.8

    def test_conjunction_without_transactions(self):
        assert self.classifier.classify("roti dan selai").intent == Intent.UNRECOGNIZED

    def test_threshold_routes_to_unrecognized(self):
        strict = RuleTableClassifier(threshold=0.9)
        result = strict.classify("beli kopi 25000")
        assert result.intent == Intent.UNRECOGNIZED
        assert result.confidence == 0.85


class TestNaiveBayesScorer:
    """Test scorer statistik yang dilatih dari contoh ucapan"""

    def setup_method(self):
        self.scorer = build_classifier("scorer")

    def test_is_trained(self):
        assert isinstance(self.scorer, NaiveBayesScorer)
        assert self.scorer.is_trained
        assert self.scorer.name == "scorer"

    def test_untrained_scorer_raises(self):
        with pytest.raises(RuntimeError):
            NaiveBayesScorer().classify("catat pengeluaran 50000 untuk makan")

    def test_featurize_replaces_amounts(self):
        assert featurize("p50k makan") == ["p", "%amount%", "makan", "__first__p"]

    def test_generalizes_over_amounts(self):
        result = self.scorer.classify("catat pengeluaran 75000 untuk bensin")
        assert result.intent == Intent.EXPENSE_SINGLE
        assert result.confidence > 0.5

        result = self.scorer.classify("terima 750rb dari freelance")
        assert result.intent == Intent.INCOME_SINGLE

    def test_unknown_tokens(self):
        assert self.scorer.classify("xyzzy").intent == Intent.UNRECOGNIZED
        assert self.scorer.classify("halo").intent == Intent.UNRECOGNIZED

    def test_multiple(self):
        result = self.scorer.classify(
            "catat pengeluaran 50000 untuk makan dan 30000 untuk transport"
        )
        assert result.intent == Intent.EXPENSE_MULTIPLE

    def test_deterministic(self):
        text = "bayar 150000 untuk listrik"
        assert self.scorer.classify(text) == self.scorer.classify(text)


class TestBuildClassifier:
    def test_rules_is_default(self):
        assert build_classifier().name == "rules"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_classifier("bert")
