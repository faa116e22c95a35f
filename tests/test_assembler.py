from datetime import date

import pytest

from keuangan_nlu.assembler import assemble, assemble_or_reject
from keuangan_nlu.errors import ExtractionFailure
from keuangan_nlu.models import (
    CandidateDraft,
    ClassifiedIntent,
    Intent,
    NormalizedAmount,
    NormalizedCategory,
    NormalizedDate,
    Provenance,
    Rejection,
    RejectionReason,
    TransactionType,
)


class TestAssemble:
    """Test validasi draft menjadi kandidat"""

    def setup_method(self):
        self.today = date(2024, 12, 25)
        self.expense = ClassifiedIntent(Intent.EXPENSE_SINGLE, 0.95)
        self.income = ClassifiedIntent(Intent.INCOME_SINGLE, 0.85)

    def test_defaults_date_to_today(self):
        draft = CandidateDraft(
            intent=self.expense,
            amount=NormalizedAmount(50000),
            category=NormalizedCategory("makanan"),
            text="catat pengeluaran 50000 untuk makan",
        )
        candidate = assemble(draft, self.today)
        assert candidate.type == TransactionType.EXPENSE
        assert candidate.amount == 50000
        assert candidate.category == "makanan"
        assert candidate.date == self.today
        assert candidate.description == "catat pengeluaran 50000 untuk makan"
        assert candidate.confidence == 0.95
        assert candidate.field_provenance == {
            "amount": Provenance.TEXT,
            "category": Provenance.TEXT,
            "date": Provenance.DEFAULT,
        }

    def test_income_type_and_explicit_date(self):
        draft = CandidateDraft(
            intent=self.income,
            amount=NormalizedAmount(2000000),
            category=NormalizedCategory("pendapatan"),
            date=NormalizedDate(date(2024, 12, 1)),
            description="gaji desember",
        )
        candidate = assemble(draft, self.today)
        assert candidate.type == TransactionType.INCOME
        assert candidate.date == date(2024, 12, 1)
        assert candidate.field_provenance["date"] == Provenance.TEXT
        assert candidate.description == "gaji desember"

    def test_missing_or_zero_amount(self):
        for amount in (None, NormalizedAmount(0)):
            draft = CandidateDraft(
                intent=self.expense, amount=amount, category=NormalizedCategory("makanan")
            )
            with pytest.raises(ExtractionFailure) as exc_info:
                assemble(draft, self.today)
            assert exc_info.value.reason == RejectionReason.MISSING_AMOUNT

    def test_missing_category(self):
        draft = CandidateDraft(intent=self.expense, amount=NormalizedAmount(50000))
        with pytest.raises(ExtractionFailure) as exc_info:
            assemble(draft, self.today)
        assert exc_info.value.reason == RejectionReason.MISSING_CATEGORY

    def test_assemble_or_reject(self):
        draft = CandidateDraft(intent=self.expense, category=NormalizedCategory("makanan"))
        outcome = assemble_or_reject(draft, self.today)
        assert isinstance(outcome, Rejection)
        assert outcome.reason == RejectionReason.MISSING_AMOUNT
