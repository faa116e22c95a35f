"""Candidate assembler: validasi draft menjadi TransactionCandidate atau Rejection."""

from datetime import date

from .errors import ExtractionFailure
from .models import (
    CandidateDraft,
    Provenance,
    Rejection,
    TransactionCandidate,
    transaction_type_for,
)


def assemble(draft: CandidateDraft, today: date) -> TransactionCandidate:
    """
    Raises:
        ExtractionFailure: jika nominal <= 0/tidak ada atau kategori kosong
    """
    if not draft.has_valid_amount:
        raise ExtractionFailure("amount")
    if not draft.has_category:
        raise ExtractionFailure("category")

    if draft.date is not None:
        tx_date, date_provenance = draft.date.value, draft.date.provenance
    else:
        tx_date, date_provenance = today, Provenance.DEFAULT

    return TransactionCandidate(
        type=transaction_type_for(draft.intent.intent),
        amount=draft.amount.value,
        category=draft.category.name,
        date=tx_date,
        description=draft.description if draft.description is not None else draft.text,
        confidence=draft.intent.confidence,
        field_provenance={
            "amount": draft.amount.provenance,
            "category": draft.category.provenance,
            "date": date_provenance,
        },
    )


def assemble_or_reject(draft: CandidateDraft, today: date) -> TransactionCandidate | Rejection:
    try:
        return assemble(draft, today)
    except ExtractionFailure as exc:
        return Rejection(exc.reason, detail=str(exc))
