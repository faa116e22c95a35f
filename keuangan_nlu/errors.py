"""
Exception untuk pipeline ekstraksi transaksi.

Kegagalan yang diharapkan (nominal/kategori tidak ada, split ambigu) ditangkap
di dalam pipeline dan diubah menjadi Rejection. Hanya MalformedOCRExtract yang
dibiarkan naik ke pemanggil.
"""

from typing import Any

from .models import RejectionReason


class PipelineError(Exception):
    """Base exception for pipeline errors."""

    def __init__(self, message: str, reason: RejectionReason | None = None):
        super().__init__(message)
        self.reason = reason


class ExtractionFailure(PipelineError):
    """Raised when a required field (amount or category) cannot be found."""

    def __init__(self, field_name: str):
        reason = (
            RejectionReason.MISSING_AMOUNT
            if field_name == "amount"
            else RejectionReason.MISSING_CATEGORY
        )
        super().__init__(f"no usable {field_name} found", reason)
        self.field_name = field_name


class NormalizationFailure(PipelineError):
    """Raised when an amount substring is not parsable by any rule."""

    def __init__(self, raw: str):
        super().__init__(f"cannot normalize amount {raw!r}", RejectionReason.MISSING_AMOUNT)
        self.raw = raw


class AmbiguousSplit(PipelineError):
    """Raised when a multi-transaction message does not resolve into clauses."""

    def __init__(self, message: str = "multi-transaction message did not resolve"):
        super().__init__(message, RejectionReason.AMBIGUOUS_SPLIT)


class MalformedOCRExtract(PipelineError):
    """Raised when the OCR collaborator returns a payload of the wrong shape."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []
