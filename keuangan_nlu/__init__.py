"""
Ekstraksi transaksi terstruktur dari pesan chat berbahasa Indonesia dan
hasil OCR struk.

Usage:
    from keuangan_nlu import TransactionPipeline, Message, load_pipeline_config

    pipeline = TransactionPipeline(load_pipeline_config())
    result = pipeline.resolve(Message("catat pengeluaran 50rb untuk makan"))
"""

from .amount import normalize_amount
from .category import infer_category_from_merchant, levenshtein_distance, normalize_category
from .config import PipelineConfig, Settings, get_settings, load_pipeline_config
from .errors import (
    AmbiguousSplit,
    ExtractionFailure,
    MalformedOCRExtract,
    NormalizationFailure,
    PipelineError,
)
from .models import (
    InboundMessage,
    Intent,
    MaintenanceAction,
    MediaAttachment,
    Message,
    OCRExtract,
    PipelineResult,
    Provenance,
    Rejection,
    RejectionReason,
    TransactionCandidate,
    TransactionType,
)
from .ocr import HttpOCRCollaborator, OCRCollaborator, OCRReport
from .pipeline import TransactionPipeline
from .replies import format_currency, render_reply

__all__ = [
    "AmbiguousSplit",
    "ExtractionFailure",
    "HttpOCRCollaborator",
    "InboundMessage",
    "Intent",
    "MaintenanceAction",
    "MalformedOCRExtract",
    "MediaAttachment",
    "Message",
    "NormalizationFailure",
    "OCRCollaborator",
    "OCRExtract",
    "OCRReport",
    "PipelineConfig",
    "PipelineError",
    "PipelineResult",
    "Provenance",
    "Rejection",
    "RejectionReason",
    "Settings",
    "TransactionCandidate",
    "TransactionPipeline",
    "TransactionType",
    "format_currency",
    "get_settings",
    "infer_category_from_merchant",
    "levenshtein_distance",
    "load_pipeline_config",
    "normalize_amount",
    "normalize_category",
    "render_reply",
]
