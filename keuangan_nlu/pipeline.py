"""
Pipeline teks + struk -> kandidat transaksi.

Alur: pesan [+ media] -> (jika media) kolaborator OCR -> OCRExtract, lalu
teks -> classifier -> extractor -> normalizer -> fusion OCR -> assembler.

Satu-satunya titik suspend adalah menunggu kolaborator OCR; sisanya komputasi
sinkron murni tanpa state bersama yang bisa berubah, jadi banyak pesan boleh
diproses bersamaan dengan satu PipelineConfig.
"""

from dataclasses import replace
from datetime import date

from loguru import logger

from .assembler import assemble_or_reject
from .config import PipelineConfig, load_pipeline_config
from .dates import today_in
from .errors import AmbiguousSplit
from .extractor import build_draft
from .fusion import fuse, synthesize_directive
from .models import (
    CandidateDraft,
    ClassifiedIntent,
    InboundMessage,
    Intent,
    MaintenanceAction,
    MaintenanceKind,
    MediaAttachment,
    Message,
    OCRExtract,
    PipelineResult,
    Rejection,
    RejectionReason,
    TransactionCandidate,
)
from .ocr import OCRCollaborator
from .splitter import split_transactions

_MAINTENANCE_KINDS = {
    Intent.EDIT_LAST: MaintenanceKind.EDIT,
    Intent.DELETE_LAST: MaintenanceKind.DELETE,
}


class TransactionPipeline:
    """
    Orkestrasi end-to-end untuk satu pesan per pemanggilan.

    Attributes:
        config: Konfigurasi imutabel bersama (classifier, kamus, ambang)
        ocr: Kolaborator OCR opsional untuk pesan bermedia
    """

    def __init__(self, config: PipelineConfig | None = None, ocr: OCRCollaborator | None = None):
        self.config = config or load_pipeline_config()
        self.ocr = ocr

    async def process(self, inbound: InboundMessage, today: date | None = None) -> PipelineResult:
        """Proses event chat mentah, termasuk menunggu OCR jika ada media."""
        extract = None
        if inbound.has_media:
            extract = await self._run_ocr(inbound.media)
        return self.resolve(inbound.to_message(), extract, today)

    async def _run_ocr(self, media: MediaAttachment | None) -> OCRExtract:
        if media is None or not media.is_image:
            logger.info("Media is not an image, skipping OCR")
            return OCRExtract()
        if self.ocr is None:
            logger.warning("Media received but no OCR collaborator configured")
            return OCRExtract()

        report = await self.ocr.recognize(media.data, media.mimetype)
        if not report.success:
            logger.warning("OCR failed, continuing with text only")
            return OCRExtract()

        logger.debug(
            "OCR extract received",
            amounts=len(report.extracted_data.amounts),
            merchants=len(report.extracted_data.merchants),
            raw_text_length=len(report.raw_text),
        )
        return report.extracted_data

    def resolve(
        self,
        message: Message,
        extract: OCRExtract | None = None,
        today: date | None = None,
    ) -> PipelineResult:
        """Bagian sinkron pipeline: deterministik untuk (message, extract, today) yang sama."""
        today = today or today_in(self.config.timezone)
        text = message.text.strip()
        has_receipt = extract is not None and (message.has_media or not extract.is_empty())

        if not text:
            if has_receipt:
                return self._resolve_receipt_only(extract, today)
            return self._reject(ClassifiedIntent(Intent.UNRECOGNIZED), RejectionReason.UNRECOGNIZED)

        classified = self.config.classifier.classify(text)

        if classified.intent in _MAINTENANCE_KINDS:
            logger.info("Maintenance action requested", intent=classified.intent.value)
            return PipelineResult(
                intent=classified,
                maintenance=MaintenanceAction(_MAINTENANCE_KINDS[classified.intent]),
            )

        if classified.intent == Intent.UNRECOGNIZED:
            if has_receipt and not extract.is_empty():
                return self._resolve_receipt_only(extract, today, caption=text)
            return self._reject(classified, RejectionReason.UNRECOGNIZED)

        if classified.intent == Intent.EXPENSE_MULTIPLE:
            try:
                drafts = split_transactions(text, self.config, today, extract)
            except AmbiguousSplit as exc:
                return self._reject(classified, exc.reason, str(exc))
            return self._finish(classified, fuse(drafts, extract, self.config), today, multiple=True)

        draft = build_draft(text, classified, self.config, today)
        return self._finish(classified, fuse([draft], extract, self.config), today)

    def _resolve_receipt_only(
        self, extract: OCRExtract, today: date, caption: str = ""
    ) -> PipelineResult:
        """Struk tanpa teks: directive sintetis masuk lewat classifier yang sama."""
        directive = synthesize_directive(extract)
        classified = self.config.classifier.classify(directive)
        logger.debug("Receipt directive synthesized", directive=directive, intent=classified.intent.value)

        if not classified.is_single_transaction:
            return self._reject(classified, RejectionReason.UNRECOGNIZED)

        draft = build_draft(directive, classified, self.config, today, synthetic=True)
        draft = replace(draft, text=caption)
        return self._finish(classified, fuse([draft], extract, self.config), today)

    def _finish(
        self,
        classified: ClassifiedIntent,
        drafts: list[CandidateDraft],
        today: date,
        multiple: bool = False,
    ) -> PipelineResult:
        candidates: list[TransactionCandidate] = []
        rejections: list[Rejection] = []
        for draft in drafts:
            outcome = assemble_or_reject(draft, today)
            if isinstance(outcome, Rejection):
                rejections.append(outcome)
            else:
                candidates.append(outcome)

        if not candidates:
            if multiple:
                return self._reject(classified, RejectionReason.AMBIGUOUS_SPLIT)
            return self._reject(classified, rejections[0].reason, rejections[0].detail)

        logger.info(
            "Pipeline finished",
            intent=classified.intent.value,
            candidates=len(candidates),
            dropped=len(rejections),
        )
        return PipelineResult(intent=classified, candidates=tuple(candidates))

    def _reject(
        self,
        classified: ClassifiedIntent,
        reason: RejectionReason | None,
        detail: str | None = None,
    ) -> PipelineResult:
        reason = reason or RejectionReason.UNRECOGNIZED
        logger.info("Message rejected", intent=classified.intent.value, reason=reason.value)
        return PipelineResult(intent=classified, rejection=Rejection(reason, detail))
