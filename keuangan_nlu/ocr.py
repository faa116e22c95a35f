"""
OCR collaborator interface.

Pengenalan teks dari gambar dilakukan di luar pipeline (ai-media-service).
Modul ini hanya mendefinisikan kontrak, memvalidasi bentuk payload, dan
menyediakan client HTTP.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import Settings
from .errors import MalformedOCRExtract
from .models import OCRExtract


class OCRReport(BaseModel):
    """Envelope `{success, rawText, extractedData}` dari kolaborator OCR"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool
    raw_text: str = Field("", alias="rawText")
    extracted_data: OCRExtract = Field(default_factory=OCRExtract, alias="extractedData")


def parse_ocr_report(payload: Any) -> OCRReport:
    """
    Validasi payload mentah kolaborator OCR.

    Raises:
        MalformedOCRExtract: jika bentuk payload tidak sesuai kontrak
    """
    try:
        return OCRReport.model_validate(payload)
    except ValidationError as exc:
        logger.error("Malformed OCR payload", errors=exc.error_count())
        raise MalformedOCRExtract(
            "OCR payload does not match the declared shape", errors=exc.errors()
        ) from exc


class OCRCollaborator(ABC):
    """Abstract base class for OCR collaborators."""

    @abstractmethod
    async def recognize(self, image_bytes: bytes, mimetype: str) -> OCRReport:
        """
        Jalankan OCR pada gambar struk.

        Returns:
            OCRReport; `success=False` jika OCR gagal

        Raises:
            MalformedOCRExtract: jika hasil tidak sesuai kontrak
        """
        pass


class HttpOCRCollaborator(OCRCollaborator):
    """
    Client OCR via HTTP (multipart upload ke media service).

    Kegagalan transport (timeout, status error) dicatat dan dikembalikan
    sebagai OCRReport gagal; payload yang bentuknya salah tetap dinaikkan.
    """

    def __init__(
        self,
        base_url: str,
        endpoint: str = "/media/ocr/extract",
        timeout: float = 30.0,
        debug_logging: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint
        self.timeout = timeout
        self._debug_logging = debug_logging
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "HttpOCRCollaborator":
        return cls(
            base_url=settings.ocr_service_url,
            endpoint=settings.ocr_endpoint,
            timeout=settings.ocr_timeout,
            debug_logging=settings.debug_logging,
            **kwargs,
        )

    async def recognize(self, image_bytes: bytes, mimetype: str) -> OCRReport:
        url = f"{self.base_url}{self.endpoint}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    url, files={"file": ("receipt", image_bytes, mimetype)}
                )
                response.raise_for_status()
            except httpx.HTTPError as exc:
                logger.warning("OCR service request failed", url=url, error=str(exc))
                return OCRReport(success=False)

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedOCRExtract("OCR service returned non-JSON body") from exc

        if self._debug_logging:
            logger.debug("OCR service response", payload=payload)

        return parse_ocr_report(payload)
