import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from loguru import logger
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .category import COMPILED_MERCHANT_PATTERNS
from .classifier import IntentClassifier, build_classifier
from .lexicon import FALLBACK_CATEGORY, LEXICON_VERSION, SYNONYM_TABLE

# Supported classifier backends
ClassifierBackend = Literal["rules", "scorer"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Classifier settings
    classifier_backend: ClassifierBackend = "rules"
    intent_confidence_threshold: float = 0.5

    # Normalization settings
    fuzzy_max_distance: int = 2
    timezone: str = "Asia/Jakarta"

    # OCR collaborator settings
    ocr_service_url: str = "http://ai-media-service:8500"
    ocr_endpoint: str = "/media/ocr/extract"
    ocr_timeout: float = 30.0

    debug_logging: bool = False

    @field_validator("classifier_backend", mode="before")
    @classmethod
    def normalize_backend(cls, v: str | None) -> str:
        """Normalize backend names to lowercase, defaulting empty to 'rules'."""
        if v is None or v == "":
            return "rules"
        return v.lower()

    @field_validator("intent_confidence_threshold")
    @classmethod
    def check_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("intent_confidence_threshold must be within [0, 1]")
        return v

    @field_validator("fuzzy_max_distance")
    @classmethod
    def check_distance(cls, v: int) -> int:
        if v < 0:
            raise ValueError("fuzzy_max_distance must not be negative")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()


@dataclass(frozen=True)
class PipelineConfig:
    """
    Konfigurasi imutabel yang dibangun sekali saat proses mulai.

    Diteruskan by reference ke setiap tahap pipeline; aman dibaca bersamaan
    tanpa batas karena tidak ada field yang berubah setelah dibangun.
    """
    classifier: IntentClassifier
    synonyms: Mapping[str, str]
    merchant_patterns: tuple[tuple[re.Pattern[str], str], ...]
    fallback_category: str
    fuzzy_max_distance: int
    confidence_threshold: float
    timezone: str
    lexicon_version: str


def load_pipeline_config(settings: Settings | None = None) -> PipelineConfig:
    settings = settings or get_settings()
    classifier = build_classifier(
        settings.classifier_backend, settings.intent_confidence_threshold
    )
    config = PipelineConfig(
        classifier=classifier,
        synonyms=SYNONYM_TABLE,
        merchant_patterns=COMPILED_MERCHANT_PATTERNS,
        fallback_category=FALLBACK_CATEGORY,
        fuzzy_max_distance=settings.fuzzy_max_distance,
        confidence_threshold=settings.intent_confidence_threshold,
        timezone=settings.timezone,
        lexicon_version=LEXICON_VERSION,
    )
    logger.info(
        "Pipeline config loaded",
        classifier=classifier.name,
        threshold=config.confidence_threshold,
        lexicon_version=config.lexicon_version,
    )
    return config
