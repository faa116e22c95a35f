"""
Struktur data pipeline ekstraksi transaksi.

Dataclass dipakai untuk hasil antar-tahap yang hidup sebentar, sedangkan
data yang menyeberang batas proses (OCRExtract dari kolaborator OCR,
TransactionCandidate ke kolaborator persistence) memakai pydantic supaya
bentuknya tervalidasi.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Intent(str, Enum):
    """Aksi yang diminta sebuah pesan"""
    EXPENSE_SINGLE = "expense.single"
    INCOME_SINGLE = "income.single"
    EXPENSE_MULTIPLE = "expense.multiple"
    EDIT_LAST = "edit.last"
    DELETE_LAST = "delete.last"
    UNRECOGNIZED = "query.unrecognized"


SINGLE_TRANSACTION_INTENTS = frozenset({Intent.EXPENSE_SINGLE, Intent.INCOME_SINGLE})
MAINTENANCE_INTENTS = frozenset({Intent.EDIT_LAST, Intent.DELETE_LAST})


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Provenance(str, Enum):
    """Sumber yang mengisi sebuah field kandidat"""
    TEXT = "text"
    OCR = "ocr"
    MERCHANT = "merchant"
    PASSTHROUGH = "passthrough"
    DEFAULT = "default"


class RejectionReason(str, Enum):
    MISSING_AMOUNT = "MissingAmount"
    MISSING_CATEGORY = "MissingCategory"
    AMBIGUOUS_SPLIT = "AmbiguousSplit"
    UNRECOGNIZED = "Unrecognized"


class MaintenanceKind(str, Enum):
    EDIT = "edit"
    DELETE = "delete"


def transaction_type_for(intent: Intent) -> TransactionType:
    """Tipe transaksi ditentukan sepenuhnya oleh intent."""
    if intent == Intent.INCOME_SINGLE:
        return TransactionType.INCOME
    return TransactionType.EXPENSE


@dataclass(frozen=True)
class Message:
    """Pesan masuk yang sudah direduksi ke teks + penanda media"""
    text: str = ""
    has_media: bool = False


@dataclass(frozen=True)
class MediaAttachment:
    mimetype: str
    data: bytes = field(repr=False)

    @property
    def is_image(self) -> bool:
        return self.mimetype.lower().startswith("image/")


@dataclass(frozen=True)
class InboundMessage:
    """Event chat mentah dari transport"""
    body: str = ""
    has_media: bool = False
    media: MediaAttachment | None = None

    def to_message(self) -> Message:
        return Message(text=self.body or "", has_media=self.has_media)


def _reject_non_numbers(values: Any) -> Any:
    if not isinstance(values, (list, tuple)):
        raise ValueError("expected a list of numbers")
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"amount {value!r} is not a number")
        if value < 0:
            raise ValueError(f"amount {value!r} is negative")
    return list(values)


def _reject_non_strings(values: Any) -> Any:
    if not isinstance(values, (list, tuple)):
        raise ValueError("expected a list of strings")
    for value in values:
        if not isinstance(value, str):
            raise ValueError(f"{value!r} is not a string")
    return list(values)


class OCRExtract(BaseModel):
    """Daftar kandidat hasil OCR struk, read-only"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    amounts: list[float] = Field(default_factory=list)
    dates: list[date] = Field(default_factory=list)
    merchants: list[str] = Field(default_factory=list)
    items: list[str] = Field(default_factory=list)

    @field_validator("amounts", mode="before")
    @classmethod
    def check_amounts(cls, v: Any) -> Any:
        return _reject_non_numbers(v)

    @field_validator("merchants", "items", mode="before")
    @classmethod
    def check_strings(cls, v: Any) -> Any:
        return _reject_non_strings(v)

    @field_validator("dates", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        """Terima tanggal ISO maupun timestamp ISO (mis. "2024-12-25T00:00:00.000Z")."""
        if not isinstance(v, (list, tuple)):
            raise ValueError("expected a list of ISO dates")
        parsed: list[date] = []
        for value in v:
            if isinstance(value, datetime):
                parsed.append(value.date())
            elif isinstance(value, date):
                parsed.append(value)
            elif isinstance(value, str):
                try:
                    parsed.append(datetime.fromisoformat(value).date())
                except ValueError as exc:
                    raise ValueError(f"{value!r} is not an ISO date") from exc
            else:
                raise ValueError(f"{value!r} is not an ISO date")
        return parsed

    def is_empty(self) -> bool:
        return not (self.amounts or self.dates or self.merchants or self.items)


@dataclass(frozen=True)
class ClassifiedIntent:
    intent: Intent
    confidence: float = 0.0

    @property
    def is_single_transaction(self) -> bool:
        return self.intent in SINGLE_TRANSACTION_INTENTS


@dataclass(frozen=True)
class Span:
    start: int
    end: int


@dataclass(frozen=True)
class RawEntitySet:
    """Substring entitas yang belum divalidasi untuk satu klausa"""
    amount_text: str | None = None
    category_text: str | None = None
    date_text: str | None = None
    amount_span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class NormalizedAmount:
    value: int
    provenance: Provenance = Provenance.TEXT

    @property
    def is_valid(self) -> bool:
        return self.value > 0


@dataclass(frozen=True)
class NormalizedCategory:
    name: str
    provenance: Provenance = Provenance.TEXT


@dataclass(frozen=True)
class NormalizedDate:
    value: date
    provenance: Provenance = Provenance.TEXT


@dataclass(frozen=True)
class CandidateDraft:
    """
    Field-field satu transaksi sebelum divalidasi assembler.

    Attributes:
        intent: Hasil klasifikasi klausa sumber
        entities: Substring mentah dari extractor
        amount: Nominal ternormalisasi (None jika tidak ada/gagal)
        category: Kategori ternormalisasi
        date: Tanggal ternormalisasi
        text: Teks asli klausa, dasar deskripsi
        description: Deskripsi final hasil fusion (None = pakai text)
        synthetic: True jika field berasal dari directive sintetis OCR,
            bukan dari teks yang diketik pengguna
    """
    intent: ClassifiedIntent
    entities: RawEntitySet = field(default_factory=RawEntitySet)
    amount: NormalizedAmount | None = None
    category: NormalizedCategory | None = None
    date: NormalizedDate | None = None
    text: str = ""
    description: str | None = None
    synthetic: bool = False

    @property
    def has_valid_amount(self) -> bool:
        return self.amount is not None and self.amount.is_valid

    @property
    def has_category(self) -> bool:
        return self.category is not None and bool(self.category.name)


class TransactionCandidate(BaseModel):
    """Kandidat transaksi final yang sudah tervalidasi"""
    model_config = ConfigDict(frozen=True)

    type: TransactionType
    amount: int = Field(..., gt=0)
    category: str = Field(..., min_length=1)
    date: date
    description: str = ""
    confidence: float = Field(..., ge=0, le=1)
    field_provenance: dict[str, Provenance]


@dataclass(frozen=True)
class Rejection:
    reason: RejectionReason
    detail: str | None = None


@dataclass(frozen=True)
class MaintenanceAction:
    """Sinyal edit/hapus untuk kolaborator persistence"""
    kind: MaintenanceKind
    target: str = "last"


@dataclass(frozen=True)
class PipelineResult:
    intent: ClassifiedIntent
    candidates: tuple[TransactionCandidate, ...] = ()
    rejection: Rejection | None = None
    maintenance: MaintenanceAction | None = None

    @property
    def ok(self) -> bool:
        return bool(self.candidates) or self.maintenance is not None
