"""
Normalisasi nominal: teks -> integer rupiah non-negatif.

Urutan aturan (aturan pertama yang berlaku menang):
1. Singkatan dengan pengali: "50k", "1,5jt", "2 juta"
2. Angka biasa: "Rp 50.000", "50,000", "50.000,00"
3. Bentuk kata: "lima puluh ribu", "seratus dua puluh lima"
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import NormalizationFailure
from .lexicon import DIGIT_WORDS, GROUP_WORDS, SCALE_WORDS, SHORTHAND_MULTIPLIERS

_CURRENCY_PREFIX = r"(?:rp\.?|idr)\s*"
_NUMBER = r"\d+(?:[.,]\d+)*"

_WORD_MULTIPLIERS = "|".join(sorted((m for m in SHORTHAND_MULTIPLIERS if len(m) > 1), key=len, reverse=True))
_LETTER_MULTIPLIERS = "".join(m for m in SHORTHAND_MULTIPLIERS if len(m) == 1)

# Pengali satu huruf harus menempel pada angka ("2b"), pengali kata boleh berjarak ("2 juta")
_SHORTHAND_RE = re.compile(
    rf"^(?:{_CURRENCY_PREFIX})?({_NUMBER})(?:\s*({_WORD_MULTIPLIERS})|([{_LETTER_MULTIPLIERS}]))$",
    re.IGNORECASE,
)
_PLAIN_RE = re.compile(rf"^(?:{_CURRENCY_PREFIX})?({_NUMBER})(?:,-|-)?$", re.IGNORECASE)


def parse_number(number_str: str) -> Decimal | None:
    """
    Parse angka dengan pemisah ribuan/desimal format Indonesia maupun Inggris.

    "1.234.567" -> 1234567, "1.234,56" -> 1234.56, "1,234.56" -> 1234.56,
    "1,5" -> 1.5. Satu pemisah yang diikuti tepat tiga digit dianggap
    pemisah ribuan.
    """
    if not number_str:
        return None

    number_str = number_str.strip()

    if "." in number_str and "," in number_str:
        if number_str.rfind(".") > number_str.rfind(","):
            # Format: 1,234.56 (English)
            number_str = number_str.replace(",", "")
        else:
            # Format: 1.234,56 (Indonesian)
            number_str = number_str.replace(".", "").replace(",", ".")
    elif "." in number_str:
        parts = number_str.split(".")
        if len(parts) > 2 or len(parts[-1]) == 3:
            number_str = number_str.replace(".", "")
    elif "," in number_str:
        parts = number_str.split(",")
        if len(parts) > 2 or len(parts[-1]) == 3:
            number_str = number_str.replace(",", "")
        else:
            number_str = number_str.replace(",", ".")

    try:
        return Decimal(number_str)
    except InvalidOperation:
        return None


def _to_int(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def _normalize_shorthand(text: str) -> int | None:
    match = _SHORTHAND_RE.match(text)
    if not match:
        return None
    number = parse_number(match.group(1))
    if number is None:
        return None
    return _to_int(number * SHORTHAND_MULTIPLIERS[(match.group(2) or match.group(3)).lower()])


def _normalize_plain(text: str) -> int | None:
    match = _PLAIN_RE.match(text)
    if not match:
        return None
    number = parse_number(match.group(1))
    if number is None:
        return None
    return _to_int(number)


def _normalize_words(text: str) -> int | None:
    """
    Akumulator kata angka.

    Kata digit menambah akumulator, "puluh"/"belas"/"ratus" menutup satu
    kelompok ratusan, dan pengali >= 1000 mengalikan kelompok berjalan lalu
    menambahkannya ke total. Token yang tidak dikenal dilewati.
    """
    total = 0
    group = 0
    current = 0
    recognized = False

    for token in text.lower().split():
        if token in DIGIT_WORDS:
            current += DIGIT_WORDS[token]
        elif token == "seratus":
            group += GROUP_WORDS[token] + current
            current = 0
        elif token == "belas":
            group += current + GROUP_WORDS[token]
            current = 0
        elif token in GROUP_WORDS:
            group += current * GROUP_WORDS[token]
            current = 0
        elif token in SCALE_WORDS:
            accumulator = group + current
            if token.startswith("se") and accumulator == 0:
                accumulator = 1
            total += accumulator * SCALE_WORDS[token]
            group = 0
            current = 0
        else:
            continue
        recognized = True

    if not recognized:
        return None
    return total + group + current


def normalize_amount(raw: str) -> int:
    """
    Normalisasi substring nominal menjadi integer.

    Raises:
        NormalizationFailure: jika tidak ada aturan yang menghasilkan angka
    """
    text = " ".join((raw or "").split())
    if not text:
        raise NormalizationFailure(raw)

    for rule in (_normalize_shorthand, _normalize_plain, _normalize_words):
        value = rule(text)
        if value is not None and value >= 0:
            return value

    raise NormalizationFailure(raw)


def to_rupiah(value: float) -> int:
    """Bulatkan nominal OCR (float) ke integer, half-up."""
    return _to_int(Decimal(str(value)))
