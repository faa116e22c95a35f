"""
Normalisasi kategori.

Dua jalur dengan kebijakan fallback berbeda:
- jalur teks (pesan yang diketik): sinonim persis, lalu Levenshtein <= 2,
  selain itu teks diteruskan apa adanya (lowercase)
- jalur merchant (khusus OCR fusion): pola regex berurutan, fallback "lainnya"
"""

import re
from collections.abc import Iterable, Mapping

from .lexicon import FALLBACK_CATEGORY, MERCHANT_CATEGORY_PATTERNS, SYNONYM_TABLE
from .models import NormalizedCategory, Provenance

DEFAULT_MAX_DISTANCE = 2

COMPILED_MERCHANT_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), category)
    for pattern, category in MERCHANT_CATEGORY_PATTERNS
)


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance (insert/delete/substitute) dengan tabel DP standar."""
    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            else:
                dp[i][j] = 1 + min(
                    dp[i - 1][j],      # deletion
                    dp[i][j - 1],      # insertion
                    dp[i - 1][j - 1],  # substitution
                )
    return dp[m][n]


def resolve_category(
    raw: str,
    synonyms: Mapping[str, str] = SYNONYM_TABLE,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> NormalizedCategory | None:
    """Jalur teks dengan provenance. None jika input kosong."""
    normalized = " ".join((raw or "").lower().split())
    if not normalized:
        return None

    if normalized in synonyms:
        return NormalizedCategory(synonyms[normalized], Provenance.TEXT)

    best_key: str | None = None
    best_distance = max_distance + 1
    for key in synonyms:
        distance = levenshtein_distance(normalized, key)
        # strict "<" keeps the first key in table order on ties
        if distance < best_distance:
            best_key, best_distance = key, distance

    if best_key is not None and best_distance <= max_distance:
        return NormalizedCategory(synonyms[best_key], Provenance.TEXT)

    return NormalizedCategory(normalized, Provenance.PASSTHROUGH)


def normalize_category(
    raw: str,
    synonyms: Mapping[str, str] = SYNONYM_TABLE,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> str:
    resolved = resolve_category(raw, synonyms, max_distance)
    return resolved.name if resolved else ""


def infer_category_from_merchant(
    merchant: str | None,
    patterns: Iterable[tuple[re.Pattern[str], str]] = COMPILED_MERCHANT_PATTERNS,
    fallback: str = FALLBACK_CATEGORY,
) -> str:
    """Jalur merchant: pola pertama yang cocok menang, selain itu fallback."""
    if merchant:
        for pattern, category in patterns:
            if pattern.search(merchant):
                return category
    return fallback
