"""Normalisasi token tanggal (numerik D-M-Y, nama bulan, hari ini/kemarin/besok)."""

import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from .lexicon import MONTHS, RELATIVE_DAYS

_MONTH_NAMES = "|".join(sorted(MONTHS, key=len, reverse=True))

# Pattern tanggal - urut dari paling spesifik
DATE_PATTERNS: tuple[tuple[str, str], ...] = (
    (r"(\d{4})[/\-](\d{1,2})[/\-](\d{1,2})", "ymd"),
    (r"(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})", "dmy"),
    (r"(\d{1,2})[/\-](\d{1,2})[/\-](\d{2})", "dmy_short"),
    (rf"(\d{{1,2}})\s+({_MONTH_NAMES})[a-z]*\s+(\d{{4}})", "dmy_text"),
)

DATE_TOKEN_RE = re.compile(
    r"(?<!\d)(?:"
    + "|".join(pattern for pattern, _ in DATE_PATTERNS)
    + r")(?!\d)|\b(?:"
    + "|".join(RELATIVE_DAYS)
    + r")\b",
    re.IGNORECASE,
)


def today_in(timezone: str) -> date:
    return datetime.now(ZoneInfo(timezone)).date()


def normalize_date(text: str | None, today: date) -> date | None:
    """
    Ubah token tanggal menjadi `date`.

    Tanggal kalender yang mustahil (mis. 31-02-2024) dianggap tidak ada.
    """
    if not text:
        return None
    lowered = " ".join(text.lower().split())

    if lowered in RELATIVE_DAYS:
        return today + timedelta(days=RELATIVE_DAYS[lowered])

    for pattern, format_type in DATE_PATTERNS:
        match = re.fullmatch(pattern, lowered)
        if not match:
            continue
        groups = match.groups()
        try:
            if format_type == "ymd":
                year, month, day = int(groups[0]), int(groups[1]), int(groups[2])
            elif format_type == "dmy":
                day, month, year = int(groups[0]), int(groups[1]), int(groups[2])
            elif format_type == "dmy_short":
                day, month, year = int(groups[0]), int(groups[1]), 2000 + int(groups[2])
            else:
                day = int(groups[0])
                month = MONTHS[groups[1]]
                year = int(groups[2])
            return date(year, month, day)
        except (ValueError, KeyError):
            return None

    return None
