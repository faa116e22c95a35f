import re

from .lexicon import MULTI_CONJUNCTION

_CONJUNCTION_RE = re.compile(re.escape(MULTI_CONJUNCTION), re.IGNORECASE)


def collapse_whitespace(text: str | None) -> str:
    return " ".join((text or "").split())


def normalize_text(text: str | None) -> str:
    """Lowercase + spasi tunggal, bentuk yang dipakai classifier."""
    return collapse_whitespace(text).lower()


def split_clauses(text: str) -> list[str]:
    """Pecah teks pada konjungsi literal " dan ", buang klausa kosong."""
    clauses = _CONJUNCTION_RE.split(collapse_whitespace(text))
    return [clause.strip() for clause in clauses if clause.strip()]
