"""Text heuristics over OCR output: keywords, dates, legibility."""
from __future__ import annotations

import re
from typing import Iterable, Optional

APOSTILLE_KEYWORDS = (
    "apostille",
    "hague convention",
    "convention de la haye",
    "apostilla",
    "apostila",
)

# certification tags (normalised) that stand in for an apostille
APOSTILLE_CERTIFICATIONS = frozenset(
    {"apostille", "apostilled", "apostille_certificate", "hague_apostille", "e_apostille"}
)

NOTARIZATION_KEYWORDS = ("notary", "notarized", "notarised", "notarial")
NOTARIZATION_CERTIFICATIONS = frozenset(
    {"notarization", "notarisation", "notarized", "notary_authentication", "notarial_certificate"}
)

SIGNATURE_KEYWORDS = (
    "signature",
    "signed",
    "firma",
    "assinatura",
    "unterschrift",
    "подпись",
)

SEAL_KEYWORDS = (
    "seal",
    "stamp",
    "notary",
    "certified",
    "official",
    "embassy",
    "consulate",
    "ministry",
    "department",
)

_MONTHS = (
    "january|february|march|april|may|june|july|august|september|october|november|december"
)

# digit guards only: OCR output glues dates to letters ("15/05/2020г",
# "2020-05-15T10:00:00Z")
DATE_PATTERNS = (
    re.compile(r"(?<!\d)\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}(?!\d)"),
    re.compile(r"(?<!\d)\d{4}[/\-.]\d{1,2}[/\-.]\d{1,2}(?!\d)"),
    re.compile(rf"\b(?:{_MONTHS})\s+\d{{1,2}},?\s+\d{{4}}(?!\d)", re.IGNORECASE),
    re.compile(rf"(?<!\d)\d{{1,2}}\s+(?:{_MONTHS}),?\s+\d{{4}}(?!\d)", re.IGNORECASE),
)

# anything that is not a word character, whitespace or ordinary punctuation
_ILLEGIBLE_RE = re.compile(r"[^\w\s.,;:!?'\"()\[\]/&%#@$+\-]")

LETTER_COUNTRIES = frozenset({"US", "CA", "MX", "PH", "CL", "CO", "VE", "CR", "GT", "DO", "PA", "SV"})
DEFAULT_PAPER_SIZE = "A4"


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    low = (text or "").casefold()
    return any(k.casefold() in low for k in keywords)


def find_keyword(text: str, keywords: Iterable[str]) -> Optional[str]:
    low = (text or "").casefold()
    for k in keywords:
        if k.casefold() in low:
            return k
    return None


def illegible_ratio(text: str) -> float:
    """Share of characters that look like OCR noise; 0.0 for empty text."""
    if not text:
        return 0.0
    return len(_ILLEGIBLE_RE.findall(text)) / len(text)


def contains_date(text: str) -> bool:
    return any(p.search(text or "") for p in DATE_PATTERNS)


def expected_paper_size(country_code: str, override: Optional[str] = None) -> str:
    if override:
        return override
    return "Letter" if country_code in LETTER_COUNTRIES else DEFAULT_PAPER_SIZE


def same_paper_size(a: str, b: str) -> bool:
    def _norm(s: str) -> str:
        s = re.sub(r"[\s_\-]+", "", s).lower()
        return "letter" if s in {"usletter", "letter", "ansia"} else s

    return _norm(a) == _norm(b)


__all__ = [
    "APOSTILLE_KEYWORDS",
    "APOSTILLE_CERTIFICATIONS",
    "NOTARIZATION_KEYWORDS",
    "NOTARIZATION_CERTIFICATIONS",
    "SIGNATURE_KEYWORDS",
    "SEAL_KEYWORDS",
    "DATE_PATTERNS",
    "LETTER_COUNTRIES",
    "DEFAULT_PAPER_SIZE",
    "contains_any",
    "find_keyword",
    "illegible_ratio",
    "contains_date",
    "expected_paper_size",
    "same_paper_size",
]
