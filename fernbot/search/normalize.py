# Query normalization: alias removal and keyword extraction.
# Both helpers are pure and never raise.

from __future__ import annotations

import re
from typing import Iterable, List

_WS = re.compile(r"\s+")
# Thai block plus Latin letters; everything else is stripped from a token.
_NON_LETTER = re.compile(r"[^\u0E00-\u0E7Fa-z]")

STOPWORDS = frozenset(
    {
        # greetings / thanks
        "สวัสดี", "สวัสดีครับ", "สวัสดีค่ะ", "สวัสดีคะ", "หวัดดี", "ดีจ้า",
        "ขอบคุณ", "ขอบคุณครับ", "ขอบคุณค่ะ", "ขอบใจ",
        # politeness particles
        "ครับ", "ค่ะ", "คะ", "คับ", "ค้าบ", "จ้า", "จ้ะ", "จ๊ะ", "นะ", "นะคะ", "นะครับ",
        "หน่อย", "ด้วย", "ที",
        # question particles
        "ไหม", "มั้ย", "มั๊ย", "เหรอ", "หรอ", "หรือ", "ล่ะ", "อะไร", "ยังไง", "อย่างไร",
        "ไหน", "บ้าง", "เปล่า",
        # fillers
        "คือ", "ที่", "และ", "กับ", "ของ", "ก็", "แล้ว", "เป็น", "ให้",
        # english fillers
        "hi", "hello", "hey", "thanks", "thank", "please", "the", "a", "an",
        "is", "are", "what", "do", "does", "you",
    }
)


def _collapse(text: str) -> str:
    return _WS.sub(" ", text).strip()


def clean(raw, aliases: Iterable[str]) -> str:
    """Remove every persona alias from ``raw`` and collapse whitespace.

    Removal repeats until no alias is left, so joins created by a removal
    (``"ferfernn"`` -> ``"fern"``) are removed as well. Returns ``""`` when
    nothing is left; callers fall back to the raw text for searching.
    """
    if not isinstance(raw, str) or not raw:
        return ""
    names = sorted({a for a in aliases if isinstance(a, str) and a}, key=len, reverse=True)
    text = _collapse(raw)
    if not names:
        return text
    pattern = re.compile("|".join(re.escape(a) for a in names), re.IGNORECASE)
    while True:
        reduced = _collapse(pattern.sub("", text))
        if reduced == text:
            return text
        text = reduced


def extract_keywords(text) -> List[str]:
    """Content words of ``text``, lower-cased, stopwords dropped, order kept."""
    if not isinstance(text, str):
        return []
    keywords: List[str] = []
    for token in text.split():
        word = _NON_LETTER.sub("", token.casefold())
        if not word or word in STOPWORDS:
            continue
        keywords.append(word)
    return keywords
