# Data models for the search layer.
# Entries come from the store; Query, Match and traces live for one request.

from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional


class Persona(str, Enum):
    """Which persona a query's answer is scoped to."""
    A = "A"
    B = "B"
    BOTH = "Both"


# Document field names as stored in the collection.
FIELD_QUESTION = "question"
FIELD_KEYWORDS = "keywords"
FIELD_ANSWER_A = "fern_answer"
FIELD_ANSWER_B = "nannam_answer"


class AnswerFields(NamedTuple):
    """Document fields holding persona A and persona B answers."""
    a: str = FIELD_ANSWER_A
    b: str = FIELD_ANSWER_B


DEFAULT_ANSWER_FIELDS = AnswerFields()


@dataclass
class Entry:
    """One stored question/keywords/answers record.

    Values are kept exactly as the store returned them; the scorer and the
    answer selector check types where they use a field.
    """
    id: str
    question: Any = None
    keywords: Any = None
    answer_a: Any = None
    answer_b: Any = None

    @classmethod
    def from_dict(
        cls,
        doc_id: str,
        data: Optional[Dict[str, Any]],
        fields: AnswerFields = DEFAULT_ANSWER_FIELDS,
    ) -> "Entry":
        data = data or {}
        return cls(
            id=str(doc_id),
            question=data.get(FIELD_QUESTION),
            keywords=data.get(FIELD_KEYWORDS),
            answer_a=data.get(fields.a),
            answer_b=data.get(fields.b),
        )

    def answer_for(self, persona: Persona) -> Optional[str]:
        value = self.answer_a if persona is Persona.A else self.answer_b
        if isinstance(value, str) and value.strip():
            return value
        return None

    @property
    def question_text(self) -> Optional[str]:
        return self.question if isinstance(self.question, str) else None


@dataclass
class Query:
    """A normalized inbound message."""
    raw: str
    persona: Persona
    cleaned: str
    keywords: List[str] = field(default_factory=list)

    @property
    def search_text(self) -> str:
        return self.cleaned or self.raw


@dataclass
class Match:
    """Scoring result for one candidate entry."""
    entry: Entry
    score: float
    signals: List[str] = field(default_factory=list)


@dataclass
class RankResult:
    best: Optional[Match]
    ranked: List[Match]


@dataclass
class SearchTrace:
    """Per-request diagnostics handed to the trace hook."""
    raw: str
    persona: Persona
    cleaned: str
    keywords: List[str]
    candidates: int = 0
    best_id: Optional[str] = None
    best_score: float = float("-inf")
    accepted: bool = False
    outcome: str = ""
    top: List[Dict[str, Any]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "raw": self.raw,
            "persona": self.persona.value,
            "cleaned": self.cleaned,
            "keywords": list(self.keywords),
            "candidates": self.candidates,
            "best_id": self.best_id,
            "best_score": finite_or_none(self.best_score),
            "accepted": self.accepted,
            "outcome": self.outcome,
            "top": list(self.top),
        }


def finite_or_none(score: float) -> Optional[float]:
    """JSON cannot carry -inf; unmatched scores are reported as null."""
    return score if math.isfinite(score) else None
