# Question-answer engine: detect persona -> normalize -> rank -> select answer.
# The store is injected; every call reads the whole collection (no cache).
# Diagnostics leave through ``trace_hook`` so the engine itself stays log-free.

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from . import messages
from .answers import select_answer
from .normalize import clean, extract_keywords
from .personas import PersonaDetector
from .rank import DEFAULT_THRESHOLD, is_acceptable, rank, suggestions
from .scoring import SimilarityScorer
from .types import Match, Persona, Query, RankResult, SearchTrace, finite_or_none

if TYPE_CHECKING:
    from ..store.base import EntryStore

TraceHook = Callable[[SearchTrace], None]

OUTCOME_ANSWERED = "answered"
OUTCOME_NO_MATCH = "no_match"
OUTCOME_EMPTY = "empty_collection"


@dataclass
class SearchOutcome:
    query: Query
    result: RankResult
    accepted: Optional[Match]
    trace: SearchTrace


@dataclass
class Reply:
    text: str
    trace: SearchTrace


class QAEngine:
    def __init__(
        self,
        store: "EntryStore",
        collection: str = "audio_content",
        detector: Optional[PersonaDetector] = None,
        scorer: Optional[SimilarityScorer] = None,
        threshold: float = DEFAULT_THRESHOLD,
        suggestion_limit: int = 3,
        trace_hook: Optional[TraceHook] = None,
        trace_top: int = 5,
    ):
        self.store = store
        self.collection = collection
        self.detector = detector or PersonaDetector()
        self.scorer = scorer or SimilarityScorer()
        self.threshold = threshold
        self.suggestion_limit = suggestion_limit
        self.trace_hook = trace_hook
        self.trace_top = trace_top

    def build_query(self, raw) -> Optional[Query]:
        """Normalize inbound text; ``None`` when there is nothing to search."""
        if not isinstance(raw, str) or not raw.strip():
            return None
        text = raw.strip()
        cleaned = clean(text, self.detector.all_aliases) or text
        return Query(
            raw=text,
            persona=self.detector.detect(text),
            cleaned=cleaned,
            keywords=extract_keywords(cleaned),
        )

    def search(self, raw) -> Optional[SearchOutcome]:
        """Rank the whole collection for ``raw``.

        Raises ``StoreUnavailableError`` when the store cannot be read.
        """
        query = self.build_query(raw)
        if query is None:
            return None
        entries = self.store.fetch_all(self.collection, self.detector.answer_fields)
        result = rank(query, entries, self.scorer)
        accepted = result.best if is_acceptable(result.best, self.threshold) else None

        trace = SearchTrace(
            raw=query.raw,
            persona=query.persona,
            cleaned=query.cleaned,
            keywords=list(query.keywords),
            candidates=len(entries),
            accepted=accepted is not None,
        )
        if result.best is not None:
            trace.best_id = result.best.entry.id
            trace.best_score = result.best.score
        trace.top = [
            {
                "id": m.entry.id,
                "question": m.entry.question_text,
                "score": finite_or_none(m.score),
                "signals": list(m.signals),
            }
            for m in result.ranked[: self.trace_top]
        ]
        if not entries:
            trace.outcome = OUTCOME_EMPTY
        elif accepted is None:
            trace.outcome = OUTCOME_NO_MATCH
        else:
            trace.outcome = OUTCOME_ANSWERED
        return SearchOutcome(query=query, result=result, accepted=accepted, trace=trace)

    def answer(self, raw) -> Optional[Reply]:
        """Reply text for ``raw``, or ``None`` for empty input."""
        outcome = self.search(raw)
        if outcome is None:
            return None
        if self.trace_hook is not None:
            self.trace_hook(outcome.trace)
        return Reply(text=self.reply_for(outcome), trace=outcome.trace)

    def reply_for(self, outcome: SearchOutcome) -> str:
        if outcome.trace.outcome == OUTCOME_EMPTY:
            return messages.NO_DATA
        if outcome.accepted is None:
            return messages.build_not_understood(
                suggestions(outcome.result, self.suggestion_limit)
            )
        return select_answer(outcome.accepted.entry, outcome.query.persona, self.persona_names())

    def persona_names(self):
        return {p: self.detector.name_of(p) for p in (Persona.A, Persona.B)}
