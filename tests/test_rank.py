import math

from fernbot.search import Entry, Match, Persona, Query, SimilarityScorer
from fernbot.search.rank import is_acceptable, rank, suggestions


def q(text):
    from fernbot.search.normalize import extract_keywords
    return Query(raw=text, persona=Persona.BOTH, cleaned=text, keywords=extract_keywords(text))


def test_ties_go_to_first_seen():
    entries = [
        Entry(id="first", question="ชอบดื่มอะไร"),
        Entry(id="second", question="ชอบดื่มอะไร"),
    ]
    result = rank(q("ชอบดื่มอะไร"), entries, SimilarityScorer())
    assert result.best.entry.id == "first"
    assert [m.entry.id for m in result.ranked] == ["first", "second"]


def test_ranked_is_sorted_descending_and_covers_all_entries():
    entries = [
        Entry(id="none", question="zzz"),
        Entry(id="kw", keywords=["เครื่องดื่ม"]),
        Entry(id="exact", question="ชอบเครื่องดื่มเย็น"),
    ]
    result = rank(q("เครื่องดื่ม"), entries, SimilarityScorer())
    assert [m.entry.id for m in result.ranked] == ["exact", "kw", "none"]
    assert result.best.entry.id == "exact"
    assert result.ranked[-1].score == -math.inf


def test_no_signal_means_no_best():
    result = rank(q("zzz"), [Entry(id="1", question="abc")], SimilarityScorer())
    assert result.best is None
    assert len(result.ranked) == 1


def test_empty_candidate_set():
    result = rank(q("ชอบ"), [], SimilarityScorer())
    assert result.best is None
    assert result.ranked == []


def test_rank_is_idempotent():
    entries = [Entry(id=str(i), question=text) for i, text in enumerate(["ชอบกินอะไร", "ชอบดื่มอะไร", "สีอะไร"])]
    a = rank(q("ชอบดื่มอะไร"), entries, SimilarityScorer())
    b = rank(q("ชอบดื่มอะไร"), entries, SimilarityScorer())
    assert a.best.entry.id == b.best.entry.id
    assert [(m.entry.id, m.score) for m in a.ranked] == [(m.entry.id, m.score) for m in b.ranked]


def test_threshold_is_strict():
    e = Entry(id="1")
    assert not is_acceptable(Match(entry=e, score=-1000.0), -1000.0)
    assert is_acceptable(Match(entry=e, score=-999.5), -1000.0)
    assert not is_acceptable(None, -1000.0)
    assert not is_acceptable(Match(entry=e, score=-math.inf), -1000.0)


def test_suggestions_skip_unscored_and_questionless():
    entries = [
        Entry(id="a", question="ชอบดื่มอะไร"),
        Entry(id="b", keywords=["ดื่ม"]),
        Entry(id="c", question="ชอบดื่มอะไร"),
        Entry(id="d", question="ดื่มน้ำไหม"),
        Entry(id="e", question="zzz"),
    ]
    result = rank(q("ดื่ม"), entries, SimilarityScorer())
    out = suggestions(result, limit=3)
    assert out == ["ชอบดื่มอะไร", "ดื่มน้ำไหม"]


def test_suggestions_limit():
    entries = [Entry(id=str(i), question=f"ดื่ม{i}") for i in range(5)]
    result = rank(q("ดื่ม"), entries, SimilarityScorer())
    assert len(suggestions(result, limit=3)) == 3
