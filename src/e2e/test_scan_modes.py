import pytest

from lexmatch.engine import Engine
from lexmatch.models import CoverageRecord, LineCoverage, Lexicon, LexiconCollection, MatchOptions, MatchResult


def _engine(options, **named):
    eng = Engine(options)
    eng.attach(LexiconCollection(tuple(Lexicon.from_entries(n, e) for n, e in named.items())))
    return eng


def test_token_mode_single_match():
    eng = _engine(MatchOptions(mode="tokens"), verbs=["run"])
    rows = list(eng.match(eng.document("doc", "I run daily.\n")))
    assert rows == [MatchResult("run", 2, 5, ("verbs",), "doc")]


def test_token_mode_does_not_match_inside_words():
    eng = _engine(MatchOptions(mode="tokens"), animals=["cat"])
    rows = list(eng.match(eng.document("doc", "the cat sat on the category mat.")))
    assert [(r.text, r.begin) for r in rows] == [("cat", 4)]


def test_token_mode_coverage_records():
    eng = _engine(MatchOptions(mode="tokens", coverage=True), lex=["a"])
    records = list(eng.run([eng.document("doc", "a a b\n")]))
    assert [type(r) for r in records] == [MatchResult, MatchResult, CoverageRecord]
    cov = records[-1]
    assert (cov.matched, cov.total) == (2, 3)
    assert cov.ratio == pytest.approx(0.6666666666666666)


def test_window_mode_scenario():
    eng = _engine(MatchOptions(mode="window", max_window_length=3), lex=["AB", "ABC"])
    rows = list(eng.match(eng.document("doc", "ABCD")))
    assert rows == [MatchResult("ABC", 0, 3, ("lex",), "doc")]


def test_window_mode_character_coverage():
    eng = _engine(MatchOptions(mode="window", max_window_length=2, coverage=True), lex=["北京"])
    counters = eng.coverage(eng.document("doc", "我爱北京"))
    # four characters plus the appended newline
    assert (counters.scope, counters.matched, counters.total) == ("chars", [2], 5)


def test_coverage_matrix_rows_follow_document_results():
    eng = _engine(MatchOptions(mode="tokens", coverage_matrix=True), first=["a"], second=["b"])
    records = list(eng.run([eng.document("doc", "a b\nc\n\na a\n")]))
    lines = [r for r in records if isinstance(r, LineCoverage)]
    assert [(r.line_no, r.ratios, r.aggregate) for r in lines] == [
        (1, (0.5, 0.5), 1.0),
        (2, (0.0, 0.0), 0.0),
        (4, (1.0, 0.0), 1.0),
    ]


def test_min_token_length_applies_before_lookup():
    eng = _engine(MatchOptions(mode="tokens", min_token_length=3, coverage=True), lex=["an", "ant"])
    counters = eng.coverage(eng.document("doc", "an ant"))
    assert (counters.matched, counters.total) == ([1], 1)


def test_engine_requires_lexicons():
    eng = Engine(MatchOptions(mode="tokens"))
    with pytest.raises(RuntimeError):
        list(eng.match(eng.document("doc", "text")))


def test_window_mode_coverage_per_lexicon():
    eng = _engine(MatchOptions(mode="window", max_window_length=2, coverage=True),
                  cities=["北京"], verbs=["爱", "北京"])
    records = [r for r in eng.run([eng.document("doc", "我爱北京")]) if isinstance(r, CoverageRecord)]
    assert [(r.lexicon, r.matched, r.total) for r in records] == [
        ("cities", 2, 5),
        ("verbs", 3, 5),
        (None, 3, 5),
    ]
