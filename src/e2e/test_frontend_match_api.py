import pytest

import lexmatch_web.web as webmod
from lexmatch.engine import Engine
from lexmatch.models import MatchOptions
from lexmatch_web.web import app as flask_app


@pytest.fixture
def client(monkeypatch):
    eng = Engine(MatchOptions(mode="tokens"))
    eng.load(queries=["run", "cat"])
    monkeypatch.setattr(webmod, "_engine", eng)
    try:
        yield flask_app.test_client()
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_health_lists_lexicons(client):
    rv = client.get("/api/health")
    assert rv.status_code == 200
    assert rv.get_json() == {"ok": True, "lexicons": ["custom"]}


@pytest.mark.e2e
def test_match_tokens_with_coverage(client):
    rv = client.post("/api/match", json={"text": "I run daily.", "coverage": True})
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["matches"] == [
        {"text": "run", "begin": 2, "end": 5, "lexicons": ["custom"], "document": "request"},
    ]
    (cov,) = data["coverage"]
    assert (cov["scope"], cov["matched"], cov["total"]) == ("tokens", 1, 3)
    assert data["lines"] == []


@pytest.mark.e2e
def test_match_substring_mode(client):
    rv = client.post("/api/match", json={"text": "the cat sat on the category mat.", "mode": "substring", "id": "t1"})
    assert rv.status_code == 200
    assert rv.get_json()["matches"] == [
        {"entry": "cat", "lexicon": "custom", "count": 1, "offsets": [4], "document": "t1"},
    ]


@pytest.mark.e2e
@pytest.mark.parametrize("payload", [
    {"text": "x", "mode": "substring", "coverage": True},
    {"text": "x", "mode": "window"},
    {"text": 3},
    ["I run daily."],
    "I run daily.",
    {"text": "ABCD", "mode": "window", "max_window_length": 2.5},
    {"text": "ABCD", "mode": "window", "max_window_length": "3"},
    {"text": "I run", "min_token_length": "2"},
])
def test_bad_requests_are_400(client, payload):
    rv = client.post("/api/match", json=payload)
    assert rv.status_code == 400
    assert "error" in rv.get_json()


@pytest.mark.e2e
def test_match_without_engine_is_503(monkeypatch):
    monkeypatch.setattr(webmod, "_engine", None)
    rv = flask_app.test_client().post("/api/match", json={"text": "x"})
    assert rv.status_code == 503


@pytest.mark.e2e
def test_home_page_renders(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "Lexicon matcher" in r.data.decode("utf-8")
