from lexmatch.index import SuffixTable, build


def _brute_force(data: bytes, pattern: bytes) -> list[int]:
    return [i for i in range(len(data) - len(pattern) + 1) if data[i:i + len(pattern)] == pattern]


def test_overlapping_occurrences_are_all_reported():
    assert build(b"aaaa").positions(b"aa") == [0, 1, 2]


def test_absent_and_empty_patterns():
    idx = build(b"hello world\n")
    assert idx.positions(b"xyz") == []
    assert idx.positions(b"") == []
    assert idx.positions(b"hello world\n!") == []


def test_empty_text():
    assert SuffixTable(b"").positions(b"a") == []


def test_agrees_with_brute_force_on_utf8_text():
    data = "de kat en de kater, 猫 en 猫猫; de kat.\n".encode("utf-8")
    idx = SuffixTable(data)
    for pattern in ("de", "kat", "kater", "猫", "猫猫", " ", ".\n", "e"):
        p = pattern.encode("utf-8")
        assert idx.positions(p) == _brute_force(data, p), pattern


def test_positions_ascending():
    data = b"abracadabra abracadabra\n"
    hits = build(data).positions(b"a")
    assert hits == sorted(hits) and len(hits) == 10
