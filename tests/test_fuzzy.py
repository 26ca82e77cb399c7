from dbtui.ui.fuzzy import find

TABLES = ["users", "orders", "products", "categories", "order_items"]


def test_only_candidates_with_pattern_match():
    matches = find("o", TABLES)
    texts = {m.text for m in matches}
    assert "users" not in texts
    assert texts == {t for t in TABLES if "o" in t}


def test_index_refers_to_candidate():
    for match in find("or", TABLES):
        assert TABLES[match.index] == match.text


def test_matched_indexes_follow_pattern():
    pattern = "ois"
    for match in find(pattern, TABLES):
        chars = "".join(match.text[i] for i in match.matched_indexes)
        assert chars.lower() == pattern
        assert list(match.matched_indexes) == sorted(match.matched_indexes)


def test_case_insensitive():
    matches = find("USR", ["users"])
    assert [m.text for m in matches] == ["users"]


def test_empty_pattern_matches_nothing():
    assert find("", TABLES) == []


def test_no_match():
    assert find("zzz", TABLES) == []


def test_scores_are_descending():
    scores = [m.score for m in find("o", TABLES)]
    assert scores == sorted(scores, reverse=True)


def test_prefix_ranks_first():
    matches = find("ord", ["words", "orders"])
    assert matches[0].text == "orders"
    assert len(matches) == 2