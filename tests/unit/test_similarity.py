import pytest

from lexical_rag.retrieval.similarity import cosine


def test_cosine_is_commutative() -> None:
    pairs = [
        ({"a": 0.5, "b": 0.5}, {"b": 0.25, "c": 0.75}),
        ({"x": 1.0}, {"x": 0.2, "y": 0.3, "z": 0.5}),
        ({"p": 0.1, "q": 0.9}, {"r": 1.0}),
    ]
    for a, b in pairs:
        assert cosine(a, b) == cosine(b, a)


def test_cosine_empty_is_zero() -> None:
    assert cosine({}, {"a": 1.0}) == 0.0
    assert cosine({"a": 1.0}, {}) == 0.0
    assert cosine({}, {}) == 0.0


def test_cosine_zero_norm_is_zero() -> None:
    assert cosine({"a": 0.0}, {"a": 1.0}) == 0.0


def test_cosine_self_similarity_is_one() -> None:
    vector = {"the": 0.5, "cat": 0.25, "sat": 0.25}

    assert cosine(vector, vector) == pytest.approx(1.0)


def test_cosine_uses_full_norms() -> None:
    a = {"cat": 1.0}
    b = {"the": 1 / 3, "cat": 1 / 3, "sat": 1 / 3}

    assert cosine(a, b) == pytest.approx(1 / 3**0.5)


def test_cosine_disjoint_is_zero() -> None:
    assert cosine({"a": 1.0}, {"b": 1.0}) == 0.0


def test_cosine_never_exceeds_one() -> None:
    vectors = [
        {"a": 0.1, "b": 0.2, "c": 0.7},
        {"x": 1 / 3, "y": 1 / 3, "z": 1 / 3},
        {f"t{n}": 1 / 7 for n in range(7)},
        {"eino": 0.3, "stream": 0.1, "sse": 0.6},
    ]
    for vector in vectors:
        score = cosine(vector, vector)
        assert score <= 1.0
        assert score == pytest.approx(1.0)
