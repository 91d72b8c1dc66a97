import math

import pytest

from mail_augment.domain.similarity import DimensionMismatchError, clamp_score, cosine_similarity, rank


@pytest.mark.parametrize("vector", [[1.0], [3.0, -4.0], [0.1, 0.2, 0.3, 0.4], [-7.5, 2.0, 1e-3]])
def test_self_similarity_is_one(vector):
    assert cosine_similarity(vector, vector) == pytest.approx(1.0)


def test_dimension_mismatch_raises():
    with pytest.raises(DimensionMismatchError) as exc_info:
        cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])
    assert exc_info.value.len_a == 2
    assert exc_info.value.len_b == 3


def test_zero_vector_scores_zero():
    score = cosine_similarity([0, 0, 0], [1, 2, 3])
    assert score == 0
    assert not math.isnan(score)
    assert cosine_similarity([0, 0], [0, 0]) == 0


def test_orthogonal_and_opposite_vectors():
    assert cosine_similarity([1, 0], [0, 1]) == 0
    assert cosine_similarity([1, 2], [-1, -2]) == pytest.approx(-1.0)


def _unit(score):
    return [score, math.sqrt(1 - score * score)]


def test_rank_orders_by_descending_score():
    candidates = [("A", _unit(0.9)), ("B", _unit(0.5)), ("C", _unit(0.95))]

    ranked = rank([1.0, 0.0], candidates)

    assert [candidate.id for candidate in ranked] == ["C", "A", "B"]
    assert [candidate.score for candidate in ranked] == pytest.approx([0.95, 0.9, 0.5])


def test_rank_breaks_ties_by_input_order():
    candidates = [("first", [1.0, 0.0]), ("best", [0.0, 1.0]), ("second", [1.0, 0.0]), ("third", [1.0, 0.0])]

    ranked = rank([3.0, 4.0], candidates)

    assert [candidate.id for candidate in ranked] == ["best", "first", "second", "third"]


def test_rank_filters_and_caps():
    candidates = [("A", _unit(0.9)), ("B", _unit(0.5)), ("C", _unit(0.95)), ("D", _unit(0.1))]

    assert [c.id for c in rank([1.0, 0.0], candidates, min_score=0.4)] == ["C", "A", "B"]
    assert [c.id for c in rank([1.0, 0.0], candidates, top_k=2)] == ["C", "A"]
    assert rank([1.0, 0.0], []) == []


def test_rank_propagates_dimension_mismatch():
    with pytest.raises(DimensionMismatchError):
        rank([1.0, 0.0], [("A", [1.0, 0.0]), ("B", [1.0, 0.0, 0.0])])


def test_clamp_score():
    assert clamp_score(1.0000000002) == 1.0
    assert clamp_score(-1.2) == -1.0
    assert clamp_score(0.3) == 0.3
