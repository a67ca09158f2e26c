import math

import pytest

from app.core.types import DistanceResult
from app.services.ranking import rank
from conftest import make_distances


def test_rank_orders_ascending_and_keeps_directory_order_on_ties():
    distances = make_distances([120, 50, 300, 50, 10])
    assert rank(distances, 3) == [4, 1, 3]


def test_rank_returns_everything_when_k_exceeds_candidates():
    distances = make_distances([500, 20, 40, 10, 30])
    order = rank(distances, 10)
    assert len(order) == 5
    assert order == [3, 1, 4, 2, 0]


@pytest.mark.parametrize("k", [1, 2, 4, 6])
def test_rank_length_is_min_of_k_and_usable(k):
    distances = make_distances([5, 4, 3, 2])
    assert len(rank(distances, k)) == min(k, 4)


def test_rank_excludes_unusable_destinations():
    distances = [
        DistanceResult(index=0, status="OK", distance_m=900),
        DistanceResult(index=1, status="NOT_FOUND"),
        DistanceResult(index=2, status="OK", distance_m=100),
        DistanceResult(index=3, status="ZERO_RESULTS"),
    ]
    assert rank(distances, 5) == [2, 0]


def test_rank_can_append_unusable_as_last_resort():
    distances = [
        DistanceResult(index=0, status="NOT_FOUND"),
        DistanceResult(index=1, status="OK", distance_m=70),
        DistanceResult(index=2, status="ZERO_RESULTS", distance_m=math.inf),
    ]
    assert rank(distances, 3, include_unusable=True) == [1, 0, 2]
    assert rank(distances, 2, include_unusable=True) == [1, 0]


def test_rank_zero_distance_is_usable():
    distances = make_distances([0, 15])
    assert rank(distances, 1) == [0]


def test_rank_rejects_non_positive_k():
    with pytest.raises(ValueError):
        rank(make_distances([1, 2]), 0)


def test_rank_empty_input():
    assert rank([], 3) == []
