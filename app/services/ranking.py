from typing import List, Sequence

from app.core.types import DistanceResult


def rank(distances: Sequence[DistanceResult], k: int, include_unusable: bool = False) -> List[int]:
    """
    Return the indices of the ``k`` smallest usable distances, ascending.
    Ties keep directory order. Unusable entries are dropped unless ``include_unusable``
    is set, in which case they follow the usable ones in index order.
    """
    if k < 1:
        raise ValueError("k must be a positive integer")

    # (distance, index) tuples sort ties by directory order
    usable = sorted((d.distance_m, i) for i, d in enumerate(distances) if d.usable)
    order = [i for _, i in usable]
    if include_unusable:
        order.extend(i for i, d in enumerate(distances) if not d.usable)
    return order[:k]
