from __future__ import annotations

from typing import NamedTuple

import numpy as np

from crop_recommender.services.dataset import ReferenceRow, ReferenceSet
from crop_recommender.services.normalizer import FeatureBounds


class Neighbor(NamedTuple):
    row: ReferenceRow
    distance: float


def distances(query: np.ndarray, reference: ReferenceSet, bounds: FeatureBounds) -> np.ndarray:
    """정규화 공간에서 query와 모든 row 사이의 Euclidean distance, shape (n,)."""
    q = bounds.normalize(query)
    V = bounds.normalize(reference.features)
    return np.sqrt(((V - q) ** 2).sum(axis=1))


def rank(query: np.ndarray, reference: ReferenceSet, bounds: FeatureBounds) -> list[Neighbor]:
    if len(reference) == 0:
        return []

    dists = distances(query, reference, bounds)
    # stable: 같은 거리면 dataset 순서 유지, NaN은 맨 뒤
    idx = np.argsort(dists, kind="stable")
    return [Neighbor(reference.row(int(i)), float(dists[i])) for i in idx]
