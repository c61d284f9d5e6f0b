from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from crop_recommender.services.dataset import FEATURES, ReferenceSet


def normalize(value: float, lo: float, hi: float) -> float:
    den = (hi - lo) or 1.0
    return (value - lo) / den


@dataclass(frozen=True, eq=False)
class FeatureBounds:
    mins: np.ndarray    # (7,)
    maxs: np.ndarray    # (7,)

    def normalize(self, values: np.ndarray) -> np.ndarray:
        """(7,) 또는 (n, 7) 입력을 feature별 min-max로 [0, 1] 스케일."""
        den = self.maxs - self.mins
        den = np.where(den == 0, 1.0, den)
        return (np.asarray(values, dtype=np.float64) - self.mins) / den

    def as_dict(self) -> dict[str, tuple[float, float]]:
        return {f: (float(lo), float(hi)) for f, lo, hi in zip(FEATURES, self.mins, self.maxs)}


def compute_bounds(reference: ReferenceSet) -> FeatureBounds:
    mins = np.zeros(len(FEATURES), dtype=np.float64)
    maxs = np.zeros(len(FEATURES), dtype=np.float64)

    for j in range(len(FEATURES)):
        col = reference.features[:, j]
        finite = col[np.isfinite(col)]
        # malformed 값(NaN)은 bounds 계산에서 제외
        if finite.size:
            mins[j] = finite.min()
            maxs[j] = finite.max()

    return FeatureBounds(mins=mins, maxs=maxs)
