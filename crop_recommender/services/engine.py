from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

import numpy as np

from crop_recommender.core.config import settings
from crop_recommender.services.aggregator import RankedLabel, aggregate
from crop_recommender.services.dataset import FEATURES, DatasetLoader, ReferenceSet
from crop_recommender.services.errors import DataUnavailableError, ValidationError
from crop_recommender.services.normalizer import FeatureBounds, compute_bounds
from crop_recommender.services.ranker import rank

logger = logging.getLogger(__name__)


def _is_missing(v: Any) -> bool:
    return v is None or (isinstance(v, str) and v == "")


class CropRecommendationEngine:
    def __init__(self, dataset_path: str | Path | None = None, top_k: int | None = None) -> None:
        self.loader = DatasetLoader(dataset_path or settings.CROP_DATASET_PATH)
        self.top_k = int(top_k if top_k is not None else settings.KNN_TOPK)

        self._bounds: FeatureBounds | None = None
        self._lock = threading.Lock()

    def startup_load(self) -> None:
        reference, _ = self._reference_and_bounds()
        if len(reference) == 0:
            logger.warning("Crop recommendation disabled: reference dataset is empty")

    def recommend(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        기대 payload: N, P, K, temperature, humidity, ph, rainfall (숫자, 전부 필수)

        반환:
          - input: 입력 echo
          - recommendations: [{"label", "score"}, ...] score 내림차순
          - top: recommendations[0].label 또는 None
        """
        required = {f: payload.get(f) for f in FEATURES}
        missing = [f for f, v in required.items() if _is_missing(v)]
        if missing:
            raise ValidationError(missing)

        ranked = self.rank_labels(np.array([float(required[f]) for f in FEATURES], dtype=np.float64))
        top = (ranked[0].label or None) if ranked else None
        logger.info(f"Crop recommendation: top={top} candidates={len(ranked)}")

        return {
            "input": required,
            "recommendations": [r.to_dict() for r in ranked],
            "top": top,
        }

    def rank_labels(self, query: np.ndarray) -> list[RankedLabel]:
        reference, bounds = self._reference_and_bounds()
        if len(reference) == 0 or bounds is None:
            raise DataUnavailableError(f"reference dataset is empty or missing: {self.loader.path}")

        neighbors = rank(query, reference, bounds)
        k = min(self.top_k, len(reference))
        return aggregate(neighbors, k)

    def describe(self) -> dict[str, Any]:
        reference, bounds = self._reference_and_bounds()
        return {
            "path": str(self.loader.path),
            "loaded": self.loader.loaded,
            "rows": len(reference),
            "labels": sorted(set(reference.labels)),
            "bounds": bounds.as_dict() if bounds is not None else {},
        }

    # -----------------------------
    # lazy cache
    # -----------------------------
    def _reference_and_bounds(self) -> tuple[ReferenceSet, FeatureBounds | None]:
        reference = self.loader.load()
        if len(reference) == 0:
            return reference, None

        if self._bounds is None:
            with self._lock:
                if self._bounds is None:
                    self._bounds = compute_bounds(reference)
        return reference, self._bounds
