from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Sequence

from crop_recommender.services.ranker import Neighbor


@dataclass(frozen=True)
class RankedLabel:
    label: str
    score: int

    def to_dict(self) -> dict:
        return asdict(self)


def aggregate(neighbors: Sequence[Neighbor], k: int) -> list[RankedLabel]:
    """
    상위 k개 neighbor의 label 투표.
    score 내림차순, 동점이면 top-k 안에서 먼저 나온 label이 앞.
    """
    if k <= 0:
        return []

    counts: dict[str, int] = {}
    for n in neighbors[:k]:
        counts[n.row.label] = counts.get(n.row.label, 0) + 1

    # dict는 첫 등장 순서 유지 + sorted는 stable
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [RankedLabel(label=label, score=score) for label, score in ranked]
