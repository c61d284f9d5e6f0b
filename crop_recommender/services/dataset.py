from __future__ import annotations

import io
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

# 컬럼 순서 = feature vector 순서
FEATURES: tuple[str, ...] = ("N", "P", "K", "temperature", "humidity", "ph", "rainfall")
LABEL = "label"


@dataclass(frozen=True)
class ReferenceRow:
    N: float
    P: float
    K: float
    temperature: float
    humidity: float
    ph: float
    rainfall: float
    label: str

    def vector(self) -> np.ndarray:
        return np.array([getattr(self, f) for f in FEATURES], dtype=np.float64)


@dataclass(frozen=True, eq=False)
class ReferenceSet:
    features: np.ndarray        # (n, 7) float64, read-only
    labels: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[ReferenceRow]:
        for i in range(len(self)):
            yield self.row(i)

    def row(self, i: int) -> ReferenceRow:
        return ReferenceRow(*(float(v) for v in self.features[i]), label=self.labels[i])

    @classmethod
    def from_rows(cls, rows: list[ReferenceRow]) -> ReferenceSet:
        if not rows:
            return cls.empty()
        features = np.array([r.vector() for r in rows], dtype=np.float64)
        return _freeze(features, [r.label for r in rows])

    @classmethod
    def empty(cls) -> ReferenceSet:
        return _freeze(np.empty((0, len(FEATURES)), dtype=np.float64), [])


def _freeze(features: np.ndarray, labels: list[str]) -> ReferenceSet:
    arr = np.array(features, dtype=np.float64)
    arr.setflags(write=False)
    return ReferenceSet(features=arr, labels=tuple(labels))


def _resolve_columns(columns) -> dict[str, str]:
    """header 이름(소문자, trim) -> 실제 DataFrame 컬럼. 중복이면 첫 번째 컬럼."""
    out: dict[str, str] = {}
    for c in columns:
        out.setdefault(str(c).strip().lower(), c)
    return out


def parse_reference_csv(path: str | Path) -> ReferenceSet:
    """
    첫 줄은 header. 컬럼 위치는 이름으로 찾음(대소문자 무시, 순서 무관).
    - header에 없는 feature 컬럼은 전부 NaN, label이 없으면 ""
    - 숫자로 파싱 안 되는 값은 NaN
    - N이 유한한 숫자가 아닌 row만 제외
    - header보다 필드가 많은 row는 뒤쪽 필드를 버리고 유지
    """
    text = Path(path).read_text(encoding="utf-8-sig")
    n_cols = len(pd.read_csv(io.StringIO(text), nrows=0).columns)

    df = pd.read_csv(
        io.StringIO(text),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        index_col=False,
        engine="python",
        on_bad_lines=lambda bad: bad[:n_cols],
    )
    cols = _resolve_columns(df.columns)

    matrix = np.full((len(df), len(FEATURES)), np.nan, dtype=np.float64)
    for j, name in enumerate(FEATURES):
        col = cols.get(name.lower())
        if col is None:
            continue
        values = pd.to_numeric(df[col].str.strip(), errors="coerce")
        matrix[:, j] = values.to_numpy(dtype=np.float64, na_value=np.nan)

    label_col = cols.get(LABEL)
    if label_col is None:
        labels = [""] * len(df)
    else:
        labels = df[label_col].fillna("").str.strip().tolist()

    keep = np.isfinite(matrix[:, 0])
    ref = _freeze(matrix[keep], [lb for lb, k in zip(labels, keep) if k])
    logger.info(
        f"Crop dataset loaded: {path} ({len(df)} data lines, {len(ref)} rows kept, "
        f"{int((~keep).sum())} dropped, {len(set(ref.labels))} labels)"
    )
    return ref


class DatasetLoader:
    """Reference dataset을 프로세스당 한 번만 읽어서 캐시."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._reference: ReferenceSet | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._reference is not None

    def load(self) -> ReferenceSet:
        ref = self._reference
        if ref is not None:
            return ref

        with self._lock:
            if self._reference is None:
                self._reference = self._read()
            return self._reference

    def _read(self) -> ReferenceSet:
        if not self.path.exists():
            # 파일이 없어도 에러가 아니라 빈 dataset (이후 요청은 data unavailable)
            logger.warning(f"Crop dataset not found at {self.path}")
            return ReferenceSet.empty()

        return parse_reference_csv(self.path)
