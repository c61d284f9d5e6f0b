from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CropRecommendRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    # 전부 필수. 누락/빈 문자열은 handler에서 "Missing fields: ..."로 처리
    N: float | None = None
    P: float | None = None
    K: float | None = None
    temperature: float | None = None
    humidity: float | None = None
    ph: float | None = None
    rainfall: float | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v == "":
            return None
        return v


class RankedLabelOut(BaseModel):
    label: str
    score: int = Field(..., description="top-k neighbor 중 해당 label 득표 수")


class CropRecommendResponse(BaseModel):
    input: dict[str, float]
    recommendations: list[RankedLabelOut]
    top: str | None = None


class DatasetInfoResponse(BaseModel):
    path: str
    loaded: bool
    rows: int
    labels: list[str]
    bounds: dict[str, tuple[float, float]]
