from __future__ import annotations


class RecommendationError(RuntimeError):
    pass


class ValidationError(RecommendationError):
    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing fields: {', '.join(self.missing)}")


class DataUnavailableError(RecommendationError):
    pass
