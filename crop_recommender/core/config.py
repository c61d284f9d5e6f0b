from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    # Reference dataset (CSV with N,P,K,temperature,humidity,ph,rainfall,label)
    CROP_DATASET_PATH: str = str(PROJECT_ROOT / "data" / "Crop_recommendation.csv")
    PRELOAD_DATASET: int = 1                    # 1이면 startup에서 dataset 로드

    KNN_TOPK: int = 5

    # 설정되어 있으면 X-API-KEY 헤더 필수
    API_KEY: str | None = None

    LOG_LEVEL: str = "INFO"

settings = Settings()
