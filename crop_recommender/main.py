import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from crop_recommender.core.config import settings
from crop_recommender.api import router, get_engine

logger = logging.getLogger(__name__)

def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 첫 요청 대신 기동 시점에 dataset 로드
        if settings.PRELOAD_DATASET:
            try:
                app.dependency_overrides.get(get_engine, get_engine)().startup_load()
            except Exception:
                # 파싱 실패는 캐시되지 않음 -> 요청 시점에 다시 시도
                logger.exception("Crop dataset preload failed")
        yield

    app = FastAPI(title="FarmerAI Crop Recommender", version="0.1.0", lifespan=lifespan)
    app.include_router(router, prefix="/api", tags=["crops"])

    return app

app = create_app()
