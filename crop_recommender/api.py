import logging

from fastapi import APIRouter, Depends, HTTPException, status

from crop_recommender.core.security import require_api_key
from crop_recommender.schemas import CropRecommendRequest, CropRecommendResponse, DatasetInfoResponse
from crop_recommender.services.engine import CropRecommendationEngine
from crop_recommender.services.errors import DataUnavailableError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_api_key)])
engine = CropRecommendationEngine()


def get_engine() -> CropRecommendationEngine:
    return engine


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/crops/dataset", response_model=DatasetInfoResponse)
def dataset_info(eng: CropRecommendationEngine = Depends(get_engine)):
    return DatasetInfoResponse(**eng.describe())


@router.post("/crops/recommend", response_model=CropRecommendResponse)
def recommend_crop(body: CropRecommendRequest, eng: CropRecommendationEngine = Depends(get_engine)):
    try:
        return CropRecommendResponse(**eng.recommend(body.model_dump()))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DataUnavailableError as e:
        logger.error(f"Crop recommend unavailable: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Dataset unavailable or empty")
    except Exception:
        logger.exception("Crop recommend error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")
