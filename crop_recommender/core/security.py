from fastapi import Header, HTTPException, status
from crop_recommender.core.config import settings

def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-KEY")) -> None:
    if not settings.API_KEY:
        return
    if not x_api_key or x_api_key != settings.API_KEY:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid API key")
