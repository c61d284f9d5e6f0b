"""
uvicorn으로 crop recommender API 실행.
"""
import os

import uvicorn

if __name__ == "__main__":
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))

    # development에서만 reload
    reload = os.getenv("ENVIRONMENT", "development").lower() == "development"

    uvicorn.run(
        "crop_recommender.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )
