import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import argparse
import json

from crop_recommender.services.engine import CropRecommendationEngine
from crop_recommender.services.errors import RecommendationError


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--dataset", default=None, help="CSV 경로 (기본값: CROP_DATASET_PATH)")
    ap.add_argument("--k", type=int, default=None)
    ap.add_argument("--N", type=float, default=90)
    ap.add_argument("--P", type=float, default=42)
    ap.add_argument("--K", type=float, default=43)
    ap.add_argument("--temperature", type=float, default=20.9)
    ap.add_argument("--humidity", type=float, default=82.0)
    ap.add_argument("--ph", type=float, default=6.5)
    ap.add_argument("--rainfall", type=float, default=202.9)
    args = ap.parse_args()

    eng = CropRecommendationEngine(dataset_path=args.dataset, top_k=args.k)
    eng.startup_load()

    payload = {
        "N": args.N,
        "P": args.P,
        "K": args.K,
        "temperature": args.temperature,
        "humidity": args.humidity,
        "ph": args.ph,
        "rainfall": args.rainfall,
    }

    try:
        res = eng.recommend(payload)
    except RecommendationError as e:
        print("error:", e)
        sys.exit(1)
    print(json.dumps(res, ensure_ascii=False, indent=2))
