import pytest

from crop_recommender.services import engine as engine_module
from crop_recommender.services.engine import CropRecommendationEngine
from crop_recommender.services.errors import DataUnavailableError, ValidationError
from tests.conftest import HEADER

ORIGIN = {"N": 0, "P": 0, "K": 0, "temperature": 0, "humidity": 0, "ph": 0, "rainfall": 0}


def test_exact_match_recommends_its_label(write_csv):
    path = write_csv([
        HEADER,
        "0,0,0,0,0,0,0,rice",
        "100,100,100,100,100,100,100,wheat",
    ])
    res = CropRecommendationEngine(dataset_path=path).recommend(dict(ORIGIN))

    assert res["top"] == "rice"
    assert res["recommendations"][0] == {"label": "rice", "score": 1}
    assert res["input"] == ORIGIN


def test_missing_temperature_is_reported(maize_rice_csv):
    payload = dict(ORIGIN)
    del payload["temperature"]

    with pytest.raises(ValidationError) as ei:
        CropRecommendationEngine(dataset_path=maize_rice_csv).recommend(payload)

    assert ei.value.missing == ["temperature"]
    assert str(ei.value) == "Missing fields: temperature"


def test_missing_fields_listed_in_feature_order(maize_rice_csv):
    payload = dict(ORIGIN, rainfall="", temperature=None)
    del payload["N"]

    with pytest.raises(ValidationError) as ei:
        CropRecommendationEngine(dataset_path=maize_rice_csv).recommend(payload)

    assert ei.value.missing == ["N", "temperature", "rainfall"]


def test_zero_is_not_missing(maize_rice_csv):
    res = CropRecommendationEngine(dataset_path=maize_rice_csv).recommend(dict(ORIGIN))
    assert res["top"] is not None


def test_whitespace_value_is_not_missing(maize_rice_csv):
    # "" 만 누락 처리, 공백 문자열은 숫자 변환 단계에서 실패
    with pytest.raises(ValueError):
        CropRecommendationEngine(dataset_path=maize_rice_csv).recommend(dict(ORIGIN, ph="  "))


def test_ragged_row_does_not_break_recommendation(write_csv):
    path = write_csv([
        HEADER,
        "0,0,0,0,0,0,0,rice",
        "100,100,100,100,100,100,100,wheat,extra",
        "1,1,1,1,1,1,1,rice",
    ])
    res = CropRecommendationEngine(dataset_path=path).recommend(dict(ORIGIN))

    assert res["recommendations"] == [{"label": "rice", "score": 2}, {"label": "wheat", "score": 1}]
    assert res["top"] == "rice"


def test_top_is_none_without_label_column(write_csv):
    path = write_csv([
        "N,P,K,temperature,humidity,ph,rainfall",
        "0,0,0,0,0,0,0",
        "5,5,5,5,5,5,5",
    ])
    res = CropRecommendationEngine(dataset_path=path).recommend(dict(ORIGIN))

    assert res["recommendations"] == [{"label": "", "score": 2}]
    assert res["top"] is None


def test_missing_dataset_is_unavailable(tmp_path):
    eng = CropRecommendationEngine(dataset_path=tmp_path / "absent.csv")

    with pytest.raises(DataUnavailableError):
        eng.recommend(dict(ORIGIN))


def test_header_only_dataset_is_unavailable(write_csv):
    eng = CropRecommendationEngine(dataset_path=write_csv([HEADER]))

    with pytest.raises(DataUnavailableError):
        eng.recommend(dict(ORIGIN))


def test_validation_runs_before_dataset_check(tmp_path):
    eng = CropRecommendationEngine(dataset_path=tmp_path / "absent.csv")

    with pytest.raises(ValidationError):
        eng.recommend({})


def test_majority_cluster_wins(maize_rice_csv):
    payload = {"N": 11, "P": 11, "K": 10, "temperature": 20, "humidity": 60, "ph": 6.0, "rainfall": 100}
    res = CropRecommendationEngine(dataset_path=maize_rice_csv).recommend(payload)

    assert res["recommendations"][0]["label"] == "maize"
    assert res["recommendations"][0]["score"] >= 3
    assert res["top"] == "maize"


def test_votes_use_min_of_k_and_dataset_size(write_csv, maize_rice_csv):
    small = write_csv([
        HEADER,
        "1,1,1,1,1,1,1,a",
        "2,2,2,2,2,2,2,b",
        "3,3,3,3,3,3,3,a",
    ], name="small.csv")
    res = CropRecommendationEngine(dataset_path=small).recommend(dict(ORIGIN))
    assert sum(r["score"] for r in res["recommendations"]) == 3

    res = CropRecommendationEngine(dataset_path=maize_rice_csv, top_k=2).recommend(dict(ORIGIN))
    assert sum(r["score"] for r in res["recommendations"]) == 2


def test_numeric_strings_accepted(maize_rice_csv):
    payload = {k: str(v) for k, v in ORIGIN.items()}
    res = CropRecommendationEngine(dataset_path=maize_rice_csv).recommend(payload)
    assert res["top"] == "maize"


def test_bounds_computed_once(maize_rice_csv, monkeypatch):
    calls = []
    real = engine_module.compute_bounds

    def counting(reference):
        calls.append(reference)
        return real(reference)

    monkeypatch.setattr(engine_module, "compute_bounds", counting)
    eng = CropRecommendationEngine(dataset_path=maize_rice_csv)
    eng.recommend(dict(ORIGIN))
    eng.recommend(dict(ORIGIN))
    eng.describe()

    assert len(calls) == 1


def test_startup_load_warns_when_empty(tmp_path, caplog):
    eng = CropRecommendationEngine(dataset_path=tmp_path / "absent.csv")

    with caplog.at_level("WARNING"):
        eng.startup_load()

    assert eng.loader.loaded
    assert "reference dataset is empty" in caplog.text


def test_describe(maize_rice_csv):
    info = CropRecommendationEngine(dataset_path=maize_rice_csv).describe()

    assert info["loaded"] is True
    assert info["rows"] == 5
    assert info["labels"] == ["maize", "rice"]
    assert info["bounds"]["N"] == (10.0, 95.0)
