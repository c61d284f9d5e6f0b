import pytest

from crop_recommender.services.dataset import ReferenceRow, ReferenceSet

HEADER = "N,P,K,temperature,humidity,ph,rainfall,label"


@pytest.fixture
def write_csv(tmp_path):
    def _write(lines, name="crops.csv"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


def make_row(values, label):
    return ReferenceRow(*[float(v) for v in values], label=label)


def make_set(rows):
    return ReferenceSet.from_rows([make_row(v, lb) for v, lb in rows])


@pytest.fixture
def maize_rice_csv(write_csv):
    return write_csv([
        HEADER,
        "10,10,10,20,60,6.0,100,maize",
        "12,11,10,21,61,6.1,102,maize",
        "11,12,11,20,59,6.0,98,maize",
        "90,80,70,30,90,7.5,250,rice",
        "95,85,75,31,92,7.4,260,rice",
    ])
