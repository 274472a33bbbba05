"""
Tests for record normalization, dataset loading and config
"""
import json
from pathlib import Path

import pytest

from mapquiz.config import load_config
from mapquiz.errors import DataLoadError
from mapquiz.loader import load_dataset, load_datasets
from mapquiz.models import Category, QuizConfig
from mapquiz.normalizer import normalize_record, normalize_records


ROOT = Path(__file__).resolve().parent.parent

WAYNE_FEATURE = {
    "type": "Feature",
    "properties": {"NAME": "Wayne", "description": "Most populous county."},
    "geometry": {
        "type": "Polygon",
        "coordinates": [[[-83.55, 42.03], [-83.55, 42.45], [-82.90, 42.45], [-82.90, 42.03], [-83.55, 42.03]]],
    },
}


def test_flat_city_record():
    target = normalize_record(
        {"Name": "Detroit", "lat": 42.3314, "lng": -83.0458, "population": "639,111",
         "isCountySeat": True, "fun_fact": "Motor City", "dateFounded": 1701},
        "cities",
        polygon=False,
    )
    assert target.name == "Detroit"
    assert target.category == Category.COUNTY_SEAT
    assert target.location.lat == 42.3314
    assert target.population == 639111
    assert target.fun_fact == "Motor City"
    assert target.date_founded == "1701"
    assert target.geometry is None


def test_city_not_county_seat():
    target = normalize_record({"name": "Warren", "lat": 42.5, "lng": -83.0, "isCountySeat": "false"}, "cities", False)
    assert target.category == Category.CITY
    assert target.is_county_seat is False


def test_point_feature_city():
    """GeoJSON Point features take their coordinates from the geometry"""
    feature = {
        "type": "Feature",
        "properties": {"name": "Flint"},
        "geometry": {"type": "Point", "coordinates": [-83.6875, 43.0125]},
    }
    target = normalize_record(feature, "cities", polygon=False)
    assert target.location.lat == 43.0125
    assert target.location.lng == -83.6875


def test_polygon_feature_location_is_bbox_center():
    target = normalize_record(WAYNE_FEATURE, "counties", polygon=True)
    assert target.name == "Wayne"
    assert target.category == Category.COUNTY
    assert target.fun_fact == "Most populous county."
    assert target.location.lat == pytest.approx(42.24)
    assert target.location.lng == pytest.approx(-83.225)
    assert target.geometry.type == "Polygon"


def test_district_label():
    feature = dict(WAYNE_FEATURE, properties={"name": "District 13", "district": "MI-13"})
    target = normalize_record(feature, "districts", polygon=True)
    assert target.category == Category.DISTRICT
    assert target.district_label == "MI-13"


def test_polygon_source_requires_geometry():
    """Area sources drop records without usable polygons"""
    assert normalize_record({"name": "Nowhere", "lat": 1, "lng": 1}, "parks", polygon=True) is None
    bad = dict(WAYNE_FEATURE, geometry={"type": "Point", "coordinates": [0, 0]})
    assert normalize_record(bad, "counties", polygon=True) is None


def test_skips_unusable_records():
    records = [
        {"lat": 1, "lng": 1},                      # no name
        {"name": "Lost"},                          # no coordinates
        "not a record",
        {"name": "Kept", "lat": 1, "lng": 2},
    ]
    targets = normalize_records(records, "cities", polygon=False)
    assert [t.name for t in targets] == ["Kept"]


def test_load_feature_collection(tmp_path):
    path = tmp_path / "counties.geojson"
    path.write_text(json.dumps({"type": "FeatureCollection", "features": [WAYNE_FEATURE]}), encoding="utf-8")
    targets = load_dataset(str(path), "counties")
    assert [t.name for t in targets] == ["Wayne"]


def test_load_missing_file(tmp_path):
    with pytest.raises(DataLoadError):
        load_dataset(str(tmp_path / "missing.json"), "cities")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DataLoadError):
        load_dataset(str(path), "cities")


def test_load_datasets_recovers_from_failure(tmp_path):
    """A broken dataset is left empty; the others still load"""
    (tmp_path / "cities.json").write_text(
        json.dumps([{"name": "Detroit", "lat": 42.33, "lng": -83.05}]), encoding="utf-8"
    )
    config = QuizConfig(
        data_dir=str(tmp_path),
        datasets={"cities": "cities.json", "parks": "parks.geojson"},
    )
    datasets, errors = load_datasets(config)
    assert [t.name for t in datasets.cities] == ["Detroit"]
    assert datasets.parks == []
    assert list(errors) == ["parks"]


def test_load_config(tmp_path):
    path = tmp_path / "quiz.yaml"
    path.write_text(
        "data_dir: /srv/data\n"
        "datasets:\n"
        "  cities: cities.json\n"
        "default_pool_size: 50\n"
        "map:\n"
        "  zoom: 8\n",
        encoding="utf-8",
    )
    config = load_config(str(path))
    assert config.data_dir == "/srv/data"
    assert config.datasets == {"cities": "cities.json"}
    assert config.default_pool_size == 50
    assert config.map.zoom == 8
    assert config.map.center == [44.3148, -85.6024]


def test_load_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_bundled_config_and_data():
    """The shipped config loads the bundled sample data"""
    config = load_config(str(ROOT / "config" / "quiz.yaml"))
    config = config.model_copy(update={"data_dir": str(ROOT / config.data_dir)})
    datasets, errors = load_datasets(config)
    assert errors == {}
    assert datasets.cities[0].name == "Detroit"
    assert len(datasets.counties) == 4


@pytest.mark.parametrize("geometry", [
    {"type": "Point", "coordinates": []},
    {"type": "Point", "coordinates": [-83.0]},
    {"type": "Point"},
    "POINT (-83 42)",
    {"type": "Point", "coordinates": ["nan", 42]},
])
def test_bad_point_geometry_skipped(tmp_path, geometry):
    """City features with unusable Point geometry are dropped, the rest load"""
    features = [
        {"type": "Feature", "properties": {"name": "Broken"}, "geometry": geometry},
        {"type": "Feature", "properties": {"name": "Flint"},
         "geometry": {"type": "Point", "coordinates": [-83.6875, 43.0125]}},
    ]
    path = tmp_path / "cities.geojson"
    path.write_text(json.dumps({"type": "FeatureCollection", "features": features}), encoding="utf-8")
    assert [t.name for t in load_dataset(str(path), "cities")] == ["Flint"]
