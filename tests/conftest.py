import json
from pathlib import Path

import pytest

from bike_hotspots.objects.accident_point import AccidentPoint
from bike_hotspots.objects.lane_segment import LaneSegment
from bike_hotspots.settings import AnalysisSettings


def make_point(lon, lat, severity=None, weather=None, lighting=None, accident_id=None, on_bike_lane=None):
    return AccidentPoint(
        accident_id=accident_id,
        lon=lon,
        lat=lat,
        severity=severity,
        weather=weather,
        lighting=lighting,
        on_bike_lane=on_bike_lane,
    )


@pytest.fixture
def straight_lane() -> LaneSegment:
    """East-west lane along 45.51 N, about 780 m long."""
    return LaneSegment([[(-73.5700, 45.5100), (-73.5600, 45.5100)]])


@pytest.fixture
def settings(tmp_path: Path) -> AnalysisSettings:
    return AnalysisSettings(
        accidents_path=tmp_path / "bikes.geojson",
        lanes_path=tmp_path / "reseau_cyclable.json",
        output_path=tmp_path / "map.html",
    )


def accident_feature(lon, lat, gravite, meteo, eclairage, seq):
    return {
        "type": "Feature",
        "properties": {"NO_SEQ_COLL": seq, "GRAVITE": gravite, "CD_COND_METEO": meteo, "CD_ECLRM": eclairage},
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
    }


@pytest.fixture
def write_inputs(settings: AnalysisSettings):
    """Write a small accidents/lanes pair matching the Montreal exports."""

    def _write(accident_features=None, lane_features=None):
        if accident_features is None:
            accident_features = [
                accident_feature(-73.5650, 45.5100, "Léger", 11.0, 1.0, "SPVM _ 2019 _ 1"),
                accident_feature(-73.5650, 45.5300, "Mortel", "14", "3", "SPVM _ 2019 _ 2"),
                accident_feature(-73.5651, 45.51002, "Dommages matériels seulement", "nan", None, "SPVM _ 2019 _ 3"),
                {"type": "Feature", "properties": {"NO_SEQ_COLL": "SPVM _ 2019 _ 4", "GRAVITE": "Grave"}, "geometry": None},
            ]
        if lane_features is None:
            lane_features = [
                {
                    "type": "Feature",
                    "properties": {"ID_CYCL": 1},
                    "geometry": {"type": "LineString", "coordinates": [[-73.5700, 45.5100], [-73.5600, 45.5100]]},
                },
                {"type": "Feature", "properties": {"ID_CYCL": 2}, "geometry": None},
            ]
        settings.accidents_path.write_text(
            json.dumps({"type": "FeatureCollection", "features": accident_features}), encoding="utf-8"
        )
        settings.lanes_path.write_text(
            json.dumps({"type": "FeatureCollection", "features": lane_features}), encoding="utf-8"
        )
        return settings

    return _write
