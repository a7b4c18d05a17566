import pytest
from pyproj import Geod

from bike_hotspots.logic.lane_buffer_index import LaneBufferIndex
from bike_hotspots.objects.lane_segment import LaneSegment

GEOD = Geod(ellps="WGS84")
MID_LON, MID_LAT = -73.5650, 45.5100


def offset_north(lon, lat, meters):
    new_lon, new_lat, _ = GEOD.fwd(lon, lat, 0.0, meters)
    return new_lon, new_lat


def test_point_on_segment_and_far_point(straight_lane):
    index = LaneBufferIndex.build([straight_lane], radius_m=5.0)
    assert index.classify(-73.5650, 45.5100) is True
    assert index.classify(-73.5650, 45.5300) is False


@pytest.mark.parametrize("distance_m, expected", [(0.0, True), (2.5, True), (4.9, True), (5.0, True), (5.3, False), (8.0, False)])
def test_radius_boundary(straight_lane, distance_m, expected):
    index = LaneBufferIndex.build([straight_lane], radius_m=5.0)
    lon, lat = offset_north(MID_LON, MID_LAT, distance_m)
    assert index.classify(lon, lat) is expected


def test_larger_radius_is_superset(straight_lane):
    small = LaneBufferIndex.build([straight_lane], radius_m=5.0)
    large = LaneBufferIndex.build([straight_lane], radius_m=10.0)
    for distance_m in (1.0, 4.0, 7.0, 9.5, 12.0):
        lon, lat = offset_north(MID_LON, MID_LAT, distance_m)
        if small.classify(lon, lat):
            assert large.classify(lon, lat)
    lon, lat = offset_north(MID_LON, MID_LAT, 7.0)
    assert not small.classify(lon, lat)
    assert large.classify(lon, lat)


def test_point_beyond_segment_end_uses_round_cap(straight_lane):
    index = LaneBufferIndex.build([straight_lane], radius_m=5.0)
    east_lon, east_lat, _ = GEOD.fwd(-73.5600, 45.5100, 90.0, 3.0)
    assert index.classify(east_lon, east_lat)
    east_lon, east_lat, _ = GEOD.fwd(-73.5600, 45.5100, 90.0, 6.0)
    assert not index.classify(east_lon, east_lat)


def test_empty_index_rejects_everything():
    index = LaneBufferIndex.build([], radius_m=5.0)
    assert len(index) == 0
    assert index.classify(MID_LON, MID_LAT) is False


def test_zero_length_segment_becomes_disk():
    lane = LaneSegment([[(MID_LON, MID_LAT), (MID_LON, MID_LAT)]])
    index = LaneBufferIndex.build([lane], radius_m=5.0)
    assert len(index) == 1
    assert index.classify(*offset_north(MID_LON, MID_LAT, 3.0))
    assert not index.classify(*offset_north(MID_LON, MID_LAT, 8.0))


def test_multiline_lane_covers_every_part():
    lane = LaneSegment.from_geojson(
        {
            "type": "MultiLineString",
            "coordinates": [
                [[-73.5700, 45.5100], [-73.5690, 45.5100]],
                [[-73.5500, 45.5200], [-73.5490, 45.5200]],
            ],
        }
    )
    index = LaneBufferIndex.build([lane], radius_m=5.0)
    assert len(index) == 1
    assert index.classify(-73.5695, 45.5100)
    assert index.classify(-73.5495, 45.5200)
    assert not index.classify(-73.5600, 45.5150)


def test_segment_without_vertices_is_ignored(straight_lane):
    index = LaneBufferIndex.build([LaneSegment([[]]), straight_lane], radius_m=5.0)
    assert len(index) == 1
    assert index.buffers[0].segment_index == 1
    assert index.classify(MID_LON, MID_LAT)


def test_non_finite_coordinates_are_not_on_lane(straight_lane):
    index = LaneBufferIndex.build([straight_lane], radius_m=5.0)
    assert index.classify(float("nan"), MID_LAT) is False


def test_invalid_inputs_raise(straight_lane):
    with pytest.raises(ValueError):
        LaneBufferIndex.build([straight_lane], radius_m=0)
    with pytest.raises(TypeError):
        LaneBufferIndex.build([[(-73.57, 45.51), (-73.56, 45.51)]], radius_m=5.0)
    with pytest.raises(TypeError):
        LaneSegment.from_geojson({"type": "Polygon", "coordinates": []})
    with pytest.raises(TypeError):
        LaneSegment([[("a", "b"), (1.0, 2.0)]])


def test_buffers_geojson_is_wgs84(straight_lane):
    index = LaneBufferIndex.build([straight_lane], radius_m=5.0)
    collection = index.buffers_geojson()
    assert collection["type"] == "FeatureCollection"
    ring = collection["features"][0]["geometry"]["coordinates"][0]
    lons = [pt[0] for pt in ring]
    lats = [pt[1] for pt in ring]
    assert min(lons) == pytest.approx(-73.5700, abs=1e-3)
    assert max(lons) == pytest.approx(-73.5600, abs=1e-3)
    assert max(lats) - min(lats) < 0.0002
