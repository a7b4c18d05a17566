from conftest import make_point

from bike_hotspots.logic.bike_lane_classifier import BikeLaneClassifier
from bike_hotspots.logic.lane_buffer_index import LaneBufferIndex


def test_tag_all_tags_and_counts(straight_lane):
    index = LaneBufferIndex.build([straight_lane], radius_m=5.0)
    points = [
        make_point(-73.5650, 45.5100, accident_id="a"),
        make_point(-73.5650, 45.5300, accident_id="b"),
        make_point(None, None, accident_id="c"),
    ]
    result = BikeLaneClassifier(index).tag_all(points)

    assert [p.on_bike_lane for p in result.points] == [True, False, False]
    assert [p.accident_id for p in result.points] == ["a", "b", "c"]
    assert result.skipped == 1
    assert result.on_lane == 1


def test_tag_all_does_not_modify_input(straight_lane):
    index = LaneBufferIndex.build([straight_lane], radius_m=5.0)
    original = make_point(-73.5650, 45.5100)
    BikeLaneClassifier(index).tag_all([original])
    assert original.on_bike_lane is None


def test_tagging_is_idempotent(straight_lane):
    index = LaneBufferIndex.build([straight_lane], radius_m=5.0)
    classifier = BikeLaneClassifier(index)
    points = [make_point(-73.5700 + i * 0.0005, 45.5100 + (i % 3) * 0.00003) for i in range(25)]
    first = classifier.tag_all(points)
    second = classifier.tag_all(points)
    again = classifier.tag_all(first.points)

    flags = [p.on_bike_lane for p in first.points]
    assert flags == [p.on_bike_lane for p in second.points]
    assert flags == [p.on_bike_lane for p in again.points]
    assert any(flags) and not all(flags)


def test_empty_index_tags_everything_false():
    index = LaneBufferIndex.build([], radius_m=5.0)
    result = BikeLaneClassifier(index).tag_all([make_point(-73.5650, 45.5100)])
    assert result.points[0].on_bike_lane is False
    assert result.skipped == 0
