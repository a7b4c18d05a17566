from typing import List, Sequence

from bike_hotspots.logic.lane_buffer_index import LaneBufferIndex
from bike_hotspots.objects.accident_point import AccidentPoint


class ClassificationResult:
    """Tagged accidents plus counts for reporting."""

    points: List[AccidentPoint]
    skipped: int
    on_lane: int

    def __init__(self, points: List[AccidentPoint], skipped: int, on_lane: int):
        """Create a classification result.

        Args:
            points: Tagged accidents, same order as the input.
            skipped: Accidents without usable coordinates (tagged False).
            on_lane: Accidents inside the lane buffers.
        """
        self.points = points
        self.skipped = skipped
        self.on_lane = on_lane


class BikeLaneClassifier:
    """Tag accidents as on/off the bike lane network."""

    def __init__(self, index: LaneBufferIndex):
        self.index = index

    def tag_all(self, points: Sequence[AccidentPoint]) -> ClassificationResult:
        """Return tagged copies of all accidents.

        Args:
            points: Accidents to tag; they are not modified.

        Returns:
            ClassificationResult with tagged points and skipped/on-lane counts.
        """
        tagged: List[AccidentPoint] = []
        skipped = 0
        on_lane = 0
        for point in points:
            if not point.has_position():
                skipped += 1
                tagged.append(point.tagged(False))
                continue
            flag = self.index.classify_point(point)
            if flag:
                on_lane += 1
            tagged.append(point.tagged(flag))

        print(
            f"Tagged accidents: {len(tagged):,} ({on_lane:,} on bike lanes, "
            f"{skipped:,} skipped without coordinates)"
        )
        return ClassificationResult(tagged, skipped, on_lane)
