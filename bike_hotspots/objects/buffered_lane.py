from __future__ import annotations

from shapely import Polygon, MultiPolygon


class BufferedLane:
    """Buffer polygon around one lane segment.

    Explanation:
    Keeps the polygon in the projected (metric) CRS used for point tests, the index of the
    source LaneSegment, and the buffer radius in meters.
    """

    segment_index: int
    polygon: Polygon | MultiPolygon
    radius_m: float

    def __init__(self, segment_index: int, polygon: Polygon | MultiPolygon, radius_m: float):
        """Create a buffered lane container.

        Args:
            segment_index: Position of the source segment in the lane list.
            polygon: Buffer polygon in projected meters.
            radius_m: Nominal buffer radius (meters).
        """
        self.segment_index = segment_index
        self.polygon = polygon
        self.radius_m = radius_m
