from __future__ import annotations

import math
from typing import List, Optional, Sequence

from shapely import LineString, Point, STRtree, union_all
from shapely.geometry.base import BaseGeometry

from bike_hotspots.objects.accident_point import AccidentPoint
from bike_hotspots.objects.buffered_lane import BufferedLane
from bike_hotspots.objects.lane_segment import LaneSegment
from bike_hotspots.utility.projection import Projector


class LaneBufferIndex:
    """Buffered bike lanes with a spatial index for point membership tests.

    Explanation:
    Each LaneSegment is projected to a metric CRS and buffered there, so the radius is a ground
    distance. Polygons are stored in an STRtree; a point query tests only the buffers whose
    envelope contains the point.
    """

    buffers: List[BufferedLane]
    radius_m: float

    def __init__(self, buffers: List[BufferedLane], radius_m: float, projector: Projector) -> None:
        """Wrap prebuilt buffers; use build() to create them from lanes."""
        self.buffers = buffers
        self.radius_m = radius_m
        self.projector = projector
        self.tree: Optional[STRtree] = STRtree([b.polygon for b in buffers]) if buffers else None

    @classmethod
    def build(
        cls,
        lanes: Sequence[LaneSegment],
        radius_m: float,
        projected_crs: str = "EPSG:32188",
        boundary_tolerance_m: float = 0.05,
        quad_segs: int = 16,
    ) -> LaneBufferIndex:
        """Buffer every lane segment at radius_m.

        Args:
            lanes: Lane segments in WGS84.
            radius_m: Buffer radius in meters.
            projected_crs: Metric CRS used for buffering and point tests.
            boundary_tolerance_m: Extra distance so points exactly at radius_m are inside.
            quad_segs: Segments per quarter circle in buffer arcs.

        Returns:
            LaneBufferIndex; empty if lanes is empty.

        Raises:
            TypeError: If an element of lanes is not a LaneSegment.
            ValueError: If radius_m is not positive.
        """
        if radius_m <= 0:
            raise ValueError(f"Buffer radius must be positive, got {radius_m}")
        projector = Projector(projected_crs)
        distance = cls.effective_buffer_distance(radius_m, quad_segs, boundary_tolerance_m)

        buffers: List[BufferedLane] = []
        for idx, lane in enumerate(lanes):
            if not isinstance(lane, LaneSegment):
                raise TypeError(f"Expected LaneSegment at position {idx}, got {type(lane).__name__}")
            polygon = cls._buffer_segment(lane, projector, distance, quad_segs)
            if polygon is not None:
                buffers.append(BufferedLane(idx, polygon, radius_m))

        print(f"Lane buffers: {len(buffers):,} (r={radius_m} m) from {len(lanes):,} lanes")
        return cls(buffers, radius_m, projector)

    @staticmethod
    def effective_buffer_distance(radius_m: float, quad_segs: int, boundary_tolerance_m: float) -> float:
        """Distance passed to shapely so the polygonal arcs stay outside the true circle.

        Buffer arcs are chords of the circle; scaling to the circumscribed radius keeps every
        point at distance <= radius_m inside.
        """
        return radius_m / math.cos(math.pi / (4 * quad_segs)) + boundary_tolerance_m

    @staticmethod
    def _buffer_segment(
        lane: LaneSegment, projector: Projector, distance: float, quad_segs: int
    ) -> Optional[BaseGeometry]:
        """Buffer all parts of a lane; a part collapsed to one vertex becomes a disk."""
        pieces = []
        for part in lane.parts:
            if not part:
                continue
            projected = projector.project_coords(part)
            if len(set(projected)) == 1:
                geom: BaseGeometry = Point(projected[0])
            else:
                geom = LineString(projected)
            pieces.append(geom.buffer(distance, quad_segs=quad_segs))
        if not pieces:
            return None
        if len(pieces) == 1:
            return pieces[0]
        return union_all(pieces)

    def classify(self, lon: float, lat: float) -> bool:
        """True if lon/lat is inside or on the boundary of any lane buffer."""
        if self.tree is None:
            return False
        if not (math.isfinite(lon) and math.isfinite(lat)):
            return False
        pt = self.projector.project_point(lon, lat)
        candidates = self.tree.query(pt)
        for buffer_idx in sorted(int(i) for i in candidates):
            if self.buffers[buffer_idx].polygon.covers(pt):
                return True
        return False

    def classify_point(self, point: AccidentPoint) -> bool:
        """Classify an accident; accidents without a position are never on a lane."""
        if not point.has_position():
            return False
        lon, lat = point.coords()
        return self.classify(lon, lat)

    def buffers_geojson(self) -> dict:
        """Buffers back in WGS84 as a GeoJSON FeatureCollection (map overlay)."""
        features = [
            {
                "type": "Feature",
                "properties": {"segment_index": b.segment_index, "radius_m": b.radius_m},
                "geometry": self.projector.to_wgs84(b.polygon).__geo_interface__,
            }
            for b in self.buffers
        ]
        return {"type": "FeatureCollection", "features": features}

    def __len__(self) -> int:
        return len(self.buffers)
