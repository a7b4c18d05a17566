from __future__ import annotations

from typing import Any, Mapping, Sequence

from pyproj import Geod

WGS84_GEOD = Geod(ellps="WGS84")


class LaneSegment:
    """Bike lane polyline (single or multi-part) in WGS84.

    Explanation:
    Stores each part as a list of (lon, lat) tuples. Only LineString and MultiLineString
    geometries are accepted; any other shape is a type error.
    """

    parts: list[list[tuple[float, float]]]

    def __init__(self, parts: Sequence[Sequence[Sequence[float]]]) -> None:
        """Create a lane segment.

        Args:
            parts: One or more coordinate sequences, each a sequence of (lon, lat).

        Raises:
            TypeError: If parts is not a sequence of coordinate sequences.
        """
        self.parts = [self._read_part(part) for part in parts]

    @classmethod
    def from_geojson(cls, geometry: Mapping[str, Any]) -> LaneSegment:
        """Build a segment from a GeoJSON LineString/MultiLineString geometry dict."""
        geom_type = geometry.get("type")
        coordinates = geometry.get("coordinates")
        if geom_type == "LineString":
            return cls([coordinates])  # type: ignore[list-item]
        if geom_type == "MultiLineString":
            if not isinstance(coordinates, (list, tuple)):
                raise TypeError(f"MultiLineString coordinates must be a list, got {type(coordinates).__name__}")
            return cls(coordinates)
        raise TypeError(f"Lane geometry must be LineString or MultiLineString, got {geom_type!r}")

    def coords(self) -> list[tuple[float, float]]:
        """All vertices of all parts."""
        return [pt for part in self.parts for pt in part]

    def length_m(self) -> float:
        """Geodesic ground length of all parts on the WGS84 ellipsoid, in meters."""
        return sum(
            WGS84_GEOD.line_length([lon for lon, _ in part], [lat for _, lat in part])
            for part in self.parts
            if len(part) > 1
        )

    def is_empty(self) -> bool:
        return not any(self.parts)

    @staticmethod
    def _read_part(part: Any) -> list[tuple[float, float]]:
        if not isinstance(part, (list, tuple)):
            raise TypeError(f"Lane part must be a coordinate sequence, got {type(part).__name__}")
        coords: list[tuple[float, float]] = []
        for position in part:
            if not isinstance(position, (list, tuple)) or len(position) < 2:
                raise TypeError(f"Lane position must be a (lon, lat) pair, got {position!r}")
            lon, lat = position[0], position[1]
            if isinstance(lon, bool) or isinstance(lat, bool) or not isinstance(lon, (int, float)) or not isinstance(lat, (int, float)):
                raise TypeError(f"Lane coordinates must be numbers, got {position!r}")
            coords.append((float(lon), float(lat)))
        return coords

    def __repr__(self) -> str:
        return f"LaneSegment(parts={len(self.parts)}, vertices={sum(len(p) for p in self.parts)})"
