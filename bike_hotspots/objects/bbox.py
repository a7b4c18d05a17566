from __future__ import annotations

from typing import Iterable


class BBox:
    """Axis-aligned bounding box in WGS84.

    Explanation:
    Stores north/south/east/west limits; used as the extent of the lane network and to center the map.
    """

    north: float
    south: float
    east: float
    west: float

    def __init__(self, north: float, south: float, east: float, west: float) -> None:
        """Create a bounding box.

        Args:
            north: Northern latitude.
            south: Southern latitude.
            east: Eastern longitude.
            west: Western longitude.
        """
        self.north = north
        self.south = south
        self.east = east
        self.west = west

    @classmethod
    def from_coords(cls, coords: Iterable[tuple[float, float]]) -> BBox | None:
        """Smallest box around (lon, lat) pairs.

        Args:
            coords: Iterable of (lon, lat) tuples.

        Returns:
            BBox, or None if no coordinates were given.
        """
        lons: list[float] = []
        lats: list[float] = []
        for lon, lat in coords:
            lons.append(lon)
            lats.append(lat)
        if not lons:
            return None
        return cls(north=max(lats), south=min(lats), east=max(lons), west=min(lons))

    def center(self) -> tuple[float, float]:
        """Return the (lat, lon) center, folium location order."""
        return (self.north + self.south) / 2, (self.east + self.west) / 2

    def __str__(self) -> str:
        return f"BBox(north={self.north}, south={self.south}, east={self.east}, west={self.west})"
