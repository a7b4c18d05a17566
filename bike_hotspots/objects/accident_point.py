from __future__ import annotations

import math
from typing import Any, Mapping, Optional


class AccidentPoint:
    """Single bicycle accident record.

    Explanation:
    Holds the identifier, the WGS84 position (None when the source coordinates are missing or not numeric),
    the raw attribute codes, and the derived bike-lane tag. Instances are never edited after creation;
    tagging returns a new instance.
    """

    accident_id: Optional[str]
    lon: Optional[float]
    lat: Optional[float]
    severity: Any
    weather: Any
    lighting: Any
    on_bike_lane: Optional[bool]

    def __init__(
        self,
        accident_id: Optional[str],
        lon: Optional[float],
        lat: Optional[float],
        severity: Any = None,
        weather: Any = None,
        lighting: Any = None,
        on_bike_lane: Optional[bool] = None,
    ) -> None:
        """Create an accident record.

        Args:
            accident_id: Source identifier, may be None.
            lon: Longitude (WGS84) or None.
            lat: Latitude (WGS84) or None.
            severity: Raw severity text.
            weather: Raw weather code.
            lighting: Raw lighting code.
            on_bike_lane: Bike-lane tag, None while untagged.
        """
        self.accident_id = accident_id
        self.lon = lon
        self.lat = lat
        self.severity = severity
        self.weather = weather
        self.lighting = lighting
        self.on_bike_lane = on_bike_lane

    @classmethod
    def from_properties(
        cls,
        properties: Mapping[str, Any],
        lon: Any,
        lat: Any,
        id_field: str,
        severity_field: str,
        weather_field: str,
        lighting_field: str,
    ) -> AccidentPoint:
        """Build a record from a raw attribute bag and raw coordinates.

        Coordinates that cannot be read as finite WGS84 numbers leave the position empty.
        """
        position = parse_position(lon, lat)
        raw_id = properties.get(id_field)
        return cls(
            accident_id=None if raw_id is None else str(raw_id),
            lon=position[0] if position else None,
            lat=position[1] if position else None,
            severity=properties.get(severity_field),
            weather=properties.get(weather_field),
            lighting=properties.get(lighting_field),
        )

    def has_position(self) -> bool:
        return self.lon is not None and self.lat is not None

    def coords(self) -> tuple[float, float]:
        """Return (lon, lat); only valid when has_position() is True."""
        if self.lon is None or self.lat is None:
            raise ValueError(f"Accident {self.accident_id} has no position")
        return self.lon, self.lat

    def tagged(self, on_bike_lane: bool) -> AccidentPoint:
        """Return a copy carrying the given bike-lane tag."""
        return AccidentPoint(
            accident_id=self.accident_id,
            lon=self.lon,
            lat=self.lat,
            severity=self.severity,
            weather=self.weather,
            lighting=self.lighting,
            on_bike_lane=on_bike_lane,
        )

    def __repr__(self) -> str:
        return f"AccidentPoint(id={self.accident_id}, lon={self.lon}, lat={self.lat}, on_bike_lane={self.on_bike_lane})"


def parse_position(lon: Any, lat: Any) -> Optional[tuple[float, float]]:
    """Read raw lon/lat values as a WGS84 position.

    Args:
        lon: Raw longitude (number or numeric string).
        lat: Raw latitude (number or numeric string).

    Returns:
        (lon, lat) floats, or None if either value is missing, not numeric, not finite, or out of range.
    """
    if lon is None or lat is None or isinstance(lon, bool) or isinstance(lat, bool):
        return None
    if isinstance(lon, str):
        lon = lon.strip().replace(",", ".")
    if isinstance(lat, str):
        lat = lat.strip().replace(",", ".")
    try:
        lon_f = float(lon)
        lat_f = float(lat)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(lon_f) and math.isfinite(lat_f)):
        return None
    if not (-180.0 <= lon_f <= 180.0 and -90.0 <= lat_f <= 90.0):
        return None
    return lon_f, lat_f
