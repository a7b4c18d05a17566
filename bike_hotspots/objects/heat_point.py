from typing import NamedTuple


class HeatPoint(NamedTuple):
    """Weighted position for the heat layer, in folium (lat, lon, weight) order."""

    lat: float
    lon: float
    weight: float
