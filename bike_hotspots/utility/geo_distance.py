from math import radians, sin, cos, asin, sqrt


class GeoDistance:
    """Ground distances and degree/meter conversions for WGS84 coordinates."""

    EARTH_RADIUS_M = 6371000
    METERS_PER_DEG_LAT = 111_320.0

    @staticmethod
    def haversine_m(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
        """Great-circle distance between two lon/lat points in meters."""
        dlat = radians(lat2 - lat1)
        dlon = radians(lon2 - lon1)
        a = sin(dlat/2)**2 + cos(radians(lat1))*cos(radians(lat2))*sin(dlon/2)**2
        return 2 * GeoDistance.EARTH_RADIUS_M * asin(sqrt(min(1.0, a)))

    @staticmethod
    def meters_per_deg_lon(lat: float) -> float:
        return GeoDistance.METERS_PER_DEG_LAT * cos(radians(lat))

    @staticmethod
    def meters_to_degrees(meters: float, reference_lat: float) -> tuple[float, float]:
        """Convert a ground length to (lon_deg, lat_deg) at a reference latitude.

        Args:
            meters: Ground length in meters.
            reference_lat: Latitude where the conversion holds (45.5 for Montreal).

        Returns:
            Tuple of degrees along longitude and latitude.
        """
        lon_scale = GeoDistance.meters_per_deg_lon(reference_lat)
        if lon_scale <= 0:
            raise ValueError(f"Cannot convert meters to degrees at latitude {reference_lat}")
        return meters / lon_scale, meters / GeoDistance.METERS_PER_DEG_LAT
