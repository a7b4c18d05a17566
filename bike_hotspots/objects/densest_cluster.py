class DensestCluster:
    """Largest concentration of the currently filtered accidents.

    Explanation:
    Stores the representative center (lon/lat) and the number of accidents it stands for.
    Recomputed on each filter change, never stored.
    """

    lon: float
    lat: float
    count: int
    strategy: str

    def __init__(self, lon: float, lat: float, count: int, strategy: str):
        """Create a densest cluster result.

        Args:
            lon: Center longitude (WGS84).
            lat: Center latitude (WGS84).
            count: Number of accidents in the cluster.
            strategy: Name of the density strategy that produced it.
        """
        self.lon = lon
        self.lat = lat
        self.count = count
        self.strategy = strategy

    @property
    def center(self) -> tuple[float, float]:
        return self.lon, self.lat

    def __repr__(self) -> str:
        return f"DensestCluster(lon={self.lon:.6f}, lat={self.lat:.6f}, count={self.count}, strategy={self.strategy})"
