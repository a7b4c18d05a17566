"""
Densest-cluster detection over a filtered accident set.

Two strategies share one interface: GridBinning (O(n), default) counts accidents per fixed
lon/lat cell on a base grid and three half-cell shifted grids, PairwiseRadius (O(n^2)) counts
neighbors within a ground radius around each accident. Ties go to whatever was encountered
first in input order.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Sequence

from bike_hotspots.objects.accident_point import AccidentPoint
from bike_hotspots.objects.densest_cluster import DensestCluster
from bike_hotspots.objects.heat_point import HeatPoint
from bike_hotspots.settings import AnalysisSettings
from bike_hotspots.utility.geo_distance import GeoDistance

DEFAULT_HEAT_WEIGHT = 0.7


class DensityStrategy(ABC):
    name: str

    @abstractmethod
    def densest(self, points: Sequence[AccidentPoint]) -> Optional[DensestCluster]:
        """Densest cluster of the positioned accidents, None if there are none."""


class GridBinning(DensityStrategy):
    """Count accidents per grid cell; the cell with most accidents wins.

    Explanation:
    Cells are (floor(lon / cell_lon_deg - ox), floor(lat / cell_lat_deg - oy)) for the base grid
    (0, 0) and three grids shifted by half a cell along lon, lat and both. A cluster that straddles
    a base cell edge still lands in one cell of a shifted grid. The best cell across all grids wins;
    on equal counts the base grid goes first, then first-seen order within a grid. The reported
    center is the mean position of the cell's accidents rather than the cell center.
    """

    name = "grid"
    offsets: tuple[tuple[float, float], ...] = ((0.0, 0.0), (0.5, 0.0), (0.0, 0.5), (0.5, 0.5))

    def __init__(self, cell_lon_deg: float, cell_lat_deg: Optional[float] = None) -> None:
        """Create a grid with cell sizes in degrees (square in degrees if cell_lat_deg is None)."""
        cell_lat_deg = cell_lon_deg if cell_lat_deg is None else cell_lat_deg
        if cell_lon_deg <= 0 or cell_lat_deg <= 0:
            raise ValueError(f"Cell size must be positive, got ({cell_lon_deg}, {cell_lat_deg})")
        self.cell_lon_deg = cell_lon_deg
        self.cell_lat_deg = cell_lat_deg

    @classmethod
    def from_meters(cls, cell_m: float, reference_lat: float) -> GridBinning:
        """Grid of roughly cell_m x cell_m ground cells at the reference latitude."""
        lon_deg, lat_deg = GeoDistance.meters_to_degrees(cell_m, reference_lat)
        return cls(lon_deg, lat_deg)

    def cell_of(self, lon: float, lat: float, offset: tuple[float, float] = (0.0, 0.0)) -> tuple[int, int]:
        return (
            math.floor(lon / self.cell_lon_deg - offset[0]),
            math.floor(lat / self.cell_lat_deg - offset[1]),
        )

    def densest(self, points: Sequence[AccidentPoint]) -> Optional[DensestCluster]:
        positioned = [point.coords() for point in points if point.has_position()]

        best: Optional[List[float]] = None
        for offset in self.offsets:
            # cell -> [count, sum_lon, sum_lat]; dict keeps first-seen order for the tie-break
            cells: Dict[tuple[int, int], List[float]] = {}
            for lon, lat in positioned:
                acc = cells.setdefault(self.cell_of(lon, lat, offset), [0, 0.0, 0.0])
                acc[0] += 1
                acc[1] += lon
                acc[2] += lat
            for acc in cells.values():
                if best is None or acc[0] > best[0]:
                    best = acc
        if best is None:
            return None
        count = int(best[0])
        return DensestCluster(best[1] / count, best[2] / count, count, self.name)


class PairwiseRadius(DensityStrategy):
    """Accident with the most neighbors within radius_m (haversine) is the center.

    The reported count includes the center accident itself.
    """

    name = "pairwise"

    def __init__(self, radius_m: float) -> None:
        if radius_m <= 0:
            raise ValueError(f"Radius must be positive, got {radius_m}")
        self.radius_m = radius_m

    def densest(self, points: Sequence[AccidentPoint]) -> Optional[DensestCluster]:
        coords = [p.coords() for p in points if p.has_position()]
        if not coords:
            return None

        best_idx = 0
        best_neighbors = -1
        for i, (lon1, lat1) in enumerate(coords):
            neighbors = 0
            for j, (lon2, lat2) in enumerate(coords):
                if i != j and GeoDistance.haversine_m(lon1, lat1, lon2, lat2) <= self.radius_m:
                    neighbors += 1
            if neighbors > best_neighbors:
                best_idx, best_neighbors = i, neighbors

        lon, lat = coords[best_idx]
        return DensestCluster(lon, lat, best_neighbors + 1, self.name)


class DensityEstimator:
    """Densest cluster and heat weights for the current filtered accidents."""

    def __init__(
        self,
        strategy: DensityStrategy,
        fallback: Optional[GridBinning] = None,
        pairwise_max_points: int = 2_000,
        heat_weight: float = DEFAULT_HEAT_WEIGHT,
    ) -> None:
        """Create an estimator.

        Args:
            strategy: Strategy used for densest().
            fallback: Grid used instead of a pairwise strategy on inputs above pairwise_max_points.
            pairwise_max_points: Largest input the pairwise strategy runs on.
            heat_weight: Default weight per heat point.
        """
        self.strategy = strategy
        self.fallback = fallback
        self.pairwise_max_points = pairwise_max_points
        self.heat_weight = heat_weight

    @classmethod
    def from_settings(cls, settings: AnalysisSettings) -> DensityEstimator:
        grid = GridBinning.from_meters(settings.grid_cell_m, settings.reference_latitude)
        strategy: DensityStrategy
        if settings.density_strategy == "pairwise":
            strategy = PairwiseRadius(settings.pairwise_radius_m)
        else:
            strategy = grid
        return cls(
            strategy,
            fallback=grid,
            pairwise_max_points=settings.pairwise_max_points,
            heat_weight=settings.heat_weight,
        )

    def densest(self, points: Sequence[AccidentPoint]) -> Optional[DensestCluster]:
        """Densest cluster of the given accidents; None when none has a position."""
        strategy = self.strategy
        if (
            isinstance(strategy, PairwiseRadius)
            and self.fallback is not None
            and len(points) > self.pairwise_max_points
        ):
            print(
                f"Pairwise density skipped for {len(points):,} accidents "
                f"(limit {self.pairwise_max_points:,}), using grid binning"
            )
            strategy = self.fallback
        return strategy.densest(points)

    def heat_points(
        self,
        points: Sequence[AccidentPoint],
        weight_fn: Optional[Callable[[AccidentPoint], float]] = None,
    ) -> List[HeatPoint]:
        """(lat, lon, weight) for every positioned accident.

        Args:
            points: Filtered accidents.
            weight_fn: Per-accident weight; the constant heat_weight when None.
        """
        heat = []
        for point in points:
            if not point.has_position():
                continue
            lon, lat = point.coords()
            weight = weight_fn(point) if weight_fn is not None else self.heat_weight
            heat.append(HeatPoint(lat, lon, weight))
        return heat
