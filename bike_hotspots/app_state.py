from __future__ import annotations

from typing import List, Optional

from bike_hotspots.logic.bike_lane_classifier import BikeLaneClassifier
from bike_hotspots.logic.density_estimator import DensityEstimator
from bike_hotspots.logic.filter_evaluator import filter_points
from bike_hotspots.logic.lane_buffer_index import LaneBufferIndex
from bike_hotspots.objects.accident_point import AccidentPoint
from bike_hotspots.objects.densest_cluster import DensestCluster
from bike_hotspots.objects.filter_selection import FilterSelection
from bike_hotspots.objects.heat_point import HeatPoint
from bike_hotspots.objects.lane_segment import LaneSegment
from bike_hotspots.settings import AnalysisSettings
from bike_hotspots.utility.load_accidents import LoadAccidentData
from bike_hotspots.utility.load_lanes import LoadLaneNetwork


class AnalysisResult:
    """Everything the map needs for one filter selection."""

    selection: FilterSelection
    points: List[AccidentPoint]
    heat: List[HeatPoint]
    densest: Optional[DensestCluster]

    def __init__(
        self,
        selection: FilterSelection,
        points: List[AccidentPoint],
        heat: List[HeatPoint],
        densest: Optional[DensestCluster],
    ):
        self.selection = selection
        self.points = points
        self.heat = heat
        self.densest = densest


class AppState:
    """Loaded, tagged dataset for one session.

    Explanation:
    Built once by load() (or from_data() for in-memory inputs). After that the accidents and the
    lane index are read-only and analyze() can be called for any number of selections. A failed
    load leaves the state empty with load_error set; analyze() then returns None.
    """

    def __init__(
        self,
        settings: AnalysisSettings,
        accidents: List[AccidentPoint],
        lanes: List[LaneSegment],
        lane_index: Optional[LaneBufferIndex],
        skipped: int = 0,
        load_error: Optional[str] = None,
    ) -> None:
        self.settings = settings
        self.accidents = accidents
        self.lanes = lanes
        self.lane_index = lane_index
        self.skipped = skipped
        self.load_error = load_error
        self.estimator = DensityEstimator.from_settings(settings)

    @classmethod
    def load(cls, settings: AnalysisSettings) -> AppState:
        """Load both inputs from disk and tag the accidents.

        Load failures of either file are reported, not raised.
        """
        try:
            accidents = LoadAccidentData(settings.accidents_path, settings).load_accidents()
            lanes = LoadLaneNetwork(settings.lanes_path).load_lanes()
        except (OSError, ValueError) as e:
            message = f"Could not load input data: {e}"
            print(message)
            return cls(settings, [], [], None, load_error=message)
        return cls.from_data(settings, accidents, lanes)

    @classmethod
    def from_data(
        cls, settings: AnalysisSettings, accidents: List[AccidentPoint], lanes: List[LaneSegment]
    ) -> AppState:
        """Build the lane index and tag already loaded accidents."""
        lane_index = LaneBufferIndex.build(
            lanes,
            settings.lane_buffer_m,
            projected_crs=settings.projected_crs,
            boundary_tolerance_m=settings.boundary_tolerance_m,
            quad_segs=settings.buffer_quad_segs,
        )
        result = BikeLaneClassifier(lane_index).tag_all(accidents)
        return cls(settings, result.points, lanes, lane_index, skipped=result.skipped)

    @property
    def ready(self) -> bool:
        return self.load_error is None and self.lane_index is not None

    def analyze(self, selection: FilterSelection) -> Optional[AnalysisResult]:
        """Filter accidents and compute heat weights and the densest cluster.

        Returns:
            AnalysisResult, or None if the data failed to load.
        """
        if not self.ready:
            return None
        points = filter_points(self.accidents, selection)
        return AnalysisResult(
            selection=selection,
            points=points,
            heat=self.estimator.heat_points(points),
            densest=self.estimator.densest(points),
        )
