from pathlib import Path
from typing import List

from bike_hotspots.objects.lane_segment import LaneSegment
from bike_hotspots.utility.geojson_reader import read_feature_collection


class LoadLaneNetwork:
    """Load the bike lane network (reseau cyclable) as LaneSegments."""

    def __init__(self, lanes_path: Path) -> None:
        self.lanes_path = lanes_path
        self.skipped_features = 0
        self.malformed_features = 0

    def load_lanes(self) -> List[LaneSegment]:
        """Read LineString/MultiLineString features.

        Features without geometry and entries that are not JSON objects are skipped and counted.

        Raises:
            FileNotFoundError: If the file is missing.
            OSError: If the path cannot be read.
            ValueError: If the file is not a FeatureCollection or a feature is not a polyline.
        """
        lanes = []
        self.skipped_features = 0
        self.malformed_features = 0
        for idx, feature in enumerate(read_feature_collection(self.lanes_path)):
            if not isinstance(feature, dict):
                self.malformed_features += 1
                continue
            geometry = feature.get("geometry")
            if geometry is None:
                self.skipped_features += 1
                continue
            if not isinstance(geometry, dict):
                raise ValueError(f"Lane feature {idx} in {self.lanes_path}: geometry is not an object")
            try:
                lanes.append(LaneSegment.from_geojson(geometry))
            except TypeError as e:
                raise ValueError(f"Lane feature {idx} in {self.lanes_path}: {e}") from e
        total_km = sum(lane.length_m() for lane in lanes) / 1000
        print(
            f"Loaded lanes: {len(lanes):,} ({total_km:,.1f} km, {self.skipped_features:,} features without geometry "
            f"and {self.malformed_features:,} malformed features skipped)"
        )
        return lanes
