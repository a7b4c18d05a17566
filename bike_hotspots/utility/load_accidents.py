from pathlib import Path
from typing import Any, List, Optional

import polars as pl

from bike_hotspots.objects.accident_point import AccidentPoint
from bike_hotspots.settings import AnalysisSettings
from bike_hotspots.utility.geojson_reader import read_feature_collection


class LoadAccidentData:
    """Load bicycle accident records from GeoJSON or the Montreal collisions CSV."""

    def __init__(self, accidents_path: Path, settings: Optional[AnalysisSettings] = None) -> None:
        """Configure the accident loader.

        Args:
            accidents_path: `.geojson`/`.json` FeatureCollection of points, or `.csv` export.
            settings: Field names and CSV filtering; defaults when None.
        """
        self.accidents_path = accidents_path
        self.settings = settings or AnalysisSettings()
        self.malformed_features = 0

    def load_accidents(self) -> List[AccidentPoint]:
        """Load every record; records without usable coordinates are kept with an empty position.

        Returns:
            AccidentPoint list in file order.

        Raises:
            FileNotFoundError: If the file is missing.
            OSError: If the path cannot be read.
            ValueError: If the file is not a FeatureCollection or a readable CSV.
        """
        if not self.accidents_path.exists():
            raise FileNotFoundError(f"Accident data missing: {self.accidents_path}")

        if self.accidents_path.suffix.lower() == ".csv":
            points = self._load_csv()
        else:
            points = self._load_geojson()

        without_position = sum(1 for p in points if not p.has_position())
        print(
            f"Loaded accidents: {len(points):,} ({without_position:,} without usable coordinates, "
            f"{self.malformed_features:,} malformed features)"
        )
        return points

    def _load_geojson(self) -> List[AccidentPoint]:
        points = []
        self.malformed_features = 0
        for feature in read_feature_collection(self.accidents_path):
            if not isinstance(feature, dict):
                # kept as a record without position so raw totals still include it
                self.malformed_features += 1
                points.append(self._make_point({}, None, None))
                continue
            properties = feature.get("properties")
            if not isinstance(properties, dict):
                properties = {}
            lon, lat = self._point_coordinates(feature.get("geometry"))
            points.append(self._make_point(properties, lon, lat))
        return points

    def _load_csv(self) -> List[AccidentPoint]:
        """Read the CSV as text columns and cast coordinates leniently (bad values become null)."""
        s = self.settings
        try:
            accidents = pl.read_csv(self.accidents_path, infer_schema_length=0)
        except pl.exceptions.PolarsError as e:
            raise ValueError(f"Unreadable accident CSV {self.accidents_path}: {e}") from e
        missing = [c for c in (s.lon_field, s.lat_field) if c not in accidents.columns]
        if missing:
            raise ValueError(f"Accident CSV {self.accidents_path} lacks coordinate columns: {missing}")

        if s.cyclists_only and s.cyclist_count_field in accidents.columns:
            accidents = accidents.filter(
                pl.col(s.cyclist_count_field).str.replace(",", ".").cast(pl.Float64, strict=False).fill_null(0) > 0
            )
        accidents = accidents.with_columns(
            [
                pl.col(s.lon_field).str.replace(",", ".").cast(pl.Float64, strict=False).alias("_longitude"),
                pl.col(s.lat_field).str.replace(",", ".").cast(pl.Float64, strict=False).alias("_latitude"),
            ]
        )
        return [
            self._make_point(row, row["_longitude"], row["_latitude"])
            for row in accidents.iter_rows(named=True)
        ]

    def _make_point(self, properties: dict, lon: Any, lat: Any) -> AccidentPoint:
        s = self.settings
        return AccidentPoint.from_properties(
            properties,
            lon,
            lat,
            id_field=s.id_field,
            severity_field=s.severity_field,
            weather_field=s.weather_field,
            lighting_field=s.lighting_field,
        )

    @staticmethod
    def _point_coordinates(geometry: Any) -> tuple[Any, Any]:
        """Raw (lon, lat) of a Point geometry, (None, None) for anything else."""
        if not isinstance(geometry, dict) or geometry.get("type") != "Point":
            return None, None
        coords = geometry.get("coordinates")
        if not isinstance(coords, (list, tuple)) or len(coords) < 2:
            return None, None
        return coords[0], coords[1]
