from __future__ import annotations

import json
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

ROOT = Path(__file__).resolve().parents[1]
RAW_DATA = ROOT / "raw_data"
DEFAULT_SETTINGS = Path(__file__).with_name("analysis_settings.json")


class AnalysisSettings(BaseModel):
    """Configuration for lane classification, density estimation and map output."""

    accidents_path: Path = RAW_DATA / "bikes.geojson"
    lanes_path: Path = RAW_DATA / "reseau_cyclable.json"
    output_path: Path = ROOT / "outputs" / "accident_hotspots_map.html"

    # Source attribute names
    id_field: str = "NO_SEQ_COLL"
    severity_field: str = "GRAVITE"
    weather_field: str = "CD_COND_METEO"
    lighting_field: str = "CD_ECLRM"
    lon_field: str = "LOC_LONG"
    lat_field: str = "LOC_LAT"
    cyclist_count_field: str = "NB_VICTIMES_VELO"
    cyclists_only: bool = True

    # Lane buffer
    lane_buffer_m: float = Field(default=5.0, gt=0)
    boundary_tolerance_m: float = Field(default=0.05, ge=0)
    buffer_quad_segs: int = Field(default=16, ge=1)
    projected_crs: str = "EPSG:32188"

    # Density
    density_strategy: Literal["grid", "pairwise"] = "grid"
    grid_cell_m: float = Field(default=150.0, gt=0)
    reference_latitude: float = Field(default=45.5, gt=-90, lt=90)
    pairwise_radius_m: float = Field(default=200.0, gt=0)
    pairwise_max_points: int = Field(default=2_000, ge=1)
    heat_weight: float = Field(default=0.7, gt=0)


def load_settings(path: Optional[Path] = None) -> AnalysisSettings:
    """Load settings from a JSON file; defaults if the file does not exist.

    Args:
        path: Settings file, DEFAULT_SETTINGS when None.

    Returns:
        Validated AnalysisSettings (raises pydantic.ValidationError on bad values).
    """
    settings_path = path or DEFAULT_SETTINGS
    if not settings_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Settings file missing: {settings_path}")
        return AnalysisSettings()
    data = json.loads(settings_path.read_text(encoding="utf-8"))
    return AnalysisSettings.model_validate(data)
