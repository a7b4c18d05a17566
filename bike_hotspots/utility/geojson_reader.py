import json
from pathlib import Path
from typing import Any


def read_feature_collection(path: Path) -> list[Any]:
    """Read a GeoJSON FeatureCollection and return its feature entries.

    Args:
        path: GeoJSON file.

    Returns:
        The `features` list as stored (possibly empty). Entries that are not JSON objects are
        returned unchanged so callers can count them.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the path exists but cannot be read (a directory, no permission).
        ValueError: If the file is not valid JSON or not a FeatureCollection.
    """
    if not path.exists():
        raise FileNotFoundError(f"GeoJSON missing: {path}")
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict) or payload.get("type") != "FeatureCollection":
        raise ValueError(f"{path} is not a GeoJSON FeatureCollection")
    features = payload.get("features")
    if not isinstance(features, list):
        raise ValueError(f"{path} has no feature list")
    return features
