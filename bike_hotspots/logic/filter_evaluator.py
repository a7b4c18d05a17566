from typing import Iterable, List

from bike_hotspots.objects.accident_point import AccidentPoint
from bike_hotspots.objects.filter_selection import CategoryKey, FilterSelection
from bike_hotspots.utility.code_tables import (
    bike_lane_label,
    classify_severity,
    lighting_label,
    weather_label,
)


def label_for(point: AccidentPoint, category: CategoryKey) -> str:
    """Display label of an accident in one category."""
    if category is CategoryKey.SEVERITY:
        return classify_severity(point.severity).value
    if category is CategoryKey.WEATHER:
        return weather_label(point.weather)
    if category is CategoryKey.LIGHTING:
        return lighting_label(point.lighting)
    if category is CategoryKey.BIKE_LANE:
        return bike_lane_label(point.on_bike_lane)
    raise ValueError(f"Unknown category: {category!r}")


def passes_filter(point: AccidentPoint, selection: FilterSelection) -> bool:
    """Check an accident against every active category of the selection.

    Args:
        point: Accident (tagged, for the bike lane category).
        selection: Allowed labels per active category.

    Returns:
        True if for each active category the accident's label is allowed. A category with no
        allowed labels rejects everything; a selection without active categories accepts everything.
    """
    for category, allowed in selection.items():
        if not allowed:
            return False
        if label_for(point, category) not in allowed:
            return False
    return True


def filter_points(points: Iterable[AccidentPoint], selection: FilterSelection) -> List[AccidentPoint]:
    """Accidents passing the selection, in input order."""
    return [p for p in points if passes_filter(p, selection)]
