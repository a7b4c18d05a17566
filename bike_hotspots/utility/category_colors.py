from typing import Optional

from bike_hotspots.logic.filter_evaluator import label_for
from bike_hotspots.objects.accident_point import AccidentPoint
from bike_hotspots.objects.filter_selection import CategoryKey
from bike_hotspots.utility.code_tables import Severity, normalize_code

DEFAULT_COLOR = "#666"

SEVERITY_COLORS = {
    Severity.FATAL_OR_HOSPITALIZATION.value: "red",
    Severity.INJURY.value: "yellow",
    Severity.NO_INJURY.value: "green",
}
WEATHER_COLORS = ["#00ff00", "#66ff66", "#ccff66", "#ffff66", "#ffcc66", "#ff9966", "#ff6666", "#cc66ff", "#9966ff", "#6666ff"]
LIGHTING_COLORS = ["#ffff66", "#ffcc66", "#ff9966", "#ff6666"]
BIKE_LANE_COLORS = {"Yes": "green", "No": "red"}


def _code_as_int(raw) -> int:
    code = normalize_code(raw)
    return int(code) if code else 0


def color_for(point: AccidentPoint, category: Optional[CategoryKey]) -> str:
    """Marker fill color of an accident when colored by category (grey when None)."""
    if category is None:
        return DEFAULT_COLOR
    if category is CategoryKey.WEATHER:
        return WEATHER_COLORS[_code_as_int(point.weather) % len(WEATHER_COLORS)]
    if category is CategoryKey.LIGHTING:
        return LIGHTING_COLORS[_code_as_int(point.lighting) % len(LIGHTING_COLORS)]
    label = label_for(point, category)
    if category is CategoryKey.SEVERITY:
        return SEVERITY_COLORS[label]
    return BIKE_LANE_COLORS[label]


def popup_html(point: AccidentPoint) -> str:
    """Popup body listing the accident's labels."""
    return (
        f"<b>ID:</b> {point.accident_id if point.accident_id is not None else 'n/a'}<br>"
        f"<b>Accident:</b> {label_for(point, CategoryKey.SEVERITY)}<br>"
        f"<b>Weather:</b> {label_for(point, CategoryKey.WEATHER)}<br>"
        f"<b>Lighting:</b> {label_for(point, CategoryKey.LIGHTING)}<br>"
        f"<b>Bike Lane:</b> {label_for(point, CategoryKey.BIKE_LANE)}"
    )
