#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

import folium
from folium.plugins import Fullscreen, HeatMap

from bike_hotspots.app_state import AnalysisResult, AppState
from bike_hotspots.logic.category_summary import summarize_categories
from bike_hotspots.objects.bbox import BBox
from bike_hotspots.objects.filter_selection import CategoryKey, FilterSelection
from bike_hotspots.settings import load_settings
from bike_hotspots.utility.category_colors import color_for, popup_html

# Map settings
MONTREAL_CENTER = (45.508888, -73.561668)
TILES = "cartodbpositron"
SHOW_LANE_BUFFERS = False


def lanes_geojson(state: AppState) -> dict:
    """Lane segments as a GeoJSON FeatureCollection of MultiLineStrings."""
    features = [
        {
            "type": "Feature",
            "properties": {},
            "geometry": {
                "type": "MultiLineString",
                "coordinates": [[list(pt) for pt in part] for part in lane.parts if part],
            },
        }
        for lane in state.lanes
        if not lane.is_empty()
    ]
    return {"type": "FeatureCollection", "features": features}


def make_map(state: AppState, result: AnalysisResult, color_by: Optional[CategoryKey]) -> folium.Map:
    """Render lanes, filtered accidents, heat layer and densest cluster into a Folium map."""
    extent = BBox.from_coords(p.coords() for p in result.points if p.has_position())
    center = extent.center() if extent is not None else MONTREAL_CENTER
    fmap = folium.Map(location=list(center), zoom_start=12, tiles=TILES)
    Fullscreen().add_to(fmap)

    folium.GeoJson(
        lanes_geojson(state),
        name="Bike lanes",
        style_function=lambda _: {"color": "#003366", "weight": 2},
    ).add_to(fmap)

    if state.lane_index is not None:
        folium.GeoJson(
            state.lane_index.buffers_geojson(),
            name=f"Lane buffers ({state.settings.lane_buffer_m} m)",
            show=SHOW_LANE_BUFFERS,
            style_function=lambda _: {"color": "#2980b9", "fillOpacity": 0.15, "weight": 1},
        ).add_to(fmap)

    accidents_layer = folium.FeatureGroup(name="Accidents")
    for point in result.points:
        if not point.has_position():
            continue
        lon, lat = point.coords()
        folium.CircleMarker(
            location=[lat, lon],
            radius=4,
            color="#000",
            weight=1,
            fill=True,
            fill_color=color_for(point, color_by),
            fill_opacity=0.9,
            popup=folium.Popup(popup_html(point), max_width=260),
        ).add_to(accidents_layer)
    accidents_layer.add_to(fmap)

    if result.heat:
        HeatMap(
            [list(h) for h in result.heat],
            name="Heatmap",
            radius=25,
            blur=20,
            min_opacity=0.3,
        ).add_to(fmap)

    if result.densest is not None:
        densest = result.densest
        folium.Marker(
            location=[densest.lat, densest.lon],
            tooltip=f"Densest cluster: {densest.count} accidents",
            popup=folium.Popup(
                f"Densest cluster ({densest.strategy})<br/>Accidents: {densest.count}<br/>"
                f"Center: {densest.lat:.5f}, {densest.lon:.5f}",
                max_width=220,
            ),
            icon=folium.Icon(color="red", icon="info-sign"),
        ).add_to(fmap)

    folium.LayerControl().add_to(fmap)
    return fmap


def selection_from_args(args: argparse.Namespace) -> FilterSelection:
    """Categories given on the command line become active; the others stay inactive."""
    allowed = {}
    for category in CategoryKey:
        labels = getattr(args, category.value)
        if labels is not None:
            allowed[category] = labels
    return FilterSelection(allowed)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Map Montreal bicycle accidents with bike lanes, heatmap and densest cluster."
    )
    parser.add_argument("--settings", type=Path, default=None, help="Settings JSON (default: bundled analysis_settings.json)")
    parser.add_argument("--output", type=Path, default=None, help="Output HTML (default from settings)")
    parser.add_argument(
        "--color-by",
        choices=[c.value for c in CategoryKey],
        default=None,
        help="Category used to color accident markers",
    )
    for category in CategoryKey:
        parser.add_argument(
            f"--{category.value.replace('_', '-')}",
            dest=category.value,
            action="append",
            default=None,
            metavar="LABEL",
            help=f"Keep accidents with this {category.value.replace('_', ' ')} label (repeatable)",
        )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load data, apply the command line selection, and write the map HTML."""
    args = build_parser().parse_args(argv)
    settings = load_settings(args.settings)
    output = args.output or settings.output_path

    state = AppState.load(settings)
    result = state.analyze(selection_from_args(args))
    if result is None:
        print("Map not written: input data unavailable")
        return 1

    print(f"Accidents after filter: {len(result.points):,} of {len(state.accidents):,}")
    if result.densest is None:
        print("Densest cluster: none (no accidents match the filter)")
    else:
        print(f"Densest cluster: {result.densest}")
    print(summarize_categories(result.points))

    color_by = CategoryKey(args.color_by) if args.color_by else None
    fmap = make_map(state, result, color_by)
    output.parent.mkdir(parents=True, exist_ok=True)
    fmap.save(str(output))
    print(f"Wrote map to {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
