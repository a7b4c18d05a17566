import json

import pytest
from pydantic import ValidationError

from bike_hotspots.app_state import AppState
from bike_hotspots.objects.filter_selection import CategoryKey, FilterSelection
from bike_hotspots.settings import AnalysisSettings, load_settings


def test_load_tags_accidents(write_inputs):
    state = AppState.load(write_inputs())

    assert state.ready
    assert state.load_error is None
    assert len(state.accidents) == 4
    assert state.skipped == 1
    assert [p.on_bike_lane for p in state.accidents] == [True, False, True, False]


def test_analyze_filters_and_finds_densest(write_inputs):
    state = AppState.load(write_inputs())

    result = state.analyze(FilterSelection({CategoryKey.BIKE_LANE: {"Yes"}}))
    assert [p.accident_id for p in result.points] == ["SPVM _ 2019 _ 1", "SPVM _ 2019 _ 3"]
    assert len(result.heat) == 2
    assert result.densest is not None
    assert result.densest.count == 2

    everything = state.analyze(FilterSelection())
    assert len(everything.points) == 4
    assert len(everything.heat) == 3


def test_analyze_empty_selection_has_no_densest(write_inputs):
    state = AppState.load(write_inputs())
    result = state.analyze(FilterSelection({CategoryKey.SEVERITY: set()}))
    assert result.points == []
    assert result.heat == []
    assert result.densest is None


def test_load_failure_disables_analysis(settings):
    state = AppState.load(settings)
    assert not state.ready
    assert "Could not load input data" in state.load_error
    assert state.analyze(FilterSelection()) is None


def test_unreadable_input_disables_analysis(write_inputs):
    settings = write_inputs()
    settings.accidents_path.unlink()
    settings.accidents_path.mkdir()
    state = AppState.load(settings)
    assert not state.ready
    assert "Could not load input data" in state.load_error
    assert state.analyze(FilterSelection()) is None


def test_analyze_is_repeatable(write_inputs):
    state = AppState.load(write_inputs())
    selection = FilterSelection({CategoryKey.WEATHER: {"Clear", "Rain", "Undefined"}})
    first = state.analyze(selection)
    second = state.analyze(selection)
    assert [p.accident_id for p in first.points] == [p.accident_id for p in second.points]
    assert first.densest.center == second.densest.center


def test_load_settings(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"lane_buffer_m": 10, "density_strategy": "pairwise"}), encoding="utf-8")
    settings = load_settings(path)
    assert settings.lane_buffer_m == 10.0
    assert settings.density_strategy == "pairwise"
    assert settings.grid_cell_m == 150.0

    assert load_settings().lane_buffer_m == 5.0

    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.json")


def test_settings_validation():
    with pytest.raises(ValidationError):
        AnalysisSettings(lane_buffer_m=0)
    with pytest.raises(ValidationError):
        AnalysisSettings(density_strategy="kde")
