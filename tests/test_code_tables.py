import math

import pytest

from bike_hotspots.utility.code_tables import (
    Severity,
    category_labels,
    classify_severity,
    lighting_label,
    normalize_code,
    weather_label,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("11.0", "11"),
        ("nan", ""),
        (None, ""),
        (14, "14"),
        (14.0, "14"),
        (" 12 ", "12"),
        ("NaN", ""),
        ("None", ""),
        ("", ""),
        (math.nan, ""),
        ("abc", ""),
        (True, ""),
        ("099", "99"),
        ("1_1", ""),
        ("11.7", "11"),
        ("1e1", ""),
    ],
)
def test_normalize_code(raw, expected):
    assert normalize_code(raw) == expected


def test_weather_labels():
    assert weather_label("11.0") == "Clear"
    assert weather_label(14) == "Rain"
    assert weather_label("99") == "Other / Unspecified"
    assert weather_label("20") == "Undefined"
    assert weather_label(None) == "Undefined"


def test_lighting_labels():
    assert lighting_label("1") == "Daytime – bright"
    assert lighting_label(4.0) == "Night – unlit"
    assert lighting_label("5") == "Undefined"
    assert lighting_label("nan") == "Undefined"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Léger", Severity.INJURY),
        ("LÉGER", Severity.INJURY),
        ("Mortel", Severity.FATAL_OR_HOSPITALIZATION),
        ("Grave", Severity.FATAL_OR_HOSPITALIZATION),
        ("", Severity.NO_INJURY),
        (None, Severity.NO_INJURY),
        ("Dommages matériels seulement", Severity.NO_INJURY),
        ("Grave - blessé léger aussi", Severity.FATAL_OR_HOSPITALIZATION),
    ],
)
def test_classify_severity(raw, expected):
    assert classify_severity(raw) is expected


def test_category_labels_include_undefined():
    labels = category_labels()
    assert labels["weather"][-1] == "Undefined"
    assert labels["lighting"][-1] == "Undefined"
    assert labels["bike_lane"] == ["Yes", "No"]
    assert labels["severity"] == ["Fatal/Hospitalization", "Injury", "No Injury"]
