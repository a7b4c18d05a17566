"""
Code tables of the Montreal collision dataset (SAAQ codes) and the single code normalizer
every label lookup goes through.
"""

from __future__ import annotations

import math
import re
import unicodedata
from enum import Enum
from typing import Any

UNDEFINED_LABEL = "Undefined"

# Values that mean "no code" in the exports (pandas/NumPy writes NaN as "nan").
MISSING_SENTINELS = {"", "nan", "none", "null"}
# integer part plus optional decimals; no exponents or digit separators
CODE_PATTERN = re.compile(r"^([+-]?\d+)(?:\.\d*)?$", re.ASCII)

WEATHER_LABELS = {
    "11": "Clear",
    "12": "Partly cloudy",
    "13": "Cloudy",
    "14": "Rain",
    "15": "Snow",
    "16": "Freezing rain",
    "17": "Fog",
    "18": "High winds",
    "19": "Other precip",
    "99": "Other / Unspecified",
}

LIGHTING_LABELS = {
    "1": "Daytime – bright",
    "2": "Daytime – semi-obscure",
    "3": "Night – lit",
    "4": "Night – unlit",
}

BIKE_LANE_LABELS = {True: "Yes", False: "No"}


class Severity(str, Enum):
    FATAL_OR_HOSPITALIZATION = "Fatal/Hospitalization"
    INJURY = "Injury"
    NO_INJURY = "No Injury"


# Checked in this order: a text can carry both kinds of token.
SEVERE_TOKENS = ("mortel", "grave", "fatal", "serious")
MINOR_TOKENS = ("léger", "leger", "minor")


def normalize_code(raw: Any) -> str:
    """Canonical integer string for a raw code value.

    Args:
        raw: Number, numeric string ("11", "11.0"), or a missing sentinel (None, NaN, "nan", "none").

    Returns:
        Integer code as string ("11"), or "" if the value is missing or not numeric.
        Fractional values are truncated toward zero.
    """
    if raw is None or isinstance(raw, bool):
        return ""
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, float):
        return str(int(raw)) if math.isfinite(raw) else ""
    text = str(raw).strip()
    if text.lower() in MISSING_SENTINELS:
        return ""
    match = CODE_PATTERN.match(text)
    if match is None:
        return ""
    return str(int(match.group(1)))


def weather_label(raw: Any) -> str:
    return WEATHER_LABELS.get(normalize_code(raw), UNDEFINED_LABEL)


def lighting_label(raw: Any) -> str:
    return LIGHTING_LABELS.get(normalize_code(raw), UNDEFINED_LABEL)


def bike_lane_label(on_bike_lane: bool | None) -> str:
    """Yes/No label; an untagged accident counts as off the network."""
    return BIKE_LANE_LABELS[bool(on_bike_lane)]


def classify_severity(raw: Any) -> Severity:
    """Map free-text severity (GRAVITE) to an accident type.

    Args:
        raw: Severity text such as "Mortel", "Grave", "Léger" or "Dommages matériels seulement".

    Returns:
        Fatal/Hospitalization if a severe token is present, else Injury if a minor token is present,
        else No Injury (also for empty or missing values).
    """
    if raw is None:
        return Severity.NO_INJURY
    if isinstance(raw, float) and math.isnan(raw):
        return Severity.NO_INJURY
    text = unicodedata.normalize("NFC", str(raw)).lower()
    if not text.strip():
        return Severity.NO_INJURY
    if any(token in text for token in SEVERE_TOKENS):
        return Severity.FATAL_OR_HOSPITALIZATION
    if any(token in text for token in MINOR_TOKENS):
        return Severity.INJURY
    return Severity.NO_INJURY


def category_labels() -> dict[str, list[str]]:
    """Every label each category can produce, in display order."""
    return {
        "severity": [s.value for s in Severity],
        "weather": list(WEATHER_LABELS.values()) + [UNDEFINED_LABEL],
        "lighting": list(LIGHTING_LABELS.values()) + [UNDEFINED_LABEL],
        "bike_lane": list(BIKE_LANE_LABELS.values()),
    }
