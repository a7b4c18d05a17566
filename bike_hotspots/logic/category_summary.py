from typing import Iterable, Sequence

import polars as pl

from bike_hotspots.logic.filter_evaluator import label_for
from bike_hotspots.objects.accident_point import AccidentPoint
from bike_hotspots.objects.filter_selection import CategoryKey


def summarize_categories(
    points: Sequence[AccidentPoint], categories: Iterable[CategoryKey] = tuple(CategoryKey)
) -> pl.DataFrame:
    """Count accidents per label for each category.

    Args:
        points: Accidents (tagged, for the bike lane category).
        categories: Categories to summarize, all by default.

    Returns:
        DataFrame with columns category, label, count; sorted by category then descending count.
    """
    category_col: list[str] = []
    label_col: list[str] = []
    for category in categories:
        for point in points:
            category_col.append(category.value)
            label_col.append(label_for(point, category))

    labels = pl.DataFrame(
        {"category": category_col, "label": label_col},
        schema={"category": pl.Utf8, "label": pl.Utf8},
    )
    return (
        labels.group_by(["category", "label"], maintain_order=True)
        .agg(pl.len().alias("count"))
        .sort(["category", "count"], descending=[False, True], maintain_order=True)
    )
