"""
Medal view projections.

Pure pandas transforms from a medal summary snapshot to the frames the
dashboard renders: leader cards, the country table and the bar chart.
Nothing here touches Streamlit or the network.
"""

import math

import pandas as pd

ALL_COUNTRIES = "All"
COLUMNS = ["country", "gold", "silver", "bronze", "total"]


def snapshot_frame(records):
    """Build a snapshot frame from a list of record dicts."""
    if not records:
        return pd.DataFrame({c: pd.Series(dtype="object" if c == "country" else "int64")
                             for c in COLUMNS})
    return pd.DataFrame.from_records(list(records))


def _by_total(df):
    # mergesort is stable: equal totals keep snapshot order
    return df.sort_values("total", ascending=False, kind="mergesort")


def top_leaders(snapshot, n=3, ceiling=3000):
    """Top ``n`` countries by total, with a ``pct`` column for the donut cards.

    ``pct`` is ``total / ceiling`` as a whole percentage (halves round up),
    clamped to 100.
    """
    top = _by_total(snapshot).head(n).copy()
    top["pct"] = [min(100, math.floor(t / ceiling * 100 + 0.5)) for t in top["total"]]
    return top.reset_index(drop=True)


def filtered_table(snapshot, selection=ALL_COUNTRIES, limit=10):
    df = snapshot if selection == ALL_COUNTRIES else snapshot[snapshot["country"] == selection]
    return _by_total(df).head(limit).reset_index(drop=True)


def chart_series(snapshot, limit=10):
    """Return ``(labels, values)`` for the top ``limit`` countries by total."""
    top = _by_total(snapshot).head(limit)
    return top["country"].tolist(), [int(v) for v in top["total"]]


def donut_degrees(pct):
    return pct * 3.6
