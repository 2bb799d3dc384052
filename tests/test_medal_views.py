import pytest

from medal_views import (ALL_COUNTRIES, chart_series, donut_degrees,
                         filtered_table, snapshot_frame, top_leaders)


def _rec(country, gold, silver, bronze):
    return {"country": country, "gold": gold, "silver": silver,
            "bronze": bronze, "total": gold + silver + bronze}


@pytest.fixture
def snapshot():
    return snapshot_frame([
        _rec("USA", 1000, 800, 700),
        _rec("NOR", 5, 3, 2),
        _rec("CHN", 300, 250, 200),
        _rec("SWE", 4, 4, 2),      # ties NOR at 10
        _rec("GBR", 290, 320, 310),
        _rec("FIN", 2, 4, 4),      # ties NOR at 10
    ])


def test_worked_example():
    s = snapshot_frame([_rec("USA", 5, 3, 2), _rec("CHN", 4, 4, 4)])

    leaders = top_leaders(s, 1, 3000)
    assert leaders["country"].tolist() == ["CHN"]
    assert leaders["pct"].tolist() == [0]

    assert filtered_table(s, ALL_COUNTRIES, 10)["country"].tolist() == ["CHN", "USA"]
    assert chart_series(s, 10) == (["CHN", "USA"], [12, 10])


def test_top_leaders_bounds_and_order(snapshot):
    leaders = top_leaders(snapshot, 3, 3000)
    assert leaders["country"].tolist() == ["USA", "GBR", "CHN"]
    assert leaders["total"].is_monotonic_decreasing
    assert leaders["pct"].between(0, 100).all()

    assert len(top_leaders(snapshot, 50, 3000)) == len(snapshot)


def test_top_leaders_pct_clamped_and_rounded(snapshot):
    leaders = top_leaders(snapshot, 3, 1000)
    # USA 2500/1000 would be 250%
    assert leaders["pct"].tolist() == [100, 92, 75]
    s =snapshot_frame([_rec("A", 15, 0, 0)])
    # 0.5% rounds up
    assert top_leaders(s, 1, 3000)["pct"].tolist() == [1]


def test_filtered_table_single_country(snapshot):
    out = filtered_table(snapshot, "CHN", 10)
    assert out["country"].tolist() == ["CHN"]
    assert out.iloc[0].to_dict() == _rec("CHN", 300, 250, 200)


def test_filtered_table_unknown_country_is_empty(snapshot):
    assert filtered_table(snapshot, "ATL", 10).empty


def test_filtered_table_does_not_assume_unique_country():
    s = snapshot_frame([_rec("USA", 1, 0, 0), _rec("CHN", 9, 9, 9), _rec("USA", 5, 5, 5)])
    out = filtered_table(s, "USA", 10)
    assert out["total"].tolist() == [15, 1]


def test_filtered_table_all_matches_chart_selection(snapshot):
    table = filtered_table(snapshot, ALL_COUNTRIES, 4)
    labels, values = chart_series(snapshot, 4)
    assert table["country"].tolist() == labels
    assert table["total"].tolist() == values


def test_ties_keep_input_order(snapshot):
    labels, values = chart_series(snapshot, 10)
    assert labels[-3:] == ["NOR", "SWE", "FIN"]
    assert values[-3:] == [10, 10, 10]
    assert filtered_table(snapshot, ALL_COUNTRIES, 10)["country"].tolist()[-3:] == ["NOR", "SWE", "FIN"]


def test_projections_are_idempotent_and_pure(snapshot):
    before = snapshot.copy()
    first = top_leaders(snapshot, 3, 3000)
    second = top_leaders(snapshot, 3, 3000)
    assert first.equals(second)
    assert filtered_table(snapshot, "GBR", 10).equals(filtered_table(snapshot, "GBR", 10))
    assert chart_series(snapshot, 5) == chart_series(snapshot, 5)
    assert snapshot.equals(before)


def test_empty_snapshot():
    s = snapshot_frame([])
    assert list(s.columns) == ["country", "gold", "silver", "bronze", "total"]
    assert top_leaders(s, 3, 3000).empty
    assert filtered_table(s, ALL_COUNTRIES, 10).empty
    assert filtered_table(s, "USA", 10).empty
    assert chart_series(s, 10) == ([], [])


def test_donut_degrees():
    assert donut_degrees(0) == 0
    assert donut_degrees(100) == pytest.approx(360)
    assert donut_degrees(25) == pytest.approx(90)


def test_top_leaders_ties_keep_input_order():
    s = snapshot_frame([_rec("NOR", 5, 3, 2), _rec("USA", 9, 9, 9),
                        _rec("SWE", 4, 4, 2), _rec("FIN", 2, 4, 4)])
    leaders = top_leaders(s, 3, 3000)
    assert leaders["country"].tolist() == ["USA", "NOR", "SWE"]


def test_filtered_table_duplicate_rows_keep_input_order():
    s = snapshot_frame([
        {"country": "USA", "gold": 1, "silver": 1, "bronze": 1, "total": 3},
        {"country": "CHN", "gold": 9, "silver": 9, "bronze": 9, "total": 27},
        {"country": "USA", "gold": 3, "silver": 0, "bronze": 0, "total": 3},
        {"country": "USA", "gold": 0, "silver": 0, "bronze": 3, "total": 3},
    ])
    out = filtered_table(s, "USA", 10)
    assert out["gold"].tolist() == [1, 3, 0]
    assert out["bronze"].tolist() == [1, 0, 3]
