from datetime import date

import pandas as pd

from covid_preprints.export import write_dataset
from covid_preprints.report import (
    OTHER_LABEL,
    bucket_sources,
    cumulative_counts,
    daily_counts,
    load_frame,
    render_reports,
    weekly_counts,
)
from tests.factories import make_record


def _frame(rows):
    return pd.DataFrame(
        {
            "source": [s for s, _ in rows],
            "posted_date": pd.to_datetime([d for _, d in rows]),
        }
    )


def test_bucket_sources_groups_small_sources() -> None:
    rows = [("bioRxiv", "2020-03-01")] * 50 + [("SciELO", "2020-03-01")] * 49
    bucketed = bucket_sources(_frame(rows), threshold=50)
    assert bucketed["source"].value_counts().to_dict() == {"bioRxiv": 50, OTHER_LABEL: 49}


def test_daily_counts_fill_missing_days() -> None:
    df = _frame([("arXiv", "2020-03-01"), ("arXiv", "2020-03-03"), ("medRxiv", "2020-03-03")])
    daily = daily_counts(df)
    assert list(daily.index.strftime("%Y-%m-%d")) == ["2020-03-01", "2020-03-02", "2020-03-03"]
    assert daily.loc["2020-03-02"].sum() == 0
    assert daily.loc["2020-03-03", "medRxiv"] == 1


def test_weekly_counts_end_on_sunday() -> None:
    # 2020-03-01 is a Sunday
    df = _frame([("arXiv", "2020-03-01"), ("arXiv", "2020-03-02"), ("arXiv", "2020-03-08")])
    weekly = weekly_counts(df)
    assert list(weekly.index.strftime("%Y-%m-%d")) == ["2020-03-01", "2020-03-08"]
    assert list(weekly["arXiv"]) == [1, 2]


def test_cumulative_counts_are_monotonic() -> None:
    df = _frame([("arXiv", "2020-03-01"), ("arXiv", "2020-03-03"), ("arXiv", "2020-03-03")])
    cumulative = cumulative_counts(df)
    assert list(cumulative["arXiv"]) == [1, 1, 3]


def test_other_column_is_last() -> None:
    df = _frame([(OTHER_LABEL, "2020-03-01")] * 5 + [("arXiv", "2020-03-01")])
    assert list(daily_counts(df).columns) == ["arXiv", OTHER_LABEL]


def test_render_reports_writes_three_images(tmp_path) -> None:
    csv_path = tmp_path / "dataset.csv"
    write_dataset(
        [
            make_record(identifier="a", posted=date(2020, 3, 1)),
            make_record(identifier="b", posted=date(2020, 3, 9), title="Covid-19 b", source="arXiv"),
        ],
        csv_path,
    )
    assert len(load_frame(csv_path)) == 2

    paths = render_reports(csv_path, tmp_path / "figures", threshold=1)

    assert set(paths) == {"daily", "weekly", "cumulative"}
    for path in paths.values():
        assert path.exists()
        assert path.stat().st_size > 0
