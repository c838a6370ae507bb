"""Aggregate charts from the exported dataset.

Sources with fewer than ``threshold`` records are grouped as "Other". Three
views are rendered: daily counts, weekly counts (weeks ending Sunday) and
cumulative daily counts, each stacked by source.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from .constants import OTHER_THRESHOLD

logger = logging.getLogger(__name__)

OTHER_LABEL = "Other"


def load_frame(path: Path) -> pd.DataFrame:
	return pd.read_csv(path, parse_dates=["posted_date"])


def bucket_sources(df: pd.DataFrame, threshold: int = OTHER_THRESHOLD) -> pd.DataFrame:
	counts = df["source"].value_counts()
	small = counts[counts < threshold].index
	out = df.copy()
	out.loc[out["source"].isin(small), "source"] = OTHER_LABEL
	return out


def _order_columns(frame: pd.DataFrame) -> pd.DataFrame:
	# largest sources first, "Other" always last
	cols = frame.sum().sort_values(ascending=False).index.tolist()
	if OTHER_LABEL in cols:
		cols.remove(OTHER_LABEL)
		cols.append(OTHER_LABEL)
	return frame[cols]


def daily_counts(df: pd.DataFrame) -> pd.DataFrame:
	if df.empty:
		return pd.DataFrame()
	daily = df.groupby([df["posted_date"].dt.normalize(), "source"]).size().unstack(fill_value=0)
	daily = daily.asfreq("D", fill_value=0)
	daily.index.name = "posted_date"
	return _order_columns(daily)


def weekly_counts(df: pd.DataFrame) -> pd.DataFrame:
	daily = daily_counts(df)
	if daily.empty:
		return daily
	return daily.resample("W-SUN").sum()


def cumulative_counts(df: pd.DataFrame) -> pd.DataFrame:
	return daily_counts(df).cumsum()


def _plot(frame: pd.DataFrame, kind: str, title: str, ylabel: str, path: Path) -> Path:
	fig, ax = plt.subplots(figsize=(12, 6))
	if frame.empty:
		ax.text(0.5, 0.5, "No records", ha="center", va="center", transform=ax.transAxes)
	elif kind == "bar":
		plotted = frame.copy()
		plotted.index = plotted.index.strftime("%Y-%m-%d")
		plotted.plot(kind="bar", stacked=True, ax=ax, width=0.9)
		ax.tick_params(axis="x", labelrotation=90)
	else:
		frame.plot(kind="area", stacked=True, ax=ax, linewidth=0)
	ax.set_title(title)
	ax.set_xlabel("Posted date")
	ax.set_ylabel(ylabel)
	if not frame.empty:
		ax.legend(title="Source", loc="upper left", fontsize="small")
	fig.tight_layout()
	fig.savefig(path, dpi=150)
	plt.close(fig)
	return path


def render_reports(csv_path: Path, out_dir: Path, threshold: int = OTHER_THRESHOLD) -> Dict[str, Path]:
	out_dir.mkdir(parents=True, exist_ok=True)
	df = bucket_sources(load_frame(csv_path), threshold)
	logger.info(f"Rendering reports for {len(df)} records from {csv_path}")
	return {
		"daily": _plot(daily_counts(df), "area", "COVID-19 preprints per day", "Preprints", out_dir / "daily.png"),
		"weekly": _plot(weekly_counts(df), "bar", "COVID-19 preprints per week", "Preprints", out_dir / "weekly.png"),
		"cumulative": _plot(cumulative_counts(df), "area", "Cumulative COVID-19 preprints", "Preprints", out_dir / "cumulative.png"),
	}
