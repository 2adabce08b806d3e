"""Tabular (pandas) views of an AnalyticsSummary for CLI output and CSV export."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from putting_analyzer.models import AnalyticsSummary
from .formatting import format_percentage

logger = logging.getLogger(__name__)

TABLE_ORDER = ("overview", "distance", "slope", "green_speed", "mental")


def summary_tables(summary: AnalyticsSummary) -> Dict[str, pd.DataFrame]:
    """One DataFrame per breakdown, columns named after the summary fields."""
    data = summary.to_dict()
    overview = pd.DataFrame(
        [
            {
                "total_rounds": data["total_rounds"],
                "average_putts": data["average_putts"],
                "one_putt_rate": data["one_putt_rate"],
                "three_putt_rate": data["three_putt_rate"],
                "cup_in_rate": data["cup_in_rate"],
            }
        ]
    )
    return {
        "overview": overview,
        "distance": pd.DataFrame(data["distance_stats"], columns=["range", "attempts", "cup_ins", "rate"]),
        "slope": pd.DataFrame(data["slope_stats"], columns=["slope", "attempts", "cup_ins", "rate"]),
        "green_speed": pd.DataFrame(data["green_speed_stats"], columns=["speed_range", "average_putts", "rounds"]),
        "mental": pd.DataFrame(data["mental_stats"], columns=["state", "attempts", "cup_ins", "rate"]),
    }


def render_tables(summary: AnalyticsSummary) -> str:
    """Human-readable text block; rates shown with one decimal."""
    tables = summary_tables(summary)
    blocks: List[str] = []
    for name in TABLE_ORDER:
        df = tables[name].copy()
        for column in df.columns:
            if column.endswith("rate"):
                df[column] = df[column].map(format_percentage)
        if "average_putts" in df.columns:
            df["average_putts"] = df["average_putts"].map(lambda v: f"{v:.2f}")
        title = name.replace("_", " ").upper()
        blocks.append(f"=== {title} ===\n{df.to_string(index=False)}")
    return "\n\n".join(blocks)


def write_summary_csv(summary: AnalyticsSummary, directory: Union[str, Path]) -> List[Path]:
    """Write ``<table>.csv`` for each breakdown into ``directory``; returns the paths."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for name, df in summary_tables(summary).items():
        path = out_dir / f"{name}.csv"
        df.to_csv(path, index=False)
        written.append(path)
    logger.info(f"Wrote {len(written)} summary tables to {out_dir}")
    return written
