"""
Tabular views and CSV export of subject assignments
"""

from typing import Any, Dict, List, Optional, Tuple
import io
import pandas as pd
from sqlalchemy.engine import Engine

from .catalog_store import load_assignment_views
from .constants import ASSIGNMENT_EXPORT_COLUMNS, year_level_rank


def assignments_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """Assignment view rows as a DataFrame in export column order."""
    df = pd.DataFrame(rows, columns=None if rows else ASSIGNMENT_EXPORT_COLUMNS)
    if df.empty:
        return df

    if "is_active" in df.columns:
        df["is_active"] = df["is_active"].astype(bool)

    ordered_cols = [
        c for c in ASSIGNMENT_EXPORT_COLUMNS if c in df.columns
    ] + [c for c in df.columns if c not in ASSIGNMENT_EXPORT_COLUMNS]
    df = df[ordered_cols]

    if "year_level" in df.columns:
        keys = ["_rank"] + [c for c in ("course_code", "section") if c in df.columns]
        df = (
            df.assign(_rank=df["year_level"].map(year_level_rank))
            .sort_values(keys, kind="stable")
            .drop(columns="_rank")
            .reset_index(drop=True)
        )
    return df


def export_assignments(engine: Engine, year_level: Optional[str] = None) -> Tuple[str, bytes]:
    """CSV of the assignment list, optionally for one year level."""
    df = assignments_frame(load_assignment_views(engine, year_level=year_level))

    suffix = f"_{year_level.split()[0].lower()}" if year_level and year_level != "all" else ""
    out = io.StringIO()
    df.to_csv(out, index=False)
    return f"subject_assignments{suffix}.csv", out.getvalue().encode("utf-8")
