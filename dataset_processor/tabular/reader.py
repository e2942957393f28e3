from __future__ import annotations

import zipfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.row_data import RowData

"""Tabular input reader (CSV / XLSX) built on pandas.

The first line is the header; every following line is one data row. All cells
are read as strings so parsing (scores, IPs, flags) stays in the services and
produces domain errors instead of silent dtype coercion.
"""

__all__ = [
    "TableReadError",
    "MissingColumnsError",
    "REQUIRED_COLUMNS",
    "read_table",
    "normalize_table",
    "read_program_rows",
]

REQUIRED_COLUMNS: dict[str, tuple[str, ...]] = {
    "grades": ("name",),
    "cart": ("item",),
    "devices": ("name", "ip", "active"),
    "collections": ("name", "value"),
}

_CSV_SUFFIXES = {".csv", ".txt"}
_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


class TableReadError(Exception):
    """Raised when an input file cannot be read as a table."""


class MissingColumnsError(Exception):
    """Raised when required columns are missing from the header."""


def read_table(path: Path) -> pd.DataFrame:
    """Read a CSV or XLSX file into a DataFrame of strings (first sheet for XLSX)."""
    if not path.exists():
        raise TableReadError(f"input file not found: {path}")
    suffix = path.suffix.lower()
    try:
        if suffix in _CSV_SUFFIXES:
            return pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
        if suffix in _EXCEL_SUFFIXES:
            return pd.read_excel(path, sheet_name=0, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError as e:
        raise TableReadError(f"input file is empty: {path}") from e
    except (pd.errors.ParserError, zipfile.BadZipFile, ValueError, OSError) as e:
        raise TableReadError(f"cannot read {path}: {e}") from e
    raise TableReadError(f"unsupported input format: {path.suffix or '(none)'}")


def _clean_cell(value: Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def normalize_table(df: pd.DataFrame, expected_columns: Iterable[str] = ()) -> list[RowData]:
    """Lower-case / strip header names, check required columns, build RowData.

    Fully blank rows are dropped; row numbers still count them so they match
    the file.
    """
    df = df.rename(columns=lambda c: str(c).strip().lower())
    missing = [c for c in expected_columns if c not in df.columns]
    if missing:
        raise MissingColumnsError(f"missing columns: {', '.join(missing)}")

    rows: list[RowData] = []
    for idx, raw in enumerate(df.to_dict(orient="records"), start=1):
        values = {str(k): _clean_cell(v) for k, v in raw.items()}
        if not any(values.values()):
            continue
        rows.append(RowData(row_number=idx, values=values))
    return rows


def read_program_rows(path: Path, program: str) -> list[RowData]:
    return normalize_table(read_table(path), REQUIRED_COLUMNS.get(program, ()))
