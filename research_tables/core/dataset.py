"""
Dataset Helpers
===============

Coerce caller data into a DataFrame, resolve header labels and turn cells
into display strings.
"""

from typing import Any, List, Optional, Sequence

import pandas as pd

from research_tables.core.errors import FormatError


def to_dataframe(data: Any) -> pd.DataFrame:
    """
    Coerce a tabular dataset into a DataFrame.

    DataFrames are returned unchanged. Mappings of column name to values and
    lists of records go through the DataFrame constructor.

    Raises:
        FormatError: If the data has no tabular shape
    """
    if isinstance(data, pd.DataFrame):
        return data
    if data is None:
        raise FormatError("Dataset is missing")

    try:
        return pd.DataFrame(data)
    except (ValueError, TypeError) as e:
        raise FormatError("Dataset is not tabular", cause=str(e)) from e


def resolve_labels(df: pd.DataFrame, col_names: Optional[Sequence[Any]] = None) -> List[str]:
    """
    Header labels for a DataFrame.

    Defaults to the column names in order. Supplied labels must match the
    column count.

    Raises:
        FormatError: If the label count differs from the column count
    """
    if col_names is None:
        return [str(col) for col in df.columns]

    labels = [str(name) for name in col_names]
    if len(labels) != len(df.columns):
        raise FormatError(
            "Column label count does not match dataset",
            labels=len(labels),
            columns=len(df.columns),
        )
    return labels


def cell_text(value: Any) -> str:
    """Display text for a single cell. Missing values render empty."""
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        # Array-like cells have no single truth value
        pass
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e15:
        # NaN upcasts integer columns to float
        return str(int(value))
    return str(value)


def iter_rows(df: pd.DataFrame) -> List[List[str]]:
    """Body rows as lists of display strings, in dataset order."""
    return [[cell_text(value) for value in row] for row in df.itertuples(index=False, name=None)]
