"""Search REDCap data dictionaries for query strings.

Data dictionaries are pd.DataFrames holding the metadata columns
field_name, form_name, field_label, and select_choices_or_calculations
(see redcap_request.read_metadata), collected in a dict keyed by
project name.

MalformedTableError : data dictionary is missing metadata columns
match_string : row mask for a case-insensitive query
match_strings : row mask for any of several case-sensitive queries
search_string : search dictionaries for a single string
search_strings : search dictionaries for any of several strings
search : dispatch to search_string or search_strings
print_table : print a search result

"""
import re
from typing import Callable, Optional, Sequence, Union
import numpy as np
import pandas as pd

METADATA_COLS = (
    "field_name",
    "form_name",
    "field_label",
    "select_choices_or_calculations",
)
STRING_COLS = ["field_name", "field_label", "form_name"]
STRINGS_COLS = ["field_name"]


class MalformedTableError(ValueError):
    """Data dictionary does not hold the expected metadata columns."""

    def __init__(self, name, missing):
        self.name = name
        self.missing = missing
        super().__init__(
            f"Data dictionary '{name}' missing columns : {', '.join(missing)}"
        )


def _check_table(name: str, df: pd.DataFrame):
    """Raise MalformedTableError if df lacks metadata columns."""
    missing = [x for x in METADATA_COLS if x not in df.columns]
    if missing:
        raise MalformedTableError(name, missing)


def _col_strings(df: pd.DataFrame, col: str) -> pd.Series:
    """Return metadata column as strings, empty cells as ''."""
    return df[col].fillna("").astype(str)


def match_string(df: pd.DataFrame, query: str) -> pd.Series:
    """Return mask of rows containing query in any metadata column.

    Matching is literal and case-insensitive, an empty query
    matches every row.

    Parameters
    ----------
    df : pd.DataFrame
        Data dictionary
    query : str
        Search string

    Returns
    -------
    pd.Series
        Boolean, aligned with df.index

    """
    mask = np.zeros(len(df.index), dtype=bool)
    for col in METADATA_COLS:
        mask |= (
            _col_strings(df, col)
            .str.contains(query, case=False, regex=False)
            .to_numpy(dtype=bool)
        )
    return pd.Series(mask, index=df.index)


def match_strings(df: pd.DataFrame, queries: Sequence[str]) -> pd.Series:
    """Return mask of rows containing any of queries in any metadata column.

    Queries are combined into a single alternation of literal
    strings, matching is case-sensitive.

    Parameters
    ----------
    df : pd.DataFrame
        Data dictionary
    queries : list
        Search strings

    Returns
    -------
    pd.Series
        Boolean, aligned with df.index

    Raises
    ------
    ValueError
        If queries is empty

    """
    if not queries:
        raise ValueError("Expected at least one query string")
    pattern = "|".join(re.escape(x) for x in queries)
    mask = np.zeros(len(df.index), dtype=bool)
    for col in METADATA_COLS:
        mask |= (
            _col_strings(df, col)
            .str.contains(pattern, case=True, regex=True)
            .to_numpy(dtype=bool)
        )
    return pd.Series(mask, index=df.index)


def _filter_tables(
    tables: dict, mask_func: Callable, out_cols: list
) -> dict:
    """Apply row mask and column selection, drop empty results."""
    for name, df in tables.items():
        _check_table(name, df)

    out_dict = {}
    for name, df in tables.items():
        mask = mask_func(df)
        if not mask.any():
            continue
        out_dict[name] = df.loc[mask.to_numpy(), out_cols].reset_index(
            drop=True
        )
    return out_dict


def search_string(tables: dict, query: str) -> dict:
    """Search data dictionaries for a single string.

    Keep rows where query is found, ignoring case, in any of the
    metadata columns. Dictionaries without a match are dropped.

    Parameters
    ----------
    tables : dict
        {project_name: pd.DataFrame} data dictionaries
    query : str
        Search string

    Returns
    -------
    dict
        {project_name: pd.DataFrame} matching rows with columns
        field_name, field_label, form_name

    Raises
    ------
    MalformedTableError
        If a data dictionary lacks metadata columns

    Example
    -------
    dict_atq = search_string(all_dicts, "ATQ")

    """
    return _filter_tables(
        tables, lambda df: match_string(df, query), STRING_COLS
    )


def search_strings(tables: dict, queries: Sequence[str]) -> dict:
    """Search data dictionaries for any of several strings.

    Keep rows where any query is found, respecting case, in any of
    the metadata columns. Dictionaries without a match are dropped.

    Parameters
    ----------
    tables : dict
        {project_name: pd.DataFrame} data dictionaries
    queries : list
        Search strings

    Returns
    -------
    dict
        {project_name: pd.DataFrame} matching rows with
        column field_name

    Raises
    ------
    MalformedTableError
        If a data dictionary lacks metadata columns
    ValueError
        If queries is empty

    """
    if not queries:
        raise ValueError("Expected at least one query string")
    return _filter_tables(
        tables, lambda df: match_strings(df, queries), STRINGS_COLS
    )


def search(
    tables: dict,
    query: Union[str, Sequence[str]],
    on_table: Optional[Callable[[str, pd.DataFrame], None]] = None,
) -> dict:
    """Search data dictionaries for one or many strings.

    A string, or a sequence holding one string, is searched via
    search_string, longer sequences via search_strings.

    Parameters
    ----------
    tables : dict
        {project_name: pd.DataFrame} data dictionaries
    query : str, list
        Search string(s)
    on_table : callable, optional
        Called as on_table(project_name, df) for each result,
        e.g. print_table

    Returns
    -------
    dict
        {project_name: pd.DataFrame}

    """
    if isinstance(query, str):
        out_dict = search_string(tables, query)
    elif len(query) == 1:
        out_dict = search_string(tables, query[0])
    else:
        out_dict = search_strings(tables, list(query))

    if on_table is not None:
        for name, df in out_dict.items():
            on_table(name, df)
    return out_dict


def print_table(name: str, df: pd.DataFrame):
    """Print search result of project name."""
    print(f"\n{name} : {len(df.index)} matching fields")
    print(df.to_string(index=False))
