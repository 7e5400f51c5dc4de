"""Request project data and metadata from the REDCap API.

Each request returns a FetchResult rather than raising on remote
failures, allowing batch requests to continue past a failed project.

FetchResult : outcome of a single request
read_project : download project records
read_metadata : download project data dictionary
read_projects : download records for many projects
read_dictionaries : download data dictionaries for many projects

"""
import io
from datetime import datetime
from typing import NamedTuple, Union
import requests
import pandas as pd
from redcap_tools.resources import report_helper
from redcap_tools.resources.search_dictionary import METADATA_COLS


class FetchResult(NamedTuple):
    """Outcome of a REDCap request.

    Attributes
    ----------
    name : str, None
        Project name of the token, None if not in token mapping
    df : pd.DataFrame, None
        Downloaded data, None if the request failed
    error : str, None
        Failure description

    """

    name: Union[str, None]
    df: Union[pd.DataFrame, None]
    error: Union[str, None] = None

    @property
    def ok(self) -> bool:
        return self.df is not None


def _as_list(value) -> list:
    """Return value as list, allowing None or a single string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _check_raw_label(value: str, arg_name: str):
    """Raise ValueError for unexpected rawOrLabel option."""
    if value not in ["raw", "label"]:
        raise ValueError(f"Unexpected {arg_name} value : {value}")


def _build_payload(token, content, fields=None, forms=None) -> dict:
    """Return POST data for a csv export of content."""
    data = {
        "token": token,
        "content": content,
        "format": "csv",
        "returnFormat": "csv",
    }
    for idx, field in enumerate(_as_list(fields)):
        data[f"fields[{idx}]"] = field
    for idx, form in enumerate(_as_list(forms)):
        data[f"forms[{idx}]"] = form
    return data


def _post_csv(uri: str, data: dict) -> pd.DataFrame:
    """Submit request and make a pandas dataframe from the csv response.

    Raises
    ------
    requests.RequestException
        Connection failed or REDCap returned an error status
    pd.errors.EmptyDataError
        Response had no content

    """
    r = requests.post(uri, data=data)
    r.raise_for_status()
    return pd.read_csv(io.StringIO(r.text), low_memory=False, na_values=None)


def _fetch(what: str, uri: str, data: dict, tokens: dict, cols=None):
    """Submit request, catch remote failures into a FetchResult."""
    name = report_helper.token_name(data["token"], tokens)
    print(f"{what.capitalize()} requested at : {datetime.now()}")
    try:
        df = _post_csv(uri, data)
        if cols is not None:
            missing = [x for x in cols if x not in df.columns]
            if missing:
                raise KeyError(
                    f"Response missing columns : {', '.join(missing)}"
                )
            df = df[list(cols)]
    except (
        requests.RequestException,
        pd.errors.ParserError,
        pd.errors.EmptyDataError,
        KeyError,
    ) as e:
        return FetchResult(name, None, f"Unable to load {what} : {e}")
    return FetchResult(name, df)


def read_project(
    uri,
    token,
    fields=None,
    forms=None,
    raw_or_label="raw",
    raw_or_label_headers="raw",
    tokens=None,
):
    """Download records of a REDCap project.

    By default the entire project is returned with raw field
    names and raw values.

    Parameters
    ----------
    uri : str
        REDCap API address
    token : str
        API token of project
    fields : str, list, optional
        Desired field names
    forms : str, list, optional
        Desired form names
    raw_or_label : str, optional
        {"raw", "label"}
        Export coded values or their labels
    raw_or_label_headers : str, optional
        {"raw", "label"}
        Export field names or field labels as headers
    tokens : dict, optional
        {project_name: token}, used to name the project

    Returns
    -------
    FetchResult

    Raises
    ------
    ValueError
        Unexpected raw_or_label or raw_or_label_headers value

    Example
    -------
    result = read_project(
        "https://redcap.example.edu/api/",
        "AADUISAN09FS",
        fields=["idmaternal", "t0_dem23"],
        forms="demographics",
    )

    """
    _check_raw_label(raw_or_label, "raw_or_label")
    _check_raw_label(raw_or_label_headers, "raw_or_label_headers")
    data = _build_payload(token, "record", fields, forms)
    data.update(
        {
            "type": "flat",
            "rawOrLabel": raw_or_label,
            "rawOrLabelHeaders": raw_or_label_headers,
            "exportCheckboxLabel": "false",
        }
    )
    return _fetch("project", uri, data, tokens)


def read_metadata(uri, token, fields=None, forms=None, tokens=None):
    """Download the data dictionary of a REDCap project.

    Parameters
    ----------
    uri : str
        REDCap API address
    token : str
        API token of project
    fields : str, list, optional
        Desired field names
    forms : str, list, optional
        Desired form names
    tokens : dict, optional
        {project_name: token}, used to name the project

    Returns
    -------
    FetchResult
        df holds columns field_name, form_name, field_label,
        select_choices_or_calculations

    """
    data = _build_payload(token, "metadata", fields, forms)
    return _fetch("metadata", uri, data, tokens, cols=METADATA_COLS)


def _read_many(read_func, what: str, uri: str, tokens: dict, **kwargs):
    """Apply read_func to each token, skip failed projects."""
    out_dict = {}
    for name, token in tokens.items():
        result = read_func(uri, token, tokens=tokens, **kwargs)
        if not result.ok:
            print(f"\tThere is an error : {result.error}")
            print(f"\tUnable to load {what} from : {name}")
            continue
        out_dict[name] = result.df
    return out_dict


def read_projects(uri: str, tokens: dict, **kwargs) -> dict:
    """Download records for each project in tokens.

    Projects failing to download are reported and skipped.

    Parameters
    ----------
    uri : str
        REDCap API address
    tokens : dict
        {project_name: token}
    **kwargs
        Passed to read_project

    Returns
    -------
    dict
        {project_name: pd.DataFrame}

    """
    return _read_many(read_project, "dataset", uri, tokens, **kwargs)


def read_dictionaries(uri: str, tokens: dict, **kwargs) -> dict:
    """Download data dictionaries for each project in tokens.

    Projects failing to download are reported and skipped.

    Parameters
    ----------
    uri : str
        REDCap API address
    tokens : dict
        {project_name: token}
    **kwargs
        Passed to read_metadata

    Returns
    -------
    dict
        {project_name: pd.DataFrame}

    """
    return _read_many(read_metadata, "data dictionary", uri, tokens, **kwargs)
