"""Supporting functions for REDCap requests.

check_redcap_uri : resolve REDCap API address
load_tokens : load project name to API token mapping
token_name : find project name of an API token
write_df : write dataframe to csv

"""
import os
import json
from typing import Union
import pandas as pd


def check_redcap_uri(uri: str = None) -> str:
    """Return REDCap API address.

    Parameters
    ----------
    uri : str, optional
        REDCap API address, falls back to global variable
        'REDCAP_API_URI' in user env

    Returns
    -------
    str

    Raises
    ------
    EnvironmentError
        If uri is not given and not defined in user env

    """
    if uri:
        return uri
    try:
        return os.environ["REDCAP_API_URI"]
    except KeyError as e:
        raise EnvironmentError(
            "No global variable 'REDCAP_API_URI' defined in user env"
        ) from e


def load_tokens(token_file: Union[str, os.PathLike]) -> dict:
    """Load project API tokens from JSON file.

    Parameters
    ----------
    token_file : path
        Location of JSON file, e.g. {"pregnancy_t0": "AADUISAN09FS"}

    Returns
    -------
    dict
        {project_name: token}

    Raises
    ------
    FileNotFoundError
        If token_file does not exist
    ValueError
        If token_file does not hold a mapping of strings

    """
    if not os.path.exists(token_file):
        raise FileNotFoundError(f"Expected token file : {token_file}")
    with open(token_file) as jf:
        tokens = json.load(jf)

    if not isinstance(tokens, dict):
        raise ValueError(f"Expected mapping of project tokens : {token_file}")
    for name, token in tokens.items():
        if not isinstance(token, str):
            raise ValueError(f"Unexpected token value for project : {name}")
    return tokens


def token_name(token: str, tokens: dict = None) -> Union[str, None]:
    """Return name of project holding token, None if unknown."""
    if not tokens:
        return None
    for name, value in tokens.items():
        if value == token:
            return name
    return None


def write_df(df: pd.DataFrame, out_file: Union[str, os.PathLike]):
    """Make output dir and write out_file from df."""
    out_dir = os.path.dirname(out_file)
    if out_dir and not os.path.exists(out_dir):
        os.makedirs(out_dir)
    df.to_csv(out_file, index=False, na_rep="")
    print(f"\tWrote : {out_file}")
