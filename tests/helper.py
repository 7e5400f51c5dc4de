import requests
import pandas as pd
import numpy as np


def metadata_maternal() -> pd.DataFrame:
    """Return data dictionary of a pregnancy project."""
    return pd.DataFrame(
        data={
            "field_name": {
                0: "idmaternal",
                1: "t0_dem23",
                2: "t0_atq_1",
                3: "t0_eth_race35",
            },
            "form_name": {
                0: "demographics",
                1: "demographics",
                2: "atq",
                3: "ethnicity",
            },
            "field_label": {
                0: "Maternal ID",
                1: "Household income",
                2: "ATQ item 1",
                3: "Race",
            },
            "select_choices_or_calculations": {
                0: np.nan,
                1: "1, Under $10k | 2, $10k-$50k | 3, Over $50k",
                2: "1, Never | 2, Always",
                3: "1, Asian | 2, Black | 3, White | 4, DEM other",
            },
        }
    )


def metadata_infant() -> pd.DataFrame:
    """Return data dictionary of an infant project."""
    return pd.DataFrame(
        data={
            "field_name": {0: "idinfant", 1: "inf_weight"},
            "form_name": {0: "birth", 1: "birth"},
            "field_label": {0: "Infant ID", 1: "Birth weight (g)"},
            "select_choices_or_calculations": {0: np.nan, 1: np.nan},
        }
    )


def metadata_csv() -> str:
    """Return REDCap metadata export, including unselected columns."""
    return (
        "field_name,form_name,section_header,field_type,field_label,"
        + "select_choices_or_calculations,field_note\n"
        + "idmaternal,demographics,,text,Maternal ID,,\n"
        + 't0_dem23,demographics,,radio,Household income,'
        + '"1, Under $10k | 2, Over $10k",\n'
    )


def record_csv() -> str:
    """Return REDCap record export."""
    return "idmaternal,t0_dem23\nM001,1\nM002,2\n"


class FakeResponse:
    """Stand-in for requests.Response."""

    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


class FakePost:
    """Record requests.post calls, respond by token.

    Parameters
    ----------
    responses : dict
        {token: FakeResponse|Exception}

    """

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def __call__(self, uri, data=None, **kwargs):
        self.calls.append((uri, data))
        resp = self.responses[data["token"]]
        if isinstance(resp, Exception):
            raise resp
        return resp
