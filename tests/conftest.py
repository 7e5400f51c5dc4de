import pytest
import requests
from typing import Iterator
from redcap_tools.resources import redcap_request
import helper


class SupplyVars:
    """Allow each fixture to add respective attrs."""

    pass


@pytest.fixture
def fixt_dicts() -> Iterator[SupplyVars]:
    """Supply data dictionaries of two projects."""
    supp_vars = SupplyVars()
    supp_vars.df_maternal = helper.metadata_maternal()
    supp_vars.df_infant = helper.metadata_infant()
    supp_vars.all_dicts = {
        "pregnancy": supp_vars.df_maternal,
        "infant": supp_vars.df_infant,
    }
    yield supp_vars


@pytest.fixture
def fixt_post(monkeypatch) -> Iterator[SupplyVars]:
    """Replace requests.post with responses for three projects.

    Token "tok_broken" answers with a REDCap error status and
    "tok_offline" fails to connect.

    """
    supp_vars = SupplyVars()
    supp_vars.uri = "https://redcap.example.edu/api/"
    supp_vars.tokens = {
        "pregnancy": "tok_pregnancy",
        "broken": "tok_broken",
        "offline": "tok_offline",
    }
    fake_post = helper.FakePost(
        {
            "tok_pregnancy": helper.FakeResponse(helper.metadata_csv()),
            "tok_broken": helper.FakeResponse(
                '{"error": "You do not have permissions"}', 403
            ),
            "tok_offline": requests.ConnectionError("Connection refused"),
        }
    )
    monkeypatch.setattr(redcap_request.requests, "post", fake_post)
    supp_vars.fake_post = fake_post
    yield supp_vars
