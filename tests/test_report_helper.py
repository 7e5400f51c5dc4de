import os
import json
import pytest
import pandas as pd
from redcap_tools.resources import report_helper


def test_check_redcap_uri(monkeypatch):
    monkeypatch.setenv("REDCAP_API_URI", "https://env.example.edu/api/")
    assert "https://x/api/" == report_helper.check_redcap_uri("https://x/api/")
    assert "https://env.example.edu/api/" == report_helper.check_redcap_uri()

    monkeypatch.delenv("REDCAP_API_URI")
    with pytest.raises(EnvironmentError):
        report_helper.check_redcap_uri()


def test_load_tokens(tmp_path):
    token_file = tmp_path / "tokens.json"
    token_file.write_text(json.dumps({"pregnancy": "A1", "infant": "B2"}))
    tokens = report_helper.load_tokens(token_file)
    assert ["pregnancy", "infant"] == list(tokens.keys())
    assert "B2" == tokens["infant"]

    with pytest.raises(FileNotFoundError):
        report_helper.load_tokens(tmp_path / "foo.json")

    token_file.write_text(json.dumps(["A1", "B2"]))
    with pytest.raises(ValueError):
        report_helper.load_tokens(token_file)

    token_file.write_text(json.dumps({"pregnancy": 1}))
    with pytest.raises(ValueError):
        report_helper.load_tokens(token_file)


def test_token_name():
    tokens = {"pregnancy": "A1", "infant": "B2"}
    assert "infant" == report_helper.token_name("B2", tokens)
    assert report_helper.token_name("C3", tokens) is None
    assert report_helper.token_name("A1") is None


def test_write_df(tmp_path, capsys):
    df = pd.DataFrame(
        data={
            "field_name": ["idmaternal", "t0_dem23"],
            "field_label": ["Maternal ID", None],
        }
    )
    out_file = os.path.join(tmp_path, "sub", "dict_pregnancy.csv")
    report_helper.write_df(df, out_file)
    assert os.path.exists(out_file)
    with open(out_file) as f:
        assert (
            "field_name,field_label\nidmaternal,Maternal ID\nt0_dem23,\n"
            == f.read()
        )
    assert f"Wrote : {out_file}" in capsys.readouterr().out
