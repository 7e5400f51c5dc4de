"""Methods for downloading and searching many REDCap projects.

Download records and data dictionaries for each project of a token
mapping, search the data dictionaries, and write results to disk.

GetProjects : download, search, and write REDCap project data

"""
# %%
import os
from typing import Union
import pandas as pd
from redcap_tools.resources import redcap_request
from redcap_tools.resources import report_helper
from redcap_tools.resources import search_dictionary


# %%
class GetProjects:
    """Download and search REDCap projects.

    Projects failing to download are reported and skipped, remaining
    projects are processed.

    Parameters
    ----------
    uri : str
        REDCap API address
    tokens : dict
        {project_name: token}
    out_dir : path, optional
        Output location of csv files, nothing written if None

    Attributes
    ----------
    data_dicts : dict
        {project_name: pd.DataFrame} data dictionaries, set by
        get_dictionaries
    data_projects : dict
        {project_name: pd.DataFrame} project records, set by
        get_projects
    data_search : dict
        {project_name: pd.DataFrame} matching dictionary rows,
        set by search_dictionaries

    Example
    -------
    get_proj = GetProjects(uri, tokens, "/path/to/output")
    get_proj.get_dictionaries()
    get_proj.search_dictionaries(["ATQ", "DEM"])
    df_match = get_proj.data_search["pregnancy_t0"]

    """

    def __init__(
        self,
        uri: str,
        tokens: dict,
        out_dir: Union[str, os.PathLike] = None,
    ):
        """Initialize."""
        print("Initializing GetProjects")
        self._uri = uri
        self._tokens = tokens
        self._out_dir = out_dir

    def _write_all(self, data: dict, prefix: str):
        """Write each project dataframe to out_dir."""
        if not self._out_dir:
            return
        for name, df in data.items():
            out_file = os.path.join(self._out_dir, f"{prefix}_{name}.csv")
            report_helper.write_df(df, out_file)

    def get_projects(self, **kwargs) -> dict:
        """Download records of all projects.

        Parameters
        ----------
        **kwargs
            Passed to redcap_request.read_project, e.g. fields,
            forms, raw_or_label, raw_or_label_headers

        Returns
        -------
        dict
            {project_name: pd.DataFrame}

        """
        print("Downloading project records ...")
        self.data_projects = redcap_request.read_projects(
            self._uri, self._tokens, **kwargs
        )
        self._write_all(self.data_projects, "data")
        return self.data_projects

    def get_dictionaries(self, **kwargs) -> dict:
        """Download data dictionaries of all projects.

        Parameters
        ----------
        **kwargs
            Passed to redcap_request.read_metadata, e.g. fields, forms

        Returns
        -------
        dict
            {project_name: pd.DataFrame}

        """
        print("Downloading data dictionaries ...")
        self.data_dicts = redcap_request.read_dictionaries(
            self._uri, self._tokens, **kwargs
        )
        self._write_all(self.data_dicts, "dict")
        return self.data_dicts

    def search_dictionaries(self, query, show: bool = True) -> dict:
        """Search data dictionaries for query.

        Downloads data dictionaries when get_dictionaries has not
        been run.

        Parameters
        ----------
        query : str, list
            Search string(s), see search_dictionary.search
        show : bool, optional
            Print each matching data dictionary

        Returns
        -------
        dict
            {project_name: pd.DataFrame}

        """
        if not hasattr(self, "data_dicts"):
            self.get_dictionaries()

        on_table = search_dictionary.print_table if show else None
        self.data_search = search_dictionary.search(
            self.data_dicts, query, on_table=on_table
        )
        if not self.data_search:
            print(f"No data dictionary matches for : {query}")
        self._write_all(self.data_search, "search")
        return self.data_search


def search_projects(
    uri: str, tokens: dict, query, out_dir=None, show=True
) -> pd.DataFrame:
    """Search data dictionaries of projects, return long dataframe.

    Parameters
    ----------
    uri : str
        REDCap API address
    tokens : dict
        {project_name: token}
    query : str, list
        Search string(s)
    out_dir : path, optional
        Output location of csv files
    show : bool, optional
        Print each matching data dictionary

    Returns
    -------
    pd.DataFrame
        Matching rows of all projects, with a leading
        "project" column

    """
    get_proj = GetProjects(uri, tokens, out_dir)
    data_search = get_proj.search_dictionaries(query, show=show)
    return combine_results(data_search)


def combine_results(data_search: dict) -> pd.DataFrame:
    """Stack search results into one dataframe with project column."""
    if not data_search:
        return pd.DataFrame(columns=["project", "field_name"])
    df_list = []
    for name, df in data_search.items():
        df_proj = df.copy()
        df_proj.insert(0, "project", name)
        df_list.append(df_proj)
    return pd.concat(df_list, ignore_index=True)
