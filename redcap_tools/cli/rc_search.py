r"""Search REDCap data dictionaries.

Pull the data dictionary of each project named in the token file
and print the rows matching the query.

A single query is matched ignoring case, and results show the
field_name, field_label, and form_name columns. Multiple queries
are matched respecting case, and results show only field_name.

Projects without matches are not reported. When --out-dir is given,
results are written to:
    <out-dir>/search_<project>.csv

Notes
-----
* requires --api-uri or global variable 'REDCAP_API_URI' in user env.
* token file is a JSON mapping of project name to API token.

Example
-------
rc_search \
    --token-file ~/.redcap_tokens.json \
    --query ATQ

rc_search \
    --token-file ~/.redcap_tokens.json \
    --query idmaternal t0_dem23 t0_eth_race35 \
    --out-dir /path/to/search

"""
import sys
import textwrap
from argparse import ArgumentParser, RawTextHelpFormatter
from redcap_tools.resources import report_helper
from redcap_tools.workflows import manage_dictionary


def _get_args():
    """Get and parse arguments."""
    parser = ArgumentParser(
        description=__doc__, formatter_class=RawTextHelpFormatter
    )
    parser.add_argument(
        "--api-uri",
        type=str,
        default=None,
        help=textwrap.dedent(
            """\
            REDCap API address
            (default : global variable REDCAP_API_URI)
            """
        ),
    )
    parser.add_argument(
        "--out-dir",
        type=str,
        default=None,
        help="Output location for search results",
    )

    required_args = parser.add_argument_group("Required Arguments")
    required_args.add_argument(
        "--query",
        nargs="+",
        type=str,
        required=True,
        help="String(s) to search for in data dictionaries",
    )
    required_args.add_argument(
        "--token-file",
        type=str,
        required=True,
        help="JSON file mapping project names to API tokens",
    )

    if len(sys.argv) <= 1:
        parser.print_help(sys.stderr)
        sys.exit(0)

    return parser


# %%
def main():
    """Capture arguments and trigger workflow."""
    args = _get_args().parse_args()
    uri = report_helper.check_redcap_uri(args.api_uri)
    tokens = report_helper.load_tokens(args.token_file)
    manage_dictionary.search_projects(
        uri, tokens, args.query, out_dir=args.out_dir
    )


if __name__ == "__main__":
    main()
