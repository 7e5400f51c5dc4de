r"""Download REDCap project records.

Pull the records of each project named in the token file and
write them to:
    <out-dir>/data_<project>.csv

By default all fields are exported with raw values and raw
field names. Projects failing to download are reported and skipped.

Notes
-----
* requires --api-uri or global variable 'REDCAP_API_URI' in user env.
* token file is a JSON mapping of project name to API token.

Example
-------
rc_data \
    --token-file ~/.redcap_tokens.json \
    --out-dir /path/to/data \
    --fields idmaternal t0_dem23 \
    --raw-or-label label

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
        "--fields",
        nargs="+",
        type=str,
        default=None,
        help="Field names to request",
    )
    parser.add_argument(
        "--forms",
        nargs="+",
        type=str,
        default=None,
        help="Form names to request",
    )
    parser.add_argument(
        "--raw-or-label",
        type=str,
        choices=["raw", "label"],
        default="raw",
        help=textwrap.dedent(
            """\
            Export coded values or their labels
            (default : %(default)s)
            """
        ),
    )
    parser.add_argument(
        "--raw-or-label-headers",
        type=str,
        choices=["raw", "label"],
        default="raw",
        help=textwrap.dedent(
            """\
            Export field names or field labels as headers
            (default : %(default)s)
            """
        ),
    )

    required_args = parser.add_argument_group("Required Arguments")
    required_args.add_argument(
        "--out-dir",
        type=str,
        required=True,
        help="Output location for project records",
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

    get_proj = manage_dictionary.GetProjects(uri, tokens, args.out_dir)
    get_proj.get_projects(
        fields=args.fields,
        forms=args.forms,
        raw_or_label=args.raw_or_label,
        raw_or_label_headers=args.raw_or_label_headers,
    )


if __name__ == "__main__":
    main()
