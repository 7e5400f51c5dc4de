"""Print entrypoint help."""
import redcap_tools._version as ver


def main():
    print(
        f"""

    Version : {ver.__version__}

    The package redcap_tools consists of several sub-packages
    that can be accessed from their respective entrypoints (below).

        rc_dict     : Download data dictionaries of REDCap projects
        rc_data     : Download records of REDCap projects
        rc_search   : Search data dictionaries of REDCap projects

    """
    )


if __name__ == "__main__":
    main()
