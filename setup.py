from setuptools import setup, find_packages

exec(open("redcap_tools/_version.py").read())

setup(
    name="redcap_tools",
    version=__version__,  # noqa: F821
    packages=find_packages(exclude=["tests"]),
    entry_points={
        "console_scripts": [
            "redcap_tools=redcap_tools.entrypoint:main",
            "rc_dict=redcap_tools.cli.rc_dict:main",
            "rc_data=redcap_tools.cli.rc_data:main",
            "rc_search=redcap_tools.cli.rc_search:main",
        ]
    },
    include_package_data=True,
    install_requires=[
        "numpy>=1.23.1",
        "pandas>=1.4.3",
        "requests>=2.22.0",
        "setuptools>=65.5.1",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
