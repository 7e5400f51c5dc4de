from . import report_helper
from . import redcap_request
from . import search_dictionary

__all__ = [
    "report_helper",
    "redcap_request",
    "search_dictionary",
]
