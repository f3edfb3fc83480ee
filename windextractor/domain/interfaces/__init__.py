from .i_browser_page import IBrowserPage, IBrowserSession
from .i_result_store import IResultStore

__all__ = [
    "IBrowserPage",
    "IBrowserSession",
    "IResultStore",
]
