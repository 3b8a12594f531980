"""
Concrete management pages built from declarative configs.
"""

from .config import ActionForm, LookupConfig, PageConfig, StatusAction
from .export import EXPORT_FILTERS, CsvExporter, export_filename
from .page import ResourcePage, build_page
from .registry import PAGES, get_page_config

__all__ = [
    "ActionForm",
    "LookupConfig",
    "PageConfig",
    "StatusAction",
    "EXPORT_FILTERS",
    "CsvExporter",
    "export_filename",
    "ResourcePage",
    "build_page",
    "PAGES",
    "get_page_config",
]
