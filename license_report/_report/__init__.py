"""License report assembly: column layouts and file writers."""

from .columns import LAYOUTS, Column, build_rows, layout_for
from .writers import CSVReportWriter, JSONReportWriter, ReportFormat, write_report

__all__ = [
    "Column",
    "LAYOUTS",
    "build_rows",
    "layout_for",
    "CSVReportWriter",
    "JSONReportWriter",
    "ReportFormat",
    "write_report",
]
