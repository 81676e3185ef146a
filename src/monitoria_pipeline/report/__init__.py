"""Report assembly and writers."""

from .assembler import ReportViews, assemble_report
from .excel_writer import write_report

__all__ = ["ReportViews", "assemble_report", "write_report"]
