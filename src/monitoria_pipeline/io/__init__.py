"""Pipeline I/O: attendance export readers."""

from .report_reader import read_attendance_report

__all__ = ["read_attendance_report"]
