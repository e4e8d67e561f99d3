"""
Report the local JavaScript and mobile toolchain for bug reports.
"""

from .report import ReportOptions, print_report

__all__ = ["environment", "packages", "report", "cli", "ReportOptions", "print_report"]
__version__ = "0.1.0"
