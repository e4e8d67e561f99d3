"""Entry point for the envreport command line tool."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .formatting import MANIFEST_ERROR, environment_rows
from .host import Host
from .packages import DependencyRecord
from .report import Report, ReportOptions, build_report, copy_to_clipboard, print_report


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Print the local development toolchain for bug reports.",
    )
    parser.add_argument(
        "--packages",
        nargs="?",
        const=True,
        default=False,
        metavar="NAMES",
        help="list package.json dependencies; optionally a comma separated subset",
    )
    parser.add_argument("--clipboard", action="store_true", help="also copy the report to the clipboard")
    parser.add_argument(
        "--keep-on-missing-manifest",
        action="store_true",
        help="still print the environment when package.json cannot be read",
    )
    parser.add_argument("--ui", action="store_true", help="render the report with Rich tables")
    parser.add_argument("--timeout", type=float, default=None, help="seconds to wait for each probed command")
    parser.add_argument("-v", "--verbose", action="store_true", help="log probe details to stderr")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    options = ReportOptions(
        packages=args.packages,
        clipboard=args.clipboard,
        keep_report_on_missing_manifest=args.keep_on_missing_manifest,
    )
    host = Host(timeout=args.timeout)

    if args.ui:
        report = build_report(options, host)
        if report.discarded:
            return 1
        if options.clipboard:
            copy_to_clipboard(report.text)
        _render_rich(report)
        return 1 if report.manifest_missing else 0

    report = print_report(options, host)
    return 1 if report.manifest_missing else 0


def setup_logging(level: int = logging.WARNING) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _render_rich(report: Report, console: Optional[Console] = None) -> None:
    console = console or Console()

    environment = Table(show_header=False, box=box.ROUNDED)
    environment.add_column(style="bold")
    environment.add_column()
    for label, value in environment_rows(report.snapshot):
        environment.add_row(label, value)
    console.print(Panel("Environment", style="bold cyan"))
    console.print(environment)

    if report.manifest_missing:
        console.print(Panel(MANIFEST_ERROR, style="bold red"))
    elif report.packages is not None:
        console.print(_rich_package_table(report.packages))


def _rich_package_table(records: List[DependencyRecord]) -> Table:
    table = Table(title="Packages", box=box.SIMPLE_HEAD)
    table.add_column("Package", style="bold")
    table.add_column("Wanted")
    table.add_column("Installed")

    if not records:
        table.add_row("-", "no matching dependencies", "-")
        return table

    for record in records:
        table.add_row(record.name, record.wanted, record.installed)
    return table


if __name__ == "__main__":
    raise SystemExit(main())
