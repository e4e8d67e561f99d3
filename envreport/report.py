"""Assemble the environment report, optionally copy it, and print it."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
import logging
from typing import Any, List, Mapping, Optional, TextIO, Union

import pyperclip

from .environment import EnvironmentSnapshot, gather_environment
from .formatting import format_environment, format_manifest_error, format_packages
from .host import Host
from .packages import DependencyRecord, ManifestNotFoundError, PackageSelector, audit_packages

logger = logging.getLogger(__name__)


@dataclass
class ReportOptions:
    packages: PackageSelector = False
    clipboard: bool = False
    # Print the environment block and an error line instead of nothing when
    # package.json is missing.
    keep_report_on_missing_manifest: bool = False

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ReportOptions":
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            logger.debug("ignoring unknown report options: %s", ", ".join(sorted(unknown)))
        return cls(**{key: value for key, value in values.items() if key in known})


@dataclass
class Report:
    snapshot: EnvironmentSnapshot
    lines: List[str] = field(default_factory=list)
    packages: Optional[List[DependencyRecord]] = None
    manifest_missing: bool = False
    discarded: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def build_report(options: ReportOptions, host: Host) -> Report:
    """Probe the host and lay the results out as report lines."""
    snapshot = gather_environment(host)
    report = Report(snapshot=snapshot, lines=format_environment(snapshot))

    if wants_packages(options.packages):
        try:
            report.packages = audit_packages(options.packages, host)
        except ManifestNotFoundError as exc:
            logger.warning("cannot audit packages: %s", exc)
            report.manifest_missing = True
            report.discarded = not options.keep_report_on_missing_manifest
            report.lines.extend(format_manifest_error())
        else:
            report.lines.extend(format_packages(report.packages))

    return report


def print_report(
    options: Union[ReportOptions, Mapping[str, Any], None] = None,
    host: Optional[Host] = None,
    stream: Optional[TextIO] = None,
) -> Report:
    """Build the report, copy it to the clipboard if asked, and print it.

    A discarded report is neither copied nor printed.
    """
    if options is None:
        options = ReportOptions()
    elif not isinstance(options, ReportOptions):
        options = ReportOptions.from_mapping(options)
    host = host or Host()

    report = build_report(options, host)
    if report.discarded:
        return report

    if options.clipboard:
        copy_to_clipboard(report.text)
    print(report.text, file=stream)
    return report


def copy_to_clipboard(text: str) -> bool:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        logger.warning("could not copy report to clipboard: %s", exc)
        return False
    return True


def wants_packages(selector: PackageSelector) -> bool:
    """False, None and "" skip the packages section; an empty list does not."""
    if isinstance(selector, (bool, str)) or selector is None:
        return bool(selector)
    return True
