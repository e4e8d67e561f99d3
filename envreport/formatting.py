"""Console-friendly formatting utilities."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from .environment import EnvironmentSnapshot
from .packages import DependencyRecord

PACKAGES_HEADER = "Packages: (wanted => installed)"
MANIFEST_ERROR = "ERROR: package.json not found!"


def environment_rows(snapshot: EnvironmentSnapshot) -> List[Tuple[str, str]]:
    return [
        ("OS", snapshot.os),
        ("Node", snapshot.node),
        ("Yarn", snapshot.yarn),
        ("npm", snapshot.npm),
        ("Watchman", snapshot.watchman),
        ("Xcode", snapshot.xcode),
        ("Android Studio", snapshot.android_studio),
    ]


def format_environment(snapshot: EnvironmentSnapshot) -> List[str]:
    lines = ["", "Environment:"]
    lines.extend(f"  {label}: {value}" for label, value in environment_rows(snapshot))
    lines.append("")
    return lines


def format_packages(records: Iterable[DependencyRecord]) -> List[str]:
    lines = [PACKAGES_HEADER]
    lines.extend(f"  {record.name}: {record.wanted} => {record.installed}" for record in records)
    lines.append("")
    return lines


def format_manifest_error() -> List[str]:
    return [MANIFEST_ERROR, ""]
