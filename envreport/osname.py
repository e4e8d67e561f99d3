"""Human-readable operating system names from platform and kernel release."""

from __future__ import annotations

import re
from typing import Dict, Optional

from .host import Platform

MACOS_NAMES: Dict[int, str] = {
    24: "Sequoia",
    23: "Sonoma",
    22: "Ventura",
    21: "Monterey",
    20: "Big Sur",
    19: "Catalina",
    18: "Mojave",
    17: "High Sierra",
    16: "Sierra",
    15: "El Capitan",
    14: "Yosemite",
    13: "Mavericks",
    12: "Mountain Lion",
    11: "Lion",
    10: "Snow Leopard",
}

WINDOWS_NAMES: Dict[str, str] = {
    "10.0": "10",
    "6.3": "8.1",
    "6.2": "8",
    "6.1": "7",
    "6.0": "Vista",
    "5.2": "Server 2003",
    "5.1": "XP",
}

_MAJOR_MINOR = re.compile(r"^(\d+)\.(\d+)")


def os_name(platform: Platform, release: str, system: str = "") -> str:
    """Return a marketing name such as ``macOS Sonoma`` or ``Windows 10``.

    Raises ``ValueError`` when the platform is unknown and no system name is
    available to fall back on.
    """
    if platform is Platform.MACOS:
        return _macos_name(release)
    if platform is Platform.WINDOWS:
        return _windows_name(release)
    if platform is Platform.LINUX:
        match = _MAJOR_MINOR.match(release)
        return f"Linux {match.group(1)}.{match.group(2)}" if match else "Linux"
    if not system:
        raise ValueError("unknown platform")
    return system


def _macos_name(release: str) -> str:
    major = _leading_int(release)
    if major is None or major not in MACOS_NAMES:
        return "macOS"
    prefix = "macOS" if major >= 16 else "OS X"
    return f"{prefix} {MACOS_NAMES[major]}"


def _windows_name(release: str) -> str:
    # Python reports "10" or "8.1" here, Node-style callers pass the NT version.
    match = _MAJOR_MINOR.match(release)
    name = WINDOWS_NAMES.get(f"{match.group(1)}.{match.group(2)}") if match else None
    name = name or release.strip()
    return f"Windows {name}" if name else "Windows"


def _leading_int(value: str) -> Optional[int]:
    match = re.match(r"^(\d+)", value)
    return int(match.group(1)) if match else None
