"""Probe the local toolchain: OS, Node, package managers, Watchman, Xcode, Android Studio."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import plistlib
import re
from typing import Callable, Dict, Optional, Sequence
from xml.parsers.expat import ExpatError

from .host import CommandError, Host, Platform
from .osname import os_name

logger = logging.getLogger(__name__)

NOT_FOUND = "Not Found"
NOT_APPLICABLE = "N/A"
UNKNOWN_VERSION = "Unknown Version"

ANDROID_STUDIO_PLIST = "/Applications/Android Studio.app/Contents/Info.plist"
ANDROID_STUDIO_LINUX_HOME = "/opt/android-studio"
ANDROID_STUDIO_WINDOWS_HOME = "C:\\Program Files\\Android\\Android Studio"

_STUDIO_CONFIG_MARKER = "/.AndroidStudio"
_STUDIO_VERSION = re.compile(r"\d\.\d")

ProbeFailure = (CommandError, OSError, ValueError, KeyError, ExpatError)


@dataclass
class EnvironmentSnapshot:
    os: str
    node: str
    yarn: str
    npm: str
    watchman: str
    xcode: str
    android_studio: str


def gather_environment(host: Host) -> EnvironmentSnapshot:
    """Run every probe in report order."""
    return EnvironmentSnapshot(
        os=get_os_info(host),
        node=get_node_version(host),
        yarn=get_yarn_version(host),
        npm=get_npm_version(host),
        watchman=get_watchman_version(host),
        xcode=get_xcode_version(host),
        android_studio=get_android_studio_version(host),
    )


def get_os_info(host: Host) -> str:
    name: Optional[str] = None
    try:
        name = os_name(host.platform, host.release, host.system)
        if host.platform is Platform.MACOS:
            name = f"{name} {host.run(['sw_vers', '-productVersion'])}"
    except ProbeFailure as exc:
        logger.debug("OS probe failed: %s", exc)
        return f"{name} {UNKNOWN_VERSION}" if name else UNKNOWN_VERSION
    return name


def get_node_version(host: Host) -> str:
    try:
        version = host.run(["node", "--version"])
    except CommandError as exc:
        logger.debug("node probe failed: %s", exc)
        return NOT_FOUND
    return version[1:] if version.startswith("v") else version


def get_yarn_version(host: Host) -> str:
    return _simple_version(host, ["yarn", "--version"])


def get_npm_version(host: Host) -> str:
    return _simple_version(host, ["npm", "-v"])


def get_watchman_version(host: Host) -> str:
    path = host.which("watchman")
    if not path:
        return NOT_FOUND
    return _simple_version(host, [path, "--version"])


def get_xcode_version(host: Host) -> str:
    if host.platform is not Platform.MACOS:
        return NOT_APPLICABLE
    path = host.which("xcodebuild")
    if not path:
        return NOT_FOUND
    try:
        output = host.run([path, "-version"])
    except CommandError as exc:
        logger.debug("xcodebuild probe failed: %s", exc)
        return NOT_FOUND
    return " ".join(output.splitlines())


def get_android_studio_version(host: Host) -> str:
    probe = _ANDROID_STUDIO_PROBES.get(host.platform)
    if probe is None:
        return NOT_FOUND
    try:
        return probe(host)
    except ProbeFailure as exc:
        logger.debug("Android Studio probe failed: %s", exc)
        return NOT_FOUND


def extract_studio_version(script: str) -> str:
    """Pull the ``N.N`` version out of the config path in ``studio.sh``.

    Raises ``ValueError`` when no line mentions the config directory or the
    line holds no version.
    """
    for line in script.splitlines():
        if _STUDIO_CONFIG_MARKER in line:
            match = _STUDIO_VERSION.search(line)
            if not match:
                raise ValueError("no version in studio.sh config path")
            return match.group(0)
    raise ValueError("studio.sh has no config path")


def _simple_version(host: Host, args: Sequence[str]) -> str:
    try:
        return host.run(args)
    except CommandError as exc:
        logger.debug("%s probe failed: %s", args[0], exc)
        return NOT_FOUND


def _android_studio_macos(host: Host) -> str:
    info = plistlib.loads(host.read_bytes(ANDROID_STUDIO_PLIST))
    return f"{info['CFBundleShortVersionString']} {info['CFBundleVersion']}"


def _android_studio_linux(host: Host) -> str:
    build = host.read_text(f"{ANDROID_STUDIO_LINUX_HOME}/build.txt").strip()
    version = extract_studio_version(host.read_text(f"{ANDROID_STUDIO_LINUX_HOME}/bin/studio.sh"))
    return f"{version} {build}"


def _android_studio_windows(host: Host) -> str:
    # WQL wants doubled backslashes, and the quotes must reach wmic untouched,
    # so this one goes through as a single command line.
    exe = f"{ANDROID_STUDIO_WINDOWS_HOME}\\bin\\studio.exe".replace("\\", "\\\\")
    output = host.run(f'wmic datafile where name="{exe}" get Version')
    # wmic prints a "Version" header row above the value.
    rows = [row.strip() for row in output.splitlines() if row.strip()]
    if rows and rows[0].lower() == "version":
        rows = rows[1:]
    if not rows:
        raise ValueError("wmic returned no version")
    build = host.read_text(f"{ANDROID_STUDIO_WINDOWS_HOME}\\build.txt")
    build = build.replace("\r", "").replace("\n", "")
    return f"{rows[0]} {build}"


_ANDROID_STUDIO_PROBES: Dict[Platform, Callable[[Host], str]] = {
    Platform.MACOS: _android_studio_macos,
    Platform.LINUX: _android_studio_linux,
    Platform.WINDOWS: _android_studio_windows,
}
