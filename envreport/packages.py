"""Compare the dependencies a project declares with what is installed."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Dict, Iterable, List, Sequence, Union

from .host import EnvReportError, Host

logger = logging.getLogger(__name__)

NOT_INSTALLED = "Not Installed"
MANIFEST_NAME = "package.json"

PackageSelector = Union[bool, str, Sequence[str]]


class ManifestNotFoundError(EnvReportError):
    """The project's package.json is missing or unreadable."""


@dataclass
class DependencyRecord:
    name: str
    wanted: str
    installed: str


def audit_packages(selector: PackageSelector, host: Host) -> List[DependencyRecord]:
    """Resolve wanted and installed versions for the selected dependencies.

    ``selector`` is ``True`` for every declared dependency, a comma separated
    string of names, or a sequence of names. Names the manifest does not
    declare are skipped.
    """
    declared = read_declared_dependencies(host)
    records: List[DependencyRecord] = []
    for name in _select(selector, declared):
        if name not in declared:
            logger.debug("%s is not declared in %s, skipping", name, MANIFEST_NAME)
            continue
        records.append(
            DependencyRecord(name=name, wanted=declared[name], installed=installed_version(name, host))
        )
    return records


def read_declared_dependencies(host: Host) -> Dict[str, str]:
    """Merge devDependencies and dependencies; dependencies win on collision."""
    path = host.cwd / MANIFEST_NAME
    try:
        manifest = json.loads(host.read_text(path))
    except (OSError, ValueError) as exc:
        raise ManifestNotFoundError(f"{path}: {exc}") from exc
    if not isinstance(manifest, dict):
        raise ManifestNotFoundError(f"{path}: not a JSON object")

    merged: Dict[str, str] = {}
    for section in ("devDependencies", "dependencies"):
        declared = manifest.get(section) or {}
        if not isinstance(declared, dict):
            logger.debug("%s in %s is not an object, skipping", section, path)
            continue
        merged.update(declared)
    return merged


def installed_version(name: str, host: Host) -> str:
    path = host.cwd / "node_modules" / name / MANIFEST_NAME
    try:
        version = json.loads(host.read_text(path)).get("version")
    except (OSError, ValueError, AttributeError) as exc:
        logger.debug("cannot read installed version of %s: %s", name, exc)
        return NOT_INSTALLED
    return str(version) if version else NOT_INSTALLED


def _select(selector: PackageSelector, declared: Dict[str, str]) -> Iterable[str]:
    if isinstance(selector, bool):
        return list(declared) if selector else []
    if isinstance(selector, str):
        return [name.strip() for name in selector.split(",") if name.strip()]
    return list(selector)
