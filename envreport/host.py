"""Access to the local machine: commands, PATH lookups, files and platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import os
from pathlib import Path
import platform as _platform
import shutil
import subprocess
from typing import Optional, Sequence, Union

import psutil

logger = logging.getLogger(__name__)

# An argument list, or a whole command line for the few Windows tools that
# parse their own quoting.
Command = Union[str, Sequence[str]]


def _display(args: Command) -> str:
    return args if isinstance(args, str) else " ".join(args)


class EnvReportError(Exception):
    """Base class for errors raised by envreport."""


class CommandError(EnvReportError):
    """A command could not be started, timed out or exited non-zero."""

    def __init__(self, args: Command, reason: str) -> None:
        self.command = _display(args)
        self.reason = reason
        super().__init__(f"{self.command}: {reason}")


class Platform(Enum):
    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"
    OTHER = "other"


def detect_platform() -> Platform:
    if psutil.MACOS:
        return Platform.MACOS
    if psutil.LINUX:
        return Platform.LINUX
    if psutil.WINDOWS:
        return Platform.WINDOWS
    return Platform.OTHER


@dataclass
class Host:
    """The machine the report describes.

    Every probe goes through one of these, so tests can hand in a fake that
    answers commands and file reads from memory.
    """

    platform: Platform = field(default_factory=detect_platform)
    release: str = field(default_factory=_platform.release)
    system: str = field(default_factory=_platform.system)
    cwd: Path = field(default_factory=Path.cwd)
    timeout: Optional[float] = None

    def run(self, args: Command) -> str:
        """Run a command and return its stripped stdout. stderr is discarded."""
        logger.debug("running %s", _display(args))
        if not isinstance(args, str):
            # Resolves npm.cmd and friends on Windows.
            args = [shutil.which(args[0]) or args[0], *args[1:]]
        try:
            result = subprocess.run(
                args,
                check=True,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise CommandError(args, "command not found") from exc
        except subprocess.CalledProcessError as exc:
            raise CommandError(args, f"exited with status {exc.returncode}") from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandError(args, f"timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise CommandError(args, str(exc)) from exc
        return (result.stdout or "").strip()

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)

    def read_text(self, path: os.PathLike | str) -> str:
        return Path(path).read_text(encoding="utf-8")

    def read_bytes(self, path: os.PathLike | str) -> bytes:
        return Path(path).read_bytes()
