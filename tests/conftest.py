from pathlib import Path

import pytest

from envreport.host import CommandError, Host, Platform


class FakeHost(Host):
    """Host that answers commands, PATH lookups and file reads from dicts."""

    def __init__(
        self,
        *,
        platform=Platform.LINUX,
        release="6.1.0-13-amd64",
        system="Linux",
        cwd="/project",
        commands=None,
        paths=None,
        files=None,
    ):
        super().__init__(platform=platform, release=release, system=system, cwd=Path(cwd))
        self.commands = commands or {}
        self.paths = paths or {}
        self.files = {str(key): value for key, value in (files or {}).items()}
        self.calls = []

    def run(self, args):
        key = args if isinstance(args, str) else " ".join(args)
        self.calls.append(key)
        if key not in self.commands:
            raise CommandError(args, "command not found")
        return self.commands[key].strip()

    def which(self, name):
        return self.paths.get(name)

    def read_text(self, path):
        value = self._read(path)
        return value.decode("utf-8") if isinstance(value, bytes) else value

    def read_bytes(self, path):
        value = self._read(path)
        return value.encode("utf-8") if isinstance(value, str) else value

    def _read(self, path):
        key = str(path)
        if key not in self.files:
            raise FileNotFoundError(key)
        return self.files[key]


@pytest.fixture
def make_host():
    return FakeHost
