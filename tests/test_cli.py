import json
from pathlib import Path

import pyperclip
import pytest

from envreport import cli


@pytest.fixture
def fake_host(make_host, monkeypatch):
    host = make_host(
        commands={"node --version": "v20.9.0"},
        files={Path("/project") / "package.json": json.dumps({"dependencies": {"react": "^18.2.0"}})},
    )
    seen = {}

    def build(timeout=None):
        seen["timeout"] = timeout
        host.timeout = timeout
        return host

    monkeypatch.setattr(cli, "Host", build)
    host.seen = seen
    return host


def test_plain_report(fake_host, capsys):
    assert cli.main([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("\nEnvironment:\n  OS: Linux 6.1\n  Node: 20.9.0\n")
    assert "Packages:" not in out


def test_packages_flag_without_names_lists_everything(fake_host, capsys):
    assert cli.main(["--packages"]) == 0
    assert "  react: ^18.2.0 => Not Installed\n" in capsys.readouterr().out


def test_packages_flag_with_names(fake_host, capsys):
    assert cli.main(["--packages", "lodash"]) == 0
    out = capsys.readouterr().out
    assert "Packages: (wanted => installed)\n\n" in out
    assert "react" not in out


def test_missing_manifest_exits_nonzero_without_output(make_host, monkeypatch, capsys):
    monkeypatch.setattr(cli, "Host", lambda timeout=None: make_host())
    assert cli.main(["--packages"]) == 1
    assert capsys.readouterr().out == ""


def test_keep_on_missing_manifest_prints_environment(make_host, monkeypatch, capsys):
    monkeypatch.setattr(cli, "Host", lambda timeout=None: make_host())
    assert cli.main(["--packages", "--keep-on-missing-manifest"]) == 1
    out = capsys.readouterr().out
    assert out.startswith("\nEnvironment:\n")
    assert out.endswith("ERROR: package.json not found!\n\n")


def test_timeout_is_passed_to_host(fake_host):
    cli.main(["--timeout", "2.5"])
    assert fake_host.seen["timeout"] == 2.5


def test_clipboard_flag(fake_host, monkeypatch, capsys):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)
    assert cli.main(["--clipboard"]) == 0
    assert copied and copied[0] + "\n" == capsys.readouterr().out


def test_rich_ui(fake_host, capsys):
    assert cli.main(["--ui", "--packages"]) == 0
    out = capsys.readouterr().out
    assert "Environment" in out
    assert "Android Studio" in out
    assert "react" in out
