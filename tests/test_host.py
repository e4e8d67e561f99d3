from pathlib import Path
import sys

import psutil
import pytest

from envreport.host import CommandError, Host, Platform, detect_platform


def make_real_host(**kwargs):
    return Host(platform=Platform.LINUX, release="6.1.0", system="Linux", **kwargs)


def python(code):
    return [sys.executable, "-c", code]


def test_run_returns_trimmed_stdout_and_drops_stderr(capfd):
    host = make_real_host()
    output = host.run(python("import sys; print('  1.22.19  '); print('noise', file=sys.stderr)"))
    assert output == "1.22.19"
    captured = capfd.readouterr()
    assert "noise" not in captured.err
    assert "noise" not in captured.out


def test_run_raises_on_nonzero_exit():
    host = make_real_host()
    with pytest.raises(CommandError) as excinfo:
        host.run(python("import sys; print('partial'); sys.exit(3)"))
    assert "status 3" in excinfo.value.reason


def test_run_raises_for_missing_command():
    host = make_real_host()
    with pytest.raises(CommandError) as excinfo:
        host.run(["envreport-no-such-tool", "--version"])
    assert excinfo.value.command == "envreport-no-such-tool --version"
    assert excinfo.value.reason == "command not found"


def test_run_times_out():
    host = make_real_host(timeout=0.1)
    with pytest.raises(CommandError) as excinfo:
        host.run(python("import time; time.sleep(5)"))
    assert "timed out" in excinfo.value.reason


def test_which_searches_path(monkeypatch):
    executable = Path(sys.executable)
    monkeypatch.setenv("PATH", str(executable.parent))
    host = make_real_host()
    assert host.which(executable.name) is not None
    assert host.which("envreport-no-such-tool") is None


def test_reads_text_and_bytes(tmp_path):
    (tmp_path / "build.txt").write_text("AI-162.4069837\n", encoding="utf-8")
    host = make_real_host(cwd=tmp_path)
    assert host.read_text(tmp_path / "build.txt") == "AI-162.4069837\n"
    assert host.read_bytes(tmp_path / "build.txt") == b"AI-162.4069837\n"
    with pytest.raises(OSError):
        host.read_text(tmp_path / "missing.txt")


@pytest.mark.parametrize(
    "flags, expected",
    [
        ({"MACOS": True, "LINUX": False, "WINDOWS": False}, Platform.MACOS),
        ({"MACOS": False, "LINUX": True, "WINDOWS": False}, Platform.LINUX),
        ({"MACOS": False, "LINUX": False, "WINDOWS": True}, Platform.WINDOWS),
        ({"MACOS": False, "LINUX": False, "WINDOWS": False}, Platform.OTHER),
    ],
)
def test_detect_platform(monkeypatch, flags, expected):
    for name, value in flags.items():
        monkeypatch.setattr(psutil, name, value)
    assert detect_platform() == expected
