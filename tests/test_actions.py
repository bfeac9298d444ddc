import subprocess

import pytest

from sredd import actions
from sredd.errors import ActionError


def test_invoke_command_prints_urls_and_appends_them(monkeypatch, capsys):
    calls = []

    def fake_run(argv, check):
        calls.append((argv, check))
        return subprocess.CompletedProcess(argv, 0)

    monkeypatch.setattr(actions.subprocess, "run", fake_run)

    actions.invoke_command("open", ("-a", "Safari"), ["https://a", "https://b"])

    assert capsys.readouterr().out == "URL: https://a\nURL: https://b\n"
    assert calls == [(["open", "-a", "Safari", "https://a", "https://b"], True)]


def test_invoke_command_without_args():
    assert actions.build_command("xdg-open", (), ["https://a"]) == [
        "xdg-open",
        "https://a",
    ]


def test_invoke_command_non_zero_exit_raises(monkeypatch):
    def fake_run(argv, check):
        raise subprocess.CalledProcessError(2, argv)

    monkeypatch.setattr(actions.subprocess, "run", fake_run)

    with pytest.raises(ActionError, match="exited with status 2"):
        actions.invoke_command("open", (), ["https://a"])


def test_invoke_command_launch_failure_raises(monkeypatch):
    def fake_run(argv, check):
        raise FileNotFoundError(2, "No such file or directory", argv[0])

    monkeypatch.setattr(actions.subprocess, "run", fake_run)

    with pytest.raises(ActionError, match="Failed to run 'missing-browser'"):
        actions.invoke_command("missing-browser", (), ["https://a"])
