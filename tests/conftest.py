"""Shared fixtures: isolated tabctl environment and a CLI runner."""

import io

import pytest

from tabctl.control import cli


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for name in ("TABCTL_APP", "TABCTL_OSASCRIPT", "TABCTL_OSASCRIPT_TIMEOUT", "TABCTL_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TABCTL_CONFIG_PATH", str(tmp_path / "config.json"))


@pytest.fixture
def run_cli():
    def _run(argv, browser, stdin=""):
        out = io.StringIO()
        stdin_stream = io.StringIO(stdin) if isinstance(stdin, str) else stdin
        rc = cli.main(["tabctl", *argv], adapter=browser, stdin=stdin_stream, stdout=out)
        return rc, out.getvalue()

    return _run
