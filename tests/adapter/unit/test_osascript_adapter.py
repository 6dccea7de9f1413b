import json
import subprocess
from types import SimpleNamespace

import pytest

from tabctl.adapter import osascript
from tabctl.adapter.osascript import OsascriptAdapter, TabRef, WindowRef
from tabctl.config import Settings
from tabctl.control.snapshot import build_snapshot
from tabctl.errors import AdapterUnavailable


class _Recorder:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.commands = []

    def __call__(self, cmd, **kwargs):
        self.commands.append((cmd, kwargs))
        response = self.responses.pop(0) if self.responses else SimpleNamespace(returncode=0, stdout="{}", stderr="")
        if isinstance(response, BaseException):
            raise response
        return response


def _ok(payload):
    return SimpleNamespace(returncode=0, stdout=json.dumps(payload) + "\n", stderr="")


def _adapter(**overrides):
    return OsascriptAdapter(Settings(**overrides))


def test_read_tabs_runs_one_osascript_call_and_builds_snapshot(monkeypatch):
    recorder = _Recorder(
        _ok(
            {
                "ids": [[11, 12], [21]],
                "titles": [["Inbox", ""], ["News"]],
                "urls": [["https://mail.google.com", "https://blank.test"], ["https://news.test"]],
            }
        )
    )
    monkeypatch.setattr(osascript.subprocess, "run", recorder)

    records = build_snapshot(_adapter())

    assert len(recorder.commands) == 1
    cmd, kwargs = recorder.commands[0]
    assert cmd[:4] == ["/usr/bin/osascript", "-l", "JavaScript", "-e"]
    assert "browser.windows.tabs.title()" in cmd[4]
    assert cmd[5:] == ["Google Chrome"]
    assert kwargs["timeout"] == 30.0
    assert kwargs["capture_output"] is True

    assert [(r.window_index, r.tab_index, r.id, r.title, r.url) for r in records] == [
        (0, 0, 11, "Inbox", "https://mail.google.com"),
        (0, 1, 12, "No Title", "https://blank.test"),
        (1, 0, 21, "News", "https://news.test"),
    ]
    assert records[2].window == WindowRef(1)
    assert records[2].tab == TabRef(window_index=1, index=0, id=21, title="News", url="https://news.test")


def test_empty_browser_has_no_windows(monkeypatch):
    monkeypatch.setattr(osascript.subprocess, "run", _Recorder(_ok({"ids": [], "titles": [], "urls": []})))
    assert _adapter().list_windows() == []


def test_mutations_pass_indices_as_arguments(monkeypatch):
    recorder = _Recorder()
    monkeypatch.setattr(osascript.subprocess, "run", recorder)
    adapter = _adapter(application="Brave Browser")

    adapter.close_tab(TabRef(window_index=1, index=4))
    adapter.close_window(WindowRef(2))
    adapter.set_window_visible(WindowRef(0), True)
    adapter.set_active_tab(WindowRef(0), 3)
    adapter.set_window_order(WindowRef(0), 0)
    adapter.activate_application()

    args = [cmd[5:] for cmd, _kwargs in recorder.commands]
    assert args == [
        ["Brave Browser", "1", "4"],
        ["Brave Browser", "2"],
        ["Brave Browser", "0", "true"],
        ["Brave Browser", "0", "3"],
        ["Brave Browser", "0", "0"],
        ["Brave Browser"],
    ]
    assert ".tabs[Number(argv[2])].close()" in recorder.commands[0][0][4]
    assert "activeTabIndex = Number(argv[2]) + 1" in recorder.commands[3][0][4]


def test_user_text_is_never_spliced_into_script_source(monkeypatch):
    recorder = _Recorder()
    monkeypatch.setattr(osascript.subprocess, "run", recorder)
    message = 'Close "these"?\n\n\\ tabs'

    _adapter().show_alert(message)

    cmd, _kwargs = recorder.commands[0]
    assert message not in cmd[4]
    assert cmd[-1] == message


def test_confirm_dialog_reports_button_or_cancel(monkeypatch):
    monkeypatch.setattr(
        osascript.subprocess, "run", _Recorder(_ok({"button": "OK"}), _ok({"cancelled": True}))
    )
    adapter = _adapter()
    assert adapter.show_confirm_dialog("Close these tabs?") == "OK"
    assert adapter.show_confirm_dialog("Close these tabs?") is None


def test_not_running_browser_is_unavailable(monkeypatch):
    failure = SimpleNamespace(
        returncode=1,
        stdout="",
        stderr="execution error: Error: Error: Google Chrome is not running (-2700)\n",
    )
    monkeypatch.setattr(osascript.subprocess, "run", _Recorder(failure))
    with pytest.raises(AdapterUnavailable, match="^Google Chrome is not running$"):
        _adapter().list_windows()


def test_missing_automation_permission_is_explained(monkeypatch):
    failure = SimpleNamespace(
        returncode=1,
        stdout="",
        stderr="execution error: Not authorized to send Apple events to Google Chrome. (-1743)",
    )
    monkeypatch.setattr(osascript.subprocess, "run", _Recorder(failure))
    with pytest.raises(AdapterUnavailable, match="Privacy & Security > Automation"):
        _adapter().list_windows()


def test_other_failures_keep_the_detail(monkeypatch):
    failure = SimpleNamespace(returncode=1, stdout="", stderr="execution error: Invalid index. (-1719)")
    monkeypatch.setattr(osascript.subprocess, "run", _Recorder(failure))
    with pytest.raises(AdapterUnavailable, match=r"automation failed \(close-tab\): .*Invalid index"):
        _adapter().close_tab(TabRef(window_index=0, index=9))


def test_missing_osascript_and_timeouts_are_unavailable(monkeypatch):
    monkeypatch.setattr(osascript.subprocess, "run", _Recorder(FileNotFoundError("osascript")))
    with pytest.raises(AdapterUnavailable, match="osascript not found: /opt/osascript"):
        _adapter(osascript_path="/opt/osascript").activate_application()

    monkeypatch.setattr(
        osascript.subprocess, "run", _Recorder(subprocess.TimeoutExpired(cmd="osascript", timeout=2.5))
    )
    with pytest.raises(AdapterUnavailable, match=r"did not respond within 2.5s \(read-tabs\)"):
        _adapter(osascript_timeout=2.5).list_windows()


def test_garbled_output_is_unavailable(monkeypatch):
    monkeypatch.setattr(
        osascript.subprocess, "run", _Recorder(SimpleNamespace(returncode=0, stdout="not json", stderr=""))
    )
    with pytest.raises(AdapterUnavailable, match="Unexpected osascript output"):
        _adapter().list_windows()
