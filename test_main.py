"""Entrypoint: startup check gating, wiring, and shutdown."""

import logging

import pytest

import config
import main
from activity_tracker import ActivityMonitor, DependencyError, StopFlag


@pytest.fixture(autouse=True)
def no_signal_handlers(monkeypatch):
    installed = []
    monkeypatch.setattr(main.signal, "signal", lambda sig, handler: installed.append((sig, handler)))
    return installed


def test_startup_failure_exits_before_polling(monkeypatch, caplog, capsys):
    def missing(xdotool):
        raise DependencyError("xdotool is not installed. Please run: sudo apt-get install xdotool")

    ran = []
    monkeypatch.setattr(main, "check_dependencies", missing)
    monkeypatch.setattr(ActivityMonitor, "run", lambda self, stop=None: ran.append(self))

    with caplog.at_level(logging.CRITICAL):
        assert main.main([]) == 1

    assert ran == []
    assert "Dependency check failed" in caplog.text
    assert "Starting monitoring" not in capsys.readouterr().out


def test_runs_monitor_with_config(monkeypatch, capsys, no_signal_handlers):
    checked = []
    monitors = []
    monkeypatch.setattr(main, "check_dependencies", checked.append)
    monkeypatch.setattr(ActivityMonitor, "run", lambda self, stop=None: monitors.append((self, stop)))

    stop = StopFlag()
    assert main.main(["--interval", "2"], stop_event=stop) == 0

    assert len(checked) == 1
    assert checked[0].binary == config.XDOTOOL_BIN
    monitor, passed_stop = monitors[0]
    assert passed_stop is stop
    assert monitor.poll_interval == 2
    assert monitor.max_consecutive_errors == config.MAX_CONSECUTIVE_ERRORS
    assert monitor.error_backoff == config.ERROR_BACKOFF

    out = capsys.readouterr().out
    assert "All dependencies checked. Starting monitoring..." in out
    assert "Stopped." in out

    # SIGINT/SIGTERM handlers set the stop event
    assert len(no_signal_handlers) == 2
    no_signal_handlers[0][1]()
    assert stop.is_set()


def test_default_interval_comes_from_config():
    assert main.parse_args([]).interval == config.POLL_INTERVAL


def test_log_level_is_case_insensitive():
    assert main.parse_args(["--log-level", "debug"]).log_level == "DEBUG"


def test_unknown_log_level_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main.parse_args(["--log-level", "verbose"])
    assert exc.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_unknown_log_level_from_env_is_a_usage_error(monkeypatch, capsys):
    monkeypatch.setattr(config, "LOG_LEVEL", "VERBOSE")
    with pytest.raises(SystemExit) as exc:
        main.parse_args([])
    assert exc.value.code == 2
    assert "LOG_LEVEL must be one of" in capsys.readouterr().err
