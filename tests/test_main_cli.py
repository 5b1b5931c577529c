"""Tests for the nettelemetry command dispatcher."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

import nettelemetry.__main__ as dispatcher


@pytest.fixture(autouse=True)
def _quiet_logging():
    """Keep dispatcher tests from replacing the global loguru sink."""
    with patch.object(dispatcher, "configure_logging"):
        yield


class TestDispatcher:
    """Test sub-command dispatch."""

    def test_commands_registered(self):
        assert set(dispatcher.COMMANDS) == {"usage", "probe"}

    def test_no_command_prints_usage(self, capsys):
        with patch("sys.argv", ["nettelemetry"]):
            with pytest.raises(SystemExit) as exc_info:
                dispatcher.main()
        assert exc_info.value.code == 1
        assert "Available commands" in capsys.readouterr().out

    def test_help_exits_zero(self, capsys):
        with patch("sys.argv", ["nettelemetry", "--help"]):
            with pytest.raises(SystemExit) as exc_info:
                dispatcher.main()
        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "usage" in out
        assert "Examples:" in out
        assert "[fe80::1]:monitoring" in out

    def test_unknown_command(self, capsys):
        with patch("sys.argv", ["nettelemetry", "bogus"]):
            with pytest.raises(SystemExit) as exc_info:
                dispatcher.main()
        assert exc_info.value.code == 1
        assert "unknown command 'bogus'" in capsys.readouterr().err

    def test_dispatches_remaining_args(self):
        """The sub-CLI receives argv after the command name."""
        module = MagicMock()
        with (
            patch("sys.argv", ["nettelemetry", "probe", "10.0.0.1", "-c", "x"]),
            patch("importlib.import_module", return_value=module) as import_module,
        ):
            dispatcher.main()
        import_module.assert_called_once_with("nettelemetry.probe.cli")
        module.main.assert_called_once_with(["10.0.0.1", "-c", "x"])


class TestStartupBanner:
    def test_banner_includes_version_and_build_env(self, monkeypatch):
        """The banner table is logged raw with the version and set GITHUB_* vars."""
        monkeypatch.setenv("GITHUB_SHA", "abc123")
        monkeypatch.setenv("GITHUB_REF", "GITHUB_REF_is_undefined")
        with patch.object(dispatcher, "glogger") as glogger:
            dispatcher._print_startup_banner()

        glogger.opt.assert_called_once_with(raw=True)
        banner = glogger.opt.return_value.info.call_args.args[1]
        assert dispatcher.__version__ in banner
        assert "abc123" in banner
        assert "GITHUB_REF" not in banner
        assert "nettelemetry starting up" in banner

    def test_banner_lists_commands_and_vendors(self):
        """The banner shows the sub-commands, vendor tags and catalog directory."""
        with patch.object(dispatcher, "glogger") as glogger:
            dispatcher._print_startup_banner()

        banner = glogger.opt.return_value.info.call_args.args[1]
        assert "usage, probe" in banner
        assert "mikrotik" in banner
        assert str(dispatcher.DEFAULT_CONFIG_DIR) in banner
