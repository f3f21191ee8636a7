"""Tests for unified_cli module."""

import sys
from unittest.mock import Mock, patch

import pytest

from asciifier.unified_cli import COMMANDS, _call_entry, main, usage

# --- Fixtures ---


@pytest.fixture
def mock_module_with_main():
    """Create a mock module with a main function."""
    module = Mock()
    module.main = Mock(return_value=0)
    return module


# --- Tests for usage() ---


class TestUsage:
    def test_usage_lists_commands(self, capsys):
        usage()
        captured = capsys.readouterr()
        assert "Usage: asciifier <command> [args...]" in captured.out
        for cmd in COMMANDS:
            assert cmd in captured.out

    def test_usage_with_prog_name(self, capsys):
        usage(prog="custom-prog")
        captured = capsys.readouterr()
        assert "Usage: custom-prog <command> [args...]" in captured.out


# --- Tests for _call_entry() ---


class TestCallEntry:
    def test_call_entry_with_argv_param(self):
        mock_entry = Mock(return_value=0)

        with patch("asciifier.unified_cli.inspect.signature") as mock_sig:
            mock_sig.return_value.parameters = {"argv": None}
            result = _call_entry(mock_entry, ["arg1", "arg2"])

        assert result == 0
        mock_entry.assert_called_once_with(["arg1", "arg2"])

    def test_call_entry_without_argv_param_restores_sys_argv(self):
        mock_entry = Mock(return_value=0)

        with patch("asciifier.unified_cli.inspect.signature") as mock_sig:
            mock_sig.return_value.parameters = {}
            original_argv = sys.argv[:]
            result = _call_entry(mock_entry, ["arg1"], module_prog="test-prog")

        assert result == 0
        mock_entry.assert_called_once_with()
        assert sys.argv == original_argv

    @pytest.mark.parametrize("code,expected", [(5, 5), (None, 0), ("bad", 0)])
    def test_call_entry_with_system_exit(self, code, expected):
        mock_entry = Mock(side_effect=SystemExit(code))

        with patch("asciifier.unified_cli.inspect.signature") as mock_sig:
            mock_sig.return_value.parameters = {"argv": None}
            result = _call_entry(mock_entry, [])

        assert result == expected

    def test_call_entry_with_exception(self, capsys):
        mock_entry = Mock(side_effect=RuntimeError("Test error"))

        with patch("asciifier.unified_cli.inspect.signature") as mock_sig:
            mock_sig.return_value.parameters = {"argv": None}
            result = _call_entry(mock_entry, [])

        assert result == 1
        assert "Error running command: Test error" in capsys.readouterr().err


# --- Tests for main() ---


class TestMain:
    @pytest.mark.parametrize("argv", [[], ["-h"], ["--help"]])
    def test_help(self, argv, capsys):
        result = main(argv)
        assert result == 0
        assert "Usage: asciifier" in capsys.readouterr().out

    def test_version(self, capsys):
        from asciifier import __version__

        assert main(["--version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        result = main(["unknown"])
        captured = capsys.readouterr()

        assert result == 2
        assert "Unknown command: unknown" in captured.err
        assert "Usage: asciifier" in captured.out

    @pytest.mark.parametrize("cmd", sorted(COMMANDS))
    def test_valid_command_imports_module(self, cmd, mock_module_with_main):
        with patch("asciifier.unified_cli.importlib.import_module") as mock_import:
            mock_import.return_value = mock_module_with_main
            result = main([cmd, "arg"])

        assert result == 0
        mock_import.assert_called_once_with(COMMANDS[cmd])

    def test_import_error(self, capsys):
        with patch("asciifier.unified_cli.importlib.import_module") as mock_import:
            mock_import.side_effect = ImportError("Module not found")
            result = main(["image"])

        captured = capsys.readouterr()
        assert result == 3
        assert "Failed to import command 'image'" in captured.err

    def test_no_main_function(self, capsys):
        with patch("asciifier.unified_cli.importlib.import_module") as mock_import:
            mock_import.return_value = Mock(spec=[])
            result = main(["image"])

        assert result == 4
        assert "has no callable 'main'" in capsys.readouterr().err

    def test_subcommand_return_code_is_passed_through(self):
        mock_module = Mock()
        mock_module.main = Mock(return_value=42)

        with patch("asciifier.unified_cli.importlib.import_module") as mock_import:
            with patch("asciifier.unified_cli.inspect.signature") as mock_sig:
                mock_import.return_value = mock_module
                mock_sig.return_value.parameters = {"argv": None}
                result = main(["image", "pic.png"])

        assert result == 42
        mock_module.main.assert_called_once_with(["pic.png"])

    def test_none_argv_uses_sys_argv(self, monkeypatch, mock_module_with_main):
        monkeypatch.setattr(sys, "argv", ["asciifier", "styles"])
        with patch("asciifier.unified_cli.importlib.import_module") as mock_import:
            mock_import.return_value = mock_module_with_main
            assert main(None) == 0
        mock_import.assert_called_once_with(COMMANDS["styles"])


class TestCommandsIntegration:
    def test_all_commands_are_importable(self):
        import importlib

        for module_path in COMMANDS.values():
            module = importlib.import_module(module_path)
            assert callable(getattr(module, "main", None)), f"{module_path}.main should be callable"

    def test_styles_command_lists_everything(self, capsys):
        from asciifier.charsets import CHARACTER_SETS
        from asciifier.colorizer import EFFECTS

        assert main(["styles", "--ramps"]) == 0
        out = capsys.readouterr().out
        for name, chars in CHARACTER_SETS.items():
            assert name in out
            assert f"[{chars}]" in out
        for name in EFFECTS:
            assert name in out
