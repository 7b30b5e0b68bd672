"""Tests for the command line interface."""

import os
import sys
from unittest.mock import Mock, patch

import pytest

from shellhelper import CommandError, Settings, ShellHelper, SpawnError
from shellhelper.cli import SPAWN_FAILED_EXIT, run_cli


@pytest.fixture
def helper(reporter):
    return ShellHelper(Settings(), reporter=reporter)


class TestRun:
    """Tests for `shellhelper run`."""

    def test_success(self, helper, output):
        code = run_cli(["run", sys.executable, "-c", "print('from child')"], helper=helper)
        assert code == 0
        assert "from child" in output()

    def test_quiet(self, helper, output):
        code = run_cli(["run", "--quiet", sys.executable, "-c", "print('from child')"], helper=helper)
        assert code == 0
        assert "from child" not in output()

    def test_exit_code_passthrough(self, helper):
        assert run_cli(["run", sys.executable, "-c", "import sys; sys.exit(6)"], helper=helper) == 6

    def test_spawn_failure(self, helper):
        assert run_cli(["run", "shellhelper-definitely-missing-command"], helper=helper) == SPAWN_FAILED_EXIT

    def test_no_command(self, helper, output):
        assert run_cli(["run"], helper=helper) == 2
        assert "No command given" in output()


class TestIn:
    def test_runs_in_directory_and_restores(self, helper, tmp_path, monkeypatch, output):
        monkeypatch.chdir(tmp_path)
        sub = tmp_path / "proj"
        sub.mkdir()
        before = os.getcwd()
        code = run_cli(["in", str(sub), sys.executable, "-c", "import os; print(os.path.basename(os.getcwd()))"], helper=helper)
        assert code == 0
        assert "proj" in output()
        assert os.getcwd() == before

    def test_missing_directory(self, helper, tmp_path, monkeypatch, output):
        """Test a missing directory is reported instead of raising."""
        monkeypatch.chdir(tmp_path)
        before = os.getcwd()
        code = run_cli(["in", str(tmp_path / "missing"), sys.executable, "-c", "pass"], helper=helper)
        assert code == 1
        assert "Cannot enter" in output()
        assert os.getcwd() == before
        assert len(helper.locations) == 0


class TestSpawn:
    @patch("shellhelper.helper.process.run_command_no_wait")
    def test_spawn(self, mock_spawn, helper, output):
        mock_spawn.return_value = Mock(pid=1234)
        assert run_cli(["spawn", "code", "."], helper=helper) == 0
        mock_spawn.assert_called_once_with("code", ["."])
        assert "1234" in output()


class TestPort:
    @patch("shellhelper.helper.ports.get_process_id_by_port", return_value="4321")
    def test_found(self, mock_lookup, helper, output):
        assert run_cli(["port", "8080"], helper=helper) == 0
        assert "4321" in output()

    @patch("shellhelper.helper.ports.get_process_id_by_port", return_value=False)
    def test_not_found(self, mock_lookup, helper, output):
        assert run_cli(["port", "8080"], helper=helper) == 1
        assert "Nothing is listening on port 8080" in output()

    @patch("shellhelper.helper.ports.get_process_id_by_port")
    def test_netstat_missing(self, mock_lookup, helper, output):
        mock_lookup.side_effect = SpawnError("No such file or directory", ["netstat", "-ano"])
        assert run_cli(["port", "8080"], helper=helper) == SPAWN_FAILED_EXIT
        assert "Cannot run 'netstat -ano'" in output()

    @patch("shellhelper.helper.ports.get_process_id_by_port")
    def test_netstat_fails(self, mock_lookup, helper, output):
        mock_lookup.side_effect = CommandError(2, "", "denied", ["netstat", "-ano"])
        assert run_cli(["port", "8080"], helper=helper) == 2
        assert "Port lookup failed" in output()


class TestAsk:
    def test_default(self, helper, output):
        with patch.object(helper.console, "input", return_value=""):
            assert run_cli(["ask", "Env?", "--default", "qa"], helper=helper) == 0
        assert "QA" in output()

    def test_yes_no(self, helper, output):
        with patch.object(helper.console, "input", return_value="y"):
            assert run_cli(["ask", "Ok?"], helper=helper) == 0
        assert "True" in output()


class TestFiles:
    def test_write_then_cat(self, helper, tmp_path, output):
        path = tmp_path / "x.txt"
        assert run_cli(["write", str(path), "hello file"], helper=helper) == 0
        assert path.read_text(encoding="utf-8") == "hello file"
        assert run_cli(["cat", str(path)], helper=helper) == 0
        assert output().endswith("hello file")


class TestHelp:
    def test_no_subcommand(self, helper, capsys):
        assert run_cli([], helper=helper) == 0
        assert "shellhelper" in capsys.readouterr().out
