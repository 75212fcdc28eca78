import shutil

import pytest
from unittest.mock import MagicMock, patch

from app.core.errors import CommandExecutionError
from app.executor.command_runner import run_commands


@patch("app.executor.command_runner.subprocess.run")
def test_runs_commands_in_order_through_bash(mock_run):
    mock_run.return_value = MagicMock(returncode=0)

    executed = run_commands(["make gen", "  ", " make fmt "], workspace_path="/repo")

    assert executed == ["make gen", "make fmt"]
    assert [c.args[0] for c in mock_run.call_args_list] == [
        ["bash", "-lc", "make gen"],
        ["bash", "-lc", "make fmt"],
    ]
    assert all(c.kwargs["cwd"] == "/repo" for c in mock_run.call_args_list)


@patch("app.executor.command_runner.subprocess.run")
def test_output_is_not_captured(mock_run):
    mock_run.return_value = MagicMock(returncode=0)
    run_commands(["echo hi"])
    assert "capture_output" not in mock_run.call_args.kwargs
    assert "stdout" not in mock_run.call_args.kwargs


@patch("app.executor.command_runner.subprocess.run")
def test_failure_aborts_remaining_commands(mock_run):
    mock_run.side_effect = [MagicMock(returncode=0), MagicMock(returncode=2), MagicMock(returncode=0)]

    with pytest.raises(CommandExecutionError) as exc:
        run_commands(["one", "two", "three"])

    assert exc.value.command == "two"
    assert exc.value.exit_code == 2
    assert str(exc.value) == "command failed (two): exit 2"
    assert mock_run.call_count == 2


@patch("app.executor.command_runner.subprocess.run", side_effect=FileNotFoundError("bash"))
def test_missing_shell_is_command_error(mock_run):
    with pytest.raises(CommandExecutionError):
        run_commands(["anything"])


@pytest.mark.skipif(shutil.which("bash") is None, reason="bash not available")
def test_real_shell_exit_code(tmp_path):
    marker = tmp_path / "ran.txt"
    run_commands([f"echo ok > {marker}"], workspace_path=str(tmp_path))
    assert marker.read_text().strip() == "ok"

    with pytest.raises(CommandExecutionError) as exc:
        run_commands(["exit 3"], workspace_path=str(tmp_path))
    assert exc.value.exit_code == 3
