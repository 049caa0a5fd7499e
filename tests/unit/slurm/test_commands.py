"""Tests for sacct invocation with the mock executable."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from sjobmeta.logger import disable_verbose, enable_verbose
from sjobmeta.slurm.commands import build_command, query_job
from sjobmeta.slurm.queries import ENVIRONMENT_QUERY, SCRIPT_QUERY, SUBMITLINE_QUERY


class TestBuildCommand:
    """Tests for build_command."""

    def test_script_command(self) -> None:
        command = build_command("55", SCRIPT_QUERY, "/usr/bin/sacct")
        assert command == ["/usr/bin/sacct", "--batch-script", "--jobs", "55"]

    def test_environment_command(self) -> None:
        assert build_command("70", ENVIRONMENT_QUERY) == ["sacct", "--env-vars", "--jobs", "70"]

    def test_submitline_allocation_command(self) -> None:
        command = build_command("55", SUBMITLINE_QUERY)
        assert command == ["sacct", "--allocations", "--parsable2", "--format=SubmitLine", "--jobs", "55"]

    def test_submitline_step_command(self) -> None:
        command = build_command("55.0", SUBMITLINE_QUERY)
        assert command == ["sacct", "--parsable2", "--format=SubmitLine", "--jobs", "55.0"]


class TestQueryJob:
    """Tests for query_job against the mock sacct."""

    def test_returns_lines(self, mock_slurm_path: Path) -> None:
        record = query_job("55", SCRIPT_QUERY)
        assert record.success is True
        assert record.job_id == "55"
        assert record.lines[0] == "Batch Script for 55"
        assert record.lines[-1] == ""
        assert len(record) == 6

    def test_missing_trailing_newline(self, mock_slurm_path: Path) -> None:
        record = query_job("57", SCRIPT_QUERY)
        assert record.lines[-1] == "echo no newline at end"

    def test_unknown_job_returns_no_lines(self, mock_slurm_path: Path) -> None:
        record = query_job("999", SCRIPT_QUERY)
        assert record.success is True
        assert record.lines == ()

    def test_non_zero_exit_is_failure(self, mock_slurm_path: Path) -> None:
        record = query_job("998", SCRIPT_QUERY)
        assert record.success is False

    def test_undecodable_output_is_replaced(self, mock_slurm_path: Path) -> None:
        record = query_job("60", ENVIRONMENT_QUERY)
        assert record.success is True
        assert "NAME=caf\ufffd" in record.lines

    def test_decoding_errors_are_replaced(self, mock_slurm_path: Path) -> None:
        completed = MagicMock(returncode=0, stdout="", stderr="")
        with patch("sjobmeta.slurm.commands.subprocess.run", return_value=completed) as mock_run:
            query_job("55", SCRIPT_QUERY)
        assert mock_run.call_args.kwargs["encoding"] == "utf-8"
        assert mock_run.call_args.kwargs["errors"] == "replace"

    def test_step_uses_step_flags(self, mock_slurm_path: Path) -> None:
        record = query_job("55.0", SUBMITLINE_QUERY)
        assert record.lines == ("SubmitLine", "srun hostname")

    def test_invalid_job_id_does_not_run(self) -> None:
        with patch("sjobmeta.slurm.commands.subprocess.run") as mock_run:
            record = query_job("55; rm -rf /", SCRIPT_QUERY)
        mock_run.assert_not_called()
        assert record.success is False

    def test_missing_executable(self) -> None:
        record = query_job("55", SCRIPT_QUERY, executable="definitely-not-a-real-sacct-binary")
        assert record.success is False

    def test_timeout_is_failure(self, mock_slurm_path: Path) -> None:
        with patch(
            "sjobmeta.slurm.commands.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="sacct", timeout=1.0),
        ):
            record = query_job("55", SCRIPT_QUERY, timeout=1.0)
        assert record.success is False

    def test_timeout_is_passed_to_subprocess(self, mock_slurm_path: Path) -> None:
        completed = MagicMock(returncode=0, stdout="SubmitLine\nsbatch job.sub\n", stderr="")
        with patch("sjobmeta.slurm.commands.subprocess.run", return_value=completed) as mock_run:
            query_job("55", SUBMITLINE_QUERY, timeout=30.0)
        assert mock_run.call_args.kwargs["timeout"] == 30.0
        assert mock_run.call_args.kwargs["check"] is False


class TestVerbose:
    """Tests for echoing the sacct command line."""

    def test_verbose_writes_command_to_stderr(self, mock_slurm_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        enable_verbose()
        try:
            query_job("55", SCRIPT_QUERY, verbose=True)
        finally:
            disable_verbose()
        captured = capsys.readouterr()
        assert f"{mock_slurm_path / 'sacct'} --batch-script --jobs 55" in captured.err
        assert captured.out == ""

    def test_quiet_by_default(self, mock_slurm_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        enable_verbose()
        try:
            query_job("55", SCRIPT_QUERY)
        finally:
            disable_verbose()
        assert capsys.readouterr().err == ""
