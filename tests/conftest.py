"""Shared test fixtures for sjobmeta."""

import os
from pathlib import Path

import pytest

from tests.mocks import MOCKS_DIR

SEPARATOR = "-" * 80


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's settings file out of every test."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("SJOBMETA_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def mock_slurm_path(monkeypatch: pytest.MonkeyPatch) -> Path:
    """Add the mock sacct executable to PATH.

    Returns:
        Path to the mocks directory.
    """
    current_path = os.environ.get("PATH", "")
    monkeypatch.setenv("PATH", f"{MOCKS_DIR}:{current_path}")
    return MOCKS_DIR


@pytest.fixture
def script_lines() -> list[str]:
    """Batch script output for a plain job."""
    return ["Batch Script for 55", SEPARATOR, "#!/bin/bash", "hostname", "date", ""]


@pytest.fixture
def interactive_script_lines() -> list[str]:
    """Batch script output for an interactive job, which has no script."""
    return ["Batch Script for 56", SEPARATOR, "NONE", ""]


@pytest.fixture
def array_env_lines() -> list[str]:
    """Environment output for a three element array job."""
    lines: list[str] = []
    for index in (1, 2, 3):
        lines.extend([f"Environment used for 70_{index}", SEPARATOR, "SHELL=/bin/bash", ""])
    return lines


@pytest.fixture
def array_submitline_lines() -> list[str]:
    """Parsable SubmitLine output for a three element array job."""
    return ["SubmitLine", "sbatch -a 1-3 array.sub", "sbatch -a 1-3 array.sub", "sbatch -a 1-3 array.sub"]
