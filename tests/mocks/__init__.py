"""Mock SLURM executables for tests."""

from pathlib import Path

MOCKS_DIR = Path(__file__).parent
