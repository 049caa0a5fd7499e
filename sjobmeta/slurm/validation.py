"""Validation and classification of SLURM job identifiers."""

import re
import shutil
from enum import Enum

# "12345", "12345_0", "12345+1", each optionally followed by ".0", ".batch", ".extern", ...
SAFE_JOBID_PATTERN = re.compile(r"^[0-9]+([_+][0-9]+)?(\.[0-9A-Za-z]+)?$")

ARRAY_SEPARATOR = "_"
STEP_SEPARATOR = "."


class ValidationError(Exception):
    """Raised when input validation fails."""


class JobShape(Enum):
    """Syntactic shape of a job identifier."""

    PLAIN = "plain"
    ARRAY_ELEMENT = "array_element"
    STEP = "step"


def classify_job_id(job_id: str) -> JobShape:
    """Classify a job identifier by its shape.

    A step of an array element ("70_1.batch") is a step.

    Args:
        job_id: The job identifier as given on the command line.

    Returns:
        The shape of the identifier.
    """
    if STEP_SEPARATOR in job_id:
        return JobShape.STEP
    if ARRAY_SEPARATOR in job_id:
        return JobShape.ARRAY_ELEMENT
    return JobShape.PLAIN


def validate_job_id(job_id: str) -> bool:
    """Validate that a job ID has a safe format.

    Args:
        job_id: The job ID to validate.

    Returns:
        True if the job ID is safe.

    Raises:
        ValidationError: If the job ID format is invalid.
    """
    if not job_id:
        raise ValidationError("Job ID cannot be empty")
    if not SAFE_JOBID_PATTERN.fullmatch(job_id):
        raise ValidationError(
            f"Invalid job ID format: {job_id!r}. Expected format: 12345, 12345_0 or 12345.batch"
        )
    return True


def resolve_executable(executable: str) -> str:
    """Return the absolute path to an executable.

    Args:
        executable: The name of the executable to find, or a path to it.

    Returns:
        The absolute path to the executable.

    Raises:
        FileNotFoundError: If the executable is not found on PATH.
    """
    resolved = shutil.which(executable)
    if resolved is None:
        raise FileNotFoundError(f"Executable {executable!r} was not found on PATH")
    return resolved
