"""SLURM command execution."""

import shlex
import subprocess

from sjobmeta.logger import get_logger
from sjobmeta.slurm.parser import RawRecord
from sjobmeta.slurm.queries import QuerySpec
from sjobmeta.slurm.validation import ValidationError, resolve_executable, validate_job_id

logger = get_logger(__name__)

DEFAULT_SACCT = "sacct"


def build_command(job_id: str, spec: QuerySpec, executable: str = DEFAULT_SACCT) -> list[str]:
    """Build the sacct command line for one job.

    Args:
        job_id: The SLURM job ID to query.
        spec: The query variant.
        executable: Path or name of the sacct executable.

    Returns:
        The argument vector.
    """
    return [executable, *spec.flags_for(job_id), "--jobs", job_id]


def query_job(
    job_id: str,
    spec: QuerySpec,
    *,
    executable: str = DEFAULT_SACCT,
    verbose: bool = False,
    timeout: float | None = None,
) -> RawRecord:
    """Run sacct for one job and capture its output lines.

    Failures never raise; they come back as a record with ``success=False``.

    Args:
        job_id: The SLURM job ID to query.
        spec: The query variant.
        executable: Name or path of the sacct executable.
        verbose: Echo the command line to stderr before running it.
        timeout: Seconds to wait for sacct, or None to wait indefinitely.

    Returns:
        The raw record.
    """
    failed = RawRecord(job_id=job_id, lines=(), success=False)

    try:
        validate_job_id(job_id)
    except ValidationError as exc:
        logger.warning(str(exc))
        return failed

    try:
        sacct = resolve_executable(executable)
        command = build_command(job_id, spec, sacct)
        command_line = shlex.join(command)
        if verbose:
            logger.bind(echo=True).info(command_line)
        else:
            logger.debug(f"Running command: {command_line}")

        result = subprocess.run(  # noqa: S603
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        logger.error(f"sacct not found: {exc}")
        return failed
    except subprocess.TimeoutExpired:
        logger.error(f"Timeout getting {spec.kind} for job {job_id}")
        return failed
    except subprocess.SubprocessError as exc:
        logger.error(f"Error running sacct: {exc}")
        return failed

    lines = tuple(result.stdout.splitlines())
    if result.returncode != 0:
        error_msg = result.stderr.strip() or "Job not found in accounting database"
        logger.warning(f"sacct returned error for job {job_id}: {error_msg}")
        return RawRecord(job_id=job_id, lines=lines, success=False)

    logger.debug(f"sacct returned {len(lines)} lines of {spec.kind} for job {job_id}")
    return RawRecord(job_id=job_id, lines=lines, success=True)
