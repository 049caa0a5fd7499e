"""Per-job processing and the batch loop shared by all three commands."""

import sys
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from sjobmeta.logger import get_logger
from sjobmeta.settings import Settings
from sjobmeta.slurm.commands import DEFAULT_SACCT, query_job
from sjobmeta.slurm.formatters import array_job_warning, format_record, not_found_message
from sjobmeta.slurm.parser import MalformedRecordError, RawRecord
from sjobmeta.slurm.queries import QuerySpec

logger = get_logger(__name__)


class Outcome(Enum):
    """Result of processing one job."""

    PRINTED = "printed"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class JobResult:
    """What one job produced."""

    job_id: str
    outcome: Outcome
    lines: tuple[str, ...] = ()
    is_array: bool = False


@dataclass(frozen=True)
class RunOptions:
    """Options for one run over a list of jobs."""

    raw: bool = False
    verbose: bool = False
    executable: str = DEFAULT_SACCT
    timeout: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings, *, raw: bool = False, verbose: bool = False) -> "RunOptions":
        """Combine command line flags with stored settings."""
        return cls(
            raw=raw,
            verbose=verbose or settings.verbose,
            executable=settings.sacct_executable,
            timeout=settings.command_timeout,
        )


def passes_sanity_check(record: RawRecord, spec: QuerySpec) -> bool:
    """Return whether a record is worth parsing.

    Failed invocations and output shorter than the variant's minimum (an
    unknown job ID yields only a column header) are rejected.
    """
    return record.success and len(record) >= spec.min_lines


def process_job(job_id: str, spec: QuerySpec, options: RunOptions) -> JobResult:
    """Query, check and format one job.

    Args:
        job_id: The job identifier.
        spec: The query variant.
        options: Run options.

    Returns:
        The job's result. Failures are reported as NOT_FOUND, never raised.
    """
    record = query_job(
        job_id,
        spec,
        executable=options.executable,
        verbose=options.verbose,
        timeout=options.timeout,
    )
    if not passes_sanity_check(record, spec):
        logger.info(f"No {spec.kind} for job {job_id} (success={record.success}, lines={len(record)})")
        return JobResult(job_id=job_id, outcome=Outcome.NOT_FOUND)

    try:
        formatted = format_record(record, spec, raw=options.raw)
    except MalformedRecordError as exc:
        logger.warning(f"Malformed {spec.kind} record for job {job_id}: {exc}")
        return JobResult(job_id=job_id, outcome=Outcome.NOT_FOUND)

    return JobResult(job_id=job_id, outcome=Outcome.PRINTED, lines=formatted.lines, is_array=formatted.is_array)


def run_pipeline(
    job_ids: Iterable[str],
    spec: QuerySpec,
    options: RunOptions,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> bool:
    """Process jobs in order, printing each result as it is ready.

    Args:
        job_ids: Job identifiers in command line order.
        spec: The query variant.
        options: Run options.
        stdout: Stream for results (defaults to sys.stdout).
        stderr: Stream for diagnostics (defaults to sys.stderr).

    Returns:
        True if every job produced output.
    """
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr

    results: list[JobResult] = []
    for job_id in job_ids:
        result = process_job(job_id, spec, options)
        results.append(result)
        if result.outcome is Outcome.NOT_FOUND:
            print(not_found_message(spec, job_id), file=err)
            continue
        for line in result.lines:
            print(line, file=out)
        out.flush()

    array_jobs = [result.job_id for result in results if result.is_array]
    if spec.report_arrays and array_jobs and not options.raw:
        print(array_job_warning(array_jobs), file=err)

    all_found = all(result.outcome is Outcome.PRINTED for result in results)
    logger.info(f"Processed {len(results)} jobs for {spec.kind}, all found: {all_found}")
    return all_found


def exit_code(all_found: bool) -> int:
    """Map the aggregate status to a process exit code."""
    return 0 if all_found else 1
