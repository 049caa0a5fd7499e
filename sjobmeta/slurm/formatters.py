"""Formatting of sacct records for output."""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from sjobmeta.logger import get_logger
from sjobmeta.slurm.parser import (
    FilteredRecord,
    LineKind,
    MalformedRecordError,
    RawRecord,
    classify_lines,
    filter_record,
)
from sjobmeta.slurm.queries import QuerySpec

logger = get_logger(__name__)

# Header and separator at the top, one blank line at the bottom
LEADING_DECORATION = 2
TRAILING_DECORATION = 1


@dataclass(frozen=True)
class FormattedRecord:
    """Lines ready to print for one job."""

    lines: tuple[str, ...]
    is_array: bool = False


def repair_trailing_blank(lines: Sequence[str]) -> tuple[str, ...]:
    """Make sure a record ends with an empty line.

    When a script or environment has no newline at the end, sacct's own
    trailing blank line is swallowed. Adding it back lets the fixed "drop the
    last line" rule remove the separator and not real content.

    Args:
        lines: Record lines.

    Returns:
        The lines, with one empty line appended if the last one is not empty.
    """
    if lines and lines[-1] != "":
        return (*lines, "")
    return tuple(lines)


def strip_decorations(lines: Sequence[str], header: re.Pattern[str]) -> tuple[str, ...]:
    """Drop the header, the separator and the trailing blank line.

    The record must open with a header and a separator and keep at least
    one line between them and the trailing blank.

    Args:
        lines: A single record, already repaired.
        header: Compiled header pattern for the job.

    Returns:
        The record content.

    Raises:
        MalformedRecordError: If the decorations are missing or nothing is left.
    """
    kinds = classify_lines(lines, header)
    if kinds[:LEADING_DECORATION] != [LineKind.HEADER, LineKind.SEPARATOR]:
        raise MalformedRecordError("Record does not open with a header and a separator")
    if not kinds or kinds[-1] is not LineKind.BLANK:
        raise MalformedRecordError("Record does not end with a blank line")
    if len(lines) <= LEADING_DECORATION + TRAILING_DECORATION:
        raise MalformedRecordError(f"Record has {len(lines)} lines and no content between its header and trailer")
    return tuple(lines[LEADING_DECORATION : len(lines) - TRAILING_DECORATION])


def format_record(record: RawRecord, spec: QuerySpec, *, raw: bool = False) -> FormattedRecord:
    """Turn a raw sacct record into the lines to print.

    In raw mode the record is returned unchanged. Otherwise decorated records
    are cut to their first occurrence and stripped, and the submit line
    pipeline keeps the single line below the column header.

    Args:
        record: Output of one sacct invocation that passed the sanity check.
        spec: The query variant that produced the record.
        raw: Whether to pass the record through unchanged.

    Returns:
        The formatted record.

    Raises:
        MalformedRecordError: If the record cannot be trimmed.
    """
    if raw:
        return FormattedRecord(lines=record.lines)

    if not spec.decorated:
        # Array elements all share one submit line; the first is enough
        if len(record.lines) < 2:
            raise MalformedRecordError(f"No submit line below the column header for job {record.job_id}")
        return FormattedRecord(lines=record.lines[1:2])

    header = spec.header_pattern(record.job_id)
    filtered: FilteredRecord = filter_record(record.lines, header)
    if filtered.repeated:
        logger.debug(f"Job {record.job_id} {spec.kind} is repeated, keeping {len(filtered.lines)} lines")

    if filtered.lines and filtered.lines[-1] != "":
        logger.debug(f"Job {record.job_id} {spec.kind} has no trailing blank line, adding one")
    repaired = repair_trailing_blank(filtered.lines)
    return FormattedRecord(lines=strip_decorations(repaired, header), is_array=filtered.repeated)


def not_found_message(spec: QuerySpec, job_id: str) -> str:
    """Return the message shown when a job has no usable record.

    Args:
        spec: The query variant.
        job_id: The job identifier.

    Returns:
        A one-line message.
    """
    return f"No {spec.noun} found for jobid {job_id}"


def array_job_warning(job_ids: Sequence[str]) -> str:
    """Return the diagnostic listing array jobs whose output was collapsed.

    Args:
        job_ids: Array jobs, in the order they were queried.

    Returns:
        A multi-line message for stderr.
    """
    listed = "\n".join(f"  {job_id}" for job_id in job_ids)
    return (
        "Warning: the following jobs are array jobs:\n"
        f"{listed}\n"
        "Only the environment of the first array element was shown. Array elements\n"
        "have their own environment (SLURM_ARRAY_TASK_ID and related variables).\n"
        "Use --raw to see all of them, or query one element directly, e.g. 12345_7."
    )
