"""Query variants for the three sacct pipelines.

Each pipeline differs only in the sacct flags it passes, the header that
opens one record in the output, and how many lines a usable answer needs.
"""

import re
from dataclasses import dataclass

from sjobmeta.slurm.validation import JobShape, classify_job_id


@dataclass(frozen=True)
class QuerySpec:
    """Constant description of one sacct query variant."""

    kind: str
    noun: str
    flags: tuple[str, ...]
    # Regex template for a record header; "{job_id}" is replaced by the escaped ID
    header_template: str
    min_lines: int
    # Output opens with a header line followed by a separator line
    decorated: bool = True
    # Flags used instead of ``flags`` when the job ID names a step
    step_flags: tuple[str, ...] | None = None
    # Collect array jobs for a diagnostic after the run
    report_arrays: bool = False

    def flags_for(self, job_id: str) -> tuple[str, ...]:
        """Return the sacct flags to use for a job ID.

        Args:
            job_id: The job identifier being queried.

        Returns:
            The flag tuple, step-scoped when the ID names a step.
        """
        if self.step_flags is not None and classify_job_id(job_id) is JobShape.STEP:
            return self.step_flags
        return self.flags

    def header_pattern(self, job_id: str) -> re.Pattern[str]:
        """Compile the record header pattern for a job ID.

        Args:
            job_id: The job identifier being queried.

        Returns:
            A compiled pattern matching a whole header line.
        """
        return re.compile(self.header_template.format(job_id=re.escape(job_id)))


SCRIPT_QUERY = QuerySpec(
    kind="script",
    noun="script",
    flags=("--batch-script",),
    header_template=r"^Batch Script for {job_id}(_[0-9]+)?\s*$",
    min_lines=4,
)

ENVIRONMENT_QUERY = QuerySpec(
    kind="environment",
    noun="environment",
    flags=("--env-vars",),
    header_template=r"^Environment used for {job_id}(_[0-9]+)?\s*$",
    min_lines=4,
    report_arrays=True,
)

# The allocation-scoped variant keeps sacct from repeating the line once per step
SUBMITLINE_QUERY = QuerySpec(
    kind="submitline",
    noun="submission command",
    flags=("--allocations", "--parsable2", "--format=SubmitLine"),
    step_flags=("--parsable2", "--format=SubmitLine"),
    header_template=r"^SubmitLine\s*$",
    min_lines=2,
    decorated=False,
)

QUERIES: dict[str, QuerySpec] = {spec.kind: spec for spec in (SCRIPT_QUERY, ENVIRONMENT_QUERY, SUBMITLINE_QUERY)}
