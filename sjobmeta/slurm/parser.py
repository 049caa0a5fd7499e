"""Parsing of sacct record output.

sacct prints batch scripts and environments as decorated text blocks::

    Batch Script for 55
    --------------------------------------------------------------------------------
    #!/bin/bash
    hostname

For an array job the whole block is printed again for every array element.
The helpers here find where the first block ends so that one representative
block can be kept.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

SEPARATOR_PATTERN = re.compile(r"^-+\s*$")


class MalformedRecordError(Exception):
    """Raised when a record is too short for its decorations to be stripped."""


class LineKind(Enum):
    """Role of a single line inside a record."""

    HEADER = "header"
    SEPARATOR = "separator"
    CONTENT = "content"
    BLANK = "blank"


@dataclass(frozen=True)
class RawRecord:
    """Lines returned by one sacct invocation for one job."""

    job_id: str
    lines: tuple[str, ...]
    success: bool

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class FilteredRecord:
    """A record cut down to its first occurrence.

    ``repeated`` is True when a second occurrence of the job's header was
    found, i.e. sacct printed the block once per array element.
    """

    lines: tuple[str, ...]
    repeated: bool


def classify_lines(lines: Sequence[str], header: re.Pattern[str]) -> list[LineKind]:
    """Assign a role to every line of a record.

    The first line is always the record's own header. A line matching the
    header pattern anywhere else starts a repeated block, and a dashed line
    directly after a header is its separator.

    Args:
        lines: The record lines.
        header: Compiled header pattern for the job.

    Returns:
        One LineKind per input line.
    """
    kinds: list[LineKind] = []
    for index, line in enumerate(lines):
        if index == 0 or header.match(line):
            kinds.append(LineKind.HEADER)
        elif kinds and kinds[-1] is LineKind.HEADER and SEPARATOR_PATTERN.match(line):
            kinds.append(LineKind.SEPARATOR)
        elif line == "":
            kinds.append(LineKind.BLANK)
        else:
            kinds.append(LineKind.CONTENT)
    return kinds


def find_boundary(lines: Sequence[str], header: re.Pattern[str]) -> int:
    """Return the index where a repeated block starts.

    The search starts after line 0, which is the record's own header.

    Args:
        lines: The record lines.
        header: Compiled header pattern for the job.

    Returns:
        Index of the first repeated header, or ``len(lines)`` if there is none.
    """
    for index in range(1, len(lines)):
        if header.match(lines[index]):
            return index
    return len(lines)


def filter_record(lines: Sequence[str], header: re.Pattern[str]) -> FilteredRecord:
    """Keep only the first occurrence of a possibly repeated record.

    The repeated header itself is excluded, so the result never holds two
    header lines for the same job. Applying this to its own output returns
    the same lines.

    Args:
        lines: The record lines.
        header: Compiled header pattern for the job.

    Returns:
        The first occurrence and whether a repeat was found.
    """
    boundary = find_boundary(lines, header)
    return FilteredRecord(lines=tuple(lines[:boundary]), repeated=boundary < len(lines))
