"""SLURM interaction modules."""

from sjobmeta.slurm.commands import build_command, query_job
from sjobmeta.slurm.formatters import FormattedRecord, array_job_warning, format_record, not_found_message
from sjobmeta.slurm.parser import (
    FilteredRecord,
    LineKind,
    MalformedRecordError,
    RawRecord,
    filter_record,
    find_boundary,
)
from sjobmeta.slurm.queries import ENVIRONMENT_QUERY, QUERIES, SCRIPT_QUERY, SUBMITLINE_QUERY, QuerySpec
from sjobmeta.slurm.validation import JobShape, ValidationError, classify_job_id, validate_job_id

__all__ = [
    "ENVIRONMENT_QUERY",
    "QUERIES",
    "SCRIPT_QUERY",
    "SUBMITLINE_QUERY",
    "FilteredRecord",
    "FormattedRecord",
    "JobShape",
    "LineKind",
    "MalformedRecordError",
    "QuerySpec",
    "RawRecord",
    "ValidationError",
    "array_job_warning",
    "build_command",
    "classify_job_id",
    "filter_record",
    "find_boundary",
    "format_record",
    "not_found_message",
    "query_job",
    "validate_job_id",
]
