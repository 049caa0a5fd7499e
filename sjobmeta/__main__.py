"""Entry points for sjobmeta.

Three console scripts share one parser: ``jobscript``, ``jobenv`` and
``jobsubmitline``. ``python -m sjobmeta KIND JOBID...`` runs any of them.
"""

import argparse
import sys
import traceback
from collections.abc import Sequence
from importlib.metadata import version

from sjobmeta.app import RunOptions, exit_code, run_pipeline
from sjobmeta.logger import enable_verbose, get_logger
from sjobmeta.settings import load_settings
from sjobmeta.slurm.queries import ENVIRONMENT_QUERY, QUERIES, SCRIPT_QUERY, SUBMITLINE_QUERY, QuerySpec

logger = get_logger(__name__)

DESCRIPTIONS = {
    "script": "Print the batch script of finished or running jobs from the SLURM accounting database.",
    "environment": "Print the environment that jobs were submitted with from the SLURM accounting database.",
    "submitline": "Print the command line that jobs were submitted with from the SLURM accounting database.",
}

RAW_HELP = {
    "script": "print sacct output unchanged, including headers and one copy per array element",
    "environment": "print sacct output unchanged, including headers and the environment of every array element",
    "submitline": "print sacct output unchanged, including the column header and one line per array element",
}


def get_version() -> str:
    """Return the installed package version, or 'unknown'."""
    try:
        return version("sjobmeta")
    except Exception:  # noqa: BLE001
        return "unknown"


def build_parser(spec: QuerySpec | None = None, prog: str | None = None) -> argparse.ArgumentParser:
    """Build the argument parser for one query variant.

    Args:
        spec: The query variant, or None to take it as the first argument.
        prog: Program name shown in usage.

    Returns:
        The configured parser.
    """
    if spec is not None:
        description = DESCRIPTIONS[spec.kind]
    else:
        description = "Query job metadata from the SLURM accounting database."
    parser = argparse.ArgumentParser(prog=prog, description=description)
    if spec is None:
        parser.add_argument("kind", choices=sorted(QUERIES), help="which metadata to print")
    parser.add_argument(
        "jobids",
        metavar="JOBID",
        nargs="+",
        help="job ID, array job ID, array element (12345_7) or step (12345.0)",
    )
    parser.add_argument(
        "-r",
        "--raw",
        action="store_true",
        help=RAW_HELP[spec.kind] if spec is not None else "print sacct output unchanged",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="print each sacct command to stderr before running it"
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {get_version()}")
    return parser


def parse_args(
    argv: Sequence[str] | None = None, spec: QuerySpec | None = None, prog: str | None = None
) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:]).
        spec: The query variant, or None to take it as the first argument.
        prog: Program name shown in usage.

    Returns:
        The parsed namespace.
    """
    return build_parser(spec, prog).parse_args(argv)


def main(spec: QuerySpec | None = None, argv: Sequence[str] | None = None, prog: str | None = None) -> int:
    """Run one query variant over the job IDs given on the command line.

    Returns:
        The process exit code.
    """
    args = parse_args(argv, spec, prog)
    if spec is None:
        spec = QUERIES[args.kind]

    options = RunOptions.from_settings(load_settings(), raw=args.raw, verbose=args.verbose)
    if options.verbose:
        enable_verbose()

    logger.info(f"Starting {spec.kind} query for {len(args.jobids)} jobs (raw={options.raw})")
    return exit_code(run_pipeline(args.jobids, spec, options))


def run(spec: QuerySpec | None = None, prog: str | None = None) -> None:
    """Run a command with standard Python tracebacks and exit."""
    try:
        code = main(spec, prog=prog)
    except Exception:
        traceback.print_exc()
        sys.exit(1)
    sys.exit(code)


def jobscript() -> None:
    """Console script: print batch scripts."""
    run(SCRIPT_QUERY, prog="jobscript")


def jobenv() -> None:
    """Console script: print job environments."""
    run(ENVIRONMENT_QUERY, prog="jobenv")


def jobsubmitline() -> None:
    """Console script: print submission command lines."""
    run(SUBMITLINE_QUERY, prog="jobsubmitline")


if __name__ == "__main__":
    run(prog="sjobmeta")
