#!/usr/bin/env python
"""tarcheck - report which files are tar archives, judged by content"""

import logging
import sys

import click

from .archive_detect import ArchiveType, sniff_archive


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-q",
    "--quiet",
    "quiet",
    is_flag=True,
    help="Print nothing, only set the exit status",
    default=False,
)
@click.option(
    "-L",
    "--log-level",
    "log_level",
    help="Log level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
)
@click.argument("files", nargs=-1, required=True, type=click.Path())
def main(quiet: bool, log_level: str, files: tuple[str, ...]) -> None:
    """Check whether FILES are tar archives, plain or gzip compressed.

    Prints one line per file with its archive type (tar, gzip-tar or none)
    and exits non-zero if any file is not an archive.
    """
    logging.basicConfig(level=log_level.upper(), format="%(name)s: %(message)s")

    all_archives = True
    for name in files:
        archive_type = sniff_archive(name)
        if archive_type is ArchiveType.NONE:
            all_archives = False
        if not quiet:
            print(f"{name}\t{archive_type.value}")

    sys.exit(0 if all_archives else 1)


def run() -> None:
    """Entry point for the command-line interface."""
    main()


if __name__ == "__main__":
    run()
