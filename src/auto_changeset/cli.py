"""
Command line interface for the auto_changeset tool.

This module defines the ``main`` function used as the entry point of the
``auto-changeset`` command. It parses the positional arguments, locates
the repository, loads the configuration, runs the changeset pipeline and
prints a summary. Exit codes are defined below.

Usage::

    auto-changeset [PR_URL] SOURCE_BRANCH [TARGET_BRANCH] [PR_NUMBER]

Any argument starting with ``http://`` or ``https://`` is the related PR
link. When no PR number is given it is taken from the link's last path
segment.
"""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path
from typing import Optional, Sequence
from urllib.parse import urlsplit

import click

from auto_changeset import __version__
from auto_changeset.config.loader import ConfigurationError, load_config
from auto_changeset.pipeline import ChangesetPipeline, Invocation
from auto_changeset.report import RunReport, RunStatus
from auto_changeset.vcs.git_client import GitClient, GitError
from auto_changeset.workspace.registry import DiscoveryError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_PACKAGES = 3
EXIT_PARTIAL_SUCCESS = 4
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6

USAGE = "auto-changeset [PR_URL] SOURCE_BRANCH [TARGET_BRANCH] [PR_NUMBER]"

_URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
_PR_NUMBER_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Announce a long-running step and report how long it took."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            elapsed = time.time() - self.start_time
            click.echo(f"  ✓ Done ({elapsed:.1f}s)")
        return False


def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}")
    click.echo(f"Step {step_num}/{total_steps}: {message}")
    click.echo(f"{'='*60}")


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}")


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def parse_invocation(arguments: Sequence[str]) -> Invocation:
    """Interpret the positional arguments.

    Parameters
    ----------
    arguments : Sequence[str]
        ``[PR_URL] SOURCE_BRANCH [TARGET_BRANCH] [PR_NUMBER]``; the URL may
        appear at any position.

    Returns
    -------
    Invocation
        The parsed invocation.

    Raises
    ------
    ConfigurationError
        If the source branch is missing, or no PR number is given and none
        can be derived from the URL, or the PR number contains characters
        that cannot appear in a file name.
    """
    related_link = next((arg for arg in arguments if _URL_PATTERN.match(arg)), None)
    rest = [arg for arg in arguments if not _URL_PATTERN.match(arg)]

    source_branch = rest[0] if len(rest) > 0 and rest[0] else None
    target_branch = rest[1] if len(rest) > 1 and rest[1] else None
    pr_number = rest[2] if len(rest) > 2 and rest[2] else None
    if pr_number is None and related_link:
        pr_number = urlsplit(related_link).path.rstrip("/").rsplit("/", 1)[-1] or None

    if not source_branch:
        raise ConfigurationError("A source branch is required.")
    if not pr_number:
        raise ConfigurationError("A PR number is required: pass it last or provide the PR URL.")
    if not _PR_NUMBER_PATTERN.match(pr_number):
        raise ConfigurationError(f"Invalid PR number '{pr_number}': use letters, digits, '.', '_' or '-'.")
    return Invocation(
        source_branch=source_branch,
        pr_number=pr_number,
        target_branch=target_branch,
        related_link=related_link,
    )


def locate_repository(start: Path) -> Path:
    """Return the Git repository root containing ``start``.

    Raises
    ------
    SystemExit
        With code EXIT_VCS_FAILURE if ``start`` is not inside a repository.
    """
    repo_root = GitClient.find_repo_root(start)
    if repo_root is None:
        print_error(f"No Git repository found at {start} or its parent directories.")
        raise SystemExit(EXIT_VCS_FAILURE)
    print_success(f"Found Git repository at: {repo_root}")
    return repo_root


def _display_path(path: Path, repo_root: Path) -> str:
    try:
        return str(path.relative_to(repo_root))
    except ValueError:
        return str(path)


def print_report(report: RunReport, repo_root: Path, dry_run: bool) -> None:
    """Print what the pipeline found and produced."""
    print_info(f"Packages discovered: {len(report.packages)}")
    for line in report.packages:
        print_info(line, indent=1)
    print_info(f"Compared range: {report.range_description}")

    for degradation in report.degradations:
        print_warning(str(degradation))

    if not report.commits:
        print_info("No commits to analyse.")
        return

    print_info(f"Commits analysed: {len(report.commits)}")
    for line in report.commits:
        print_info(line, indent=1)

    if not report.documents:
        print_info("No commit touches a package; nothing to generate.")
        return

    if dry_run:
        for package, document in report.documents.items():
            click.echo(f"\n📦 {package}")
            click.echo(document)
        return

    for write in report.writes:
        if write.ok:
            print_success(f"{write.package}: {_display_path(write.path, repo_root)}")
        else:
            print_error(f"{write.package}: {write.error}")


@click.command()
@click.argument("arguments", nargs=-1, metavar="[PR_URL] SOURCE_BRANCH [TARGET_BRANCH] [PR_NUMBER]")
@click.option("--repo", type=click.Path(file_okay=False, path_type=Path), help="Repository to analyse (default: current directory).")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), help="Configuration file to use instead of .changeset/auto-changeset.json.")
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory for the generated changesets.")
@click.option("--dry-run", is_flag=True, help="Print the changesets instead of writing them.")
@click.option("--strict", is_flag=True, help="Exit with a non-zero code when some changesets could not be written.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="auto-changeset")
def main(
    arguments: Sequence[str],
    repo: Optional[Path],
    config_path: Optional[Path],
    output_dir: Optional[Path],
    dry_run: bool,
    strict: bool,
    verbose: bool,
) -> None:
    """Generate per-package changesets from the commits of a branch.

    Every package under the packages directory that was touched by a
    commit between the merge-base of TARGET_BRANCH and SOURCE_BRANCH gets
    one changeset, named after the PR number.
    """
    # Use force=True so that handlers are reconfigured on subsequent
    # invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)

    try:
        try:
            invocation = parse_invocation(arguments)
        except ConfigurationError as exc:
            print_error(str(exc))
            click.echo(f"Usage: {USAGE}", err=True)
            raise click.exceptions.Exit(EXIT_INVALID_USAGE)

        click.echo("\n" + "="*60)
        click.echo(f"📝 Auto Changeset (PR #{invocation.pr_number})".center(60))
        click.echo("="*60)
        print_info(f"Source branch: {invocation.source_branch}")
        print_info(f"Target branch: {invocation.target_branch or '(auto-detect)'}")

        total_steps = 3

        # Step 1: Detect repository
        print_step(1, total_steps, "Detecting Repository")
        try:
            repo_root = locate_repository(repo or Path.cwd())
        except SystemExit as exc:
            raise click.exceptions.Exit(exc.code)

        # Step 2: Load configuration
        print_step(2, total_steps, "Loading Configuration")
        try:
            settings = load_config(repo_root, config_path)
        except ConfigurationError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)
        print_success("Configuration loaded")
        print_info(f"Packages directory: {settings.packages_dir}", indent=1)
        print_info(f"Changeset directory: {settings.changeset_dir}", indent=1)

        # Step 3: Analyse history and write changesets
        print_step(3, total_steps, "Generating Changesets")
        pipeline = ChangesetPipeline(GitClient(repo_root), repo_root, settings)
        try:
            with ProgressIndicator("Analysing commits"):
                report = pipeline.run(invocation, output_dir=output_dir, dry_run=dry_run)
        except DiscoveryError as exc:
            print_error(f"No packages found: {exc}")
            raise click.exceptions.Exit(EXIT_NO_PACKAGES)
        except GitError as exc:
            print_error(f"VCS error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        print_report(report, repo_root, dry_run)

        click.echo(f"\n{'='*60}")
        if report.status is RunStatus.PARTIAL_SUCCESS:
            print_warning(
                f"Partial success: {len(report.written)} written, "
                f"failed for {', '.join(report.failed_packages)}"
            )
            raise click.exceptions.Exit(EXIT_PARTIAL_SUCCESS if strict else EXIT_SUCCESS)

        count = len(report.documents)
        verb = "rendered" if dry_run else "generated"
        click.echo(f"🎉 {count} changeset{'s' if count != 1 else ''} {verb}.\n")
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
