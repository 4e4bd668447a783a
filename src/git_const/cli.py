"""Command-line interface for git-const."""

import sys
from pathlib import Path

import click
from rich.panel import Panel
from rich.text import Text

from git_const.config import GenerationConfig
from git_const.diagnostics import BuildDiagnostic
from git_const.generator import ConstantGenerator
from git_const.hashes import HashKind, lookup
from git_const.targets import TARGETS, get_target
from git_const.utils.console import (
    _rich_success, _rich_error, _rich_info, _rich_warning, _rich_echo,
    _plain_echo, _get_console
)
from git_const.version import get_version


TARGET_CHOICE = click.Choice(sorted(TARGETS), case_sensitive=False)


def print_version(ctx, param, value):
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return

    version_text = Text()
    version_text.append("git-const", style="bold cyan")
    version_text.append(f" version {get_version()}", style="white")
    _get_console().print(Panel(version_text, border_style="cyan", padding=(0, 1)))
    ctx.exit()


def _report_failure(error: Exception):
    """Print a build failure and exit with a non-zero status."""
    _rich_error(f"Build failed: {error}", symbol="error")
    sys.exit(1)


@click.group(help="Embed git commit hashes into generated source files")
@click.option('--version', is_flag=True, callback=print_version,
              expose_value=False, is_eager=True, help="Show version and exit.")
def cli():
    """Main entry point for the git-const CLI."""


def _lookup_command(kind: HashKind, revision, directory, git, literal, target):
    try:
        value = lookup(kind, revision, cwd=directory, git=git)
    except BuildDiagnostic as e:
        _report_failure(e)
        return
    if literal:
        value = get_target(target).quote(value)
    _plain_echo(value)


_lookup_options = [
    click.argument('revision', required=False),
    click.option('--directory', '-C', type=click.Path(file_okay=False), default=None,
                 help="Run git in this directory instead of the current one"),
    click.option('--git', default="git", show_default=True, help="git executable to run"),
    click.option('--literal', is_flag=True, help="Print the value as a quoted string literal"),
    click.option('--target', '-t', type=TARGET_CHOICE, default="python", show_default=True,
                 help="Language used for --literal quoting"),
]


def lookup_options(func):
    for option in reversed(_lookup_options):
        func = option(func)
    return func


@cli.command(name="hash", help="Print the full commit hash of REVISION (default: HEAD)")
@lookup_options
def hash_command(revision, directory, git, literal, target):
    """Print the full commit hash."""
    _lookup_command(HashKind.FULL, revision, directory, git, literal, target)


@cli.command(name="short-hash", help="Print the abbreviated commit hash of REVISION (default: HEAD)")
@lookup_options
def short_hash_command(revision, directory, git, literal, target):
    """Print the abbreviated commit hash."""
    _lookup_command(HashKind.SHORT, revision, directory, git, literal, target)


@cli.command(help="Generate a source file defining git hash constants")
@click.option('--output', '-o', default=None, help="Output file path (default from config, else _git_const.py)")
@click.option('--target', '-t', type=TARGET_CHOICE, default=None,
              help="Language of the generated file (default: inferred from the output suffix)")
@click.option('--const', '-c', 'constants', multiple=True, metavar="NAME=KIND[:REV]",
              help="Constant to define, e.g. GIT_HASH=full or BASE=short:v1.0 (repeatable)")
@click.option('--directory', '-C', type=click.Path(file_okay=False), default=None,
              help="Project directory holding the repository and config")
@click.option('--git', default=None, help="git executable to run")
@click.option('--emit-errors', is_flag=True,
              help="On failure, write the failure directive into the file instead of aborting")
@click.option('--dry-run', is_flag=True, help="Print the generated file without writing it")
def generate(output, target, constants, directory, git, emit_errors, dry_run):
    """Generate the constants unit (a pre-build step)."""
    try:
        base_dir = Path(directory) if directory else None
        if output and base_dir is not None and not Path(output).is_absolute():
            output = str(base_dir / output)
        config = GenerationConfig.from_config_file(
            base_dir,
            output_path=output,
            target=target,
            constants=list(constants),
            git=git,
            emit_errors=emit_errors or None,
            dry_run=dry_run,
        )
    except ValueError as e:
        _rich_error(f"Configuration error: {e}", symbol="error")
        sys.exit(1)

    result = ConstantGenerator(config).generate()

    if dry_run:
        _plain_echo(result.content.rstrip("\n"))

    for name, value in result.values.items():
        _rich_echo(f"{name} = {value}", style="muted", symbol="info")

    if result.success:
        if dry_run:
            _rich_info("Dry run: no files written")
        elif result.written:
            _rich_success(f"Generated {result.output_path}", symbol="success")
        else:
            _rich_info(f"{result.output_path} is up to date")
        return

    for error in result.errors:
        _rich_error(error.message, symbol="error")
    if config.emit_errors and result.written:
        _rich_warning(f"Wrote failure directive(s) to {result.output_path}", symbol="warning")
    _rich_error(f"Build failed: {len(result.errors)} constant(s) could not be resolved")
    sys.exit(1)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except Exception as e:
        _rich_error(f"Error: {e}", symbol="error")
        sys.exit(1)


if __name__ == "__main__":
    main()
