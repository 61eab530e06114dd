"""Main CLI application entry point.

Defines the Typer command, its options, and the mapping from run
results and usage errors to process exit codes.
"""

import errno
import sys
from pathlib import Path
from typing import Annotated

import click
import typer

from scrub import __version__
from scrub.cli.display import print_run_summary
from scrub.collapse.runner import collapse_roots
from scrub.core.config import ConfigError, ScrubConfig, load_config, save_config
from scrub.utils.formatting import print_error, print_success

app = typer.Typer(
    name="scrub",
    help="Collapse a directory tree by clobbering matched files and removing emptied directories.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"scrub version {__version__}")
        raise typer.Exit()


@app.command()
def scrub(
    ctx: typer.Context,
    paths: Annotated[
        list[str] | None,
        typer.Argument(help="Directories (or files) to collapse.", show_default=False),
    ] = None,
    clobber_extension: Annotated[
        list[str] | None,
        typer.Option(
            "--clobber-extension",
            "-c",
            metavar="EXT",
            help="Delete files with extension EXT (no leading dot). Repeatable.",
            show_default=False,
        ),
    ] = None,
    clobber_name: Annotated[
        list[str] | None,
        typer.Option(
            "--clobber-name",
            "-C",
            metavar="NAME",
            help="Delete files named exactly NAME. Repeatable.",
            show_default=False,
        ),
    ] = None,
    preserve_hidden: Annotated[
        bool,
        typer.Option(
            "--preserve-hidden",
            "-H",
            help="Leave hidden directories alone instead of descending into them.",
        ),
    ] = False,
    preserve_special: Annotated[
        bool,
        typer.Option(
            "--preserve-special",
            help="Never delete special files (sockets, devices, pipes, symlinks).",
        ),
    ] = False,
    simulate: Annotated[
        bool,
        typer.Option("--simulate", help="Print unlink(...) lines instead of deleting."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Verbose logging output."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            metavar="PATH",
            help="Read default rules from PATH instead of ~/.config/scrub/config.toml.",
            dir_okay=False,
        ),
    ] = None,
    no_config: Annotated[
        bool,
        typer.Option("--no-config", help="Ignore configuration files."),
    ] = False,
    save: Annotated[
        bool,
        typer.Option(
            "--save-config",
            help="Write the effective clobber and preserve rules to the config file and exit.",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Delete files matched by name or extension, then remove every
    directory that became empty as a result, bottom-up.

    Exits with ENOTEMPTY if any root directory is left non-empty.
    """
    try:
        base = _load_base_config(config_path, no_config=no_config, creating=save)
        config = base.merged_with(
            clobber_extensions=clobber_extension,
            clobber_names=clobber_name,
            verbose=verbose,
            simulate=simulate,
            preserve_hidden=preserve_hidden,
            preserve_special=preserve_special,
        )
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=errno.EINVAL) from e

    if save:
        try:
            saved_path = save_config(config, config_path)
        except ConfigError as e:
            print_error(str(e))
            raise typer.Exit(code=errno.EINVAL) from e
        print_success(f"Configuration saved to {saved_path}")
        raise typer.Exit(code=0)

    if not paths:
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=0)

    report = collapse_roots(config, paths)

    if config.verbose:
        print_run_summary(report)

    raise typer.Exit(code=report.exit_code)


def _load_base_config(
    config_path: Path | None, *, no_config: bool, creating: bool
) -> ScrubConfig:
    """Load the configuration the command line is layered on.

    An explicit --config file that does not exist yet is only acceptable
    when it is about to be written by --save-config.
    """
    if no_config:
        return ScrubConfig()
    if creating and config_path is not None and not config_path.exists():
        return ScrubConfig()
    return load_config(config_path)


def run(argv: list[str] | None = None) -> int:
    """Run the command and return its exit status.

    Usage errors (unknown options, missing option arguments) are reported
    with the usage line and map to EINVAL.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        Process exit status.
    """
    command = typer.main.get_command(app)
    try:
        result = command.main(args=argv, prog_name="scrub", standalone_mode=False)
    except click.UsageError as e:
        e.show()
        return errno.EINVAL
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        print_error("Aborted.")
        return 1
    return result if isinstance(result, int) else 0


def main() -> None:
    """Console script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
