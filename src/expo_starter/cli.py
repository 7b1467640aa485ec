"""Expo Starter CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler

from expo_starter import __version__
from expo_starter.config import load_config
from expo_starter.pipeline import ProjectContext, print_summary, run_pipeline
from expo_starter.validators import is_valid_app_name, is_valid_package_name

USAGE = "Usage: expo-starter AppName [com.organization.appname]"


def _configure_logging(*, verbose: bool, quiet: bool) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    pkg_logger = logging.getLogger("expo_starter")
    pkg_logger.setLevel(level)
    for old in list(pkg_logger.handlers):
        pkg_logger.removeHandler(old)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    pkg_logger.addHandler(handler)


def _fail(message: str) -> NoReturn:
    click.secho(message, fg="red", err=True)
    sys.exit(1)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="expo-starter")
@click.argument("app_name", required=False)
@click.argument("package_name", required=False)
@click.option(
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Parent directory for the new project (default: current directory).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: .expo-starter.yml in the parent directory).",
)
@click.option("--skip-install", is_flag=True, help="Do not install the dependency groups.")
@click.option("--skip-git", is_flag=True, help="Keep the scaffolder's git state untouched.")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
def main(
    app_name: str | None,
    package_name: str | None,
    *,
    directory: Path | None,
    config_path: Path | None,
    skip_install: bool,
    skip_git: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Create a pre-configured Expo app named APP_NAME.

    PACKAGE_NAME optionally sets the iOS bundle identifier and the Android
    package, e.g. com.organization.appname.
    """
    _configure_logging(verbose=verbose, quiet=quiet)

    if not app_name:
        _fail(f"❌ Please provide an app name.\n{USAGE}")
    if not is_valid_app_name(app_name):
        _fail(
            f"❌ Invalid app name '{app_name}': it must start with a letter and be "
            "3-50 letters, digits, '-' or '_'."
        )
    if package_name is not None and not is_valid_package_name(package_name):
        _fail(
            f"❌ Invalid package name '{package_name}': expected at least two "
            "dot-separated lowercase segments, e.g. com.organization.appname."
        )

    parent_dir = (directory or Path.cwd()).resolve()
    ctx = ProjectContext(
        app_name=app_name,
        parent_dir=parent_dir,
        config=load_config(parent_dir, config_path),
        console=Console(),
        package_name=package_name,
        skip_install=skip_install,
        skip_git=skip_git,
    )

    try:
        result = run_pipeline(ctx)
    except (KeyboardInterrupt, EOFError):
        _fail("\nAborted.")

    if not result.ok:
        _fail(f"Error: step '{result.failed}' failed: {result.error}")

    print_summary(ctx, result)
