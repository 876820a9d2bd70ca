# -*- coding: utf-8 -*-
import logging
import os

import typer
import yaml
from rich.logging import RichHandler

from npmup.npmup_updater.errors import ManifestError
from npmup.npmup_updater.updater import NpmUpdater
from npmup.npmup_utils.config import get_log_level, load_config
from npmup.npmup_utils.globals import error_console
from npmup.npmup_utils.output import OutputType, PrettyOutput

app = typer.Typer(
    help="Update package.json dependencies to their latest versions",
    add_completion=False,
    epilog="""
Example:
  npmup --deps
  npmup --deps --devdeps --exclude react
  npmup --restore
""",
)


def init_env() -> None:
    """Load configuration and, when a log level is configured, attach a log handler."""
    try:
        load_config()
    except (OSError, ValueError, yaml.YAMLError) as e:
        PrettyOutput.print(
            f"Ignoring unreadable configuration file: {e}", OutputType.WARNING
        )

    level = get_log_level()
    if not level:
        return
    if not isinstance(logging.getLevelName(level), int):
        PrettyOutput.print(f"Ignoring unknown log_level: {level}", OutputType.WARNING)
        return
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
    )


# Options are parsed by npmup itself, so click must pass every token through.
@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    }
)
def cli(ctx: typer.Context):
    init_env()
    updater = NpmUpdater(os.getcwd())
    try:
        updater.run(ctx.args)
    except ManifestError as e:
        PrettyOutput.print(str(e), OutputType.ERROR)
        raise typer.Exit(code=1)


def main():
    """Application entry point"""
    app()


if __name__ == "__main__":
    main()
