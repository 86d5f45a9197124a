"""CLI entrypoint for minion."""

from __future__ import annotations

import rich_click as click

from minion.config import Settings
from minion.dispatcher import run
from minion.exceptions import handle_exception
from minion.log import setup_logging

CONTEXT_SETTINGS = {
    # Task options are free-form, and --help belongs to the task runner.
    "ignore_unknown_options": True,
    "allow_extra_args": True,
    "help_option_names": [],
}


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def minion(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Run a minion task: minion [task] [--option[=value] ...]"""

    try:
        settings = Settings.from_env()
        settings.validate()
    except ValueError as error:
        ctx.exit(handle_exception(error))
    setup_logging(settings.logging.level, settings.logging.log_file)
    ctx.exit(run([ctx.info_name or "minion", *args], settings=settings))


if __name__ == "__main__":  # pragma: no cover
    minion()
