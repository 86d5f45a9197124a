"""Interactive terminal helpers for tasks: prompts, waits and colors."""

from __future__ import annotations

import os
import time
from collections.abc import Sequence

import click

from minion.exceptions import InvalidColorError

WAIT_MSG = "Press any key to continue..."
INVALID_OPTION_MSG = "This is not a valid option. Please try again."

# Legacy color names mapped onto click's palette.
FOREGROUND_COLORS = {
    "black": "black",
    "dark_gray": "bright_black",
    "blue": "blue",
    "light_blue": "bright_blue",
    "green": "green",
    "light_green": "bright_green",
    "cyan": "cyan",
    "light_cyan": "bright_cyan",
    "red": "red",
    "light_red": "bright_red",
    "purple": "magenta",
    "light_purple": "bright_magenta",
    "brown": "yellow",
    "yellow": "bright_yellow",
    "light_gray": "white",
    "white": "bright_white",
}

BACKGROUND_COLORS = {
    "black": "black",
    "red": "red",
    "green": "green",
    "yellow": "yellow",
    "blue": "blue",
    "magenta": "magenta",
    "cyan": "cyan",
    "light_gray": "white",
}


def write(text: str | Sequence[str] = "") -> None:
    """Write a line, or each line of a list."""

    if isinstance(text, str):
        click.echo(text)
        return
    for line in text:
        write(line)


def write_replace(text: str = "", end_line: bool = False) -> None:
    """Overwrite the current line; pass ``end_line`` when done replacing it."""

    if end_line:
        text += "\n"
    prefix = "\r" if os.name == "nt" else "\r\033[K"
    # The clear-line code must survive non-tty output.
    click.echo(prefix + text, nl=False, color=True)


def read(text: str = "", options: Sequence[str] | None = None) -> str:
    """Read a line of input, re-asking until it is one of ``options``."""

    if options:
        text += f" [ {', '.join(options)} ]"
    if text:
        text += ": "

    stdin = click.get_text_stream("stdin")
    while True:
        click.echo(text, nl=False)
        answer = stdin.readline().strip()
        if not options or answer in options:
            return answer
        write(INVALID_OPTION_MSG)


def password(text: str = "") -> str:
    """Read input without echoing it."""

    value = click.prompt(text, hide_input=True, default="", show_default=False, prompt_suffix=": ")
    return value.strip()


def wait(seconds: int = 0, countdown: bool = False) -> None:
    """Sleep, optionally printing a countdown; with no seconds wait for Enter."""

    if countdown:
        for remaining in range(seconds, 0, -1):
            click.echo(f"{remaining}... ", nl=False)
            time.sleep(1)
        write()
    elif seconds > 0:
        time.sleep(seconds)
    else:
        write(WAIT_MSG)
        read()


def color(text: str, foreground: str, background: str | None = None) -> str:
    """Return ``text`` wrapped in ANSI codes for the named colors."""

    if foreground not in FOREGROUND_COLORS:
        raise InvalidColorError(f"Invalid CLI foreground color: {foreground}")
    if background is not None and background not in BACKGROUND_COLORS:
        raise InvalidColorError(f"Invalid CLI background color: {background}")
    if os.name == "nt":
        return text
    return click.style(
        text,
        fg=FOREGROUND_COLORS[foreground],
        bg=BACKGROUND_COLORS[background] if background is not None else None,
    )
