"""
Console adapters — terminal prompts, notifications and output log.

These are the concrete collaborators the CLI hands to the preview
pipeline.  Prompts and messages go through click so they behave the
same under ``CliRunner`` as in a real terminal.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Sequence

import click

from lwcpreview.adapters.base import Notifier, OutputChannel, Prompter
from lwcpreview.core.models.platform import PlatformOption, find_platform
from lwcpreview.core.services.messages import Messages

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_LOG = "output.log"


class ClickPrompter(Prompter):
    """Numbered-list picker and free-text input on the terminal.

    Ctrl-C / Ctrl-D at either prompt counts as a cancellation.
    """

    def __init__(self, messages: Messages):
        self._messages = messages

    def pick(
        self,
        options: Sequence[PlatformOption],
        placeholder: str,
    ) -> PlatformOption | None:
        if not options:
            return None

        click.secho(placeholder, fg="cyan", bold=True)
        default_index = 1
        for index, option in enumerate(options, start=1):
            if option.picked:
                default_index = index
            label = self._messages.localize(option.label_key)
            detail = self._messages.localize(option.description_key)
            click.echo(f"   {index}. {label}")
            click.secho(f"      {detail}", dim=True)

        try:
            choice = click.prompt(
                "Platform",
                type=click.IntRange(1, len(options)),
                default=default_index,
            )
        except click.Abort:
            click.echo()
            return None
        return options[choice - 1]

    def input_box(self, placeholder: str) -> str | None:
        """Read one line; the text is returned verbatim, Enter alone gives ``""``."""
        try:
            value = click.prompt(placeholder, default="", show_default=False)
        except click.Abort:
            click.echo()
            return None
        return value


class PresetPrompter(Prompter):
    """Answers from command-line flags, falling back to another prompter.

    ``platform`` answers the picker when it names an option in the
    catalog being shown; ``device`` (possibly ``""``) answers the
    device prompt.
    """

    def __init__(
        self,
        fallback: Prompter,
        platform: str | None = None,
        device: str | None = None,
    ):
        self._fallback = fallback
        self._platform = platform
        self._device = device

    def pick(
        self,
        options: Sequence[PlatformOption],
        placeholder: str,
    ) -> PlatformOption | None:
        if self._platform:
            found = find_platform(self._platform, tuple(options))
            if found is not None:
                return found
            logger.warning("Platform %r is not available here — asking instead", self._platform)
        return self._fallback.pick(options, placeholder)

    def input_box(self, placeholder: str) -> str | None:
        if self._device is not None:
            return self._device
        return self._fallback.input_box(placeholder)


class ConsoleChannel(OutputChannel):
    """Output log echoed to the terminal and appended to a file."""

    def __init__(self, log_path: Path | None = None, echo: bool = True):
        self._log_path = log_path
        self._echo = echo

    @property
    def log_path(self) -> Path | None:
        return self._log_path

    def append_line(self, line: str) -> None:
        if self._echo:
            click.echo(line)
        if self._log_path is None:
            return
        stamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        try:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            with self._log_path.open("a", encoding="utf-8") as f:
                f.write(f"{stamp} {line}\n")
        except OSError as e:
            logger.error("Failed to append to output log %s: %s", self._log_path, e)

    def show(self) -> None:
        if self._log_path is not None:
            logger.info("Output log: %s", self._log_path)


class ConsoleNotifier(Notifier):
    """Notifications rendered with click.

    With ``echo=False`` (machine-readable output) messages only go to
    the log.
    """

    def __init__(self, echo: bool = True):
        self._echo = echo

    def show_info(self, message: str) -> None:
        if not self._echo:
            logger.info(message)
            return
        click.secho(f"ℹ️  {message}", fg="cyan")

    def show_warning(self, message: str) -> None:
        if not self._echo:
            logger.warning(message)
            return
        click.secho(f"⚠️  {message}", fg="yellow")

    def show_error(self, message: str) -> None:
        if not self._echo:
            logger.error(message)
            return
        click.secho(f"❌ {message}", fg="red", err=True)

    def show_successful_execution(self, message: str, detail: str = "") -> None:
        if not self._echo:
            logger.info("%s %s", message, detail)
            return
        click.secho(f"✅ {message}", fg="green")
        if detail:
            click.echo(f"   {detail}")
