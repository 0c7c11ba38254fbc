"""
lwcpreview — CLI entrypoint.

Usage:
    lwcpreview --help
    lwcpreview preview force-app/main/default/lwc/foo
    lwcpreview preview foo.js --platform android --device Pixel_5
    lwcpreview devices show
    lwcpreview config show
    lwcpreview telemetry show --last 5
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from lwcpreview import __version__
from lwcpreview.core.observability.logging_config import resolve_level, setup_from_env

# Environment variable an editor task sets to the focused document
ACTIVE_FILE_ENV = "LWCP_ACTIVE_FILE"


@click.group()
@click.version_option(version=__version__, prog_name="lwcpreview")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to .lwcpreview.yml (default: auto-detect).",
)
@click.option(
    "--state-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for remembered devices, output log and telemetry.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    state_dir: str | None,
) -> None:
    """lwcpreview — preview Lightning Web Components on desktop and mobile."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["state_dir"] = Path(state_dir) if state_dir else None

    # ── Logging setup (refined once settings are loaded) ────────
    if debug:
        flag_level = "DEBUG"
    elif verbose:
        flag_level = "INFO"
    elif quiet:
        flag_level = "ERROR"
    else:
        flag_level = None
    ctx.obj["log_level_flag"] = flag_level

    setup_from_env(resolve_level(flag_level))


def load_settings_or_exit(ctx: click.Context):
    """Load settings for a command; print the error and exit 1 if invalid.

    The ``log_level`` setting becomes the console level unless a flag
    or LWCP_LOG_LEVEL already chose one.
    """
    from lwcpreview.core.config.loader import ConfigError, load_settings

    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    setup_from_env(resolve_level(ctx.obj.get("log_level_flag"), settings.log_level))
    return settings


def _active_document() -> str | None:
    return os.environ.get(ACTIVE_FILE_ENV) or None


@cli.command()
@click.argument("path", required=False)
@click.option(
    "--platform",
    "-p",
    "platform",
    default=None,
    help="Platform to preview on (desktop, ios, android). Prompts if omitted.",
)
@click.option(
    "--device",
    "-t",
    "device",
    default=None,
    help="Device name; an empty string keeps the remembered or default device.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def preview(
    ctx: click.Context,
    path: str | None,
    platform: str | None,
    device: str | None,
    as_json: bool,
) -> None:
    """Preview the component at PATH (file or bundle directory)."""
    from lwcpreview.adapters.console import (
        DEFAULT_OUTPUT_LOG,
        ClickPrompter,
        ConsoleChannel,
        ConsoleNotifier,
        PresetPrompter,
    )
    from lwcpreview.adapters.telemetry import LedgerTelemetry
    from lwcpreview.adapters.workspace import SfdxWorkspace
    from lwcpreview.core.config.loader import resolve_state_dir
    from lwcpreview.core.persistence.state_file import init_store
    from lwcpreview.core.persistence.telemetry_ledger import TelemetryWriter
    from lwcpreview.core.services.messages import Messages
    from lwcpreview.core.use_cases.preview import PreviewOrchestrator

    settings = load_settings_or_exit(ctx)
    state_dir = resolve_state_dir(ctx.obj.get("state_dir"))
    messages = Messages.from_locale_file(Path(settings.locale) if settings.locale else None)

    prompter = PresetPrompter(ClickPrompter(messages), platform=platform, device=device)
    orchestrator = PreviewOrchestrator(
        settings=settings,
        store=init_store(state_dir),
        workspace=SfdxWorkspace(namespace=settings.namespace),
        prompter=prompter,
        channel=ConsoleChannel(state_dir / DEFAULT_OUTPUT_LOG, echo=not as_json),
        notifier=ConsoleNotifier(echo=not as_json),
        telemetry=LedgerTelemetry(TelemetryWriter(state_dir=state_dir), enabled=settings.telemetry),
        messages=messages,
        active_document=_active_document,
    )

    result = orchestrator.run(path)
    try:
        outcome = result.wait()
    except KeyboardInterrupt:
        result.cancel()
        outcome = result.wait()

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))

    if result.status == "error" or (
        outcome is not None and not outcome.ok and not outcome.cancelled
    ):
        sys.exit(1)


@cli.group()
def config() -> None:
    """Settings commands."""


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Show the effective settings."""
    from lwcpreview.core.config.loader import find_settings_file, resolve_state_dir

    settings = load_settings_or_exit(ctx)
    source = ctx.obj.get("config_path") or find_settings_file()
    state_dir = resolve_state_dir(ctx.obj.get("state_dir"))

    if as_json:
        data = settings.model_dump(mode="json")
        data["settings_file"] = str(source) if source else None
        data["state_dir"] = str(state_dir)
        click.echo(json.dumps(data, indent=2))
        return

    click.secho("⚙️  Preview settings", fg="cyan", bold=True)
    click.echo(f"   Source: {source or '(defaults)'}")
    click.echo(f"   State:  {state_dir}")
    click.echo()
    for key, value in settings.model_dump().items():
        click.echo(f"   {key}: {value}")
    click.echo()


from lwcpreview.ui.cli.devices import devices  # noqa: E402
from lwcpreview.ui.cli.telemetry import telemetry  # noqa: E402

cli.add_command(devices)
cli.add_command(telemetry)


if __name__ == "__main__":
    cli()
