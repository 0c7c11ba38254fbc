"""
CLI commands for the local telemetry ledger.

Thin wrappers over ``lwcpreview.core.persistence.telemetry_ledger``.

Usage::

    lwcpreview telemetry show
    lwcpreview telemetry show --last 5 --json
"""

from __future__ import annotations

import json

import click


@click.group("telemetry")
def telemetry() -> None:
    """Telemetry — the local record of preview runs and failures."""


@telemetry.command("show")
@click.option("--last", "-n", "last", type=click.IntRange(min=1), default=20, show_default=True,
              help="Number of most recent events.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, last: int, as_json: bool) -> None:
    """Show the most recent telemetry events, oldest first."""
    from lwcpreview.core.config.loader import resolve_state_dir
    from lwcpreview.core.persistence.telemetry_ledger import TelemetryWriter

    writer = TelemetryWriter(state_dir=resolve_state_dir(ctx.obj.get("state_dir")))
    events = writer.read_recent(last)

    if as_json:
        click.echo(json.dumps([e.model_dump(mode="json") for e in events], indent=2))
        return

    if not events:
        click.echo(f"No telemetry recorded in {writer.path}")
        return

    click.secho(f"📊 Last {len(events)} telemetry event(s):", fg="cyan", bold=True)
    for event in events:
        stamp = event.timestamp[:19].replace("T", " ")
        if event.event_type == "exception":
            click.secho(f"   {stamp}  ❌ {event.name} [{event.error_class}] {event.message}", fg="red")
        else:
            duration = f" {event.duration_ms}ms" if event.duration_ms is not None else ""
            detail = " ".join(f"{k}={v}" for k, v in event.properties.items())
            click.echo(f"   {stamp}  ▶ {event.name}{duration} {detail}".rstrip())
    click.echo()
