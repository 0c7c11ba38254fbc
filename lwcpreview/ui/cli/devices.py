"""
CLI commands for remembered devices.

Thin wrappers over ``lwcpreview.core.services.device_memory``.
"""

from __future__ import annotations

import json
import sys

import click

from lwcpreview.core.models.platform import MOBILE_CATALOG, find_platform


def _open_memory(ctx: click.Context):
    """Open device memory on the state directory from context or env."""
    from lwcpreview.core.config.loader import resolve_state_dir
    from lwcpreview.core.persistence.state_file import init_store
    from lwcpreview.core.services.device_memory import DeviceMemory

    return DeviceMemory(init_store(resolve_state_dir(ctx.obj.get("state_dir"))))


@click.group("devices")
def devices() -> None:
    """Remembered devices — the last iOS simulator and Android emulator used."""


@devices.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show the remembered device per platform."""
    memory = _open_memory(ctx)
    remembered = {p.platform_name: memory.get(p.platform_name) for p in MOBILE_CATALOG}

    if as_json:
        click.echo(json.dumps(remembered, indent=2))
        return

    click.secho("📱 Remembered devices:", fg="cyan", bold=True)
    for option in MOBILE_CATALOG:
        device = remembered[option.platform_name]
        if device:
            click.echo(f"   {option.platform_name}: {device}")
        else:
            click.echo(f"   {option.platform_name}: (default {option.default_target_name})")
    click.echo()


@devices.command("forget")
@click.argument("platform", required=False)
@click.pass_context
def forget(ctx: click.Context, platform: str | None) -> None:
    """Forget the remembered device for PLATFORM (all platforms if omitted)."""
    if platform:
        option = find_platform(platform, MOBILE_CATALOG)
        if option is None:
            click.secho(f"❌ Unknown platform: {platform}", fg="red")
            sys.exit(1)
        targets = [option]
    else:
        targets = list(MOBILE_CATALOG)

    memory = _open_memory(ctx)
    for option in targets:
        if memory.forget(option.platform_name):
            click.secho(f"🗑️  Forgot {option.platform_name} device", fg="green")
        else:
            click.echo(f"   No {option.platform_name} device remembered")
