"""
Command builder — the sfdx argument list for a preview request.

Pure and deterministic: the same request, contract and log level
always produce the same list, in this order::

    <action> -p <platform> -t <target> <-f|-d> <url|component> [--loglevel <level>]
"""

from __future__ import annotations

import shlex

from lwcpreview.core.models.preview import CliContract, PreviewRequest

DEFAULT_LOG_LEVEL = "warn"
DEFAULT_DEV_SERVER_URL = "http://localhost:3333"
PREVIEW_ROUTE = "lwc/preview"


def preview_url(component: str, dev_server_url: str = DEFAULT_DEV_SERVER_URL) -> str:
    """Dev-server URL that renders ``component``."""
    return f"{dev_server_url.rstrip('/')}/{PREVIEW_ROUTE}/{component}"


def build_command(
    request: PreviewRequest,
    contract: CliContract,
    log_level: str | None = DEFAULT_LOG_LEVEL,
    dev_server_url: str = DEFAULT_DEV_SERVER_URL,
) -> list[str]:
    """Assemble the preview arguments (without the executable).

    Args:
        request: Fully populated preview request for iOS or Android.
        contract: CLI contract selected from configuration.
        log_level: Value for ``--loglevel``; omitted when blank.
        dev_server_url: Base URL used by contracts that pass a preview URL.
    """
    if request.platform.is_desktop:
        raise ValueError("Desktop previews open a browser; there is no device command")

    if contract.uses_preview_url:
        identifier = preview_url(request.component_identifier, dev_server_url)
    else:
        identifier = request.component_identifier

    args = [
        contract.primary_action,
        "-p", request.platform.platform_name,
        "-t", request.resolved_target,
        contract.identifier_flag, identifier,
    ]
    if log_level:
        args += ["--loglevel", log_level]
    return args


def format_command(executable: str, args: list[str]) -> str:
    """Human-readable command line, as echoed back to the user."""
    return shlex.join([executable, *args])
