"""
Domain models — Pydantic types for the preview pipeline.

All models are re-exported here for convenient access:

    from lwcpreview.core.models import PlatformOption, PreviewRequest, ExecutionOutcome
"""

from lwcpreview.core.models.platform import (
    ANDROID,
    DESKTOP,
    FULL_CATALOG,
    IOS,
    MOBILE_CATALOG,
    PlatformId,
    PlatformOption,
    catalog_for,
    find_platform,
)
from lwcpreview.core.models.preview import (
    CLI_CONTRACTS,
    TOOL_NOT_INSTALLED_EXIT_CODE,
    CliContract,
    ExecutionOutcome,
    OutcomeKind,
    PreviewRequest,
)
from lwcpreview.core.models.state import GlobalState

__all__ = [
    # platform.py
    "ANDROID",
    "DESKTOP",
    "FULL_CATALOG",
    "IOS",
    "MOBILE_CATALOG",
    "PlatformId",
    "PlatformOption",
    "catalog_for",
    "find_platform",
    # preview.py
    "CLI_CONTRACTS",
    "TOOL_NOT_INSTALLED_EXIT_CODE",
    "CliContract",
    "ExecutionOutcome",
    "OutcomeKind",
    "PreviewRequest",
    # state.py
    "GlobalState",
]
