"""
Preview pipeline models — the request, the CLI contract and the outcome.

A ``PreviewRequest`` is built once the component, platform and target
are all known, and is immutable from then on.  An ``ExecutionOutcome``
is produced exactly once per launched process.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lwcpreview.core.models.platform import PlatformOption

# Exit code a POSIX shell reports for "command not found"; the sfdx
# wrapper uses it when the preview plugin is missing.
TOOL_NOT_INSTALLED_EXIT_CODE = 127


class CliContract(BaseModel):
    """Versioned shape of the sfdx preview invocation.

    The preview command has been renamed across plugin versions and
    the flag carrying the component moved from ``-f`` (a preview URL)
    to ``-d`` (the component itself).  One contract is selected at
    startup from configuration.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    primary_action: str
    identifier_flag: str
    uses_preview_url: bool


CLI_CONTRACTS: dict[str, CliContract] = {
    "lwc": CliContract(
        name="lwc",
        primary_action="force:lightning:lwc:preview",
        identifier_flag="-f",
        uses_preview_url=True,
    ),
    "local": CliContract(
        name="local",
        primary_action="force:lightning:local:preview",
        identifier_flag="-d",
        uses_preview_url=False,
    ),
}


class PreviewRequest(BaseModel):
    """Everything the command builder needs for one launch."""

    model_config = ConfigDict(frozen=True)

    source_path: str
    platform: PlatformOption
    resolved_target: str
    component_identifier: str

    @model_validator(mode="after")
    def _check_populated(self) -> PreviewRequest:
        if not self.component_identifier.strip():
            raise ValueError("component_identifier must not be blank")
        if not self.platform.is_desktop and not self.resolved_target:
            raise ValueError("resolved_target must not be empty for a device platform")
        return self


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    TOOL_NOT_INSTALLED = "tool_not_installed"


class ExecutionOutcome(BaseModel):
    """Result of one preview process.

    ``exit_code`` is None only when the process could not be started
    at all; ``error`` then holds the reason.
    """

    exit_code: int | None = None
    error: str | None = None
    platform: PlatformOption
    command: str = ""
    output_tail: list[str] = Field(default_factory=list)
    cancelled: bool = False
    duration_ms: int = 0

    @property
    def kind(self) -> OutcomeKind:
        if self.exit_code == 0:
            return OutcomeKind.SUCCESS
        if self.exit_code == TOOL_NOT_INSTALLED_EXIT_CODE:
            return OutcomeKind.TOOL_NOT_INSTALLED
        return OutcomeKind.FAILURE

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "exit_code": self.exit_code,
            "error": self.error,
            "platform": self.platform.id.value,
            "command": self.command,
            "cancelled": self.cancelled,
            "duration_ms": self.duration_ms,
        }
