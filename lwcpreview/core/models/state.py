"""
GlobalState — the per-user key/value document.

Serialized to ``<state dir>/global_state.json``.  Holds the remembered
device per platform (``lastAndroidDevice``, ``lastiOSDevice``) and any
other string value a command wants to keep between invocations.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class GlobalState(BaseModel):
    """Root state model — serialized to global_state.json."""

    schema_version: int = 1

    created_at: str = Field(default_factory=_now_iso)
    updated_at: str = Field(default_factory=_now_iso)

    values: dict[str, str] = Field(default_factory=dict)

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = _now_iso()
