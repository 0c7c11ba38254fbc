"""
Telemetry ledger — append-only record of preview commands and failures.

Every command run and every reported exception writes one entry to an
NDJSON (newline-delimited JSON) file.  Entries are never modified or
deleted; the file is the local telemetry trail of the tool.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_TELEMETRY_FILE = "telemetry.ndjson"


class TelemetryEvent(BaseModel):
    """A single telemetry entry."""

    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    event_type: str = ""            # command, exception
    name: str = ""                  # e.g. lwc_preview, lwc_preview_error

    duration_ms: int | None = None
    message: str = ""
    error_class: str = ""

    properties: dict[str, Any] = Field(default_factory=dict)


class TelemetryWriter:
    """Append-only telemetry ledger writer and reader."""

    def __init__(self, path: Path | None = None, state_dir: Path | None = None):
        if path is not None:
            self._path = path
        elif state_dir is not None:
            self._path = state_dir / DEFAULT_TELEMETRY_FILE
        else:
            self._path = Path(DEFAULT_TELEMETRY_FILE)

    @property
    def path(self) -> Path:
        return self._path

    def write(self, event: TelemetryEvent) -> None:
        """Append an event. Write failures are logged, never raised."""
        data = event.model_dump(mode="json")
        line = json.dumps(data, ensure_ascii=False) + "\n"

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(line)
            logger.debug("Telemetry event written: %s/%s", event.event_type, event.name)
        except OSError as e:
            logger.error("Failed to write telemetry event: %s", e)

    def read_all(self) -> list[TelemetryEvent]:
        """Read all events from the ledger, oldest first."""
        if not self._path.is_file():
            return []

        events = []
        try:
            with self._path.open("r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        events.append(TelemetryEvent.model_validate(json.loads(line)))
                    except Exception as e:
                        logger.warning("Skipping corrupt telemetry entry at line %d: %s", line_num, e)
        except OSError as e:
            logger.error("Failed to read telemetry ledger: %s", e)

        return events

    def read_recent(self, n: int = 20) -> list[TelemetryEvent]:
        return self.read_all()[-n:]
