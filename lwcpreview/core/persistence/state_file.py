"""
State file persistence — the per-user key/value store.

State is stored as JSON in ``<state dir>/global_state.json``.  Writes
are atomic (write to temp file, then rename) so a crash mid-write never
leaves a truncated store behind.  Concurrent invocations are not
locked against each other: the last write wins.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from lwcpreview.core.models.state import GlobalState

logger = logging.getLogger(__name__)

DEFAULT_STATE_FILE = "global_state.json"


def default_state_path(state_dir: Path) -> Path:
    """Get the store file path inside a state directory."""
    return state_dir / DEFAULT_STATE_FILE


def load_state(path: Path) -> GlobalState:
    """Load the global state from a JSON file.

    Returns:
        GlobalState model. If the file doesn't exist or is corrupt,
        returns a fresh state.
    """
    if not path.is_file():
        logger.debug("No state file at %s — starting fresh", path)
        return GlobalState()

    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
        state = GlobalState.model_validate(data)
        logger.debug("Loaded state from %s (updated_at=%s)", path, state.updated_at)
        return state
    except json.JSONDecodeError as e:
        logger.warning("Corrupt state file %s: %s — starting fresh", path, e)
        return GlobalState()
    except Exception as e:
        logger.warning("Cannot load state from %s: %s — starting fresh", path, e)
        return GlobalState()


def save_state(state: GlobalState, path: Path) -> None:
    """Save the global state to a JSON file (atomic write)."""
    state.touch()

    path.parent.mkdir(parents=True, exist_ok=True)

    data = state.model_dump(mode="json")
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    try:
        _fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".state_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(_fd, "w", encoding="utf-8") as f:
                f.write(content)
            tmp.replace(path)
            logger.debug("State saved to %s", path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except Exception as e:
        logger.error("Failed to save state to %s: %s", path, e)
        raise


class GlobalStore:
    """Handle on the persistent store, opened once per process.

    Every ``update`` re-reads the file before writing so that values
    written by another invocation since startup are not clobbered.
    """

    def __init__(self, path: Path):
        self._path = path
        self._state = load_state(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: str = "") -> str:
        return self._state.values.get(key, default)

    def update(self, key: str, value: str) -> None:
        state = load_state(self._path)
        state.values[key] = value
        save_state(state, self._path)
        self._state = state

    def delete(self, key: str) -> bool:
        """Remove a key. Returns False if it was not set."""
        state = load_state(self._path)
        if key not in state.values:
            return False
        del state.values[key]
        save_state(state, self._path)
        self._state = state
        return True

    def items(self) -> dict[str, str]:
        return dict(self._state.values)


def init_store(scope: Path) -> GlobalStore:
    """Open the store for a state directory (call once at startup)."""
    return GlobalStore(default_state_path(scope))
