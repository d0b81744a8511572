"""Recording store: persists sessions as JSON documents on disk."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from pydantic import ValidationError

from sessionreel.errors import MalformedRecordingError, RecordingIOError
from sessionreel.models.recording import Recording

logger = logging.getLogger(__name__)

# Pattern for valid recording identifiers (alphanumeric, hyphens, underscores)
_SAFE_ID_RE = re.compile(r"^[a-zA-Z0-9_-]+$")
_ID_PREFIX = "session-"


def _validate_identifier(identifier: str) -> None:
    """Validate identifier to prevent path traversal.

    Raises:
        ValueError: If identifier contains unsafe characters
    """
    if not identifier or not _SAFE_ID_RE.match(identifier):
        raise ValueError(
            f"Invalid recording identifier '{identifier}': "
            "must be alphanumeric, hyphens, underscores only"
        )


def recording_identifier(recording: Recording) -> str:
    """Derive the deterministic identifier for a recording.

    Sessions starting in the same millisecond share an identifier; the
    later save replaces the earlier one.
    """
    return f"{_ID_PREFIX}{recording.start_time_epoch_millis}"


class RecordingStore:
    """Saves and loads recordings.

    Recordings are stored at:
        <storage_dir>/session-<start_time_epoch_millis>.json
    """

    def __init__(self, storage_dir: Path) -> None:
        """Initialize store.

        Args:
            storage_dir: Directory holding recording documents
        """
        self.storage_dir = Path(storage_dir)

    def path_for(self, identifier: str) -> Path:
        _validate_identifier(identifier)
        return self.storage_dir / f"{identifier}.json"

    def save(self, recording: Recording) -> str:
        """Persist a recording.

        Args:
            recording: Completed recording

        Returns:
            Identifier the recording was saved under

        Raises:
            RecordingIOError: If the document could not be written
        """
        identifier = recording_identifier(recording)
        path = self.path_for(identifier)
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            # Write atomically via temp file to prevent corruption
            tmp_path = path.with_suffix(".json.tmp")
            tmp_path.write_text(recording.model_dump_json(indent=2), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            logger.error("Failed to save recording %s: %s", identifier, e)
            raise RecordingIOError(f"Failed to save recording {identifier}: {e}") from e

        logger.info(
            "Recording %s saved to %s (%d packets, %d ms)",
            identifier, path, recording.packet_count, recording.duration_millis,
        )
        return identifier

    def load(self, identifier: str) -> Recording:
        """Load a recording by identifier.

        Args:
            identifier: Identifier returned by save()

        Returns:
            Loaded Recording

        Raises:
            RecordingIOError: If the document could not be read
            MalformedRecordingError: If the document is not a valid recording
        """
        return self.load_path(self.path_for(identifier))

    def load_path(self, path: Path) -> Recording:
        """Load a recording from an arbitrary document path.

        Unknown fields are ignored. An empty packet list is accepted; a
        missing or invalid one is not.
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRecordingError(f"{path} is not UTF-8 text: {e}") from e
        except OSError as e:
            logger.error("Failed to read recording from %s: %s", path, e)
            raise RecordingIOError(f"Failed to read recording {path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedRecordingError(f"{path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedRecordingError(f"{path} does not contain a recording object")
        if not isinstance(data.get("packets"), list):
            raise MalformedRecordingError(f"{path} has no ordered 'packets' list")

        try:
            recording = Recording.model_validate_json(text)
        except ValidationError as e:
            raise MalformedRecordingError(f"{path} is not a valid recording: {e}") from e

        logger.debug("Recording loaded from %s (%d packets)", path, recording.packet_count)
        return recording

    def exists(self, identifier: str) -> bool:
        return self.path_for(identifier).exists()

    def list_recordings(self) -> list[str]:
        """List stored recording identifiers, oldest first."""
        if not self.storage_dir.exists():
            return []

        found = []
        for path in self.storage_dir.glob(f"{_ID_PREFIX}*.json"):
            try:
                started = int(path.stem[len(_ID_PREFIX):])
            except ValueError:
                continue
            found.append((started, path.stem))

        return [identifier for _, identifier in sorted(found)]

    def delete(self, identifier: str) -> bool:
        """Delete a stored recording.

        Returns:
            True if deleted, False if not found
        """
        path = self.path_for(identifier)
        if not path.exists():
            return False

        try:
            path.unlink()
        except OSError as e:
            logger.error("Failed to delete recording %s: %s", identifier, e)
            raise RecordingIOError(f"Failed to delete recording {identifier}: {e}") from e
        return True
