"""Exception hierarchy for SessionReel."""


class SessionReelError(Exception):
    """Base class for all SessionReel errors."""


class MalformedRecordingError(SessionReelError, ValueError):
    """Persisted recording data is missing or has an invalid packet sequence."""


class RecordingIOError(SessionReelError, OSError):
    """Reading or writing recording storage failed."""


class ConfigError(SessionReelError, ValueError):
    """A configuration file could not be parsed or validated."""
