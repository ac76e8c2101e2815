"""Exceptions raised while reformatting.

Every error a run can hit derives from ReformatError so the command line can
report it once and exit non-zero.
"""

from typing import Optional


class ReformatError(Exception):
    pass


class ConfigError(ReformatError):
    """Invalid option combination, detected before any stream is opened."""
    pass


class FileAccessError(ReformatError):
    """An input could not be opened, or an output could not be created or written."""

    def __init__(self, path: str, reason: str, action: str = "open"):
        super().__init__(f"Can't {action}: {path} ({reason})")
        self.path = path


class DecodeError(ReformatError):
    """A compressed stream is corrupt or truncated."""

    def __init__(self, path: Optional[str], record_index: Optional[int], reason: str):
        location = path or "<input>"
        if record_index is not None:
            location = f"{location}, record {record_index}"
        super().__init__(f"{location}: {reason}")
        self.path = path
        self.record_index = record_index


class MalformedRecordError(DecodeError):
    """A record violates its structure or is too short for barcode extraction."""
    pass


class StreamAlignmentError(ReformatError):
    """Companion streams and the primary stream hold different record counts."""
    pass
