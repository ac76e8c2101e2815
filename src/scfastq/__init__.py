"""scfastq: Annotate single-cell FASTQ reads with barcode, UMI and sample index fields."""

__version__ = "0.1.0"

# Re-export key functions and classes that might be useful for programmatic access
from .errors import (
    ConfigError,
    DecodeError,
    FileAccessError,
    MalformedRecordError,
    ReformatError,
    StreamAlignmentError,
)
from .models import ExtractionConfig, Record, RunConfig, RunSummary
from .pipeline import reformat

__all__ = [
    "ConfigError",
    "DecodeError",
    "FileAccessError",
    "MalformedRecordError",
    "ReformatError",
    "StreamAlignmentError",
    "ExtractionConfig",
    "Record",
    "RunConfig",
    "RunSummary",
    "reformat",
]
