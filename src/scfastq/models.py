"""Records, run configuration and run bookkeeping."""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from .constants import (
    DEFAULT_BARCODE_LENGTH, DEFAULT_EXPERIMENT_TAG, DEFAULT_PROGRESS_INTERVAL,
    Chemistry, InputLayout
)
from .errors import ConfigError


class Record(NamedTuple):
    """One FASTQ record. len(sequence) == len(quality) is checked by the reader."""
    name: str
    comment: str
    sequence: str
    quality: str


EMPTY_RECORD = Record("", "", "", "")


class ExtractedFields(NamedTuple):
    barcode: str
    barcode_quality: str
    umi: str
    umi_quality: str

    @property
    def key(self) -> str:
        """Dedup key: raw barcode + UMI nucleotides, qualities excluded."""
        return self.barcode + self.umi


@dataclass(frozen=True)
class ExtractionConfig:
    barcode_length: int = DEFAULT_BARCODE_LENGTH
    umi_length: int = Chemistry.umi_length(Chemistry.V3)

    @property
    def required_length(self) -> int:
        return self.barcode_length + self.umi_length


@dataclass(frozen=True)
class RunConfig:
    """Everything a run needs, fixed for the whole run.

    inputs are in command-line order: (index, barcode, primary),
    (barcode, primary) or (primary,).
    """
    inputs: Tuple[str, ...]
    output_prefix: Optional[str] = None
    experiment_tag: str = DEFAULT_EXPERIMENT_TAG
    chunk_size: int = 0
    dedup: bool = True
    debug: bool = False
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    strict_alignment: bool = False
    progress: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self):
        if not 1 <= len(self.inputs) <= 3:
            raise ConfigError(f"Expected 1, 2 or 3 input files, got {len(self.inputs)}")
        if self.chunk_size < 0:
            raise ConfigError(f"Chunk size must not be negative: {self.chunk_size}")
        if self.chunk_size > 0 and not self.output_prefix:
            raise ConfigError("Chunk size cannot be specified when writing to stdout")
        if self.extraction.barcode_length < 0 or self.extraction.umi_length < 0:
            raise ConfigError("Barcode and UMI lengths must not be negative")

    @property
    def layout(self) -> InputLayout:
        return InputLayout.from_file_count(len(self.inputs))

    @property
    def progress_interval(self) -> int:
        return self.chunk_size if self.chunk_size > 0 else DEFAULT_PROGRESS_INTERVAL


@dataclass
class RunState:
    """Counters and clocks for one run; owned by the pipeline, not shared."""
    start_time: float
    chunk_time: float
    records_read: int = 0
    records_written: int = 0
    duplicates_skipped: int = 0
    exhausted_streams: List[str] = field(default_factory=list)


class RunSummary(NamedTuple):
    records_read: int
    records_written: int
    duplicates_skipped: int
    chunk_paths: List[str]
    elapsed: float
