"""
Lazy FASTQ record streams over gzip-compressed or plain files.

Parsing is delegated to Biopython's FastqGeneralIterator, which checks the
'@' marker, the '+' separator and that sequence and quality lengths agree.
Any failure it reports becomes a MalformedRecordError; failures of the gzip
container itself become a DecodeError.
"""

import gzip
import logging
import re
import zlib
from typing import Iterator, Optional

from Bio.SeqIO.QualityIO import FastqGeneralIterator

from .constants import GZIP_EXTENSIONS
from .errors import DecodeError, FileAccessError, MalformedRecordError
from .models import Record


def split_title(title: str):
    """Split a FASTQ title line into (name, comment) at the first whitespace character.

    Everything after that one character is the comment, unchanged.
    """
    parts = re.split(r"\s", title, maxsplit=1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


class RecordStream:
    """Forward-only iterator of Records from one FASTQ file.

    Not restartable. Use as a context manager so the handle is released on
    every exit path.
    """

    def __init__(self, path: str):
        self.path = path
        self.records_read = 0
        self.is_gzipped = path.endswith(GZIP_EXTENSIONS)
        try:
            if self.is_gzipped:
                self._handle = gzip.open(path, "rt")
            else:
                self._handle = open(path, "rt")
        except OSError as e:
            raise FileAccessError(path, e.strerror or str(e)) from e
        self._records = FastqGeneralIterator(self._handle)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __iter__(self) -> Iterator[Record]:
        return self

    def __next__(self) -> Record:
        record_index = self.records_read + 1
        try:
            title, sequence, quality = next(self._records)
        except UnicodeDecodeError as e:
            raise DecodeError(self.path, record_index, f"undecodable bytes: {e}") from e
        except ValueError as e:
            raise MalformedRecordError(self.path, record_index, str(e)) from e
        except (EOFError, OSError, zlib.error) as e:
            raise DecodeError(self.path, record_index, f"corrupt or truncated stream: {e}") from e

        self.records_read = record_index
        name, comment = split_title(title)
        return Record(name, comment, sequence, quality)

    def next_record(self) -> Optional[Record]:
        """Return the next Record, or None at end of stream."""
        return next(self, None)

    def close(self):
        if self._handle is not None:
            logging.debug(f"Closing {self.path} after {self.records_read:,} records")
            self._handle.close()
            self._handle = None


def open_record_stream(path: str) -> RecordStream:
    """Open a FASTQ file, gzipped or plain text, as a RecordStream."""
    return RecordStream(path)
