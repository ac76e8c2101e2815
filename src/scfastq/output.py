import logging
import sys
from typing import List, Optional, TextIO

from .constants import CHUNK_SUFFIX
from .errors import FileAccessError


class ChunkedWriter:
    """Writes formatted records to stdout, one file, or a series of chunk files.

    With chunk_size > 0 the output rotates after every chunk_size records to
    <prefix>_<n>.fastq, n counting from 0. A chunk file is only created when
    its first record arrives, so no empty trailing chunk is left behind.
    Only one sink is open at any time. The prefix and chunk size are taken
    as already checked by RunConfig.
    """

    def __init__(self, output_prefix: Optional[str] = None, chunk_size: int = 0,
                 stdout: Optional[TextIO] = None):
        self.output_prefix = output_prefix
        self.chunk_size = chunk_size
        self.records_written = 0
        self.chunk_paths: List[str] = []
        self._stdout = stdout if stdout is not None else sys.stdout
        self._sink: Optional[TextIO] = None
        self._sink_path: Optional[str] = None

    def __enter__(self):
        if self.chunk_size == 0:
            if self.output_prefix:
                self._open(self.output_prefix)
            else:
                self._sink = self._stdout
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def is_chunked(self) -> bool:
        return self.chunk_size > 0

    def chunk_path(self, chunk_index: int) -> str:
        return f"{self.output_prefix}_{chunk_index}{CHUNK_SUFFIX}"

    def _open(self, path: str):
        try:
            self._sink = open(path, 'w')
        except OSError as e:
            raise FileAccessError(path, e.strerror or str(e)) from e
        self._sink_path = path
        self.chunk_paths.append(path)
        logging.debug(f"Generating: {path}")

    def _close_sink(self):
        sink, path = self._sink, self._sink_path
        if sink is None:
            return
        self._sink = None
        self._sink_path = None
        try:
            if path is None:
                # never close stdout
                sink.flush()
            else:
                sink.close()
        except OSError as e:
            raise FileAccessError(path or "<stdout>", e.strerror or str(e), action="write") from e
        if path is not None:
            logging.debug(f"Generated: {path}")

    def write(self, formatted_record: str):
        """Write one formatted record, rotating after it completes a chunk."""
        if self._sink is None:
            if not self.is_chunked:
                raise RuntimeError("ChunkedWriter used outside its context")
            self._open(self.chunk_path(len(self.chunk_paths)))

        try:
            self._sink.write(formatted_record)
        except OSError as e:
            raise FileAccessError(self._sink_path or "<stdout>", e.strerror or str(e), action="write") from e
        self.records_written += 1

        if self.is_chunked and self.records_written % self.chunk_size == 0:
            self._close_sink()

    def close(self):
        self._close_sink()
