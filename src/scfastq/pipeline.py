"""
Lockstep multiplexing of index, barcode and read streams into one annotated FASTQ.

The primary (read) stream drives the run: every step takes one record from it
and one from each companion stream, and the run ends when the primary stream
is exhausted. Companion streams are assumed to be record-aligned with the
primary stream; nothing realigns them.
"""

import logging
import timeit
from contextlib import ExitStack
from typing import Dict, Optional, TextIO

from tqdm import tqdm

from .dedup import make_filter
from .errors import StreamAlignmentError
from .extract import extract_fields
from .header import compose_header, format_record
from .models import EMPTY_RECORD, Record, RunConfig, RunState, RunSummary
from .output import ChunkedWriter
from .reader import RecordStream, open_record_stream

PROGRESS_UPDATE_INTERVAL = 10000


class CompanionStream:
    """A non-primary stream advanced once per primary record.

    When the underlying file runs out first, the last record read is handed
    out again (an empty record if there never was one), unless strict
    alignment is requested, in which case running out is an error.
    """

    def __init__(self, role: str, stream: RecordStream, state: RunState, strict: bool):
        self.role = role
        self.stream = stream
        self.state = state
        self.strict = strict
        self.last: Record = EMPTY_RECORD
        self.exhausted = False

    def advance(self) -> Record:
        if not self.exhausted:
            record = self.stream.next_record()
            if record is not None:
                self.last = record
                return record
            self.exhausted = True
            self.state.exhausted_streams.append(self.role)
            if self.strict:
                raise StreamAlignmentError(
                    f"{self.role} stream {self.stream.path} ended after {self.stream.records_read:,} "
                    f"records, before the primary stream")
            logging.warning(f"{self.role} stream {self.stream.path} ended after "
                            f"{self.stream.records_read:,} records; repeating its last record")
        return self.last

    def check_drained(self):
        """In strict mode, fail if records remain once the primary stream has ended."""
        if self.strict and not self.exhausted and self.stream.next_record() is not None:
            raise StreamAlignmentError(
                f"{self.role} stream {self.stream.path} has more records than the primary stream")


def report_progress(state: RunState):
    now = timeit.default_timer()
    logging.debug(f"Reads: {state.records_written}, Chunk Time: {now - state.chunk_time:f}, "
                  f"Total Time: {now - state.start_time:f}")
    state.chunk_time = now


def log_configuration(config: RunConfig):
    for role, path in zip(config.layout.roles(), config.inputs):
        logging.debug(f"{role.capitalize()} input: {path}")
    logging.debug(f"Layout: {config.layout.to_string()}")
    logging.debug(f"Output: {config.output_prefix or '<stdout>'}")
    logging.debug(f"Experiment: {config.experiment_tag}")
    logging.debug(f"Chunk size: {config.chunk_size}")
    logging.debug(f"Barcode length: {config.extraction.barcode_length}, "
                  f"UMI length: {config.extraction.umi_length}")
    logging.debug(f"Dedup mode: {'ON' if config.dedup else 'OFF'}")


def reformat(config: RunConfig, stdout: Optional[TextIO] = None) -> RunSummary:
    """Run the whole reformatting pass described by config.

    All inputs are opened before the first record is read and every handle,
    input or output, is closed on the way out whether the run succeeds or not.
    """
    log_configuration(config)

    layout = config.layout
    start = timeit.default_timer()
    state = RunState(start_time=start, chunk_time=start)

    # dedup needs a barcode+UMI key, so it only applies with a barcode stream
    key_filter = make_filter(config.dedup and layout.has_barcodes())

    with ExitStack() as stack:
        streams: Dict[str, RecordStream] = {}
        for role, path in zip(layout.roles(), config.inputs):
            streams[role] = stack.enter_context(open_record_stream(path))

        writer = stack.enter_context(
            ChunkedWriter(config.output_prefix, config.chunk_size, stdout=stdout))

        primary = streams["primary"]
        barcode_stream = None
        index_stream = None
        if layout.has_barcodes():
            barcode_stream = CompanionStream("barcode", streams["barcode"], state,
                                             config.strict_alignment)
        if layout.has_index():
            index_stream = CompanionStream("index", streams["index"], state,
                                           config.strict_alignment)

        pbar = stack.enter_context(
            tqdm(desc="Reformatting reads", unit="read", disable=not config.progress))

        for read in primary:
            state.records_read += 1
            if state.records_read % PROGRESS_UPDATE_INTERVAL == 0:
                pbar.update(PROGRESS_UPDATE_INTERVAL)

            index = index_stream.advance() if index_stream else None
            fields = None
            if barcode_stream:
                barcode = barcode_stream.advance()
                fields = extract_fields(barcode, config.extraction,
                                        source=barcode_stream.stream.path,
                                        record_index=state.records_read)
                if not key_filter.should_keep(fields.key):
                    state.duplicates_skipped += 1
                    continue

            header = compose_header(read, fields, index, config.experiment_tag)
            writer.write(format_record(header, read))
            state.records_written += 1

            if config.debug and state.records_written % config.progress_interval == 0:
                report_progress(state)

        pbar.update(state.records_read % PROGRESS_UPDATE_INTERVAL)

        for companion in (barcode_stream, index_stream):
            if companion:
                companion.check_drained()

    elapsed = timeit.default_timer() - start
    logging.debug(f"Done. Reads: {state.records_written}, Total Time: {elapsed:f}")
    if config.dedup and layout.has_barcodes():
        logging.debug(f"Distinct barcode+UMI keys held: {len(key_filter):,}")

    return RunSummary(
        records_read=state.records_read,
        records_written=state.records_written,
        duplicates_skipped=state.duplicates_skipped,
        chunk_paths=list(writer.chunk_paths),
        elapsed=elapsed,
    )
