#!/usr/bin/env python3

"""
scfastq: Annotate FASTQ reads with cell barcode, UMI and sample index fields.

Takes the read stream of a single-cell run, optionally with its barcode+UMI
stream and sample index stream, and writes one FASTQ whose identifiers carry
the extracted fields for downstream single-cell tools.
"""

import argparse
import logging
import sys

from . import __version__
from .constants import DEFAULT_BARCODE_LENGTH, DEFAULT_EXPERIMENT_TAG, Chemistry
from .errors import ConfigError, ReformatError
from .models import ExtractionConfig, RunConfig
from .pipeline import reformat


def version():
    # 0.1 - single pipeline for one, two and three file inputs
    return f"scfastq version {__version__}"


def parse_args(argv):
    parser = argparse.ArgumentParser(
        description="scfastq: Annotate single-cell FASTQ reads with cell barcode, UMI and sample index fields.",
        epilog="Inputs: I1 R1 R2 (index, barcode+UMI, reads), R1 R2, or R2 alone. "
               "Files may be gzipped or plain text.")

    parser.add_argument("inputs", nargs="+", metavar="FASTQ",
                        help="Input FASTQ files in the order I1 R1 R2, R1 R2, or R2")

    parser.add_argument("-b", "--barcode-length", type=int, default=DEFAULT_BARCODE_LENGTH,
                        help=f"Cell barcode length at the start of R1 (default: {DEFAULT_BARCODE_LENGTH})")
    parser.add_argument("-u", "--umi-length", type=int, default=None,
                        help="UMI length following the cell barcode (default: set by --chemistry)")
    parser.add_argument("--chemistry", choices=[Chemistry.V2, Chemistry.V3], default=Chemistry.V3,
                        help="Barcode chemistry: v2 has a 10 nt UMI, v3 a 12 nt UMI (default: v3)")
    parser.add_argument("-c", "--chunk-size", type=int, default=0,
                        help="Start a new output file every N records, requires -o (default: 0, no chunking)")
    parser.add_argument("-o", "--output", default=None,
                        help="Output file, or prefix for chunk files <OUTPUT>_<n>.fastq (default: stdout)")
    parser.add_argument("-e", "--experiment", default=None,
                        help=f"Experiment tag for cell identifiers (default: output name, or {DEFAULT_EXPERIMENT_TAG})")
    parser.add_argument("-n", "--no-dedup", action="store_true",
                        help="Keep every read instead of only the first per barcode+UMI")
    parser.add_argument("--strict-alignment", action="store_true",
                        help="Fail if the I1/R1 streams hold a different number of records than R2")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("-d", "--debug", action="store_true",
                        help="Enable debug logging, including timing reports")
    parser.add_argument("-v", "--version", action="version", version=version())

    return parser.parse_args(argv[1:])


def build_run_config(args: argparse.Namespace) -> RunConfig:
    """Turn parsed options into a validated RunConfig; raises ConfigError."""
    umi_length = args.umi_length
    if umi_length is None:
        umi_length = Chemistry.umi_length(args.chemistry)

    experiment_tag = args.experiment
    if experiment_tag is None:
        experiment_tag = args.output if args.output else DEFAULT_EXPERIMENT_TAG

    return RunConfig(
        inputs=tuple(args.inputs),
        output_prefix=args.output,
        experiment_tag=experiment_tag,
        chunk_size=args.chunk_size,
        dedup=not args.no_dedup,
        debug=args.debug,
        extraction=ExtractionConfig(barcode_length=args.barcode_length, umi_length=umi_length),
        strict_alignment=args.strict_alignment,
        progress=args.progress,
    )


def main(argv):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        config = build_run_config(args)
        summary = reformat(config)
    except ConfigError as e:
        logging.error(f"Configuration error: {e}")
        sys.exit(1)
    except ReformatError as e:
        logging.error(str(e))
        sys.exit(1)

    message = f"Processed {summary.records_read:,} reads, wrote {summary.records_written:,} records"
    if summary.duplicates_skipped:
        message += f", skipped {summary.duplicates_skipped:,} duplicates"
    if summary.chunk_paths and config.chunk_size > 0:
        message += f" in {len(summary.chunk_paths)} chunk files"
    logging.info(message)
    logging.info(f"Elapsed time: {summary.elapsed:.2f} seconds")


def console_main():
    main(sys.argv)


if __name__ == "__main__":
    main(sys.argv)
