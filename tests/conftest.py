"""
Shared pytest fixtures for scfastq tests.
"""

import gzip
import tempfile
from pathlib import Path

import pytest

from scfastq.models import Record


BARCODE = "AAAAAAAAAAAAAAAA"
UMI = "GGGGGGGGGGGG"


def fastq_text(records):
    """Render (name, comment, sequence, quality) tuples as FASTQ text."""
    lines = []
    for name, comment, seq, qual in records:
        title = f"{name} {comment}" if comment else name
        lines.append(f"@{title}\n{seq}\n+\n{qual}\n")
    return "".join(lines)


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after the test."""
    with tempfile.TemporaryDirectory(prefix="scfastq_test_") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_fastq(temp_dir):
    """Write records to a gzipped FASTQ file in temp_dir and return its path as str."""
    def _write(filename, records, compress=True):
        path = temp_dir / filename
        text = fastq_text(records)
        if compress:
            with gzip.open(path, "wt") as f:
                f.write(text)
        else:
            path.write_text(text)
        return str(path)
    return _write


@pytest.fixture
def read_records():
    """Parse a plain FASTQ output file into a list of 4-line tuples."""
    def _read(path):
        lines = Path(path).read_text().splitlines()
        assert len(lines) % 4 == 0, f"{path} does not hold whole records"
        return [tuple(lines[i:i + 4]) for i in range(0, len(lines), 4)]
    return _read


@pytest.fixture
def three_file_inputs(write_fastq):
    """Index, barcode and read files for four aligned reads, the third a duplicate of the first."""
    index = [
        (f"read{i}", "1:N:0:1", seq, "FFFF:FFF")
        for i, seq in enumerate(["ACGTACGT", "TTGCAAGC", "GGATCCAA", "CATGCATG"], start=1)
    ]
    barcodes = [
        ("read1", "1:N:0:1", BARCODE + UMI, "A" * 16 + "B" * 12),
        ("read2", "1:N:0:1", "C" * 16 + "T" * 12, "C" * 28),
        ("read3", "1:N:0:1", BARCODE + UMI, "D" * 28),
        ("read4", "1:N:0:1", BARCODE + "TTTTTTTTTTTT", "E" * 28),
    ]
    reads = [
        (f"read{i}", "2:N:0:1", "ACGTACGTAC"[:5 + i], "IIIIIIIIII"[:5 + i])
        for i in range(1, 5)
    ]
    return (write_fastq("I1.fastq.gz", index),
            write_fastq("R1.fastq.gz", barcodes),
            write_fastq("R2.fastq.gz", reads))


@pytest.fixture
def primary_record():
    return Record("read1", "2:N:0:1", "ACGT", "IIII")


# Markers for test organization
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
