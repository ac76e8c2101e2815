"""
Unit tests for chunked output.
"""

import io
import math
import os

import pytest

from scfastq.errors import FileAccessError
from scfastq.output import ChunkedWriter


def record_text(i):
    return f"@read{i}\nACGT\n+\nIIII\n"


class TestChunkedWriter:

    @pytest.mark.unit
    def test_stdout_sink(self):
        stdout = io.StringIO()
        with ChunkedWriter(stdout=stdout) as writer:
            writer.write(record_text(1))
            writer.write(record_text(2))
        assert stdout.getvalue() == record_text(1) + record_text(2)
        assert writer.chunk_paths == []
        assert not stdout.closed

    @pytest.mark.unit
    def test_single_named_file(self, temp_dir):
        path = temp_dir / "out.fastq"
        with ChunkedWriter(str(path)) as writer:
            writer.write(record_text(1))
        assert path.read_text() == record_text(1)
        assert writer.chunk_paths == [str(path)]

    @pytest.mark.unit
    def test_single_named_file_created_without_records(self, temp_dir):
        path = temp_dir / "out.fastq"
        with ChunkedWriter(str(path)):
            pass
        assert path.read_text() == ""

    @pytest.mark.unit
    @pytest.mark.parametrize("n,k", [(5, 2), (4, 2), (1, 3), (7, 1), (0, 2)])
    def test_chunk_counts(self, temp_dir, n, k):
        prefix = str(temp_dir / "out")
        with ChunkedWriter(prefix, k) as writer:
            for i in range(n):
                writer.write(record_text(i))

        assert len(writer.chunk_paths) == math.ceil(n / k)
        assert sorted(p.name for p in temp_dir.iterdir()) == \
            sorted(f"out_{i}.fastq" for i in range(math.ceil(n / k)))

        sizes = [len((temp_dir / f"out_{i}.fastq").read_text().splitlines()) // 4
                 for i in range(len(writer.chunk_paths))]
        if n:
            assert all(s == k for s in sizes[:-1])
            assert sizes[-1] == (n % k or k)
        assert writer.records_written == n

    @pytest.mark.unit
    def test_records_stay_in_order_across_chunks(self, temp_dir):
        prefix = str(temp_dir / "out")
        with ChunkedWriter(prefix, 2) as writer:
            for i in range(3):
                writer.write(record_text(i))
        assert (temp_dir / "out_0.fastq").read_text() == record_text(0) + record_text(1)
        assert (temp_dir / "out_1.fastq").read_text() == record_text(2)

    @pytest.mark.unit
    def test_unwritable_output(self, temp_dir):
        path = str(temp_dir / "missing_dir" / "out.fastq")
        with pytest.raises(FileAccessError) as excinfo:
            with ChunkedWriter(path):
                pass
        assert excinfo.value.path == path

    @pytest.mark.unit
    @pytest.mark.skipif(not os.path.exists("/dev/full"), reason="needs /dev/full")
    def test_failed_write_names_output(self):
        with pytest.raises(FileAccessError) as excinfo:
            with ChunkedWriter("/dev/full") as writer:
                for i in range(10):
                    writer.write(record_text(i))
        assert excinfo.value.path == "/dev/full"
        assert "Can't write" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, OSError)

    @pytest.mark.unit
    def test_failed_stdout_flush(self):
        class FullStream(io.StringIO):
            def flush(self):
                raise OSError(28, "No space left on device")

        with pytest.raises(FileAccessError) as excinfo:
            with ChunkedWriter(stdout=FullStream()) as writer:
                writer.write(record_text(1))
        assert excinfo.value.path == "<stdout>"
