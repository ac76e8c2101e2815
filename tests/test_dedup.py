"""
Unit tests for barcode+UMI deduplication.
"""

import pytest

from scfastq.dedup import DedupFilter, PassthroughFilter, make_filter


class TestDedupFilter:

    @pytest.mark.unit
    def test_first_sighting_kept(self):
        f = DedupFilter()
        assert f.should_keep("AAAA")
        assert "AAAA" in f

    @pytest.mark.unit
    def test_repeats_dropped(self):
        f = DedupFilter()
        results = [f.should_keep(k) for k in ["AAAA", "CCCC", "AAAA", "AAAA", "CCCC", "GGGG"]]
        assert results == [True, True, False, False, False, True]
        assert len(f) == 3

    @pytest.mark.unit
    def test_keys_are_case_sensitive(self):
        f = DedupFilter()
        assert f.should_keep("acgt")
        assert f.should_keep("ACGT")


class TestPassthroughFilter:

    @pytest.mark.unit
    def test_keeps_everything(self):
        f = PassthroughFilter()
        assert all(f.should_keep("AAAA") for _ in range(5))
        assert len(f) == 0


@pytest.mark.unit
def test_make_filter():
    assert isinstance(make_filter(True), DedupFilter)
    assert isinstance(make_filter(False), PassthroughFilter)
