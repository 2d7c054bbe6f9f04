"""Shared test fixtures for psd tests."""

import gzip

import pytest


def paf_line(qname, qstart, qend, block_len=None, de=0.1, tname="ref", extra_tags=()):
    """Build one PAF line; ``de=None`` leaves the tag out."""
    if block_len is None:
        block_len = qend - qstart
    fields = [
        qname, "1000", str(qstart), str(qend), "+",
        tname, "5000", "100", str(100 + qend - qstart),
        str(block_len), str(block_len), "60",
        "tp:A:P",
    ]
    if de is not None:
        fields.append(f"de:f:{de}")
    fields.extend(extra_tags)
    return "\t".join(fields)


@pytest.fixture
def make_record():
    """Factory for PafRecord objects with sensible defaults."""
    from psd.io import PafRecord

    def _make(qname="qA", qstart=0, qend=10, block_len=None, de=0.1):
        if block_len is None:
            block_len = qend - qstart
        return PafRecord(
            query_name=qname,
            query_start=qstart,
            query_end=qend,
            alignment_block_len=block_len,
            de=de,
        )

    return _make


@pytest.fixture
def write_paf(tmp_path):
    """Write PAF lines to a file under tmp_path and return its path."""

    def _write(lines, name="aln.paf"):
        p = tmp_path / name
        text = "".join(line + "\n" for line in lines)
        if name.endswith(".gz"):
            with gzip.open(p, "wt") as f:
                f.write(text)
        else:
            p.write_text(text)
        return p

    return _write


@pytest.fixture
def adjacent_paf(write_paf):
    """Three abutting, non-overlapping alignments on one query."""
    return write_paf([
        paf_line("qA", 0, 10, de=0.1),
        paf_line("qA", 10, 20, de=0.2),
        paf_line("qA", 20, 30, de=0.3),
    ])


@pytest.fixture
def overlapping_paf(write_paf):
    """Two alignments on one query that overlap by five bases."""
    return write_paf([
        paf_line("qA", 0, 10, de=0.1),
        paf_line("qA", 5, 15, de=0.2),
    ])


@pytest.fixture
def weighted_paf(write_paf):
    """Two alignments whose weighted divergence is 0.25."""
    return write_paf([
        paf_line("qA", 0, 10, block_len=10, de=0.1),
        paf_line("qB", 0, 30, block_len=30, de=0.3),
    ])
