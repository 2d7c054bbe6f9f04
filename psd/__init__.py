"""
psd: per-sequence divergence from PAF alignments.

Reads the gap-compressed divergence (``de`` tag) of each alignment in a PAF
file and reports either the alignment-length weighted mean over all records,
or one value per non-overlapping query interval.
"""

__version__ = "0.1.0"

from psd.io import read_paf, parse_paf_line, PafRecord
from psd.divergence import (
    sort_records,
    filter_overlaps,
    weighted_divergence,
    individual_divergence,
)
from psd.exceptions import (
    PsdError,
    ArgumentError,
    FileAccessError,
    MalformedRecordError,
    MissingDivergenceField,
)

__all__ = [
    "PafRecord",
    "read_paf",
    "parse_paf_line",
    "sort_records",
    "filter_overlaps",
    "weighted_divergence",
    "individual_divergence",
    "PsdError",
    "ArgumentError",
    "FileAccessError",
    "MalformedRecordError",
    "MissingDivergenceField",
]
