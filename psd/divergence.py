"""Per-sequence divergence – overlap filtering and weighted aggregation."""

from __future__ import annotations

from typing import Generator, Iterable, List, Sequence, Tuple

import numpy as np

from psd.exceptions import MissingDivergenceField
from psd.io import PafRecord
from psd.log import get_logger

logger = get_logger(__name__)

# (query_name, query_start, query_end, de)
DivergenceRow = Tuple[str, int, int, float]


def sort_records(records: Iterable[PafRecord]) -> List[PafRecord]:
    """Return *records* ordered by query name, then query start.

    The sort is stable, so records sharing both keys keep their input order.
    """
    return sorted(records, key=lambda r: (r.query_name, r.query_start))


def overlaps(left: PafRecord, right: PafRecord) -> bool:
    """True if *left* runs into *right* on the same query."""
    return left.query_name == right.query_name and left.query_end > right.query_start


def filter_overlaps(records: Iterable[PafRecord]) -> Generator[PafRecord, None, None]:
    """Yield records that do not overlap their successor in sorted order.

    Records are sorted with :func:`sort_records` and scanned as adjacent
    pairs ``(records[i], records[i + 1])``. The left member is yielded
    unless it overlaps the right one. Each overlap drops exactly one
    record; the scan does not restart on the survivors. The last sorted
    record has no successor and is never yielded.
    """
    ordered = sort_records(records)
    dropped = 0
    for left, right in zip(ordered, ordered[1:]):
        if overlaps(left, right):
            dropped += 1
            logger.debug(
                "Skipping %s:%d-%d, overlaps %s:%d-%d",
                left.query_name, left.query_start, left.query_end,
                right.query_name, right.query_start, right.query_end,
            )
            continue
        yield left
    logger.info(
        "Overlap filter: %d sorted records, %d dropped as overlapping", len(ordered), dropped
    )


def _require_de(record: PafRecord) -> float:
    if record.de is None:
        raise MissingDivergenceField(record)
    return record.de


def weighted_divergence(records: Sequence[PafRecord]) -> float:
    """Alignment-length weighted mean of the ``de`` values of *records*.

    Computes ``sum(len_i * de_i) / sum(len_i)`` over all records in input
    order. Returns ``nan`` when the total length is zero, including the
    empty input. Every record must carry ``de``; the first one that does
    not raises :class:`MissingDivergenceField` before anything is returned.
    """
    de = np.fromiter((_require_de(r) for r in records), dtype=np.float64, count=len(records))
    lengths = np.fromiter(
        (r.alignment_block_len for r in records), dtype=np.float64, count=len(records)
    )

    sum_aln_len_de = float(np.dot(lengths, de))
    sum_aln_len = float(lengths.sum())
    logger.info("Aggregated %d records over %d aligned bases", len(records), int(sum_aln_len))

    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(sum_aln_len_de) / np.float64(sum_aln_len))


def individual_divergence(
    records: Iterable[PafRecord],
) -> Generator[DivergenceRow, None, None]:
    """Yield ``(query_name, query_start, query_end, de)`` per admissible record.

    Admissible records come from :func:`filter_overlaps`, so rows are in
    ``(query_name, query_start)`` order and the last sorted record is never
    reported. Rows are produced lazily: a record without ``de`` raises
    :class:`MissingDivergenceField` after the rows before it were yielded.
    """
    for record in filter_overlaps(records):
        yield record.query_name, record.query_start, record.query_end, _require_de(record)
