"""PAF I/O – record parsing (plain and gzipped) and row output."""

from __future__ import annotations

import gzip
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Generator, Iterable, Optional, Sequence, TextIO, Union

from psd.exceptions import FileAccessError, MalformedRecordError
from psd.log import get_logger

logger = get_logger(__name__)

# Mandatory PAF columns
PAF_MIN_COLUMNS = 12

_INT_COLUMNS = {
    1: "query length",
    2: "query start",
    3: "query end",
    6: "target length",
    7: "target start",
    8: "target end",
    9: "number of residue matches",
    10: "alignment block length",
    11: "mapping quality",
}


@dataclass(frozen=True)
class PafRecord:
    """One PAF alignment line.

    Query coordinates are 0-based, half-open ``[query_start, query_end)``.
    ``de`` is the gap-compressed divergence tag, ``None`` when absent.
    """

    query_name: str
    query_start: int
    query_end: int
    alignment_block_len: int
    de: Optional[float] = None
    query_len: int = 0
    strand: str = "+"
    target_name: str = ""
    target_len: int = 0
    target_start: int = 0
    target_end: int = 0
    n_matches: int = 0
    mapq: int = 255
    tags: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)


def parse_paf_line(
    line: str,
    line_number: int = 0,
    path: Optional[Union[str, Path]] = None,
) -> PafRecord:
    """Parse a single tab-separated PAF line into a :class:`PafRecord`.

    Optional ``TAG:TYPE:VALUE`` fields after column 12 are kept in
    ``tags``; the ``de`` tag is lifted into its own float field.
    """

    def malformed(message: str) -> MalformedRecordError:
        return MalformedRecordError(message, line_number, path)

    parts = line.rstrip("\n").rstrip("\r").split("\t")
    if len(parts) < PAF_MIN_COLUMNS:
        raise malformed(
            f"expected at least {PAF_MIN_COLUMNS} columns, found {len(parts)}"
        )

    ints: Dict[int, int] = {}
    for col, label in _INT_COLUMNS.items():
        try:
            ints[col] = int(parts[col])
        except ValueError:
            raise malformed(f"{label} is not an integer: {parts[col]!r}") from None
        if ints[col] < 0:
            raise malformed(f"{label} is negative: {parts[col]!r}")

    de: Optional[float] = None
    tags: Dict[str, str] = {}
    for raw in parts[PAF_MIN_COLUMNS:]:
        key, sep, rest = raw.partition(":")
        if not sep or ":" not in rest:
            raise malformed(f"malformed optional field: {raw!r}")
        _type, _, value = rest.partition(":")
        if key == "de":
            try:
                de = float(value)
            except ValueError:
                raise malformed(f"de tag is not a number: {value!r}") from None
        else:
            tags[key] = value

    return PafRecord(
        query_name=parts[0],
        query_start=ints[2],
        query_end=ints[3],
        alignment_block_len=ints[10],
        de=de,
        query_len=ints[1],
        strand=parts[4],
        target_name=parts[5],
        target_len=ints[6],
        target_start=ints[7],
        target_end=ints[8],
        n_matches=ints[9],
        mapq=ints[11],
        tags=tags,
    )


def read_paf(filepath: Union[str, Path]) -> Generator[PafRecord, None, None]:
    """Yield :class:`PafRecord` objects from a PAF file.

    Supports plain-text and gzip-compressed files (.gz). Blank lines are
    skipped. Lines are decoded one at a time so that a line that is not
    UTF-8 is reported with its own line number.
    """
    filepath = Path(filepath)
    opener = gzip.open if filepath.suffix == ".gz" else open
    mode = "rb"

    n = 0
    try:
        with opener(filepath, mode) as fh:  # type: ignore[arg-type]
            for line_number, raw in enumerate(fh, start=1):
                try:
                    line = raw.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise MalformedRecordError(
                        f"line is not valid UTF-8 ({e.reason} at byte {e.start})",
                        line_number,
                        filepath,
                    ) from None
                if not line.strip():
                    continue
                yield parse_paf_line(line, line_number, filepath)
                n += 1
    except (OSError, EOFError, zlib.error) as e:
        reason = getattr(e, "strerror", None) or e
        raise FileAccessError(f"Cannot read {filepath}: {reason}", filepath) from e
    logger.debug("Read %d records from %s", n, filepath)


def write_rows(rows: Iterable[Sequence[object]], fh: TextIO) -> int:
    """Write rows as tab-separated lines, flushing each one.

    Returns the number of rows written.
    """
    n = 0
    for row in rows:
        fh.write("\t".join(str(v) for v in row) + "\n")
        fh.flush()
        n += 1
    return n
