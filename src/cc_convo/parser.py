"""JSONL session file parser."""

import logging
from dataclasses import dataclass
from pathlib import Path

from cc_convo.decoder import decode_line
from cc_convo.models import NormalizedEvent
from cc_convo.normalizer import normalize
from cc_convo.records import SummaryRecord

logger = logging.getLogger(__name__)


@dataclass
class ParseStats:
    """Line counts for one parsed file."""

    total_lines: int = 0  # non-blank lines
    decoded: int = 0
    summaries: int = 0

    @property
    def skipped(self) -> int:
        return self.total_lines - self.decoded

    @property
    def events(self) -> int:
        return self.decoded - self.summaries


def parse_file(path: Path) -> list[NormalizedEvent]:
    """Parse a session file into timeline events, in file order.

    Unparseable lines are dropped. Raises OSError only if the file
    cannot be opened or read.
    """
    events, _ = parse_file_with_stats(path)
    return events


def parse_file_with_stats(path: Path) -> tuple[list[NormalizedEvent], ParseStats]:
    """Like parse_file, also reporting how many lines were kept."""
    events: list[NormalizedEvent] = []
    stats = ParseStats()

    # Binary mode so that invalid UTF-8 only costs the offending line
    with open(path, "rb") as f:
        for line_num, line in enumerate(f, 1):
            if not line.strip():
                continue
            stats.total_lines += 1

            record = decode_line(line)
            if record is None:
                logger.debug("%s:%d: skipping unparseable line", path, line_num)
                continue
            stats.decoded += 1

            if isinstance(record, SummaryRecord):
                stats.summaries += 1
                continue

            event = normalize(record)
            if event is not None:
                events.append(event)

    logger.debug(
        "%s: %d events from %d lines (%d skipped)",
        path,
        len(events),
        stats.total_lines,
        stats.skipped,
    )
    return events, stats
