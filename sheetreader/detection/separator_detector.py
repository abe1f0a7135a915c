"""
Separator (delimiter) detection by frequency analysis.

A candidate survives only when it occurs, outside double quotes, in every
sampled line. Survivors are ranked by how consistent their per-line count
is; ties keep candidate order, so the standard candidates outrank the
``include`` extras (a space is only chosen when nothing else splits every
line).
"""

from collections import Counter
from typing import Iterable, List

from config.logger import logger
from config.settings import SEPARATOR_CANDIDATES, SEPARATOR_SAMPLE_LINES
from sheetreader.textio import read_lines


def count_unquoted(line: str, delimiter: str) -> int:
    """Count occurrences of ``delimiter`` outside double-quoted fields."""
    count = 0
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            count += 1
    return count


def rank_separators(lines: Iterable[str], candidates: Iterable[str]) -> List[str]:
    sample = [line for line in lines if line.strip()]
    if not sample:
        return []

    scored = []
    for order, delim in enumerate(dict.fromkeys(candidates)):
        counts = [count_unquoted(line, delim) for line in sample]
        if min(counts) == 0:
            continue

        # Consistency: ratio of lines matching the most common count
        most_common = Counter(counts).most_common(1)[0][1]
        consistency = most_common / len(counts)
        scored.append((-consistency, order, delim))

        logger.debug(f"Separator candidate {delim!r}: counts={counts[:10]} consistency={consistency:.2f}")

    return [delim for _, _, delim in sorted(scored)]


class FrequencySeparatorDetector:

    def __init__(self, candidates=SEPARATOR_CANDIDATES, sample_lines=SEPARATOR_SAMPLE_LINES):
        self.candidates = tuple(candidates)
        self.sample_lines = sample_lines

    def detect(self, path, include: Iterable[str] = (" ",)) -> List[str]:
        """Return likely separators for ``path``, best first (maybe empty)."""
        lines = [line for line in read_lines(path) if line.strip()][:self.sample_lines]
        return rank_separators(lines, self.candidates + tuple(include))
