"""
Fixed-width column inference.

An offset is a gap when it is blank (whitespace or past the end of the
line) in at least ``threshold`` of the non-blank sample lines. Runs of
non-gap offsets are the fields. Each field is cut from its own start up to
the start of the next field and then trimmed, so every character of a line
lands in exactly one field.

    >>> rule = build_rule(["ID   NAME   AGE", "1    Alice  30"])
    >>> apply("2    Bob    25", rule)
    ['2', 'Bob', '25']
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from config.settings import FIXED_WIDTH_GAP_THRESHOLD

TAB_SIZE = 8


@dataclass(frozen=True)
class ColumnRule:
    spans: Tuple[Tuple[int, Optional[int]], ...] = ((0, None),)

    @property
    def width(self) -> int:
        return len(self.spans)


def clean_line(line: str) -> str:
    return line.rstrip("\r\n").expandtabs(TAB_SIZE)


def build_rule(sample_lines: Sequence[str], threshold: float = FIXED_WIDTH_GAP_THRESHOLD) -> ColumnRule:
    if not 0 < threshold <= 1:
        raise ValueError(f"threshold must be in (0, 1], got {threshold}")

    lines = [clean_line(line) for line in sample_lines]
    lines = [line for line in lines if line.strip()]
    if not lines:
        return ColumnRule()

    length = max(len(line) for line in lines)
    blank_counts = [0] * length
    for line in lines:
        for offset in range(length):
            if offset >= len(line) or line[offset].isspace():
                blank_counts[offset] += 1

    needed = threshold * len(lines)
    is_gap = [count >= needed for count in blank_counts]

    starts: List[int] = []
    for offset, gap in enumerate(is_gap):
        if not gap and (offset == 0 or is_gap[offset - 1]):
            starts.append(offset)

    if len(starts) < 2:
        return ColumnRule()

    starts[0] = 0
    spans = tuple(zip(starts, starts[1:] + [None]))
    return ColumnRule(spans)


def apply(line: str, rule: ColumnRule) -> List[str]:
    line = clean_line(line)
    return [line[start:end].strip() for start, end in rule.spans]
