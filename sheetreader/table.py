"""
Uniform result of a load.

Row, column and cell accessors are 1-based, the way spreadsheet users
number them; ``Sheet.rows`` and ``Table.sheets`` are plain 0-based lists.
"""

from typing import Any, List, Optional

from sheetreader.normalize import normalize_table

NATIVE = "native"
FIXED_WIDTH = "fixed_width"


class Sheet:

    def __init__(self, label: str, rows: Optional[List[List[Any]]] = None):
        self.label = label
        self._rows = [list(r) for r in (rows or [])]

    def __repr__(self):
        return f"Sheet(label={self.label!r}, maxrow={self.maxrow}, maxcol={self.maxcol})"

    def __eq__(self, other):
        if not isinstance(other, Sheet):
            return NotImplemented
        return self.label == other.label and self._rows == other._rows

    @property
    def rows(self) -> List[List[Any]]:
        return self._rows

    @property
    def maxrow(self) -> int:
        return len(self._rows)

    @property
    def maxcol(self) -> int:
        return max((len(r) for r in self._rows), default=0)

    def row(self, number: int) -> List[Any]:
        """Row ``number`` (1-based), padded to ``maxcol``."""
        if number < 1 or number > self.maxrow:
            return []
        r = self._rows[number - 1]
        return r + [None] * (self.maxcol - len(r))

    def column(self, number: int) -> List[Any]:
        return [self.cell(number, r) for r in range(1, self.maxrow + 1)]

    def cell(self, col: int, row: int) -> Any:
        if row < 1 or col < 1 or row > self.maxrow:
            return None
        r = self._rows[row - 1]
        return r[col - 1] if col <= len(r) else None

    def to_records(self) -> dict:
        """First row as header, the rest as records (see ``normalize_table``)."""
        if not self._rows:
            return {"columns": [], "rows": [], "field_types": {}}
        table = normalize_table(self._rows[0], self._rows[1:])
        table["section"] = self.label
        return table


class Table:
    """
    A collection of sheets plus where they came from.

    ``origin`` is ``"fixed_width"`` when the source was converted from
    fixed-width text and ``"native"`` otherwise; nothing else differs.
    """

    def __init__(self, sheets=None, parser=None, origin=NATIVE, source=None,
                 separator=None, warnings=None):
        self._sheets = list(sheets or [])
        self.parser = parser
        self.origin = origin
        self.source = source
        self.separator = separator
        self.warnings = list(warnings or [])

    @classmethod
    def wrap(cls, result, **tags):
        """Build a Table from any ``TableLike`` backend result."""
        sheets = [
            s if isinstance(s, Sheet) else Sheet(s.label, s.rows)
            for s in result.sheets
        ]
        return cls(sheets, **tags)

    def __repr__(self):
        return (
            f"Table(parser={self.parser!r}, origin={self.origin!r}, "
            f"sheets={self.sheet_names!r})"
        )

    def __len__(self):
        return len(self._sheets)

    def __iter__(self):
        return iter(self._sheets)

    @property
    def sheets(self) -> List[Sheet]:
        return self._sheets

    @property
    def sheet_count(self) -> int:
        return len(self._sheets)

    @property
    def sheet_names(self) -> List[str]:
        return [s.label for s in self._sheets]

    def sheet(self, key) -> Sheet:
        """Sheet by 1-based index or by label."""
        if isinstance(key, int):
            if key < 1 or key > len(self._sheets):
                raise IndexError(f"No sheet number {key} (have {len(self._sheets)})")
            return self._sheets[key - 1]
        for s in self._sheets:
            if s.label == key:
                return s
        raise KeyError(f"No sheet labelled {key!r}")

    def to_dict(self) -> dict:
        return {
            "parser": self.parser,
            "origin": self.origin,
            "source": str(self.source) if self.source is not None else None,
            "warnings": list(self.warnings),
            "tables": [s.to_records() for s in self._sheets],
        }
