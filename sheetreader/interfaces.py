"""
Collaborator contracts the loader depends on.

The loader only talks to these protocols, so the pandas backend, the CSV
writer, the MIME inspector and the separator detector can all be swapped
for fakes.
"""

from typing import Any, Dict, Iterable, List, Protocol, runtime_checkable


@runtime_checkable
class SheetLike(Protocol):
    label: str

    @property
    def rows(self) -> List[List[Any]]: ...

    @property
    def maxrow(self) -> int: ...

    @property
    def maxcol(self) -> int: ...

    def row(self, number: int) -> List[Any]: ...

    def cell(self, col: int, row: int) -> Any: ...


@runtime_checkable
class TableLike(Protocol):
    @property
    def sheets(self) -> List[SheetLike]: ...

    @property
    def sheet_count(self) -> int: ...

    def sheet(self, key) -> SheetLike: ...


class SpreadsheetReader(Protocol):
    def read(self, source, options: Dict[str, Any]) -> TableLike: ...


class RowWriter(Protocol):
    def add_row(self, fields: Iterable[Any]) -> None: ...

    def close(self) -> None: ...


class SpreadsheetWriter(Protocol):
    def create(self, path, format: str = "csv", encoding: str = "utf-8") -> RowWriter: ...


class MimeInspector(Protocol):
    def mimetype(self, path) -> str: ...


class SeparatorDetector(Protocol):
    def detect(self, path, include: Iterable[str] = (" ",)) -> List[str]: ...


class IdFactory(Protocol):
    def __call__(self) -> str: ...


__all__ = [
    "SheetLike",
    "TableLike",
    "SpreadsheetReader",
    "RowWriter",
    "SpreadsheetWriter",
    "MimeInspector",
    "SeparatorDetector",
    "IdFactory",
]
