"""
Spreadsheet backend built on pandas.

CSV goes through ``read_csv``; xls / xlsx / ods through ``read_excel``
(engines xlrd / openpyxl / odf). Options the backend does not know are
passed to pandas untouched.
"""

import csv
import io
from pathlib import Path

import pandas as pd

from config.logger import logger
from config.settings import TEXT_ENCODINGS
from sheetreader.errors import BackendError, SpreadsheetReadError
from sheetreader.json_utils import to_python
from sheetreader.table import Sheet, Table
from sheetreader.textio import is_stream, read_text

EXCEL_ENGINES = {
    "xls": "xlrd",
    "xlsx": "openpyxl",
    "ods": "odf",
}

# Options consumed here rather than handed to pandas
_OWN_OPTIONS = ("parser", "sep", "separator", "clip", "strip", "quote", "encoding")


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def clip_rows(rows):
    """Drop trailing empty rows and trailing empty columns."""
    rows = [list(r) for r in rows]
    while rows and all(_is_blank(v) for v in rows[-1]):
        rows.pop()
    width = 0
    for r in rows:
        for i in range(len(r), 0, -1):
            if not _is_blank(r[i - 1]):
                width = max(width, i)
                break
    return [r[:width] for r in rows]


def strip_rows(rows, mode: int):
    """1 strips leading, 2 trailing, 3 both sides of string cells."""
    if not mode:
        return rows

    def strip(value):
        if not isinstance(value, str):
            return value
        if mode & 1:
            value = value.lstrip()
        if mode & 2:
            value = value.rstrip()
        return value

    return [[strip(v) for v in r] for r in rows]


def dataframe_rows(df: pd.DataFrame):
    return [[to_python(v) for v in row] for row in df.itertuples(index=False, name=None)]


class PandasSpreadsheetReader:

    def read(self, source, options):
        options = dict(options or {})
        parser = (options.get("parser") or "").lower()
        extra = {k: v for k, v in options.items() if k not in _OWN_OPTIONS}

        try:
            if parser == "csv":
                sheets = self._read_csv(source, options, extra)
            elif parser in EXCEL_ENGINES:
                sheets = self._read_excel(source, parser, extra)
            else:
                raise BackendError(f"Unsupported parser {parser!r} for {source}")
        except SpreadsheetReadError:
            raise
        except Exception as e:
            raise BackendError(f"Cannot parse {source} as {parser}: {e}") from e

        clip = options.get("clip")
        strip = int(options.get("strip") or 0)
        for sheet in sheets:
            rows = sheet.rows
            if strip:
                rows = strip_rows(rows, strip)
            if clip:
                rows = clip_rows(rows)
            sheet.rows[:] = rows

        logger.info(
            f"Parsed {source} as {parser}: "
            + ", ".join(f"{s.label} ({s.maxrow}x{s.maxcol})" for s in sheets)
        )
        return Table(sheets, parser=parser)

    @staticmethod
    def _label(source, default="sheet1"):
        if is_stream(source):
            name = getattr(source, "name", None)
            return Path(name).name if isinstance(name, str) else default
        return Path(source).name

    def _read_csv(self, source, options, extra):
        sep = options.get("sep", options.get("separator"))
        encoding = options.get("encoding")
        quote = options.get("quote") or '"'
        label = self._label(source)

        text = read_text(source, (encoding,) if encoding else TEXT_ENCODINGS)

        if sep is None:
            # No separator: every line is one cell
            lines = [line for line in text.splitlines() if line.strip()]
            return [Sheet(label, [[line] for line in lines])]

        kwargs = {
            "sep": sep,
            "header": None,
            "dtype": str,
            "keep_default_na": False,
            "quotechar": quote,
        }

        # Rows may be ragged: name every column up front so pandas pads
        # short rows instead of rejecting long ones.
        width = self._field_count(text, sep, quote)
        if width:
            kwargs["names"] = list(range(width))

        kwargs.update(extra)

        try:
            df = pd.read_csv(io.StringIO(text), **kwargs)
        except pd.errors.EmptyDataError:
            return [Sheet(label, [])]

        return [Sheet(label, dataframe_rows(df))]

    @staticmethod
    def _field_count(text, sep, quote):
        """Widest row in ``text``; None when ``sep`` is not a single character."""
        if len(sep) != 1:
            return None
        reader = csv.reader(io.StringIO(text), delimiter=sep, quotechar=quote)
        return max((len(row) for row in reader), default=0)

    def _read_excel(self, source, parser, extra):
        kwargs = {"sheet_name": None, "header": None, "engine": EXCEL_ENGINES[parser]}
        kwargs.update(extra)
        frames = pd.read_excel(source, **kwargs)

        if isinstance(frames, pd.DataFrame):
            # a single sheet_name was passed through
            name = kwargs.get("sheet_name")
            frames = {str(name) if name is not None else "sheet1": frames}

        return [Sheet(str(name), dataframe_rows(df)) for name, df in frames.items()]
