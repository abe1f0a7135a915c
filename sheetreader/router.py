"""
Single entry point for reading spreadsheets and fixed-width text files.

    >>> from sheetreader.router import read_data_simple
    >>> book = read_data_simple("report.txt")
    >>> book.sheet(1).row(2)
    ['1', 'Alice', '30']

Options come as keyword arguments or as key/value pairs after the source
(``read_data_simple(path, "sep", "tab")``). ``sep`` and ``parser`` are
handled here, everything else goes to the backend. A csv source whose
separator is a single space is treated as fixed-width text: it is
converted to a temporary CSV file first and parsed from there.
"""

import re
from pathlib import Path
from typing import Optional

from config.logger import logger
from config.settings import FIXED_WIDTH_GAP_THRESHOLD, TEMP_PREFIX
from sheetreader.backends.pandas_reader import PandasSpreadsheetReader
from sheetreader.detection.format_classifier import FormatClassifier, MimeTypeInspector
from sheetreader.detection.separator_detector import FrequencySeparatorDetector
from sheetreader.errors import (
    BackendError,
    BadOptionCountError,
    InvalidInputError,
    SourceIOError,
    SourceNotFoundError,
    UnknownFormatError,
    WriteError,
)
from sheetreader.extraction.converter import CsvSpreadsheetWriter, FixedWidthConverter
from sheetreader.interfaces import (
    IdFactory,
    MimeInspector,
    SeparatorDetector,
    SpreadsheetReader,
    SpreadsheetWriter,
)
from sheetreader.table import FIXED_WIDTH, NATIVE, Table
from sheetreader.textio import is_stream, read_lines

KNOWN_PARSERS = ("csv", "ods", "xls", "xlsx")

_SPACE_ALIAS = re.compile(r"^(?:white)?spaces?$", re.IGNORECASE)
_TAB_ALIAS = re.compile(r"^tab(?:ulator)?s?$", re.IGNORECASE)


def normalize_separator(sep):
    """Map word aliases (space, whitespace, tab, tabulators, ...) to characters."""
    if not isinstance(sep, str):
        return sep
    if _SPACE_ALIAS.match(sep):
        return " "
    if _TAB_ALIAS.match(sep):
        return "\t"
    return sep


def collect_options(options, kwargs) -> dict:
    if len(options) % 2:
        raise BadOptionCountError(
            f"Invalid number of options: expected key/value pairs, got {len(options)} values"
        )

    params = dict(zip(options[::2], options[1::2]))
    params.update(kwargs)

    if "separator" in params:
        separator = params.pop("separator")
        params.setdefault("sep", separator)

    if "sep" in params:
        params["sep"] = normalize_separator(params["sep"])

    if isinstance(params.get("parser"), str):
        params["parser"] = params["parser"].lower()

    return params


class SimpleReader:
    """
    Detects the shape of a source and dispatches it to the spreadsheet
    backend. Holds no per-load state, so one instance can serve any
    number of loads.
    """

    def __init__(
        self,
        reader: Optional[SpreadsheetReader] = None,
        writer: Optional[SpreadsheetWriter] = None,
        mime_inspector: Optional[MimeInspector] = None,
        separator_detector: Optional[SeparatorDetector] = None,
        id_factory: Optional[IdFactory] = None,
        gap_threshold: float = FIXED_WIDTH_GAP_THRESHOLD,
        temp_prefix: str = TEMP_PREFIX,
        tmp_dir=None,
    ):
        self.reader = reader or PandasSpreadsheetReader()
        self.classifier = FormatClassifier(mime_inspector or MimeTypeInspector())
        self.separator_detector = separator_detector or FrequencySeparatorDetector()
        self.converter = FixedWidthConverter(
            writer=writer or CsvSpreadsheetWriter(),
            id_factory=id_factory,
            prefix=temp_prefix,
            threshold=gap_threshold,
            tmp_dir=tmp_dir,
        )

    def load(self, source, *options, **kwargs) -> Table:
        params = collect_options(options, kwargs)

        if source is None:
            raise InvalidInputError("Undefined source")

        warnings = []
        stream = is_stream(source)

        if not stream:
            path = Path(source)
            if not path.is_file():
                raise SourceNotFoundError(f"File not found: {source}")

            if params.get("parser") is None:
                params["parser"] = self.classifier.classify(source, warnings=warnings)

            if params.get("sep") is None and params.get("parser") in ("csv", None):
                self._detect_separator(source, params, warnings)

        parser = params.get("parser")
        sep = params.get("sep")

        if parser == "csv" and sep == " ":
            logger.info(f"Reading {self._name(source)} as fixed-width text")
            result = self._load_fixed_width(source)
            origin = FIXED_WIDTH
        elif parser in KNOWN_PARSERS:
            logger.info(f"Reading {self._name(source)} with parser {parser}")
            result = self._read(source, params, BackendError)
            origin = NATIVE
        else:
            raise UnknownFormatError(
                f"Cannot determine a parser for {self._name(source)}"
                + (f" (parser={parser!r})" if parser is not None else "")
            )

        table = Table.wrap(
            result,
            parser=parser,
            origin=origin,
            source=None if stream else source,
            separator=sep,
            warnings=warnings,
        )

        # the backend only saw the temporary file; label sheets after the source
        if origin == FIXED_WIDTH:
            for sheet in table.sheets:
                sheet.label = self._label(source)

        return table

    def _detect_separator(self, source, params, warnings):
        candidates = self.separator_detector.detect(source, include=[" "])
        if candidates:
            params["sep"] = candidates[0]
            logger.info(f"Auto-detected separator {params['sep']!r} for {source}")
        else:
            message = f"Failed to auto-detect separator for {source}"
            logger.warning(message)
            warnings.append(message)

    def _load_fixed_width(self, source):
        lines = read_lines(source)
        with self.converter.converted(lines) as artifact:
            return self._read(
                artifact,
                {"parser": "csv", "sep": ",", "clip": 1, "strip": 3},
                WriteError,
            )

    def _read(self, source, params, error_cls):
        try:
            return self.reader.read(source, params)
        except (error_cls, SourceIOError):
            raise
        except Exception as e:
            logger.error(f"❌ Backend failed for {self._name(source)}: {e}")
            raise error_cls(f"Cannot parse {self._name(source)}: {e}") from e

    @staticmethod
    def _label(source):
        name = getattr(source, "name", None) if is_stream(source) else source
        return Path(name).name if isinstance(name, (str, Path)) else "sheet1"

    @staticmethod
    def _name(source):
        if is_stream(source):
            return getattr(source, "name", repr(source))
        return str(source)


def read_data_simple(source, *options, **kwargs) -> Table:
    """Load ``source`` with a default ``SimpleReader``."""
    return SimpleReader().load(source, *options, **kwargs)


ReadDataSimple = read_data_simple
